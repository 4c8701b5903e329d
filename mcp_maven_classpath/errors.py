"""Domain errors raised while resolving a Maven classpath.

Structural failures abort the whole resolution and propagate to the caller.
A jar missing from the local repository is not an error; it is logged and
left out of the result.
"""


class ClasspathError(Exception):
    """Base exception for classpath resolution."""


class ToolNotFoundError(ClasspathError):
    """Raised when the ``mvn`` executable cannot be located."""


class NoArtifactsReadableError(ClasspathError):
    """Raised when no dependency listing could be produced for a descriptor."""


class MalformedCoordinateError(ClasspathError, ValueError):
    """Raised when a coordinate string does not fit a known field layout."""


__all__ = [
    "ClasspathError",
    "ToolNotFoundError",
    "NoArtifactsReadableError",
    "MalformedCoordinateError",
]
