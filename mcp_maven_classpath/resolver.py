"""Classpath resolution for Maven projects.

``MavenClassPathResolver`` ties the pieces together:

1. ``mvn dependency:list`` writes the project's dependencies to a temp file
2. the listing is parsed into a set of ``Artifact`` identities
3. each identity is mapped onto the local repository and kept if the jar exists

Structural failures (no ``mvn``, no listing, malformed listing line) raise.
Jars missing from the local repository are logged and skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .config import Settings
from .dependency_list import read_dependency_list
from .errors import NoArtifactsReadableError
from .maven import generate_dependency_list
from .models import Artifact
from .repository import find_maven_artifact

_logger = logging.getLogger(__name__)

# Listings with at least this many artifacts are reported by count only
_SUMMARY_THRESHOLD = 5


class MavenClassPathResolver:
    """Resolver for reading Maven dependencies of a single ``pom.xml``."""

    def __init__(self, pom: Path, repository_root: Optional[Path] = None) -> None:
        self.pom = Path(pom)
        self.repository_root = (
            Path(repository_root) if repository_root is not None else Settings().MAVEN_USER_HOME
        )

    @classmethod
    def maybe_create(
        cls, file: Optional[Union[Path, str]], repository_root: Optional[Path] = None
    ) -> Optional["MavenClassPathResolver"]:
        """Create a resolver if ``file`` is a Maven descriptor, else return None."""
        if file is None:
            return None
        path = Path(file)
        if path.name != Settings().DESCRIPTOR_FILENAME:
            return None
        return cls(path, repository_root=repository_root)

    def read_artifacts(self) -> set[Artifact]:
        """Run Maven and return the deduplicated artifacts it lists.

        Raises
        ------
        ToolNotFoundError
            If ``mvn`` cannot be found.
        NoArtifactsReadableError
            If no listing file was produced.
        MalformedCoordinateError
            If a listing line looks like a coordinate but cannot be parsed.
        """
        maven_output = generate_dependency_list(self.pom)
        if maven_output is None or not maven_output.exists():
            raise NoArtifactsReadableError(f"No artifacts could be read from {self.pom}")

        artifacts = read_dependency_list(maven_output)

        if not artifacts:
            _logger.warning("No artifacts found in %s", self.pom, extra={"op": "classpath"})
        elif len(artifacts) < _SUMMARY_THRESHOLD:
            _logger.info(
                "Found %s in %s",
                ", ".join(sorted(str(a) for a in artifacts)),
                self.pom,
                extra={"op": "classpath"},
            )
        else:
            _logger.info(
                "Found %d artifacts in %s", len(artifacts), self.pom, extra={"op": "classpath"}
            )

        return artifacts

    def locate(self, artifacts: Iterable[Artifact], source: bool = False) -> set[Path]:
        """Map ``artifacts`` onto existing jars in the local repository."""
        found: set[Path] = set()
        for artifact in artifacts:
            path = find_maven_artifact(artifact, source, self.repository_root)
            if path is not None:
                found.add(path)
        return found

    def resolve_classpath(self) -> set[Path]:
        return self.locate(self.read_artifacts(), source=False)

    @property
    def classpath(self) -> set[Path]:
        """Binary jars for every dependency of the project, all scopes included."""
        return self.resolve_classpath()

    @property
    def source_jars(self) -> set[Path]:
        """``-sources.jar`` files for every dependency that has one cached."""
        return self.locate(self.read_artifacts(), source=True)

    def __repr__(self) -> str:
        return f"MavenClassPathResolver(pom={str(self.pom)!r})"


__all__ = ["MavenClassPathResolver"]
