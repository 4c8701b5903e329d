"""Parsing of Maven/Gradle coordinate strings into ``Artifact`` identities.

Recognised layouts (fields separated by ``:``):

- ``group:name:version``
- ``group:name:type:version:scope``
- ``group:name:type:classifier:version:scope``

The version is picked by position: index 2 for three fields, index 3 for five
or six. Any other field count is rejected.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from .errors import MalformedCoordinateError
from .models import Artifact

_SHORT_LAYOUT = 3
_LONG_LAYOUTS = (5, 6)


def parse_artifact(raw_artifact: str, version: Optional[str] = None) -> Artifact:
    """Parse ``raw_artifact`` into an ``Artifact``.

    ``version``, when given, replaces the version found in the string; use it
    when the authoritative version is already known and only group/name are
    needed from the coordinate.

    Raises
    ------
    MalformedCoordinateError
        If the field count is not 3, 5 or 6, or a required field is empty.
    """

    parts = raw_artifact.strip().split(":")
    count = len(parts)

    if count == _SHORT_LAYOUT:
        parsed_version = parts[2]
    elif count in _LONG_LAYOUTS:
        parsed_version = parts[3]
    else:
        raise MalformedCoordinateError(
            f"{raw_artifact!r} is not a properly formed Maven/Gradle artifact"
        )

    try:
        return Artifact(
            group=parts[0],
            name=parts[1],
            version=version if version is not None else parsed_version,
        )
    except ValidationError as exc:
        raise MalformedCoordinateError(
            f"{raw_artifact!r} is not a properly formed Maven/Gradle artifact"
        ) from exc


__all__ = ["parse_artifact"]
