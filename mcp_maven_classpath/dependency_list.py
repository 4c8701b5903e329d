"""Reading the listing written by ``mvn dependency:list -DoutputFile=...``.

A typical listing looks like::

    <blank>
    The following files have been resolved:
       org.slf4j:slf4j-api:jar:2.0.13:compile
       junit:junit:jar:4.13.2:test -- module junit

Only lines shaped like a coordinate are handed to the parser; everything else
is treated as noise.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .coordinates import parse_artifact
from .models import Artifact

_logger = logging.getLogger(__name__)

# Coarse shape check: four or more colon-separated components. Three-field
# ``g:n:v`` strings are only accepted through parse_artifact directly.
_ARTIFACT_LINE = re.compile(r".*:.*:.*:.*")


def is_artifact_line(line: str) -> bool:
    """Return True if ``line`` looks like a coordinate worth parsing."""
    stripped = line.strip()
    return bool(stripped) and _ARTIFACT_LINE.fullmatch(stripped) is not None


def parse_dependency_lines(lines: Iterable[str]) -> set[Artifact]:
    """Parse coordinate-shaped ``lines`` into a deduplicated artifact set.

    A line that passes the shape check but cannot be parsed raises
    ``MalformedCoordinateError``; it means the listing format is not what the
    parser expects, so nothing is dropped silently.
    """
    return {parse_artifact(line) for line in lines if is_artifact_line(line)}


def read_dependency_list(maven_output: Path) -> set[Artifact]:
    """Read the sink file at ``maven_output`` and return its artifacts."""
    text = Path(maven_output).read_text(encoding="utf-8", errors="replace")
    artifacts = parse_dependency_lines(text.splitlines())
    _logger.debug(
        "read dependency list",
        extra={"op": "read_dependency_list", "path": str(maven_output), "count": len(artifacts)},
    )
    return artifacts


__all__ = ["is_artifact_line", "parse_dependency_lines", "read_dependency_list"]
