"""Locating artifact jars in the local Maven repository cache.

Layout::

    <root>/repository/<group with '.' as dirs>/<name>/<version>/<name>-<version>[-sources].jar
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import Settings
from .models import Artifact

_logger = logging.getLogger(__name__)


def maven_jar_name(artifact: Artifact, source: bool) -> str:
    if source:
        return f"{artifact.name}-{artifact.version}-sources.jar"
    return f"{artifact.name}-{artifact.version}.jar"


def artifact_path(artifact: Artifact, source: bool, repository_root: Path) -> Path:
    """Build the expected jar path without touching the filesystem."""
    return (
        Path(repository_root)
        / "repository"
        / artifact.group.replace(".", os.sep)
        / artifact.name
        / artifact.version
        / maven_jar_name(artifact, source)
    )


def find_maven_artifact(
    artifact: Artifact,
    source: bool = False,
    repository_root: Optional[Path] = None,
) -> Optional[Path]:
    """Return the jar path for ``artifact`` if it exists, else None.

    A missing jar is logged as a warning; the caller is expected to carry on
    with a partial classpath.
    """
    root = repository_root if repository_root is not None else Settings().MAVEN_USER_HOME
    result = artifact_path(artifact, source, root)

    if result.exists():
        return result

    _logger.warning(
        "Couldn't find %s in %s",
        artifact,
        result,
        extra={"op": "find_maven_artifact", "artifact": str(artifact)},
    )
    return None


__all__ = ["artifact_path", "find_maven_artifact", "maven_jar_name"]
