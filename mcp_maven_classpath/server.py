"""MCP STDIO server and tool definitions.

Design notes:
- Transport adapter stays thin; the resolver in ``resolver.py`` is synchronous
  and reusable without MCP.
- Maven runs in a worker thread; concurrent calls for the same descriptor
  share one run via ``InFlightDeduper``. Results are not cached.
- Logging goes to stderr via the central logging config.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastmcp import FastMCP

from .config import Settings
from .coordinates import parse_artifact
from .inflight import InFlightDeduper
from .logging_config import configure_from_settings
from .models import ClasspathResponse
from .resolver import MavenClassPathResolver

_logger = logging.getLogger(__name__)

_settings = Settings()
configure_from_settings(_settings)

_resolutions: InFlightDeduper[tuple[str, bool, str], ClasspathResponse] = InFlightDeduper()


def _resolve_blocking(resolver: MavenClassPathResolver, include_sources: bool) -> ClasspathResponse:
    artifacts = resolver.read_artifacts()
    entries = resolver.locate(artifacts, source=include_sources)

    caveats: list[str] = []
    if not artifacts:
        caveats.append("No artifacts found; check the Maven output in the server log")
    elif len(entries) < len(artifacts):
        missing = len(artifacts) - len(entries)
        caveats.append(f"{missing} artifact(s) not present in {resolver.repository_root}")

    return ClasspathResponse(
        descriptor=str(resolver.pom),
        entries=sorted(str(p) for p in entries),
        artifact_count=len(artifacts),
        sources=include_sources,
        caveats=caveats,
    )


async def resolve_classpath_core(
    *,
    descriptor_path: str,
    include_sources: bool = False,
    repository_root: Optional[str] = None,
) -> ClasspathResponse:
    """Core logic for the resolve_classpath tool (transport-neutral).

    Error handling policy:
    - A descriptor that is not a ``pom.xml``: ValueError
    - ToolNotFoundError / NoArtifactsReadableError / MalformedCoordinateError
      propagate unchanged and surface as MCP tool errors
    """

    root = Path(repository_root) if repository_root else None
    resolver = MavenClassPathResolver.maybe_create(descriptor_path, repository_root=root)
    if resolver is None:
        raise ValueError(
            f"{descriptor_path} is not a {Settings().DESCRIPTOR_FILENAME} descriptor"
        )

    key = (str(resolver.pom.absolute()), bool(include_sources), str(resolver.repository_root))
    _logger.info(
        "resolving classpath",
        extra={"op": "resolve_classpath", "descriptor": key[0], "sources": key[1]},
    )
    return await _resolutions.run(key, lambda: _resolve_blocking(resolver, include_sources))


_server = FastMCP("mcp-maven-classpath")


@_server.tool()
async def resolve_classpath(descriptor_path: str, include_sources: bool = False) -> dict:
    """Return the jar paths for every dependency of a Maven project.

    Runs ``mvn dependency:list`` next to the given pom.xml and maps the result
    onto the local repository. Jars not present locally are left out.
    """

    result = await resolve_classpath_core(
        descriptor_path=descriptor_path,
        include_sources=include_sources,
    )
    return result.model_dump()


@_server.tool()
def parse_coordinate(raw: str, version: Optional[str] = None) -> dict:
    """Parse a Maven/Gradle coordinate into group, name and version."""

    return parse_artifact(raw, version).model_dump()


def run() -> None:  # pragma: no cover
    _server.run(transport=_settings.TRANSPORT)


__all__ = ["resolve_classpath_core", "run"]
