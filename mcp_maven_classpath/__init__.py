"""Top-level package for mcp-maven-classpath.

Exports the resolver entry points and the centralized logging configuration.
"""

from .coordinates import parse_artifact
from .logging_config import configure_logging  # re-export for convenience
from .models import Artifact
from .resolver import MavenClassPathResolver

__all__ = ["Artifact", "MavenClassPathResolver", "configure_logging", "parse_artifact"]
