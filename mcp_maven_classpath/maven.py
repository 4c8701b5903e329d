"""Running ``mvn dependency:list`` and capturing its listing.

The ``mvn`` executable is looked up once per process and cached; use
``reset_mvn_command`` to force a fresh lookup (tests, changed PATH).
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from .config import Settings
from .errors import ToolNotFoundError

_logger = logging.getLogger(__name__)

_PROGRESS_PREFIX = "Progress"

# Module-level cache for the resolved executable
_mvn_command: Optional[Path] = None


def find_command_on_path(command: str) -> Optional[Path]:
    """Locate ``command`` on PATH (or as a direct path). Returns None if absent."""
    found = shutil.which(command)
    return Path(found) if found else None


def get_mvn_command() -> Path:
    """Return the cached ``mvn`` executable, looking it up on first use.

    Raises
    ------
    ToolNotFoundError
        If the configured command cannot be found.
    """
    global _mvn_command
    if _mvn_command is None:
        configured = Settings().MVN_COMMAND
        found = find_command_on_path(configured)
        if found is None:
            raise ToolNotFoundError(f"Unable to find the '{configured}' command")
        _logger.debug("using maven executable", extra={"op": "find_mvn", "path": str(found)})
        _mvn_command = found
    return _mvn_command


def reset_mvn_command() -> None:
    global _mvn_command
    _mvn_command = None


def build_dependency_list_command(mvn: Path, output_file: Path) -> list[str]:
    return [
        str(mvn),
        "dependency:list",
        "-DincludeScope=test",
        f"-DoutputFile={output_file}",
    ]


def generate_dependency_list(pom: Path) -> Optional[Path]:
    """Run ``mvn dependency:list`` for ``pom`` and return the listing file.

    The listing goes to a fresh temporary file which is left in place for the
    caller. Maven's stdout is relayed to the log line by line while the command
    runs. The exit code is not checked: a failed run leaves an empty or partial
    listing, which the caller notices when it finds no artifacts.
    """
    mvn = get_mvn_command()

    fd, name = tempfile.mkstemp(prefix="deps", suffix=".txt")
    os.close(fd)
    maven_output = Path(name)

    working_directory = Path(pom).absolute().parent
    cmd = build_dependency_list_command(mvn, maven_output)
    _logger.info(
        "Run %s in %s",
        " ".join(cmd),
        working_directory,
        extra={"op": "generate_dependency_list"},
    )

    try:
        process = subprocess.Popen(
            cmd,
            cwd=working_directory,
            stdout=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as exc:
        maven_output.unlink(missing_ok=True)
        raise ToolNotFoundError(f"Unable to run '{mvn}'") from exc

    try:
        with process.stdout as reader:
            for raw_line in reader:
                line = raw_line.strip()
                if line and not line.startswith(_PROGRESS_PREFIX):
                    _logger.info("Maven: %s", line)
    finally:
        process.wait()

    return maven_output


__all__ = [
    "build_dependency_list_command",
    "find_command_on_path",
    "generate_dependency_list",
    "get_mvn_command",
    "reset_mvn_command",
]
