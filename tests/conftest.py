from __future__ import annotations

import stat
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from mcp_maven_classpath import maven as maven_module


@pytest.fixture(autouse=True)
def _reset_mvn_command() -> Iterator[None]:
    # The executable lookup is cached per process; isolate tests from each other
    maven_module.reset_mvn_command()
    yield
    maven_module.reset_mvn_command()


@pytest.fixture
def maven_home(tmp_path: Path) -> Path:
    """An empty local repository root (the equivalent of ~/.m2)."""
    root = tmp_path / "m2"
    (root / "repository").mkdir(parents=True)
    return root


@pytest.fixture
def install_jar(maven_home: Path) -> Callable[..., Path]:
    """Create an (empty) jar in ``maven_home`` using the standard layout."""

    def _install(group: str, name: str, version: str, source: bool = False) -> Path:
        suffix = "-sources.jar" if source else ".jar"
        jar_dir = maven_home / "repository" / Path(*group.split(".")) / name / version
        jar_dir.mkdir(parents=True, exist_ok=True)
        jar = jar_dir / f"{name}-{version}{suffix}"
        jar.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
        return jar

    return _install


@pytest.fixture
def pom(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    path = project / "pom.xml"
    path.write_text("<project/>\n", encoding="utf-8")
    return path


@pytest.fixture
def fake_mvn(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str], Path]:
    """Install a fake ``mvn`` that writes ``listing`` to ``-DoutputFile``.

    The script also records its working directory in ``<tmp>/mvn-cwd.txt`` and
    prints a little Maven-like chatter on stdout.
    """

    def _make(listing: str) -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        listing_file = tmp_path / "listing.txt"
        listing_file.write_text(listing, encoding="utf-8")
        cwd_file = tmp_path / "mvn-cwd.txt"

        script = bin_dir / "mvn"
        script.write_text(
            "#!/bin/sh\n"
            'echo "[INFO] Scanning for projects..."\n'
            'echo "Progress (1): 2.1/4.0 kB"\n'
            'echo ""\n'
            'for arg in "$@"; do\n'
            '  case "$arg" in\n'
            '    -DoutputFile=*) out="${arg#-DoutputFile=}" ;;\n'
            "  esac\n"
            "done\n"
            f'pwd > "{cwd_file}"\n'
            f'cat "{listing_file}" > "$out"\n'
            'echo "[INFO] BUILD SUCCESS"\n',
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        monkeypatch.setenv("MVN_COMMAND", str(script))
        return script

    return _make
