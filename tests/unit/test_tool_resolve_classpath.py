import asyncio
import threading
from pathlib import Path

import pytest

from mcp_maven_classpath import resolver as resolver_module
from mcp_maven_classpath import server as server_module
from mcp_maven_classpath.errors import NoArtifactsReadableError
from mcp_maven_classpath.server import resolve_classpath_core


@pytest.fixture
def canned_listing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    calls: list[Path] = []

    def _install(content: str) -> list[Path]:
        def _generate(pom: Path) -> Path:
            calls.append(pom)
            sink = tmp_path / f"deps-{len(calls)}.txt"
            sink.write_text(content, encoding="utf-8")
            return sink

        monkeypatch.setattr(resolver_module, "generate_dependency_list", _generate)
        return calls

    return _install


@pytest.mark.asyncio
async def test_entries_are_sorted_strings(pom: Path, maven_home: Path, install_jar, canned_listing):
    canned_listing("org.example:zeta:jar:1.0:compile\norg.example:alpha:jar:1.0:compile\n")
    alpha = install_jar("org.example", "alpha", "1.0")
    zeta = install_jar("org.example", "zeta", "1.0")

    resp = await resolve_classpath_core(descriptor_path=str(pom), repository_root=str(maven_home))

    assert resp.entries == sorted([str(alpha), str(zeta)])
    assert resp.artifact_count == 2
    assert resp.caveats == []
    assert resp.descriptor == str(pom)


@pytest.mark.asyncio
async def test_include_sources(pom: Path, maven_home: Path, install_jar, canned_listing):
    canned_listing("org.example:alpha:jar:1.0:compile\n")
    install_jar("org.example", "alpha", "1.0")
    sources = install_jar("org.example", "alpha", "1.0", source=True)

    resp = await resolve_classpath_core(
        descriptor_path=str(pom), include_sources=True, repository_root=str(maven_home)
    )

    assert resp.entries == [str(sources)]
    assert resp.sources is True


@pytest.mark.asyncio
async def test_empty_listing_is_not_an_error(pom: Path, maven_home: Path, canned_listing):
    canned_listing("")
    resp = await resolve_classpath_core(descriptor_path=str(pom), repository_root=str(maven_home))
    assert resp.entries == []
    assert resp.artifact_count == 0
    assert len(resp.caveats) == 1


@pytest.mark.asyncio
async def test_non_pom_descriptor_is_rejected(tmp_path: Path):
    with pytest.raises(ValueError):
        await resolve_classpath_core(descriptor_path=str(tmp_path / "build.gradle"))


@pytest.mark.asyncio
async def test_structural_errors_propagate(
    pom: Path, maven_home: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(resolver_module, "generate_dependency_list", lambda pom: None)
    with pytest.raises(NoArtifactsReadableError):
        await resolve_classpath_core(descriptor_path=str(pom), repository_root=str(maven_home))


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_maven_run(
    pom: Path, maven_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    release = threading.Event()
    calls: list[Path] = []

    def _generate(p: Path) -> Path:
        calls.append(p)
        release.wait(timeout=5)
        sink = tmp_path / "deps.txt"
        sink.write_text("org.example:alpha:jar:1.0:compile\n", encoding="utf-8")
        return sink

    monkeypatch.setattr(resolver_module, "generate_dependency_list", _generate)

    tasks = [
        asyncio.create_task(
            resolve_classpath_core(descriptor_path=str(pom), repository_root=str(maven_home))
        )
        for _ in range(3)
    ]
    key = (str(pom.absolute()), False, str(maven_home))
    while not server_module._resolutions.has_inflight(key):
        await asyncio.sleep(0.01)
    # let the other callers join the run before it finishes
    await asyncio.sleep(0.05)
    release.set()

    results = await asyncio.gather(*tasks)

    assert len(calls) == 1
    assert all(r.artifact_count == 1 for r in results)
    assert not server_module._resolutions.has_inflight(key)


@pytest.mark.asyncio
async def test_concurrent_calls_with_different_roots_run_separately(
    pom: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    release = threading.Event()
    calls: list[Path] = []

    def _generate(p: Path) -> Path:
        calls.append(p)
        release.wait(timeout=5)
        sink = tmp_path / f"deps-{len(calls)}.txt"
        sink.write_text("org.example:foo:jar:1.0:compile\n", encoding="utf-8")
        return sink

    monkeypatch.setattr(resolver_module, "generate_dependency_list", _generate)

    jars = {}
    for label in ("a", "b"):
        jar_dir = tmp_path / label / "repository" / "org" / "example" / "foo" / "1.0"
        jar_dir.mkdir(parents=True)
        jars[label] = jar_dir / "foo-1.0.jar"
        jars[label].write_bytes(b"PK")

    t_a = asyncio.create_task(
        resolve_classpath_core(descriptor_path=str(pom), repository_root=str(tmp_path / "a"))
    )
    t_b = asyncio.create_task(
        resolve_classpath_core(descriptor_path=str(pom), repository_root=str(tmp_path / "b"))
    )
    key_a = (str(pom.absolute()), False, str(tmp_path / "a"))
    key_b = (str(pom.absolute()), False, str(tmp_path / "b"))
    while not (
        server_module._resolutions.has_inflight(key_a)
        and server_module._resolutions.has_inflight(key_b)
    ):
        await asyncio.sleep(0.01)
    release.set()

    resp_a, resp_b = await asyncio.gather(t_a, t_b)

    assert len(calls) == 2
    assert resp_a.entries == [str(jars["a"])]
    assert resp_b.entries == [str(jars["b"])]
