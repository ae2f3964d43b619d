from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from local_mw.config import RunConfiguration
from local_mw.core.resolver import StatusResolver
from local_mw.core.types import FailureKind, RepositoryKind
from local_mw.utils.git import GitProvider

from conftest import scripted_channel

GIT_AVAILABLE = subprocess.run(["git", "--version"], capture_output=True).returncode == 0

pytestmark = pytest.mark.skipif(not GIT_AVAILABLE, reason="git missing")


def _run(cmd: list[str], cwd: Path | None = None) -> None:
    subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=True, capture_output=True)


def _configure(path: Path) -> None:
    _run(["git", "-C", str(path), "config", "user.email", "test@example.com"])
    _run(["git", "-C", str(path), "config", "user.name", "Test"])


def _commit(path: Path, filename: str, text: str) -> None:
    (path / filename).write_text(text)
    _run(["git", "-C", str(path), "add", "."])
    _run(["git", "-C", str(path), "commit", "-m", f"edit {filename}"])


def _setup(root: Path) -> tuple[Path, Path]:
    """Create an upstream repository and a clone of it on branch main."""
    upstream = root / "upstream"
    upstream.mkdir(parents=True)
    _run(["git", "init", str(upstream)])
    _run(["git", "-C", str(upstream), "symbolic-ref", "HEAD", "refs/heads/main"])
    _configure(upstream)
    _commit(upstream, "README.md", "hello")

    clone = root / "Cite"
    _run(["git", "clone", str(upstream), str(clone)])
    _configure(clone)
    return upstream, clone


def test_provider_against_real_repository(tmp_path: Path) -> None:
    upstream, clone = _setup(tmp_path)
    provider = GitProvider(timeout=60)

    assert provider.is_repository(str(clone))
    assert not provider.is_repository(str(tmp_path))
    assert provider.current_branch(str(clone)) == "main"
    assert provider.fetch(str(clone)).ok
    assert provider.behind_count(str(clone), "main") == 0
    assert not provider.is_dirty(str(clone))

    _commit(upstream, "a.txt", "a")
    _commit(upstream, "b.txt", "b")
    assert provider.fetch(str(clone)).ok
    assert provider.behind_count(str(clone), "main") == 2

    (clone / "local.txt").write_text("local change")
    assert provider.is_dirty(str(clone))

    assert provider.pull(str(clone)).ok
    assert provider.behind_count(str(clone), "main") == 0


def test_provider_failures_are_structured(tmp_path: Path) -> None:
    _, clone = _setup(tmp_path)
    _run(["git", "-C", str(clone), "remote", "set-url", "origin", str(tmp_path / "gone")])
    provider = GitProvider(timeout=60)

    result = provider.fetch(str(clone))
    assert not result.ok
    assert result.failure == FailureKind.COMMAND_FAILED
    assert result.message
    assert provider.behind_count(str(clone), "no-such-branch") is None


def test_resolver_pulls_real_clone(tmp_path: Path) -> None:
    upstream, clone = _setup(tmp_path)
    _commit(upstream, "a.txt", "a")
    channel, _ = scripted_channel()
    config = RunConfiguration(install_path=str(tmp_path), auto_confirm=True, max_workers=1)

    status = StatusResolver(GitProvider(timeout=60), config, channel).resolve(
        str(clone), RepositoryKind.EXTENSION
    )

    assert status.name == "Cite"
    assert status.current_branch == "main"
    assert status.behind_count == 1
    assert status.pulled
    assert (clone / "a.txt").exists()
