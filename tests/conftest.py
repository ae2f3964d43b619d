from __future__ import annotations

import io
import os
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from local_mw.config import RunConfiguration
from local_mw.core.console import ConsoleChannel
from local_mw.core.types import FailureKind, SyncResult
from local_mw.utils.git import SyncProvider


@dataclass
class FakeRepo:
    is_repo: bool = True
    branch: str = "main"
    fetch: SyncResult = field(default_factory=SyncResult.success)
    behind: Optional[int] = 0
    dirty: bool = False
    pull: SyncResult = field(default_factory=SyncResult.success)


class FakeProvider(SyncProvider):
    """In-memory provider that records calls and peak concurrency."""

    def __init__(
        self,
        repos: Optional[Dict[str, FakeRepo]] = None,
        latency: Optional[Callable[[str], float]] = None,
    ) -> None:
        self.repos = repos or {}
        self.latency = latency
        self.calls: List[Tuple[str, str]] = []
        self.in_flight = 0
        self.peak = 0
        self._lock = threading.Lock()

    def _repo(self, path: str) -> FakeRepo:
        return self.repos.get(os.path.basename(path), FakeRepo())

    def _call(self, method: str, path: str) -> FakeRepo:
        name = os.path.basename(path)
        with self._lock:
            self.calls.append((method, name))
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        try:
            if self.latency is not None:
                time.sleep(self.latency(name))
        finally:
            with self._lock:
                self.in_flight -= 1
        return self._repo(path)

    def methods_for(self, name: str) -> List[str]:
        return [method for method, repo in self.calls if repo == name]

    def is_repository(self, repo_path: str) -> bool:
        return self._call("is_repository", repo_path).is_repo

    def current_branch(self, repo_path: str) -> str:
        return self._call("current_branch", repo_path).branch

    def fetch(self, repo_path: str) -> SyncResult:
        return self._call("fetch", repo_path).fetch

    def behind_count(self, repo_path: str, branch: str) -> Optional[int]:
        return self._call("behind_count", repo_path).behind

    def is_dirty(self, repo_path: str) -> bool:
        return self._call("is_dirty", repo_path).dirty

    def pull(self, repo_path: str) -> SyncResult:
        return self._call("pull", repo_path).pull


def failed(message: str) -> SyncResult:
    return SyncResult.failed(FailureKind.COMMAND_FAILED, message)


def make_config(**overrides) -> RunConfiguration:
    values = dict(install_path="/srv/mediawiki", max_workers=4)
    values.update(overrides)
    return RunConfiguration(**values)


def scripted_channel(answers: str = "") -> Tuple[ConsoleChannel, io.StringIO]:
    output = io.StringIO()
    return ConsoleChannel(io.StringIO(answers), output), output


def make_mediawiki(root: Path, extensions: List[str] = (), skins: List[str] = ()) -> Path:
    """Create the directory layout of a MediaWiki installation."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "index.php").write_text("<?php")
    (root / "api.php").write_text("<?php")
    (root / "includes").mkdir(exist_ok=True)
    (root / "extensions").mkdir(exist_ok=True)
    (root / "skins").mkdir(exist_ok=True)
    for name in extensions:
        (root / "extensions" / name).mkdir()
    for name in skins:
        (root / "skins" / name).mkdir()
    return root


@pytest.fixture
def mediawiki(tmp_path: Path) -> Path:
    return make_mediawiki(tmp_path / "mediawiki")
