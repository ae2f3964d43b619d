from __future__ import annotations

import io
import threading
import time
from typing import List, Tuple

import pytest

from local_mw.core.console import ConsoleChannel, is_affirmative
from local_mw.core.resolver import StatusResolver
from local_mw.core.scanner import Scanner
from local_mw.core.types import RepositoryKind, ScanBatch

from conftest import FakeProvider, FakeRepo, make_config


class RecordingTerminal:
    """Input and output streams that log which thread touched them."""

    def __init__(self, answer: str = "y\n") -> None:
        self.answer = answer
        self.events: List[Tuple[str, int]] = []
        self._lock = threading.Lock()

    def _record(self, kind: str) -> None:
        with self._lock:
            self.events.append((kind, threading.get_ident()))

    def write(self, text: str) -> int:
        self._record("write")
        time.sleep(0.002)
        return len(text)

    def flush(self) -> None:
        pass

    def readline(self) -> str:
        time.sleep(0.01)
        self._record("read")
        return self.answer


@pytest.mark.parametrize("answer,expected", [
    ("y\n", True),
    ("Y\n", True),
    ("yes\n", True),
    ("n\n", False),
    ("\n", False),
    ("", False),
    (" y\n", False),
])
def test_is_affirmative(answer: str, expected: bool) -> None:
    assert is_affirmative(answer) is expected


def test_confirm_writes_prompt_and_reads_answer() -> None:
    output = io.StringIO()
    channel = ConsoleChannel(io.StringIO("y\n"), output)
    assert channel.confirm("Pull?")
    assert output.getvalue() == "Pull? [y/N]: "


def test_concurrent_confirmations_do_not_interleave() -> None:
    terminal = RecordingTerminal()
    channel = ConsoleChannel(terminal, terminal)
    provider = FakeProvider(
        {f"Ext{i}": FakeRepo(behind=1) for i in range(6)},
        latency=lambda name: 0.001,
    )
    resolver = StatusResolver(provider, make_config(max_workers=3), channel)
    batch = ScanBatch.from_paths(
        [f"/srv/mediawiki/extensions/Ext{i}" for i in range(6)], RepositoryKind.EXTENSION
    )

    results = Scanner(resolver, max_workers=3).scan(batch)

    assert all(status.pulled for status in results)
    reads = [event for event in terminal.events if event[0] == "read"]
    assert len(reads) == 6

    # Every prompt's writes are followed by that same thread's read before
    # any other thread writes.
    owner = None
    for kind, ident in terminal.events:
        if owner is None:
            owner = ident
        assert ident == owner
        if kind == "read":
            owner = None


def test_two_threads_confirming_directly() -> None:
    terminal = RecordingTerminal(answer="n\n")
    channel = ConsoleChannel(terminal, terminal)
    answers = []

    def ask() -> None:
        answers.append(channel.confirm("Pull?"))

    threads = [threading.Thread(target=ask) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert answers == [False, False]
    idents = [ident for _, ident in terminal.events]
    # write, write, read from one thread, then the other
    assert idents[0] == idents[1] == idents[2]
    assert idents[3] == idents[4] == idents[5]
    assert idents[0] != idents[3]
