"""Git operations behind the synchronization provider interface."""

import os
import subprocess
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from ..core.types import FailureKind, SyncResult

if TYPE_CHECKING:
    from ..core.console import ConsoleChannel

logger = logging.getLogger('local_mw')


class SyncProvider(ABC):
    """Version-control capability consumed by the status resolver.

    Every method reports failure through its return value and never raises.
    """

    @abstractmethod
    def is_repository(self, repo_path: str) -> bool:
        """Check if the path carries version-control metadata."""

    @abstractmethod
    def current_branch(self, repo_path: str) -> str:
        """Get the current branch name, or an empty string if unknown."""

    @abstractmethod
    def fetch(self, repo_path: str) -> SyncResult:
        """Fetch updates from the remote."""

    @abstractmethod
    def behind_count(self, repo_path: str, branch: str) -> Optional[int]:
        """Count commits on origin/<branch> missing locally, None if unknown."""

    @abstractmethod
    def is_dirty(self, repo_path: str) -> bool:
        """Check if the working tree has local modifications."""

    @abstractmethod
    def pull(self, repo_path: str) -> SyncResult:
        """Pull updates into the working tree."""


class GitProvider(SyncProvider):
    """SyncProvider backed by the git command line."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        channel: Optional['ConsoleChannel'] = None
    ):
        """Initialize git provider.

        Args:
            timeout: Per-command deadline in seconds (None = no deadline)
            channel: Console channel for serialized command diagnostics
        """
        self.timeout = timeout
        self.channel = channel

    def _debug(self, message: str) -> None:
        if self.channel is not None:
            self.channel.debug(message)
        else:
            logger.debug(message)

    def _run(self, repo_path: str, args: List[str]) -> subprocess.CompletedProcess:
        """Run a git command inside a repository.

        Raises:
            subprocess.TimeoutExpired: If the deadline passed
            FileNotFoundError: If git is not installed
        """
        cmd = ["git"] + args
        self._debug(f"  [CMD] {' '.join(cmd)} (in {repo_path})")
        # stdin is reserved for confirmation prompts
        env = dict(os.environ, GIT_TERMINAL_PROMPT="0")
        result = subprocess.run(
            cmd,
            cwd=repo_path,
            stdin=subprocess.DEVNULL,
            env=env,
            capture_output=True,
            text=True,
            check=False,
            timeout=self.timeout
        )
        output = (result.stdout + result.stderr).strip()
        if output:
            self._debug(f"  [OUTPUT] {output}")
        return result

    def _sync(self, repo_path: str, args: List[str]) -> SyncResult:
        """Run a mutating or network command and classify its outcome."""
        try:
            result = self._run(repo_path, args)
        except subprocess.TimeoutExpired:
            return SyncResult.failed(
                FailureKind.TIMEOUT,
                f"git {args[0]} timed out after {self.timeout}s"
            )
        except FileNotFoundError:
            return SyncResult.failed(FailureKind.GIT_MISSING, "git executable not found")

        output = (result.stdout + result.stderr).strip()
        if result.returncode != 0:
            return SyncResult.failed(FailureKind.COMMAND_FAILED, output)
        return SyncResult.success(output)

    def is_repository(self, repo_path: str) -> bool:
        return os.path.exists(os.path.join(repo_path, '.git'))

    def current_branch(self, repo_path: str) -> str:
        try:
            result = self._run(repo_path, ["rev-parse", "--abbrev-ref", "HEAD"])
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return ""
        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def fetch(self, repo_path: str) -> SyncResult:
        return self._sync(repo_path, ["fetch"])

    def behind_count(self, repo_path: str, branch: str) -> Optional[int]:
        try:
            result = self._run(
                repo_path, ["rev-list", "--count", f"HEAD..origin/{branch}"]
            )
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return None
        if result.returncode != 0:
            return None
        try:
            return int(result.stdout.strip())
        except ValueError:
            return None

    def is_dirty(self, repo_path: str) -> bool:
        try:
            result = self._run(repo_path, ["status", "--porcelain"])
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return True
        if result.returncode != 0:
            return True
        return bool(result.stdout.strip())

    def pull(self, repo_path: str) -> SyncResult:
        return self._sync(repo_path, ["pull"])
