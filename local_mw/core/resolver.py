"""Status resolver: drives the sync provider through one repository check."""

from dataclasses import replace
from typing import Optional, TYPE_CHECKING

from .console import ConsoleChannel
from .policy import UpdateDecision, decide, scan_prompt
from .types import (
    BRANCH_UNRESOLVED,
    FETCH_FAILED,
    NOT_A_REPOSITORY,
    TRACKING_UNKNOWN,
    RepositoryKind,
    RepositoryStatus,
)

if TYPE_CHECKING:
    from ..config import RunConfiguration
    from ..utils.git import SyncProvider


class StatusResolver:
    """Resolve the synchronization state of a single repository.

    Steps run in a fixed order and stop at the first terminal outcome:
    repository check, branch lookup, fetch, behind count, dirty check and,
    when the decision policy allows it, a confirmed pull. Failures are
    recorded on the returned status and never raised.
    """

    def __init__(
        self,
        provider: 'SyncProvider',
        config: 'RunConfiguration',
        channel: Optional[ConsoleChannel] = None
    ):
        """Initialize status resolver.

        Args:
            provider: Version-control capability
            config: Run configuration
            channel: Console channel for prompts and diagnostics
        """
        self.provider = provider
        self.config = config
        self.channel = channel or ConsoleChannel()

    def resolve(self, repo_path: str, kind: RepositoryKind) -> RepositoryStatus:
        """Check a repository for updates and pull when allowed.

        Args:
            repo_path: Repository path
            kind: Declared kind of the repository

        Returns:
            Terminal RepositoryStatus
        """
        status = self.check(repo_path, kind)
        if status.is_error or not status.has_updates:
            return status

        decision = decide(status, self.config)
        if decision == UpdateDecision.SKIP:
            return status

        if decision == UpdateDecision.ASK and not self.channel.confirm(scan_prompt(status)):
            self.channel.debug("  [INFO] User declined pull")
            return status

        return self.pull(status)

    def check(self, repo_path: str, kind: RepositoryKind) -> RepositoryStatus:
        """Resolve the status of a repository without mutating it."""
        log = self.channel.debug
        status = RepositoryStatus.empty(repo_path, kind)
        log(f"\n[CHECKING] {status.name} ({kind.value})\n  Path: {repo_path}")

        if not self.provider.is_repository(repo_path):
            log("  [SKIP] Not a git repository")
            return replace(status, is_repository=False, error_message=NOT_A_REPOSITORY)
        status = replace(status, is_repository=True)

        log("  [STEP] Getting current branch...")
        branch = self.provider.current_branch(repo_path)
        if not branch:
            log(f"  [ERROR] {BRANCH_UNRESOLVED}")
            return replace(status, error_message=BRANCH_UNRESOLVED)
        status = replace(status, current_branch=branch)
        log(f"  [INFO] Current branch: {branch}")

        log("  [STEP] Fetching updates from remote...")
        fetched = self.provider.fetch(repo_path)
        if not fetched.ok:
            log(f"  [ERROR] {FETCH_FAILED}: {fetched.message}")
            return replace(status, error_message=FETCH_FAILED)

        log("  [STEP] Checking commits behind remote...")
        behind = self.provider.behind_count(repo_path, branch)
        behind_count = behind if behind is not None and behind >= 0 else -1

        log("  [STEP] Checking for uncommitted changes...")
        dirty = self.provider.is_dirty(repo_path)
        if dirty:
            log("  [WARNING] Repository has uncommitted changes!")
        status = replace(status, behind_count=behind_count, has_local_modifications=dirty)

        if behind_count > 0:
            log(f"  [RESULT] Behind by {behind_count} commit(s)")
            return replace(status, has_updates=True)
        if behind_count < 0:
            log(f"  [WARNING] {TRACKING_UNKNOWN}")
            return replace(status, error_message=TRACKING_UNKNOWN)

        log("  [RESULT] Up to date")
        return status

    def pull(self, status: RepositoryStatus) -> RepositoryStatus:
        """Pull a repository that is behind its remote.

        Args:
            status: Checked status with behind_count > 0 and no error

        Returns:
            Status carrying the pull outcome
        """
        self.channel.debug("  [STEP] Performing git pull...")
        result = self.provider.pull(status.path)
        if result.ok:
            self.channel.debug("  [SUCCESS] Git pull completed")
            return replace(status, pull_attempted=True, pull_succeeded=True)

        self.channel.debug(f"  [ERROR] Git pull failed: {result.message}")
        return replace(
            status,
            pull_attempted=True,
            pull_succeeded=False,
            pull_error=result.message or "git pull failed"
        )
