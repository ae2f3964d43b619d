"""Update decision policy.

Pure functions of a resolved status and the run configuration. Local
modifications never gate a decision; they only change the prompt text.
"""

from enum import Enum
from typing import TYPE_CHECKING

from .types import RepositoryStatus

if TYPE_CHECKING:
    from ..config import RunConfiguration


class UpdateDecision(Enum):
    """What to do with a repository that may be behind its remote."""
    PULL = "pull"
    ASK = "ask"
    SKIP = "skip"


def is_eligible(status: RepositoryStatus, config: 'RunConfiguration') -> bool:
    """Check if a scanned repository qualifies for an automatic pull."""
    return (
        status.behind_count > 0
        and not status.error_message
        and not config.report_only
        and config.update_target is None
        and status.current_branch in config.mainline_branches
    )


def decide(status: RepositoryStatus, config: 'RunConfiguration') -> UpdateDecision:
    """Decide the action for a repository resolved during a scan."""
    if not is_eligible(status, config):
        return UpdateDecision.SKIP
    return UpdateDecision.PULL if config.auto_confirm else UpdateDecision.ASK


def decide_single_target(
    status: RepositoryStatus,
    config: 'RunConfiguration'
) -> UpdateDecision:
    """Decide the action for an explicitly requested repository.

    Any repository behind its remote qualifies; the mainline branch
    restriction does not apply here.
    """
    if status.is_error or status.behind_count <= 0:
        return UpdateDecision.SKIP
    return UpdateDecision.PULL if config.auto_confirm else UpdateDecision.ASK


def format_commits(count: int) -> str:
    """Format a commit count as '1 commit' / 'N commits'."""
    return f"{count} commit{'s' if count != 1 else ''}"


def scan_prompt(status: RepositoryStatus) -> str:
    """Build the confirmation prompt for a scanned repository."""
    prompt = (
        f"\nPull updates for '{status.name}' ({status.kind.value}, "
        f"{format_commits(status.behind_count)} behind)"
    )
    if status.has_local_modifications:
        prompt += "\n  ⚠️  WARNING: Has uncommitted changes!"
    return prompt + "\n  "


def single_target_prompt(status: RepositoryStatus) -> str:
    """Build the confirmation prompt for single-target mode."""
    prompt = f"\nPull {format_commits(status.behind_count)}?"
    if status.has_local_modifications:
        prompt += "\n  ⚠️  WARNING: Repository has uncommitted changes!"
    return prompt + "\n  "
