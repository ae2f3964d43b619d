"""Update operation: check and pull one named repository."""

import os
import logging

from .base import Operation
from ..core.policy import UpdateDecision, decide_single_target, single_target_prompt
from ..utils.filesystem import resolve_target_path

logger = logging.getLogger('local_mw')


class UpdateOperation(Operation):
    """Update core, or a single extension or skin, outside of a full scan.

    Any repository behind its remote may be pulled here, whatever its branch.
    """

    name = "update"
    description = "Update core or a single extension or skin"

    def run(self) -> int:
        target = self.config.update_target
        if target is None:
            raise ValueError("update requires a TYPE argument")

        self.validate_installation()
        repo_path = resolve_target_path(self.config.install_path, target.kind, target.name)

        if not os.path.exists(repo_path):
            logger.error(f"{target.display_name} not found at: {repo_path}")
            return 1
        if not os.path.isdir(repo_path):
            logger.error(f"Path exists but is not a directory: {repo_path}")
            return 1

        self.echo(f"Checking {target.display_name} at: {repo_path}")
        status = self.resolver.resolve(repo_path, target.kind)

        if status.is_error:
            logger.error(f"Error: {status.error_message}")
            return 1

        behind = str(status.behind_count) if status.behind_count >= 0 else "Unknown"
        self.echo("\nRepository Status:")
        self.echo(f"  Branch: {status.current_branch}")
        self.echo(f"  Uncommitted changes: {'Yes' if status.has_local_modifications else 'No'}")
        self.echo(f"  Commits behind: {behind}")

        decision = decide_single_target(status, self.config)
        if decision == UpdateDecision.SKIP:
            self.echo("\n✅ Already up to date!")
            return 0

        if decision == UpdateDecision.ASK and not self.channel.confirm(single_target_prompt(status)):
            self.echo("Update cancelled.")
            return 0

        self.echo("Pulling updates...")
        status = self.resolver.pull(status)
        if status.pulled:
            self.echo("\n✅ Successfully updated!")
            return 0

        logger.error(f"Pull failed:\n{status.pull_error}")
        return 1
