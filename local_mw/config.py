"""Configuration management for local_mw."""

import os
import multiprocessing
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .core.types import MAINLINE_BRANCHES, RepositoryKind, UpdateTarget


def hardware_parallelism() -> int:
    """Get the number of available CPUs (at least 1)."""
    try:
        return max(1, multiprocessing.cpu_count())
    except NotImplementedError:
        return 1


@dataclass(frozen=True)
class RunConfiguration:
    """Run-wide settings, built once at startup and never modified.

    Merges environment variables with CLI arguments.
    CLI arguments take precedence over environment variables.
    """

    install_path: str
    verbose: bool = False
    report_only: bool = False
    auto_confirm: bool = False
    update_target: Optional[UpdateTarget] = None
    mainline_branches: FrozenSet[str] = MAINLINE_BRANCHES
    max_workers: int = 1
    sequential: bool = False
    report_file: Optional[str] = None
    git_timeout: Optional[float] = None
    log_dir: Optional[str] = None

    @classmethod
    def from_env_and_args(
        cls,
        install_path: Optional[str] = None,
        verbose: bool = False,
        report_only: bool = False,
        auto_confirm: bool = False,
        update_kind: Optional[str] = None,
        update_name: Optional[str] = None,
        max_workers: Optional[int] = None,
        sequential: bool = False,
        report_file: Optional[str] = None,
        git_timeout: Optional[float] = None
    ) -> 'RunConfiguration':
        """Create config from environment variables and CLI arguments.

        CLI arguments override environment variables.

        Args:
            install_path: MediaWiki installation path (overrides MEDIAWIKI_PATH)
            verbose: Emit per-step diagnostics
            report_only: Never pull, only report
            auto_confirm: Pull without prompting
            update_kind: Single-target kind ('core', 'extension', 'skin')
            update_name: Single-target extension or skin name
            max_workers: Maximum parallel workers (overrides LOCAL_MW_WORKERS)
            sequential: Force sequential processing
            report_file: Report output file (overrides LOCAL_MW_REPORT_FILE)
            git_timeout: Per git command deadline in seconds
                (overrides LOCAL_MW_GIT_TIMEOUT)

        Returns:
            RunConfiguration instance

        Raises:
            ValueError: If required config is missing or invalid
        """
        final_path = install_path or os.getenv('MEDIAWIKI_PATH')
        if not final_path:
            raise ValueError(
                "MediaWiki installation path is required. "
                "Set MEDIAWIKI_PATH in .env or pass PATH"
            )

        final_workers = max_workers
        if final_workers is None and os.getenv('LOCAL_MW_WORKERS'):
            final_workers = _parse_int('LOCAL_MW_WORKERS', os.getenv('LOCAL_MW_WORKERS'))
        if final_workers is None:
            final_workers = hardware_parallelism()
        if final_workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {final_workers}")

        final_timeout = git_timeout
        if final_timeout is None and os.getenv('LOCAL_MW_GIT_TIMEOUT'):
            final_timeout = _parse_float('LOCAL_MW_GIT_TIMEOUT', os.getenv('LOCAL_MW_GIT_TIMEOUT'))
        if final_timeout is not None and final_timeout <= 0:
            raise ValueError(f"Git timeout must be positive, got {final_timeout}")

        mainline = MAINLINE_BRANCHES
        if os.getenv('LOCAL_MW_MAINLINE_BRANCHES'):
            mainline = frozenset(
                name.strip()
                for name in os.getenv('LOCAL_MW_MAINLINE_BRANCHES').split(',')
                if name.strip()
            )

        update_target = None
        if update_kind is not None:
            kind = RepositoryKind.parse(update_kind)
            if kind != RepositoryKind.CORE and not update_name:
                raise ValueError(f"'update {kind.value}' requires a NAME argument")
            name = update_name if kind != RepositoryKind.CORE else ""
            update_target = UpdateTarget(kind=kind, name=name)

        return cls(
            install_path=os.path.abspath(os.path.expanduser(final_path)),
            verbose=verbose,
            report_only=report_only,
            auto_confirm=auto_confirm,
            update_target=update_target,
            mainline_branches=mainline,
            max_workers=final_workers,
            sequential=sequential,
            report_file=report_file or os.getenv('LOCAL_MW_REPORT_FILE'),
            git_timeout=final_timeout,
            log_dir=os.getenv('LOCAL_MW_LOG_DIR')
        )

    @property
    def is_update_mode(self) -> bool:
        """Check if a single target was requested."""
        return self.update_target is not None


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'") from None


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{value}'") from None
