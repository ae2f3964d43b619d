"""Core types for the status-scan engine."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class RepositoryKind(Enum):
    """Kind of subproject inside a MediaWiki installation."""
    CORE = "core"
    EXTENSION = "extension"
    SKIN = "skin"

    @classmethod
    def parse(cls, value: str) -> 'RepositoryKind':
        """Parse a kind name.

        Args:
            value: Kind name ('core', 'extension' or 'skin')

        Returns:
            Matching RepositoryKind

        Raises:
            ValueError: If the name is not a known kind
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Invalid type '{value}'. Must be 'core', 'extension', or 'skin'."
            ) from None


class FailureKind(Enum):
    """Why a provider call failed."""
    COMMAND_FAILED = "command_failed"
    TIMEOUT = "timeout"
    GIT_MISSING = "git_missing"


@dataclass(frozen=True)
class SyncResult:
    """Structured outcome of a fetch or pull."""
    ok: bool
    failure: Optional[FailureKind] = None
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> 'SyncResult':
        return cls(ok=True, message=message)

    @classmethod
    def failed(cls, failure: FailureKind, message: str) -> 'SyncResult':
        return cls(ok=False, failure=failure, message=message)


@dataclass(frozen=True)
class RepositoryStatus:
    """Terminal status of one scanned repository.

    Instances are never mutated; the resolver derives each new state with
    dataclasses.replace().
    """
    name: str
    kind: RepositoryKind
    path: str
    is_repository: bool = False
    current_branch: str = ""
    behind_count: int = -1
    has_local_modifications: bool = False
    has_updates: bool = False
    pull_attempted: bool = False
    pull_succeeded: bool = False
    pull_error: str = ""
    error_message: str = ""

    @classmethod
    def empty(cls, path: str, kind: RepositoryKind) -> 'RepositoryStatus':
        """Create the initial status for a repository path."""
        name = os.path.basename(os.path.normpath(path))
        return cls(name=name, kind=kind, path=path)

    @property
    def pulled(self) -> bool:
        """Check if a pull was attempted and succeeded."""
        return self.pull_attempted and self.pull_succeeded

    @property
    def is_error(self) -> bool:
        """Check if the repository could not be checked."""
        return not self.is_repository or bool(self.error_message)

    @property
    def category(self) -> str:
        """Statistics bucket: 'errors', 'has_updates' or 'up_to_date'."""
        if self.is_error:
            return "errors"
        if self.has_updates:
            return "has_updates"
        return "up_to_date"


@dataclass(frozen=True)
class ScanTarget:
    """A repository path plus its declared kind."""
    path: str
    kind: RepositoryKind


@dataclass(frozen=True)
class ScanBatch:
    """Ordered unit of work for the scanner."""
    targets: Tuple[ScanTarget, ...] = ()

    @classmethod
    def from_paths(cls, paths: List[str], kind: RepositoryKind) -> 'ScanBatch':
        return cls(tuple(ScanTarget(path, kind) for path in paths))

    @classmethod
    def from_directory(cls, dir_path: str, kind: RepositoryKind) -> 'ScanBatch':
        """Build a batch from the immediate subdirectories of dir_path."""
        from ..utils.filesystem import list_subdirectories
        return cls.from_paths(list_subdirectories(dir_path), kind)

    def __len__(self) -> int:
        return len(self.targets)

    def __iter__(self):
        return iter(self.targets)


@dataclass(frozen=True)
class Statistics:
    """Counts of up-to-date, updatable and erroring repositories."""
    up_to_date: int = 0
    has_updates: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.up_to_date + self.has_updates + self.errors

    def __add__(self, other: 'Statistics') -> 'Statistics':
        if not isinstance(other, Statistics):
            return NotImplemented
        return Statistics(
            up_to_date=self.up_to_date + other.up_to_date,
            has_updates=self.has_updates + other.has_updates,
            errors=self.errors + other.errors,
        )


@dataclass(frozen=True)
class UpdateTarget:
    """Single-target update selector (kind plus optional name)."""
    kind: RepositoryKind
    name: str = ""

    @property
    def display_name(self) -> str:
        if self.kind == RepositoryKind.CORE:
            return "MediaWiki core"
        return f"{self.kind.value} '{self.name}'"


MAINLINE_BRANCHES = frozenset({"master", "main"})

# Error texts recorded on statuses
NOT_A_REPOSITORY = "Not a git repository"
BRANCH_UNRESOLVED = "Could not determine branch"
FETCH_FAILED = "Failed to fetch updates"
TRACKING_UNKNOWN = "No tracking branch or error checking"
