"""Core package for local_mw."""

from .types import (
    RepositoryKind,
    RepositoryStatus,
    ScanBatch,
    ScanTarget,
    Statistics,
    SyncResult,
    FailureKind,
    UpdateTarget,
)
from .console import ConsoleChannel
from .policy import UpdateDecision, decide, decide_single_target, is_eligible
from .resolver import StatusResolver
from .scanner import Scanner
from .stats import aggregate
from .logger import setup_logging

__all__ = [
    # Types
    'RepositoryKind',
    'RepositoryStatus',
    'ScanBatch',
    'ScanTarget',
    'Statistics',
    'SyncResult',
    'FailureKind',
    'UpdateTarget',
    # Engine
    'ConsoleChannel',
    'UpdateDecision',
    'decide',
    'decide_single_target',
    'is_eligible',
    'StatusResolver',
    'Scanner',
    'aggregate',
    'setup_logging',
]
