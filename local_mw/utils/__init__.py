"""Utilities package for local_mw."""

from .git import SyncProvider, GitProvider
from .filesystem import (
    list_subdirectories,
    count_directories,
    is_mediawiki_directory,
    resolve_target_path,
)
from .report import ReportWriter, render_section, render_summary, render_table

__all__ = [
    'SyncProvider',
    'GitProvider',
    'list_subdirectories',
    'count_directories',
    'is_mediawiki_directory',
    'resolve_target_path',
    'ReportWriter',
    'render_section',
    'render_summary',
    'render_table',
]
