"""Report rendering and persistence."""

import sys
import logging
from datetime import datetime
from typing import List, Optional, TextIO

from ..core.types import RepositoryStatus, Statistics

logger = logging.getLogger('local_mw')

TABLE_WIDTH = 100
SECTION_EMPTY_MESSAGES = {
    "EXTENSIONS": "No extensions found or extensions directory doesn't exist.",
    "SKINS": "No skins found or skins directory doesn't exist.",
}


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def status_text(status: RepositoryStatus) -> str:
    """Human-readable status column for one repository."""
    if not status.is_repository:
        return "⚠️  Not a git repo"
    if status.is_error:
        return f"⚠️  {status.error_message}"
    if status.pulled:
        if status.has_local_modifications:
            return "✅ Pulled (⚠️  had uncommitted changes)"
        return "✅ Pulled and up to date"
    if status.pull_error:
        return f"❌ Pull failed: {status.pull_error}"
    if status.has_updates:
        return "🔴 Updates available"
    return "✅ Up to date"


def format_row(status: RepositoryStatus) -> str:
    """Format one table row."""
    branch = status.current_branch or "N/A"
    row = f"{status.name:<30}{status.kind.value:<12}{branch:<15}"

    if status.is_error:
        behind, uncommitted = "N/A", "N/A"
    elif status.pulled or not status.has_updates:
        behind, uncommitted = "0", _yes_no(status.has_local_modifications)
    else:
        behind = str(status.behind_count)
        uncommitted = _yes_no(status.has_local_modifications)

    return f"{row}{behind:<10}{uncommitted:<14}{status_text(status)}"


def render_table(results: List[RepositoryStatus]) -> str:
    """Render statuses as a fixed-width table.

    Args:
        results: Statuses in report order

    Returns:
        Table text, or an empty string when there are no results
    """
    if not results:
        return ""

    lines = [
        "",
        "=" * TABLE_WIDTH,
        f"{'Name':<30}{'Type':<12}{'Branch':<15}{'Behind':<10}{'Uncommitted':<14}Status",
        "-" * TABLE_WIDTH,
    ]
    lines.extend(format_row(status) for status in results)
    lines.append("=" * TABLE_WIDTH)
    return "\n".join(lines) + "\n"


def render_section(title: str, results: List[RepositoryStatus]) -> str:
    """Render a titled section with a fallback line for empty sections."""
    text = f"\n{title}:\n"
    if results:
        return text + render_table(results)
    fallback = SECTION_EMPTY_MESSAGES.get(title)
    return text + (f"{fallback}\n" if fallback else "")


def render_summary(stats: Statistics) -> str:
    """Render the summary block."""
    return (
        "\nSUMMARY:\n"
        f"  Total repositories: {stats.total}\n"
        f"  Up to date: {stats.up_to_date}\n"
        f"  Updates available: {stats.has_updates}\n"
        f"  Errors/Warnings: {stats.errors}\n\n"
    )


class ReportWriter:
    """Write report text to the console and optionally to a file."""

    def __init__(self, report_file: Optional[str] = None, stream: Optional[TextIO] = None):
        """Initialize report writer.

        Args:
            report_file: Optional path the report is also saved to
            stream: Console stream (default: stdout)
        """
        self.report_file = report_file
        self.stream = stream if stream is not None else sys.stdout
        self._file: Optional[TextIO] = None

    def __enter__(self) -> 'ReportWriter':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Open the report file and write its timestamp header."""
        if not self.report_file:
            return
        try:
            self._file = open(self.report_file, 'w', encoding='utf-8')
        except OSError as e:
            logger.warning(f"Could not open report file: {self.report_file} ({e})")
            self._file = None
            return
        self._file.write(datetime.now().strftime('%Y-%m-%d %H:%M:%S') + "\n")

    @property
    def is_saving(self) -> bool:
        return self._file is not None

    def write(self, text: str) -> None:
        """Write text to the console and to the report file if open."""
        self.stream.write(text)
        if self._file is not None:
            self._file.write(text)

    def close(self) -> None:
        """Close the report file."""
        if self._file is None:
            return
        self._file.close()
        self._file = None
        logger.info(f"Report saved to: {self.report_file}")
