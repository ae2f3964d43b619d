"""Check operation: scan core, extensions and skins and report their status."""

import logging
from typing import Dict, List

from .base import Operation
from ..core.scanner import Scanner
from ..core.stats import aggregate
from ..core.types import RepositoryKind, RepositoryStatus, ScanBatch, Statistics
from ..utils.filesystem import count_directories, kind_directory
from ..utils.report import ReportWriter, render_section, render_summary, render_table

logger = logging.getLogger('local_mw')


class CheckOperation(Operation):
    """Check every repository of an installation and pull eligible ones."""

    name = "check"
    description = "Check core, extensions and skins for updates"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.scanner = Scanner(
            self.resolver,
            max_workers=self.config.max_workers,
            sequential=self.config.sequential
        )
        self.results: Dict[RepositoryKind, List[RepositoryStatus]] = {}

    def run(self) -> int:
        self.validate_installation()
        base_path = self.config.install_path

        logger.info(f"Checking MediaWiki installation at: {base_path}")
        if not self.config.report_only:
            logger.info(
                "Auto-pull enabled for "
                f"{'/'.join(sorted(self.config.mainline_branches))} branches with updates"
            )
        logger.info("This may take a moment...")

        logger.info("Checking MediaWiki core...")
        self.results[RepositoryKind.CORE] = [
            self.resolver.resolve(base_path, RepositoryKind.CORE)
        ]

        for kind in (RepositoryKind.EXTENSION, RepositoryKind.SKIN):
            dir_path = kind_directory(base_path, kind)
            logger.info(f"Checking {kind.value}s ({count_directories(dir_path)})...")
            self.channel.debug(f"Scanning {kind.value}s directory: {dir_path}")
            self.results[kind] = self.scanner.scan(ScanBatch.from_directory(dir_path, kind))

        self.write_report()
        return 0

    @property
    def statistics(self) -> Statistics:
        """Combined statistics over every section."""
        total = Statistics()
        for results in self.results.values():
            total = total + aggregate(results)
        return total

    def write_report(self) -> None:
        """Render the per-section tables and summary."""
        with ReportWriter(self.config.report_file, stream=self.stream) as writer:
            core = self.results.get(RepositoryKind.CORE, [])
            if core:
                writer.write("\nMEDIAWIKI CORE:\n")
                writer.write(render_table(core))
            writer.write(render_section("EXTENSIONS", self.results.get(RepositoryKind.EXTENSION, [])))
            writer.write(render_section("SKINS", self.results.get(RepositoryKind.SKIN, [])))
            writer.write(render_summary(self.statistics))
