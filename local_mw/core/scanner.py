"""Concurrent scanner for orchestrating repository status checks."""

import logging
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Deque, List

from .resolver import StatusResolver
from .types import RepositoryStatus, ScanBatch, ScanTarget

logger = logging.getLogger('local_mw')


class Scanner:
    """Run the status resolver over a batch with bounded parallelism.

    At most max_workers resolutions are in flight at once. When the window is
    full the scanner waits for the oldest pending one before submitting the
    next, so results come back in batch order whatever the completion order.
    """

    def __init__(
        self,
        resolver: StatusResolver,
        max_workers: int = 1,
        sequential: bool = False
    ):
        """Initialize scanner.

        Args:
            resolver: Resolver run once per repository
            max_workers: Maximum number of parallel workers (minimum 1)
            sequential: Force sequential processing
        """
        self.resolver = resolver
        self.max_workers = max(1, max_workers)
        self.sequential = sequential

    def scan(self, batch: ScanBatch) -> List[RepositoryStatus]:
        """Resolve every repository in a batch.

        Args:
            batch: Ordered repositories to check

        Returns:
            One status per target, in batch order
        """
        if not len(batch):
            return []

        if self.sequential or self.max_workers == 1:
            logger.debug("Using sequential processing")
            return self._scan_sequential(batch)

        logger.debug(f"Using parallel processing with {self.max_workers} workers")
        return self._scan_parallel(batch)

    def _scan_parallel(self, batch: ScanBatch) -> List[RepositoryStatus]:
        """Resolve a batch through a sliding window of futures."""
        results = []
        pending: Deque[Future] = deque()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for target in batch:
                pending.append(executor.submit(self._process_target, target))
                if len(pending) >= self.max_workers:
                    results.append(pending.popleft().result())

            while pending:
                results.append(pending.popleft().result())

        return results

    def _scan_sequential(self, batch: ScanBatch) -> List[RepositoryStatus]:
        """Resolve a batch one repository at a time."""
        return [self._process_target(target) for target in batch]

    def _process_target(self, target: ScanTarget) -> RepositoryStatus:
        """Resolve one target, turning unexpected exceptions into a status."""
        try:
            return self.resolver.resolve(target.path, target.kind)
        except Exception as e:
            self.resolver.channel.log(
                f"Unexpected error processing {target.path}: {e}", logging.ERROR
            )
            return replace(
                RepositoryStatus.empty(target.path, target.kind),
                error_message=f"Unexpected error: {str(e)}"
            )
