"""Statistics aggregation over resolved statuses."""

from typing import Iterable

from .types import RepositoryStatus, Statistics


def aggregate(statuses: Iterable[RepositoryStatus]) -> Statistics:
    """Count up-to-date, updatable and erroring repositories.

    Every status lands in exactly one bucket, so the total always equals
    the number of statuses.

    Args:
        statuses: Resolved repository statuses

    Returns:
        Statistics for the sequence
    """
    up_to_date = has_updates = errors = 0
    for status in statuses:
        if status.is_error:
            errors += 1
        elif status.has_updates:
            has_updates += 1
        else:
            up_to_date += 1
    return Statistics(up_to_date=up_to_date, has_updates=has_updates, errors=errors)
