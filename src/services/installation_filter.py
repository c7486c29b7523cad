"""
Installation filter — narrows the installation list by status and search text.

Recomputed on every keystroke / combo change in the Installations tab.
"""

from __future__ import annotations

from typing import Iterable, List

from src.data.models import Installation

STATUS_FILTER_ALL = "all"


def matches(installation: Installation, status_filter: str, query: str) -> bool:
    """True if the installation passes both the status and the text filter."""
    if status_filter != STATUS_FILTER_ALL and installation.status != status_filter:
        return False
    needle = query.lower()
    return (
        needle in installation.customer_name.lower()
        or needle in installation.vehicle_info.lower()
    )


def filter_installations(
    installations: Iterable[Installation],
    status_filter: str = STATUS_FILTER_ALL,
    query: str = "",
) -> List[Installation]:
    """
    Return the visible subset of installations, in input order.

    status_filter is "all" or one of InstallationStatus.ALL. query is
    matched case-insensitively as a substring of the customer name or the
    vehicle description; an empty query matches everything.
    """
    return [i for i in installations if matches(i, status_filter, query)]
