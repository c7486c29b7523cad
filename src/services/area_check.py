"""
Cut-area consistency check.

An installation's total_area is typed in by hand, so it can drift from the
sum of its cuts. The check is advisory by default (log a warning) and can
be switched to enforced (refuse the save).
"""

from __future__ import annotations

import logging

from src.data.models import Installation

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SQFT = 0.05


class AreaMismatchError(ValueError):
    """Raised in enforced mode when total_area disagrees with the cuts."""


def cut_area(installation: Installation) -> float:
    return sum(c.square_feet for c in installation.cuts)


def area_discrepancy(installation: Installation) -> float:
    """total_area minus the cut sum (positive means cuts are missing)."""
    return installation.total_area - cut_area(installation)


def check_area(
    installation: Installation,
    enforce: bool = False,
    tolerance: float = DEFAULT_TOLERANCE_SQFT,
) -> bool:
    """
    Return True if total_area matches the cuts within tolerance.

    Installations without cuts are always consistent (nothing cut yet).
    """
    if not installation.cuts:
        return True
    diff = area_discrepancy(installation)
    if abs(diff) <= tolerance:
        return True

    msg = (
        f"Installation {installation.id}: total area {installation.total_area:.1f} ft² "
        f"but cuts add up to {cut_area(installation):.1f} ft²"
    )
    if enforce:
        raise AreaMismatchError(msg)
    logger.warning(msg)
    return False
