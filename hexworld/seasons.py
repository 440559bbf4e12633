from __future__ import annotations

"""Season and hemisphere lookup for the 14-month year."""

from .hex import Hemisphere, Season
from .settings import EQUATORIAL_LATITUDE, MONTHS_PER_YEAR


def normalize_month(month: int) -> int:
    """Wrap any integer month into 1..14."""
    return (int(month) - 1) % MONTHS_PER_YEAR + 1


def hemisphere_for(latitude: float) -> Hemisphere:
    if abs(latitude) <= EQUATORIAL_LATITUDE:
        return Hemisphere.EQUATORIAL
    return Hemisphere.NORTHERN if latitude > 0 else Hemisphere.SOUTHERN


def season_for(month: int, hemisphere: Hemisphere) -> Season:
    """
    Season for a month in the given hemisphere.

    Equatorial regions only know a wet summer (months 1-7) and a dry winter.
    The southern hemisphere runs half a year out of phase with the north.
    """
    month = normalize_month(month)
    if hemisphere is Hemisphere.EQUATORIAL:
        return Season.SUMMER if month <= 7 else Season.WINTER
    if hemisphere is Hemisphere.NORTHERN:
        if month <= 3:
            return Season.WINTER
        if month <= 7:
            return Season.SPRING
        if month <= 10:
            return Season.SUMMER
        return Season.AUTUMN
    if month <= 3:
        return Season.SUMMER
    if month <= 7:
        return Season.AUTUMN
    if month <= 10:
        return Season.WINTER
    return Season.SPRING


__all__ = ["hemisphere_for", "normalize_month", "season_for"]
