import pytest

from hexworld.hex import Hemisphere, Season
from hexworld.seasons import hemisphere_for, normalize_month, season_for


@pytest.mark.parametrize(
    "latitude,expected",
    [
        (0, Hemisphere.EQUATORIAL),
        (10, Hemisphere.EQUATORIAL),
        (-10, Hemisphere.EQUATORIAL),
        (45, Hemisphere.NORTHERN),
        (-45, Hemisphere.SOUTHERN),
    ],
)
def test_hemisphere_for_latitude(latitude, expected):
    assert hemisphere_for(latitude) is expected


def test_northern_seasons():
    assert season_for(1, Hemisphere.NORTHERN) is Season.WINTER
    assert season_for(5, Hemisphere.NORTHERN) is Season.SPRING
    assert season_for(9, Hemisphere.NORTHERN) is Season.SUMMER
    assert season_for(12, Hemisphere.NORTHERN) is Season.AUTUMN


def test_southern_hemisphere_is_out_of_phase():
    assert season_for(1, Hemisphere.SOUTHERN) is Season.SUMMER
    assert season_for(5, Hemisphere.SOUTHERN) is Season.AUTUMN
    assert season_for(9, Hemisphere.SOUTHERN) is Season.WINTER
    assert season_for(12, Hemisphere.SOUTHERN) is Season.SPRING


def test_equatorial_has_two_seasons():
    assert {season_for(m, Hemisphere.EQUATORIAL) for m in range(1, 8)} == {Season.SUMMER}
    assert {season_for(m, Hemisphere.EQUATORIAL) for m in range(8, 15)} == {Season.WINTER}


def test_month_wraps_into_year():
    assert normalize_month(15) == 1
    assert normalize_month(0) == 14
    assert normalize_month(-1) == 13
    assert season_for(15, Hemisphere.NORTHERN) is season_for(1, Hemisphere.NORTHERN)
