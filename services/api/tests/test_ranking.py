"""Tests for result ranking."""

from datetime import datetime, timezone

import pytest

from bizdir.services.ranking import average_rating, rank

from conftest import make_business


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def _ids(businesses) -> list[int]:
    return [b.id for b in businesses]


def test_default_sort_scenario():
    x = make_business(1, "X", is_premium=False, created_at=_day(2024, 1, 1))
    y = make_business(2, "Y", is_premium=True, created_at=_day(2023, 1, 1))
    z = make_business(3, "Z", is_sponsored_ad=True, is_premium=False, created_at=_day(2024, 6, 1))
    assert _ids(rank([x, y, z], "default")) == [3, 2, 1]


def test_default_sort_newest_first_within_premium_tier():
    old = make_business(1, is_premium=True, created_at=_day(2020, 1, 1))
    new = make_business(2, is_premium=True, created_at=_day(2024, 1, 1))
    plain = make_business(3, created_at=_day(2025, 1, 1))
    assert _ids(rank([old, plain, new], "default", "asc")) == [2, 1, 3]


@pytest.mark.parametrize("sort_key", ["default", "distance", "rating", "name"])
@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_sponsored_always_first(sort_key, direction):
    businesses = [
        make_business(1, "Alpha", created_at=_day(2025, 1, 1), ratings=(5,), is_premium=True),
        make_business(2, "Zulu", is_sponsored_ad=True, created_at=_day(2019, 1, 1), ratings=(1,)),
        make_business(3, "Bravo", created_at=_day(2024, 1, 1), ratings=(4,)),
        make_business(4, "Yankee", is_sponsored_ad=True, created_at=_day(2018, 1, 1)),
    ]
    ranked = rank(businesses, sort_key, direction)
    flags = [b.is_sponsored_ad for b in ranked]
    assert flags == sorted(flags, reverse=True)
    assert set(_ids(ranked[:2])) == {2, 4}


def test_rating_sort_desc_with_ties_in_input_order():
    a = make_business(1, ratings=(4, 4))
    b = make_business(2, ratings=(5,))
    c = make_business(3, ratings=(3, 5))
    d = make_business(4)
    assert _ids(rank([a, b, c, d], "rating", "desc")) == [2, 1, 3, 4]
    assert _ids(rank([a, b, c, d], "rating", "asc")) == [4, 1, 3, 2]


def test_name_sort_is_case_sensitive():
    lower = make_business(1, "apple")
    upper = make_business(2, "Banana")
    mid = make_business(3, "Cherry")
    assert _ids(rank([lower, upper, mid], "name", "asc")) == [2, 3, 1]
    assert _ids(rank([lower, upper, mid], "name", "desc")) == [1, 3, 2]


def test_distance_uses_created_at_proxy():
    old = make_business(1, created_at=_day(2020, 1, 1))
    new = make_business(2, created_at=_day(2024, 1, 1))
    assert _ids(rank([old, new], "distance", "desc")) == [2, 1]
    assert _ids(rank([new, old], "distance", "asc")) == [1, 2]


def test_rank_does_not_mutate_input():
    businesses = [make_business(1, "B"), make_business(2, "A")]
    ranked = rank(businesses, "name", "asc")
    assert _ids(businesses) == [1, 2]
    assert ranked is not businesses


def test_average_rating():
    assert average_rating(make_business(1)) == 0
    assert average_rating(make_business(2, ratings=(3, 4))) == pytest.approx(3.5)
    # Out-of-range ratings are averaged as-is
    assert average_rating(make_business(3, ratings=(7, 1))) == pytest.approx(4.0)
