"""Tests for filter composition."""

from bizdir.schemas.search import SearchRequest
from bizdir.services.filters import BusinessPredicate, ResolvedReferences, compose

from conftest import AMSTERDAM, BERLIN, PLUMBERS, POTSDAM, make_business


def test_always_requires_active_status():
    predicate = compose(SearchRequest())
    assert predicate.matches(make_business(1))
    for status in ("pending", "suspended", "premium"):
        assert not predicate.matches(make_business(2, status=status))


def test_unresolved_category_matches_nothing():
    predicate = compose(SearchRequest(category_slug="does-not-exist"), ResolvedReferences())
    assert predicate.matches_nothing
    assert not predicate.matches(make_business(1))


def test_unresolved_city_matches_nothing():
    references = ResolvedReferences(city_ids=frozenset(), unresolved=("city",))
    predicate = compose(SearchRequest(city="Atlantis"), references)
    assert predicate.matches_nothing


def test_category_filter_uses_resolved_id():
    predicate = compose(SearchRequest(category_slug="restaurants"), ResolvedReferences(category_id=10))
    assert predicate.matches(make_business(1))
    assert not predicate.matches(make_business(2, category=PLUMBERS))


def test_city_filter_membership():
    references = ResolvedReferences(city_ids=frozenset({BERLIN.id, POTSDAM.id}))
    predicate = compose(SearchRequest(city="Berlin"), references)
    assert predicate.matches(make_business(1, city=BERLIN))
    assert predicate.matches(make_business(2, city=POTSDAM))
    assert not predicate.matches(make_business(3, city=AMSTERDAM))
    assert not predicate.matches(make_business(4, city=None))


def test_country_matches_code_or_name():
    by_code = compose(SearchRequest(country="NL"))
    by_name = compose(SearchRequest(country="Netherlands"))
    dutch = make_business(1, city=AMSTERDAM)
    german = make_business(2, city=BERLIN)
    assert by_code.matches(dutch) and by_name.matches(dutch)
    assert not by_code.matches(german) and not by_name.matches(german)


def test_term_is_case_insensitive_over_name_or_description():
    predicate = compose(SearchRequest(term="CURRY"))
    assert predicate.matches(make_business(1, "Curry Corner"))
    assert predicate.matches(make_business(2, "Imbiss", description="best currywurst"))
    assert not predicate.matches(make_business(3, "Sushi Bar"))
    assert not predicate.matches(make_business(4, "Noodles", description=None))


def test_blank_term_imposes_nothing():
    predicate = compose(SearchRequest(term="   "))
    assert predicate.term is None
    assert predicate.matches(make_business(1))


def test_true_facets_are_required_false_facets_ignored():
    predicate = compose(SearchRequest(has_coupons=True, is_kid_friendly=True, is_premium=False))
    assert predicate.facets == ("has_coupons", "is_kid_friendly")
    assert predicate.matches(make_business(1, has_coupons=True, is_kid_friendly=True))
    assert not predicate.matches(make_business(2, has_coupons=True))
    assert compose(SearchRequest()).matches(make_business(3))


def test_apply_preserves_order():
    businesses = [make_business(3), make_business(1, status="pending"), make_business(2)]
    assert [b.id for b in BusinessPredicate().apply(businesses)] == [3, 2]
