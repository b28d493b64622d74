"""Filter composition for business search.

A SearchRequest plus its resolved references becomes a BusinessPredicate:
- status == active, always
- category id equality (slug resolved beforehand)
- city id membership (single city, or every city in the proximity radius)
- country code or name equality
- free text: case-insensitive substring on name OR description
- facets: each requested flag must be true

The predicate evaluates in memory (`matches`) and the store adapter translates
the same fields into a SQL WHERE clause. An unresolved category or city makes
the predicate match nothing rather than dropping the filter.
"""

from dataclasses import dataclass, field

from bizdir.schemas.business import BusinessRecord, BusinessStatus
from bizdir.schemas.search import SearchRequest


@dataclass(frozen=True)
class ResolvedReferences:
    """Store ids for the category/city named in a request.

    `unresolved` lists which references failed to resolve (e.g. ["category"]).
    """

    category_id: int | None = None
    city_ids: frozenset[int] | None = None
    unresolved: tuple[str, ...] = ()


@dataclass(frozen=True)
class BusinessPredicate:
    """Conjunctive filter over business records."""

    status: BusinessStatus = BusinessStatus.ACTIVE
    category_id: int | None = None
    city_ids: frozenset[int] | None = None
    country: str | None = None
    term: str | None = None
    facets: tuple[str, ...] = field(default_factory=tuple)
    matches_nothing: bool = False

    def matches(self, business: BusinessRecord) -> bool:
        """Evaluate the predicate against a single record."""
        if self.matches_nothing:
            return False
        if business.status != self.status:
            return False
        if self.category_id is not None and business.category.id != self.category_id:
            return False
        if self.city_ids is not None:
            if business.city is None or business.city.id not in self.city_ids:
                return False
        if self.country is not None:
            if business.country is None:
                return False
            if self.country not in (business.country.code, business.country.name):
                return False
        if self.term is not None and not _matches_term(business, self.term):
            return False
        return all(getattr(business, facet) for facet in self.facets)

    def apply(self, businesses: list[BusinessRecord]) -> list[BusinessRecord]:
        """Keep matching records, preserving order."""
        return [b for b in businesses if self.matches(b)]


def _matches_term(business: BusinessRecord, term: str) -> bool:
    needle = term.lower()
    if needle in business.name.lower():
        return True
    return bool(business.description) and needle in business.description.lower()


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def compose(request: SearchRequest, references: ResolvedReferences | None = None) -> BusinessPredicate:
    """Build the predicate for a request.

    Args:
        request: Validated search request.
        references: Resolved category/city ids. Required when the request names
            a category or city; a missing resolution means no matches.

    Returns:
        BusinessPredicate (possibly one that matches nothing).
    """
    references = references or ResolvedReferences()

    category_slug = _clean(request.category_slug)
    city = _clean(request.city)

    matches_nothing = bool(references.unresolved)
    if category_slug and references.category_id is None:
        matches_nothing = True
    if city and not references.city_ids:
        matches_nothing = True

    return BusinessPredicate(
        category_id=references.category_id if category_slug else None,
        city_ids=references.city_ids if city else None,
        country=_clean(request.country),
        term=_clean(request.term),
        facets=request.active_facets(),
        matches_nothing=matches_nothing,
    )
