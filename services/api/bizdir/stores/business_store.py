"""Business store adapter.

`BusinessStore` is the query interface the search core consumes. The
PostgreSQL implementation translates a BusinessPredicate into a SQLAlchemy
query, eagerly loads the joined projections, and validates rows into the
explicit record schemas so ORM objects never leave this module.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import ColumnElement, and_, false, or_, select, update
from sqlalchemy.orm import selectinload

from bizdir.models import Business, Category, City, Country
from bizdir.schemas.business import (
    BusinessRecord,
    BusinessStatus,
    Coordinates,
    PlaceCoordinates,
)
from bizdir.services.filters import BusinessPredicate
from bizdir.stores.postgres import get_session


class BusinessStore(Protocol):
    """Read interface (plus atomic counters) over the directory data."""

    async def fetch_active_businesses(self, predicate: BusinessPredicate) -> list[BusinessRecord]: ...

    async def fetch_business_by_id(self, business_id: int) -> BusinessRecord | None: ...

    async def fetch_place_coordinates(self, place_name: str) -> Coordinates | None: ...

    async def fetch_all_places_with_coordinates(self) -> list[PlaceCoordinates]: ...

    async def resolve_category_id_by_slug(self, slug: str) -> int | None: ...

    async def resolve_place_id_by_name(self, name: str) -> int | None: ...

    async def increment_view_count(self, business_id: int) -> bool: ...

    async def increment_click_count(self, business_id: int) -> bool: ...


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def predicate_clauses(predicate: BusinessPredicate) -> list[ColumnElement[bool]]:
    """Translate a predicate into WHERE clauses over Business (AND-ed together).

    Country matching needs the `countries` table joined by the caller.
    """
    if predicate.matches_nothing:
        return [false()]

    clauses: list[ColumnElement[bool]] = [Business.status == predicate.status.value]

    if predicate.category_id is not None:
        clauses.append(Business.category_id == predicate.category_id)

    if predicate.city_ids is not None:
        clauses.append(Business.city_id.in_(sorted(predicate.city_ids)))

    if predicate.country is not None:
        clauses.append(or_(Country.code == predicate.country, Country.name == predicate.country))

    if predicate.term is not None:
        pattern = f"%{_escape_like(predicate.term)}%"
        clauses.append(
            or_(
                Business.name.ilike(pattern, escape="\\"),
                Business.description.ilike(pattern, escape="\\"),
            )
        )

    for facet in predicate.facets:
        clauses.append(getattr(Business, facet).is_(True))

    return clauses


def _with_projections(query):
    return query.options(
        selectinload(Business.category),
        selectinload(Business.city).selectinload(City.country),
        selectinload(Business.country),
        selectinload(Business.reviews),
    )


class PostgresBusinessStore:
    """BusinessStore backed by the async SQLAlchemy session."""

    async def fetch_active_businesses(self, predicate: BusinessPredicate) -> list[BusinessRecord]:
        if predicate.matches_nothing:
            return []

        query = select(Business)
        if predicate.country is not None:
            query = query.join(Country, Business.country_id == Country.id)
        query = (
            _with_projections(query)
            .where(and_(*predicate_clauses(predicate)))
            # Store order: premium first, newest first
            .order_by(Business.is_premium.desc(), Business.created_at.desc(), Business.id.asc())
        )

        async with get_session() as session:
            result = await session.execute(query)
            rows = result.scalars().all()
            return [BusinessRecord.model_validate(row) for row in rows]

    async def fetch_business_by_id(self, business_id: int) -> BusinessRecord | None:
        query = _with_projections(select(Business)).where(
            Business.id == business_id,
            Business.status == BusinessStatus.ACTIVE.value,
        )
        async with get_session() as session:
            result = await session.execute(query)
            row = result.scalar_one_or_none()
            return BusinessRecord.model_validate(row) if row else None

    async def fetch_place_coordinates(self, place_name: str) -> Coordinates | None:
        async with get_session() as session:
            result = await session.execute(
                select(City.latitude, City.longitude).where(City.name == place_name).limit(1)
            )
            row = result.first()
        if row is None or row.latitude is None or row.longitude is None:
            return None
        return Coordinates(lat=row.latitude, lon=row.longitude)

    async def fetch_all_places_with_coordinates(self) -> list[PlaceCoordinates]:
        async with get_session() as session:
            result = await session.execute(
                select(City.name, City.latitude, City.longitude)
                .where(City.latitude.is_not(None), City.longitude.is_not(None))
                .order_by(City.id)
            )
            return [PlaceCoordinates(name=r.name, lat=r.latitude, lon=r.longitude) for r in result]

    async def resolve_category_id_by_slug(self, slug: str) -> int | None:
        async with get_session() as session:
            result = await session.execute(
                select(Category.id).where(Category.slug == slug, Category.is_active.is_(True))
            )
            return result.scalar_one_or_none()

    async def resolve_place_id_by_name(self, name: str) -> int | None:
        async with get_session() as session:
            result = await session.execute(
                select(City.id).where(City.name == name).order_by(City.id).limit(1)
            )
            return result.scalar_one_or_none()

    async def increment_view_count(self, business_id: int) -> bool:
        return await self._increment(business_id, Business.view_count)

    async def increment_click_count(self, business_id: int) -> bool:
        return await self._increment(business_id, Business.click_count)

    async def _increment(self, business_id: int, column) -> bool:
        # Single UPDATE ... SET n = n + 1, no read-modify-write round trip
        async with get_session() as session:
            result = await session.execute(
                update(Business)
                .where(Business.id == business_id)
                .values({column.key: column + 1})
            )
            return (result.rowcount or 0) > 0
