"""Business model.

Represents a directory listing with its classification (category, city,
country), operational flags used by search facets and ranking, and counters.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdir.models.category import Category
from bizdir.models.city import City
from bizdir.models.country import Country
from bizdir.models.review import Review
from bizdir.stores.postgres import Base


class Business(Base):
    """Directory listing."""

    __tablename__ = "businesses"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Identity
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200), index=True)

    # Descriptive fields
    description: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(200))
    website: Mapped[str | None] = mapped_column(Text)
    images: Mapped[list[str] | None] = mapped_column(JSON)
    logo_url: Mapped[str | None] = mapped_column(Text)

    # Classification
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True)
    city_id: Mapped[int | None] = mapped_column(ForeignKey("cities.id"), index=True)
    country_id: Mapped[int | None] = mapped_column(ForeignKey("countries.id"), index=True)

    # Operational flags
    status: Mapped[str] = mapped_column(String(20), default="pending", index=True)
    is_premium: Mapped[bool] = mapped_column(default=False)
    is_verified: Mapped[bool] = mapped_column(default=False)
    has_coupons: Mapped[bool] = mapped_column(default=False)
    accepts_orders_online: Mapped[bool] = mapped_column(default=False)
    is_kid_friendly: Mapped[bool] = mapped_column(default=False)
    is_sponsored_ad: Mapped[bool] = mapped_column(default=False, index=True)

    # Metrics (incremented atomically, see stores.business_store)
    view_count: Mapped[int] = mapped_column(default=0)
    click_count: Mapped[int] = mapped_column(default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Joined projections, always loaded explicitly by the store adapter
    category: Mapped[Category] = relationship(lazy="raise")
    city: Mapped[City | None] = relationship(lazy="raise")
    country: Mapped[Country | None] = relationship(lazy="raise")
    reviews: Mapped[list[Review]] = relationship(lazy="raise", order_by=Review.created_at)

    def __repr__(self) -> str:
        return f"<Business {self.slug} ({self.status})>"
