"""City model.

Cities double as the filter dimension for "businesses in X" and as the
basis for proximity expansion, so coordinates are optional but indexed by name.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdir.models.country import Country
from bizdir.stores.postgres import Base


class City(Base):
    """City with optional coordinates."""

    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(200), index=True)
    country_id: Mapped[int] = mapped_column(ForeignKey("countries.id"), index=True)

    # Coordinates (WGS84 degrees); missing for cities never geocoded
    latitude: Mapped[float | None] = mapped_column()
    longitude: Mapped[float | None] = mapped_column()

    country: Mapped[Country] = relationship(lazy="raise")

    def __repr__(self) -> str:
        return f"<City {self.name}>"
