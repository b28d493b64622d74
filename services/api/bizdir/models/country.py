"""Country model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from bizdir.stores.postgres import Base


class Country(Base):
    """Country used as a filter dimension and as the parent of cities."""

    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(100), index=True)
    code: Mapped[str] = mapped_column(String(2), unique=True, index=True)  # ISO 3166-1 alpha-2
    flag_url: Mapped[str | None] = mapped_column(String(500))

    def __repr__(self) -> str:
        return f"<Country {self.code}>"
