"""SQLAlchemy ORM models.

Models represent database tables:
- categories: Directory categories addressed by slug
- countries: Countries addressed by ISO code
- cities: Cities with optional coordinates (proximity search)
- businesses: Directory listings
- reviews: Customer reviews per business
"""

from bizdir.models.business import Business
from bizdir.models.category import Category
from bizdir.models.city import City
from bizdir.models.country import Country
from bizdir.models.review import Review

__all__ = ["Business", "Category", "City", "Country", "Review"]
