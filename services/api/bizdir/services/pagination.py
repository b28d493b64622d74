"""Page slicing with ad-aware numbering.

Sponsored entries never consume a display number, and numbers are counted
over the whole ranked sequence so page 2 continues where page 1 stopped.
"""

import math
from collections.abc import Sequence

from bizdir.schemas.business import BusinessRecord
from bizdir.schemas.search import RankedItem, RankedPage
from bizdir.services.ranking import average_rating


def total_pages(total: int, page_size: int) -> int:
    """Number of pages for `total` items; at least 1 even when empty."""
    return max(1, math.ceil(total / page_size))


def display_numbers(ranked: Sequence[BusinessRecord]) -> list[int | None]:
    """Display number per ranked position (None for sponsored entries)."""
    numbers: list[int | None] = []
    count = 0
    for business in ranked:
        if business.is_sponsored_ad:
            numbers.append(None)
        else:
            count += 1
            numbers.append(count)
    return numbers


def paginate(ranked: Sequence[BusinessRecord], page: int, page_size: int) -> RankedPage:
    """Slice a ranked sequence into one page.

    Args:
        ranked: Fully ranked results.
        page: 1-based page number; pages past the end come back empty.
        page_size: Items per page (> 0).
    """
    start = (page - 1) * page_size
    end = start + page_size
    numbers = display_numbers(ranked)

    items = [
        RankedItem(
            position=index + 1,
            display_number=numbers[index],
            average_rating=round(average_rating(business), 2),
            review_count=len(business.reviews),
            business=business,
        )
        for index, business in enumerate(ranked[start:end], start=start)
    ]

    return RankedPage(
        items=items,
        total=len(ranked),
        page=page,
        page_size=page_size,
        total_pages=total_pages(len(ranked), page_size),
    )
