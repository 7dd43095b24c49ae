from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class RatingAggregate:
    rating: Decimal
    total_reviews: int


def compute_rating_aggregate(ratings: Iterable[int]) -> RatingAggregate:
    """
    Arithmetic mean of all ratings, rounded half-up to two decimals.

    An empty history yields a rating of 0 with no reviews.
    """
    values = [int(r) for r in ratings]
    if not values:
        return RatingAggregate(rating=Decimal("0.00"), total_reviews=0)
    mean = Decimal(sum(values)) / Decimal(len(values))
    return RatingAggregate(rating=mean.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP), total_reviews=len(values))
