"""Rating aggregation helpers"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from app.schemas.review import RatingStats

RATING_VALUES = (1, 2, 3, 4, 5)


def is_valid_rating(rating) -> bool:
    """Ratings are whole numbers from 1 to 5 (booleans are rejected)"""
    return isinstance(rating, int) and not isinstance(rating, bool) and rating in RATING_VALUES


def compute_rating_stats(counts: Mapping[int, int]) -> RatingStats:
    """
    Build rating statistics from a {rating: number_of_reviews} mapping.

    The average is the exact mean rounded half-up to one decimal, e.g.
    [3, 4, 5] -> 4.0 and [3, 3, 4] -> 3.3. No reviews gives an average of 0.0.
    """
    distribution = {rating: int(counts.get(rating, 0)) for rating in RATING_VALUES}
    count = sum(distribution.values())
    if not count:
        return RatingStats(count=0, average=0.0, distribution=distribution)

    total = sum(rating * n for rating, n in distribution.items())
    mean = (Decimal(total) / Decimal(count)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return RatingStats(count=count, average=float(mean), distribution=distribution)
