"""Product rating statistics."""

from decimal import ROUND_HALF_UP, Decimal

from protean.utils.globals import current_domain

from marketplace.review.review import Review


def rating_stats(product_id: str) -> dict:
    """Average rating (half-up to one decimal, 0.0 with no reviews) and review count."""
    ratings = [review.rating for review in current_domain.repository_for(Review).for_product(product_id)]
    if not ratings:
        return {"average_rating": 0.0, "total_reviews": 0}

    average = Decimal(sum(ratings)) / Decimal(len(ratings))
    return {
        "average_rating": float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)),
        "total_reviews": len(ratings),
    }
