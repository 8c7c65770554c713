"""Review aggregate — a shopper's rating of a product they bought."""

from datetime import datetime

from protean.fields import DateTime, Identifier, Integer, Text

from marketplace.domain import marketplace
from marketplace.review.events import ReviewEdited, ReviewSubmitted
from marketplace.utils.query import fetch_all


@marketplace.aggregate
class Review:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def submit(cls, user_id, product_id, rating, comment=None):
        now = datetime.now()
        review = cls(
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=review.id,
                user_id=user_id,
                product_id=product_id,
                rating=rating,
            )
        )
        return review

    def edit(self, rating=None, comment=None):
        if rating is not None:
            self.rating = rating
        if comment is not None:
            self.comment = comment
        self.updated_at = datetime.now()
        self.raise_(ReviewEdited(review_id=self.id, product_id=self.product_id, rating=self.rating))


@marketplace.repository(part_of=Review)
class ReviewRepository:
    def for_product(self, product_id: str) -> list[Review]:
        return fetch_all(self._dao.query.filter(product_id=str(product_id)).order_by("-created_at"))

    def find_by_author(self, user_id: str, product_id: str) -> Review | None:
        reviews = self._dao.query.filter(user_id=str(user_id), product_id=str(product_id)).all().items
        return reviews[0] if reviews else None
