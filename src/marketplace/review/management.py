"""Review creation, editing and removal — commands and handlers.

A shopper may review a product once, and only after ordering it. Purchase
history and product existence are checked through the shared read-only
ports.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import (
    Capability,
    ensure_review_author,
    ensure_review_author_or_admin,
    require,
)
from marketplace.domain import marketplace
from marketplace.exceptions import DuplicateReview, NotPurchased
from marketplace.review.review import Review
from marketplace.shared.ports import get_product_catalog, get_purchase_history

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Review")
class CreateReview:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    product_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text()


@marketplace.command(part_of="Review")
class UpdateReview:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    review_id: Identifier(required=True)
    rating: Integer(min_value=1, max_value=5)
    comment: Text()


@marketplace.command(part_of="Review")
class DeleteReview:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    review_id: Identifier(required=True)


@marketplace.command_handler(part_of=Review)
class ManageReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        actor = Actor.from_command(command)
        require(actor, Capability.WRITE_REVIEW)

        product_id = str(command.product_id)
        # Raises ObjectNotFoundError for an unknown product
        get_product_catalog().get_product(product_id)

        if not get_purchase_history().has_purchased(actor.user_id, product_id):
            raise NotPurchased()

        repo = current_domain.repository_for(Review)
        if repo.find_by_author(actor.user_id, product_id) is not None:
            raise DuplicateReview()

        review = Review.submit(
            user_id=actor.user_id,
            product_id=product_id,
            rating=command.rating,
            comment=command.comment,
        )
        repo.add(review)
        logger.info("Review submitted", review_id=str(review.id), product_id=product_id)
        return str(review.id)

    @handle(UpdateReview)
    def update_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        ensure_review_author(Actor.from_command(command), review)

        review.edit(rating=command.rating, comment=command.comment)
        repo.add(review)

    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        ensure_review_author_or_admin(Actor.from_command(command), review)

        repo._dao.delete(review)
