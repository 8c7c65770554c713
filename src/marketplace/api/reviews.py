"""FastAPI endpoints for reviews."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.catalogue import review_response
from marketplace.api.schemas import (
    CreateReviewRequest,
    MessageResponse,
    ReviewIdResponse,
    ReviewResponse,
    UpdateReviewRequest,
)
from marketplace.api.security import actor_fields, current_actor
from marketplace.auth.actor import Actor
from marketplace.review.management import CreateReview, DeleteReview, UpdateReview
from marketplace.review.review import Review

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def create_review(body: CreateReviewRequest, actor: Actor = Depends(current_actor)) -> ReviewIdResponse:
    command = CreateReview(
        product_id=body.product_id,
        rating=body.rating,
        comment=body.comment,
        **actor_fields(actor),
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: str, actor: Actor = Depends(current_actor)) -> ReviewResponse:
    return review_response(current_domain.repository_for(Review).get(review_id))


@review_router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str, body: UpdateReviewRequest, actor: Actor = Depends(current_actor)
) -> ReviewResponse:
    command = UpdateReview(
        review_id=review_id,
        rating=body.rating,
        comment=body.comment,
        **actor_fields(actor),
    )
    current_domain.process(command, asynchronous=False)
    return review_response(current_domain.repository_for(Review).get(review_id))


@review_router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(review_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(DeleteReview(review_id=review_id, **actor_fields(actor)), asynchronous=False)
    return MessageResponse(message="Review deleted successfully")
