"""FastAPI endpoints for categories, products and product reviews.

Catalogue reads are public; writes need a bearer token.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    CategoryIdResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    FeatureResponse,
    MessageResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    RatingResponse,
    ReviewResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
    UpdateStockRequest,
)
from marketplace.api.security import actor_fields, current_actor
from marketplace.auth.actor import Actor
from marketplace.catalogue.category import Category, CreateCategory, DeleteCategory, UpdateCategory
from marketplace.catalogue.listing import DEFAULT_PAGE_SIZE, featured_products, list_products
from marketplace.catalogue.management import (
    CreateProduct,
    DeleteProduct,
    SetProductStock,
    ToggleFeatured,
    UpdateProduct,
)
from marketplace.catalogue.product import Product
from marketplace.review.rating import rating_stats
from marketplace.review.review import Review

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(id=str(category.id), name=category.name, description=category.description)


def product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        is_featured=product.is_featured,
        store_id=str(product.store_id),
        category_id=str(product.category_id),
        created_at=product.created_at,
    )


def review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=str(review.id),
        user_id=str(review.user_id),
        product_id=str(review.product_id),
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
    )


# --- Category endpoints ---


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest, actor: Actor = Depends(current_actor)) -> CategoryIdResponse:
    command = CreateCategory(name=body.name, description=body.description, **actor_fields(actor))
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [category_response(c) for c in current_domain.repository_for(Category).list_all()]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return category_response(current_domain.repository_for(Category).get(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, actor: Actor = Depends(current_actor)
) -> CategoryResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        **actor_fields(actor),
    )
    current_domain.process(command, asynchronous=False)
    return category_response(current_domain.repository_for(Category).get(category_id))


@category_router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(DeleteCategory(category_id=category_id, **actor_fields(actor)), asynchronous=False)
    return MessageResponse(message="Category deleted successfully")


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, actor: Actor = Depends(current_actor)) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        category_id=body.category_id,
        **actor_fields(actor),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductListResponse)
async def search_products(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    search: str | None = None,
    category_id: str | None = None,
) -> ProductListResponse:
    result = list_products(page=page, limit=limit, search=search, category_id=category_id)
    return ProductListResponse(
        products=[product_response(p) for p in result["products"]],
        total=result["total"],
        page=result["page"],
        limit=result["limit"],
    )


@product_router.get("/featured", response_model=list[ProductResponse])
async def get_featured_products() -> list[ProductResponse]:
    return [product_response(p) for p in featured_products()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return product_response(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, actor: Actor = Depends(current_actor)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
        **actor_fields(actor),
    )
    current_domain.process(command, asynchronous=False)
    return product_response(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}/stock", response_model=ProductResponse)
async def update_stock(
    product_id: str, body: UpdateStockRequest, actor: Actor = Depends(current_actor)
) -> ProductResponse:
    command = SetProductStock(product_id=product_id, stock_quantity=body.stock_quantity, **actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return product_response(current_domain.repository_for(Product).get(product_id))


@product_router.post("/{product_id}/feature", response_model=FeatureResponse)
async def toggle_featured(product_id: str, actor: Actor = Depends(current_actor)) -> FeatureResponse:
    result = current_domain.process(ToggleFeatured(product_id=product_id, **actor_fields(actor)), asynchronous=False)
    return FeatureResponse(product_id=product_id, is_featured=result)


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, actor: Actor = Depends(current_actor)) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id, **actor_fields(actor)), asynchronous=False)
    return MessageResponse(message="Product deleted successfully")


@product_router.get("/{product_id}/reviews", response_model=list[ReviewResponse])
async def get_product_reviews(product_id: str) -> list[ReviewResponse]:
    current_domain.repository_for(Product).get(product_id)
    return [review_response(r) for r in current_domain.repository_for(Review).for_product(product_id)]


@product_router.get("/{product_id}/rating", response_model=RatingResponse)
async def get_product_rating(product_id: str) -> RatingResponse:
    current_domain.repository_for(Product).get(product_id)
    return RatingResponse(product_id=product_id, **rating_stats(product_id))
