"""Pydantic request/response schemas for the Marketplace API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

# --- Auth & user schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ada Shopper",
                    "email": "ada@example.com",
                    "password": "secret123",
                    "role": "shopper",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["shopper", "seller", "admin"] = "shopper"


class RegisterResponse(BaseModel):
    message: str
    user_id: str


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "ada@example.com", "password": "secret123"}]}}

    email: EmailStr
    password: str


class UserSummary(BaseModel):
    id: str
    email: str
    name: str
    role: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary


class MessageResponse(BaseModel):
    message: str


class SellerApplicationRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "maker@example.com",
                    "store_name": "Maker's Corner",
                    "store_description": "Handmade ceramics and prints.",
                }
            ]
        }
    }

    email: EmailStr
    store_name: str = Field(..., min_length=1, max_length=100)
    store_description: str | None = None


class SellerApplicationResponse(BaseModel):
    message: str
    type: str


class ApproveSellerResponse(BaseModel):
    message: str
    user_id: str
    type: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: str
    is_verified: bool
    created_at: datetime | None = None


class UpdateProfileRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Ada Lovelace", "email": "ada.l@example.com"}]}}

    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None


# --- Store schemas ---


class CreateStoreRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Maker's Corner", "description": "Handmade ceramics and prints."}]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class UpdateStoreRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class StoreIdResponse(BaseModel):
    store_id: str


class StoreResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    is_approved: bool
    owner_id: str
    owner: UserSummary | None = None
    products: list[ProductResponse] = []
    created_at: datetime | None = None


# --- Category schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Electronics", "description": "Phones, laptops and gadgets."}]}
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class CategoryIdResponse(BaseModel):
    category_id: str


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None


# --- Product schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Laptop Pro 14",
                    "description": "14-inch laptop with 16GB RAM.",
                    "price": 999.99,
                    "stock_quantity": 10,
                    "category_id": "b3c1a7f0-5d7e-4d8e-9a43-2f1e6c0b9d11",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: float = Field(..., ge=0)
    stock_quantity: int = Field(..., ge=0)
    category_id: str


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    category_id: str | None = None


class UpdateStockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"stock_quantity": 25}]}}

    stock_quantity: int = Field(..., ge=0)


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    stock_quantity: int
    is_featured: bool
    store_id: str
    category_id: str
    created_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int
    page: int
    limit: int


class FeatureResponse(BaseModel):
    product_id: str
    is_featured: bool


class RatingResponse(BaseModel):
    product_id: str
    average_rating: float
    total_reviews: int


# --- Order schemas ---


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"items": [{"product_id": "0b8f4c52-7a9b-4a0e-8f0d-3f1d2c4b5a69", "quantity": 3}]}]
        }
    }

    items: list[OrderItemRequest] = Field(..., min_length=1)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}

    status: str = Field(..., max_length=20)


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    store_id: str
    product_name: str
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    total_amount: float
    status: str
    items: list[OrderItemResponse]
    created_at: datetime | None = None


class StatusResponse(BaseModel):
    status: str = "ok"


# --- Review schemas ---


class CreateReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "0b8f4c52-7a9b-4a0e-8f0d-3f1d2c4b5a69",
                    "rating": 5,
                    "comment": "Fast, quiet and the battery lasts all day.",
                }
            ]
        }
    }

    product_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None


class UpdateReviewRequest(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = None


class ReviewIdResponse(BaseModel):
    review_id: str


class ReviewResponse(BaseModel):
    id: str
    user_id: str
    product_id: str
    rating: int
    comment: str | None = None
    created_at: datetime | None = None


# --- Payment schemas ---


class ProcessPaymentRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": "6a0d3c1e-2b4f-4e8a-9c7d-1f2e3d4c5b6a",
                    "payment_method": "card",
                    "card_number": "4242424242424242",
                    "card_expiry": "12/30",
                    "card_cvv": "123",
                }
            ]
        }
    }

    order_id: str
    payment_method: Literal["card", "mobile_money", "bank_transfer"]
    card_number: str | None = Field(None, max_length=19)
    card_expiry: str | None = Field(None, max_length=7)
    card_cvv: str | None = Field(None, max_length=4)
    phone_number: str | None = Field(None, max_length=20)


class PaymentResponse(BaseModel):
    id: str
    order_id: str
    user_id: str
    amount: float
    method: str
    status: str
    reference: str | None = None
    failure_reason: str | None = None
    created_at: datetime | None = None


StoreResponse.model_rebuild()
