"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Common ---


class StatusResponse(BaseModel):
    success: bool = True
    message: str = "ok"


class IdResponse(BaseModel):
    success: bool = True
    id: str


# --- Auth ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "correct-horse-battery",
                    "first_name": "Jane",
                    "last_name": "Doe",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=254)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=128)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=128)


class ResetTokenResponse(BaseModel):
    success: bool = True
    message: str = "Token is valid"
    email: str


class MeResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    is_verified: bool
    is_admin: bool
    created_at: datetime | None = None
    addresses: int
    orders: int


# --- Users ---


class UpdateProfileRequest(BaseModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)


class AddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "street": "12 rue de la Paix",
                    "city": "Paris",
                    "zip_code": "75002",
                    "country": "France",
                    "phone": "+33 1 23 45 67 89",
                    "is_default": False,
                }
            ]
        }
    }

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    phone: str | None = Field(None, max_length=30)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)
    is_default: bool = False


class AddressResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    street: str
    city: str
    zip_code: str
    country: str
    phone: str | None = None
    is_default: bool
    formatted: str


class ProfileResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    is_verified: bool
    is_admin: bool
    addresses: list[AddressResponse]


class UserStatsResponse(BaseModel):
    total_orders: int
    completed_orders: int
    total_spent: str
    total_addresses: int
    member_since: datetime | None = None
    is_verified: bool


# --- Catalogue ---


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., max_length=100)
    description: str | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Heavyweight cotton tee",
                    "price": 19.99,
                    "stock": 40,
                    "category_id": "cat-001",
                    "is_featured": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: float
    stock: int = 0
    category_id: str
    is_featured: bool = False


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = None
    category_id: str | None = None


class UpdateStockRequest(BaseModel):
    quantity: int
    operation: str = "set"


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    price: float
    stock: int
    in_stock: bool
    is_active: bool
    is_featured: bool
    category_id: str


class BestSellerResponse(ProductResponse):
    total_sold: int


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int
    page: int
    limit: int
    pages: int


class AvailabilityResponse(BaseModel):
    available: bool
    stock: int
    message: str


# --- Cart ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int


class GuestCartLine(BaseModel):
    product_id: str
    quantity: int


class MergeCartRequest(BaseModel):
    items: list[GuestCartLine]


class CartLineResponse(BaseModel):
    item_id: str
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    line_total: float
    available_stock: int
    is_available: bool


class CartResponse(BaseModel):
    cart_id: str
    items: list[CartLineResponse]
    total_items: int
    total_quantity: int
    total_price: float
    is_empty: bool


class CartCountResponse(BaseModel):
    total_items: int
    total_quantity: int
    is_empty: bool


class CartValidationResponse(BaseModel):
    is_valid: bool
    errors: list[str]
    cart: CartResponse


class MergeCartResponse(BaseModel):
    merged: int
    cart: CartResponse


# --- Orders ---


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"shipping_address_id": "addr-001", "billing_address_id": "addr-001", "notes": "Ring twice"}]
        }
    }

    shipping_address_id: str
    billing_address_id: str
    notes: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderNumberResponse(BaseModel):
    success: bool = True
    order_number: str


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    total_price: float


class OrderAddressResponse(BaseModel):
    first_name: str
    last_name: str
    street: str
    city: str
    zip_code: str
    country: str
    phone: str | None = None
    formatted: str


class OrderResponse(BaseModel):
    order_number: str
    status: str
    total_price: float
    total_items: int
    total_quantity: int
    items: list[OrderItemResponse]
    shipping_address: OrderAddressResponse
    billing_address: OrderAddressResponse
    notes: str | None = None
    can_be_cancelled: bool
    is_completed: bool
    created_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class TimelineEntry(BaseModel):
    status: str
    label: str
    date: datetime | None = None


class TrackingResponse(BaseModel):
    order_number: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    timeline: list[TimelineEntry]
    can_be_cancelled: bool
    is_completed: bool


class OrderStatsResponse(BaseModel):
    total_orders: int
    pending_orders: int
    completed_orders: int
    cancelled_orders: int
    total_spent: str
    average_order_value: str
