"""Catalogue endpoints: browsing for shoppers, maintenance for admins."""

from math import ceil

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.dependencies import admin_user
from storefront.api.schemas import (
    AvailabilityResponse,
    BestSellerResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    IdResponse,
    ProductListResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductRequest,
    UpdateStockRequest,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.availability import check_availability
from storefront.catalogue.product.creation import CreateProduct, UpdateProductDetails
from storefront.catalogue.product.product import LOW_STOCK_THRESHOLD, Product
from storefront.catalogue.product.stock import ToggleActive, ToggleFeatured, UpdateStock
from storefront.ordering.order.sales import best_sellers

router = APIRouter(prefix="/api/products", tags=["products"])


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        slug=product.slug,
        description=product.description,
        price=product.price,
        stock=product.stock,
        in_stock=product.in_stock,
        is_active=product.is_active,
        is_featured=product.is_featured,
        category_id=str(product.category_id),
    )


# ---------------------------------------------------------------------------
# Browsing
# ---------------------------------------------------------------------------
@router.get("", response_model=ProductListResponse)
async def list_products(
    category_id: str | None = None,
    search: str | None = None,
    featured: bool | None = None,
    in_stock: bool = False,
    min_price: float | None = None,
    max_price: float | None = None,
    sort: str = "newest",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> ProductListResponse:
    products, total = current_domain.repository_for(Product).browse(
        category_id=category_id,
        search=search,
        featured=featured,
        in_stock=in_stock,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        limit=limit,
    )
    return ProductListResponse(
        products=[_product_response(p) for p in products],
        total=total,
        page=page,
        limit=limit,
        pages=ceil(total / limit) if total else 0,
    )


@router.get("/featured", response_model=list[ProductResponse])
async def featured_products(limit: int = Query(8, ge=1, le=50)) -> list[ProductResponse]:
    return [_product_response(p) for p in current_domain.repository_for(Product).featured(limit)]


@router.get("/best-sellers", response_model=list[BestSellerResponse])
async def best_selling_products(limit: int = Query(8, ge=1, le=50)) -> list[BestSellerResponse]:
    return [
        BestSellerResponse(**_product_response(product).model_dump(), total_sold=total_sold)
        for product, total_sold in best_sellers(limit)
    ]


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [
        CategoryResponse(id=str(c.id), name=c.name, slug=c.slug, description=c.description)
        for c in current_domain.repository_for(Category).active()
    ]


@router.get("/low-stock", response_model=list[ProductResponse], dependencies=[Depends(admin_user)])
async def low_stock_products(threshold: int = Query(LOW_STOCK_THRESHOLD, ge=0)) -> list[ProductResponse]:
    return [_product_response(p) for p in current_domain.repository_for(Product).low_stock(threshold)]


def _active_product(product_id) -> Product:
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_active:
        raise ObjectNotFoundError(f"Product {product_id} not found")
    return product


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(_active_product(product_id))


@router.get("/{product_id}/similar", response_model=list[ProductResponse])
async def similar_products(product_id: str, limit: int = Query(4, ge=1, le=20)) -> list[ProductResponse]:
    product = _active_product(product_id)
    return [_product_response(p) for p in current_domain.repository_for(Product).similar(product, limit)]


@router.get("/{product_id}/availability", response_model=AvailabilityResponse)
async def product_availability(product_id: str, quantity: int = Query(1, ge=1)) -> AvailabilityResponse:
    return AvailabilityResponse(**check_availability(product_id, quantity))


# ---------------------------------------------------------------------------
# Back office
# ---------------------------------------------------------------------------
@router.post("/categories", status_code=201, response_model=IdResponse, dependencies=[Depends(admin_user)])
async def create_category(body: CreateCategoryRequest) -> IdResponse:
    category_id = current_domain.process(
        CreateCategory(name=body.name, description=body.description),
        asynchronous=False,
    )
    return IdResponse(id=category_id)


@router.post("", status_code=201, response_model=IdResponse, dependencies=[Depends(admin_user)])
async def create_product(body: CreateProductRequest) -> IdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category_id=body.category_id,
        is_featured=body.is_featured,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=product_id)


@router.put("/{product_id}", response_model=StatusResponse, dependencies=[Depends(admin_user)])
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/{product_id}/stock", response_model=ProductResponse, dependencies=[Depends(admin_user)])
async def update_stock(product_id: str, body: UpdateStockRequest) -> ProductResponse:
    command = UpdateStock(product_id=product_id, quantity=body.quantity, operation=body.operation)
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get(product_id))


@router.post("/{product_id}/toggle-featured", response_model=ProductResponse, dependencies=[Depends(admin_user)])
async def toggle_featured(product_id: str) -> ProductResponse:
    current_domain.process(ToggleFeatured(product_id=product_id), asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get(product_id))


@router.post("/{product_id}/toggle-active", response_model=ProductResponse, dependencies=[Depends(admin_user)])
async def toggle_active(product_id: str) -> ProductResponse:
    current_domain.process(ToggleActive(product_id=product_id), asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get(product_id))
