"""Product Routes: list/get/create/update/delete."""

import logging

from fastapi import APIRouter, Depends, status

from helpdesk.api.dependencies import ValidatedRequest, get_product_repository
from helpdesk.core import envelope
from helpdesk.core.errors import ResourceNotFoundError
from helpdesk.core.repository_protocols import ProductRepository
from helpdesk.schemas.common import split_list_query
from helpdesk.schemas.product import (
    ProductCreate, ProductFilter, ProductResponse, ProductUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["products"])


async def get_product_or_404(products: ProductRepository, product_id: int):
    product = await products.find_by_id(product_id)
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


@router.get("")
async def list_products(
    query: dict = Depends(ValidatedRequest(ProductFilter, "query")),
    products: ProductRepository = Depends(get_product_repository),
):
    filters, options = split_list_query(query)
    rows, total = await products.find_all(filters, options)
    return envelope.paginated(
        "Products retrieved successfully",
        ProductResponse.present_list(rows),
        envelope.page_of(options.page, options.limit, total),
    )


@router.get("/{product_id}")
async def get_product(
    product_id: int, products: ProductRepository = Depends(get_product_repository),
):
    product = await get_product_or_404(products, product_id)
    return envelope.success(
        "Product retrieved successfully", ProductResponse.present(product),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: dict = Depends(ValidatedRequest(ProductCreate)),
    products: ProductRepository = Depends(get_product_repository),
):
    product = await products.create(body)
    logger.info(
        f"Product created successfully with ID: {product.id}",
        extra={"resource_id": product.id},
    )
    return envelope.success(
        "Product created successfully", ProductResponse.present(product),
    )


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    body: dict = Depends(ValidatedRequest(ProductUpdate)),
    products: ProductRepository = Depends(get_product_repository),
):
    await get_product_or_404(products, product_id)
    product = await products.update(product_id, body)
    return envelope.success(
        "Product updated successfully", ProductResponse.present(product),
    )


@router.delete("/{product_id}")
async def delete_product(
    product_id: int, products: ProductRepository = Depends(get_product_repository),
):
    await get_product_or_404(products, product_id)
    await products.delete(product_id)
    return envelope.success("Product deleted successfully")
