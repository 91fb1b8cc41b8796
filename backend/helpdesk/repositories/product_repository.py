"""Product Repository: SQLAlchemy persistence for products."""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.db.base import utcnow
from helpdesk.models.product import Product
from helpdesk.repositories.base import apply_changes, fetch_page
from helpdesk.schemas.common import PageRequest

SORT_COLUMNS = {
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
}


class SqlProductRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all(
        self, filters: dict[str, Any], options: PageRequest,
    ) -> tuple[Sequence[Product], int]:
        query = select(Product)
        if "category" in filters:
            query = query.where(Product.category == filters["category"])
        if "is_active" in filters:
            query = query.where(Product.is_active == filters["is_active"])
        if "name" in filters:
            query = query.where(Product.name.ilike(f"%{filters['name']}%"))
        if "min_price" in filters:
            query = query.where(Product.price >= filters["min_price"])
        if "max_price" in filters:
            query = query.where(Product.price <= filters["max_price"])
        return await fetch_page(self._db, query, options, SORT_COLUMNS, Product.id)

    async def find_by_id(self, product_id: int) -> Product | None:
        return await self._db.get(Product, product_id)

    async def create(self, data: dict[str, Any]) -> Product:
        product = Product(**data)
        self._db.add(product)
        await self._db.commit()
        await self._db.refresh(product)
        return product

    async def update(self, product_id: int, data: dict[str, Any]) -> Product | None:
        product = await self.find_by_id(product_id)
        if product is None:
            return None
        apply_changes(product, data)
        product.updated_at = utcnow()
        await self._db.commit()
        await self._db.refresh(product)
        return product

    async def delete(self, product_id: int) -> bool:
        product = await self.find_by_id(product_id)
        if product is None:
            return False
        await self._db.delete(product)
        await self._db.commit()
        return True
