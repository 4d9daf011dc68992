"""
Product resource service.

Holds the CRUD business rules for products independently of the HTTP layer:
input validation, price coercion, partial updates and the mapping of
persistence outcomes (missing rows, driver faults) onto the domain errors in
``shopsmart.errors``.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopsmart import repositories
from shopsmart.core.logging import get_logger
from shopsmart.errors import ProductNotFound, ProductValidationError, StorageFault
from shopsmart.models import Product
from shopsmart.schemas import ProductCreate, ProductUpdate

logger = get_logger(__name__)


def coerce_price(value: Union[float, int, str]) -> float:
    """
    Parse a price given as a number or a numeric string into a float.

    Raises ProductValidationError when the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ProductValidationError("Price must be a number")
    try:
        price = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as e:
        raise ProductValidationError("Price must be a number") from e
    if not math.isfinite(price):
        raise ProductValidationError("Price must be a number")
    return price


class ProductService:
    """CRUD operations over Product, bound to one database session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _fault(self, action: str, message: str, exc: Exception) -> StorageFault:
        self.db.rollback()
        logger.exception("Error %s: %s", action, exc)
        return StorageFault(message)

    def list_products(self) -> List[Product]:
        try:
            return repositories.list_products(self.db)
        except SQLAlchemyError as e:
            raise self._fault("fetching products", "Failed to fetch products", e) from e

    def get_product(self, product_id: Optional[int]) -> Product:
        if product_id is None:
            raise ProductNotFound()
        try:
            product = repositories.get_product(self.db, product_id)
        except SQLAlchemyError as e:
            raise self._fault("fetching product", "Failed to fetch product", e) from e

        if product is None:
            raise ProductNotFound()
        return product

    def create_product(self, payload: ProductCreate) -> Product:
        # price 0 is a valid price: only a missing/null price is rejected
        if not payload.name or payload.price is None:
            raise ProductValidationError("Name and price are required")

        price = coerce_price(payload.price)
        try:
            product = repositories.create_product(
                self.db,
                name=payload.name,
                description=payload.description or None,
                price=price,
            )
        except SQLAlchemyError as e:
            raise self._fault("creating product", "Failed to create product", e) from e

        logger.info("Created product %s", product.id)
        return product

    def _changes(self, payload: ProductUpdate) -> Dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True)

        if "name" in changes and not changes["name"]:
            raise ProductValidationError("Name cannot be empty")
        if "price" in changes:
            if changes["price"] is None:
                raise ProductValidationError("Price must be a number")
            changes["price"] = coerce_price(changes["price"])
        return changes

    def update_product(self, product_id: Optional[int], payload: Optional[ProductUpdate]) -> Product:
        """
        Apply the fields present in ``payload``; a missing body is an empty patch.

        An unknown id is reported before the patch is validated.
        """
        if product_id is None:
            raise ProductNotFound()
        try:
            existing = repositories.get_product(self.db, product_id)
        except SQLAlchemyError as e:
            raise self._fault("updating product", "Failed to update product", e) from e
        if existing is None:
            raise ProductNotFound()

        changes = self._changes(payload or ProductUpdate())
        try:
            product = repositories.update_product(self.db, product_id, changes)
        except SQLAlchemyError as e:
            raise self._fault("updating product", "Failed to update product", e) from e

        if product is None:
            raise ProductNotFound()
        logger.info("Updated product %s fields=%s", product_id, sorted(changes))
        return product

    def delete_product(self, product_id: Optional[int]) -> None:
        if product_id is None:
            raise ProductNotFound()
        try:
            deleted = repositories.delete_product(self.db, product_id)
        except SQLAlchemyError as e:
            raise self._fault("deleting product", "Failed to delete product", e) from e

        if not deleted:
            raise ProductNotFound()
        logger.info("Deleted product %s", product_id)
