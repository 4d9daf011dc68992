from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopsmart.models import Product


def list_products(db: Session) -> list[Product]:
    stmt = select(Product).order_by(Product.created_at.desc(), Product.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_product(db: Session, product_id: int) -> Product | None:
    return db.get(Product, product_id)


def create_product(db: Session, *, name: str, description: str | None, price: float) -> Product:
    product = Product(name=name, description=description, price=price)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def update_product(db: Session, product_id: int, changes: Mapping[str, Any]) -> Product | None:
    """Apply ``changes`` to the row; ``None`` when no row has that id."""
    product = db.get(Product, product_id)
    if product is None:
        return None

    for field, value in changes.items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> bool:
    """Hard delete; ``False`` when no row has that id."""
    product = db.get(Product, product_id)
    if product is None:
        return False

    db.delete(product)
    db.commit()
    return True
