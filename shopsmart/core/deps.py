from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from shopsmart.core.db import Database
from shopsmart.services import ProductService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    yield from database.session()


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)
