# tests/test_product_service.py

import pytest
from sqlalchemy.exc import OperationalError

from shopsmart import repositories
from shopsmart.errors import ProductNotFound, ProductValidationError, StorageFault
from shopsmart.schemas import ProductCreate, ProductUpdate
from shopsmart.services import ProductService, coerce_price


@pytest.fixture()
def service(db_session) -> ProductService:
    return ProductService(db_session)


def test_coerce_price_accepts_numbers_and_numeric_strings():
    assert coerce_price(0) == 0.0
    assert coerce_price(9.99) == 9.99
    assert coerce_price(" 12.5 ") == 12.5


@pytest.mark.parametrize("value", ["", "abc", "nan", "inf", True])
def test_coerce_price_rejects_non_numbers(value):
    with pytest.raises(ProductValidationError):
        coerce_price(value)


def test_create_assigns_id_and_timestamps(service):
    product = service.create_product(ProductCreate(name="Widget", price="9.99"))

    assert product.id is not None
    assert product.price == 9.99
    assert isinstance(product.price, float)
    assert product.description is None
    assert product.created_at is not None
    assert product.updated_at is not None


def test_create_distinguishes_missing_price_from_zero(service):
    with pytest.raises(ProductValidationError):
        service.create_product(ProductCreate(name="No price"))

    assert service.create_product(ProductCreate(name="Free", price=0)).price == 0.0


def test_update_only_touches_fields_in_the_patch(service):
    product = service.create_product(ProductCreate(name="Widget", description="Nice", price=1))

    patch = ProductUpdate.model_validate({"name": "Renamed"})
    assert patch.model_fields_set == {"name"}

    updated = service.update_product(product.id, patch)
    assert updated.name == "Renamed"
    assert updated.description == "Nice"
    assert updated.price == 1.0


def test_update_null_description_is_applied(service):
    product = service.create_product(ProductCreate(name="Widget", description="Nice", price=1))

    updated = service.update_product(product.id, ProductUpdate.model_validate({"description": None}))
    assert updated.description is None


def test_update_unknown_id_raises_not_found(service):
    with pytest.raises(ProductNotFound):
        service.update_product(404, ProductUpdate(name="Ghost"))
    assert service.list_products() == []


def test_delete_removes_row(service):
    product = service.create_product(ProductCreate(name="Widget", price=1))

    service.delete_product(product.id)

    with pytest.raises(ProductNotFound):
        service.get_product(product.id)


def test_delete_unknown_id_raises_not_found(service):
    with pytest.raises(ProductNotFound):
        service.delete_product(12345)


def test_malformed_id_is_not_found(service):
    with pytest.raises(ProductNotFound):
        service.get_product(None)
    with pytest.raises(ProductNotFound):
        service.delete_product(None)


def test_list_is_reverse_insertion_order(service):
    ids = [service.create_product(ProductCreate(name=f"P{i}", price=i)).id for i in range(5)]

    assert [p.id for p in service.list_products()] == list(reversed(ids))


def test_storage_errors_become_storage_fault(service, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(repositories, "list_products", broken)

    with pytest.raises(StorageFault) as excinfo:
        service.list_products()
    assert excinfo.value.message == "Failed to fetch products"
    assert excinfo.value.status_code == 500
    assert "disk" not in str(excinfo.value)
