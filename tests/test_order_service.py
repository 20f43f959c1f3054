"""Tests for the order store operations."""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from order_tracker.errors import (
    DuplicateOrderError,
    EmptyUpdateError,
    InvalidQuantityError,
    OrderNotFoundError,
    OrderValidationError,
    StorageError,
)
from order_tracker.repositories.order_repository import OrderRepository

from .conftest import make_order


def test_list_is_empty_initially(service):
    assert service.list_orders() == []


def test_create_returns_stored_row(service):
    order = service.create_order(make_order(order_id='  A1 ', customer_name=' Jane Baker ', quantity='2.5'))

    assert order.id is not None
    assert order.created_at is not None
    assert order.order_id == 'A1'
    assert order.customer_name == 'Jane Baker'
    assert order.quantity == 2.5
    assert order.order_date == date(2024, 5, 1)
    assert order.order_status == 'Pending'


def test_create_rejects_invalid_record(service):
    with pytest.raises(OrderValidationError) as exc_info:
        service.create_order(make_order(customer_name='', quantity='0'))

    assert exc_info.value.errors == [
        'Customer name required',
        'Quantity must be a positive number',
    ]
    assert service.list_orders() == []


def test_duplicate_order_id_is_rejected(service):
    first = service.create_order(make_order(order_id='A1'))

    with pytest.raises(DuplicateOrderError):
        service.create_order(make_order(order_id='A1', customer_name='Someone Else'))

    orders = service.list_orders()
    assert len(orders) == 1
    assert orders[0] == first


def test_list_orders_newest_first(service):
    for order_id in ('A1', 'A2', 'A3'):
        service.create_order(make_order(order_id=order_id))

    orders = service.list_orders()
    assert [o.order_id for o in orders] == ['A3', 'A2', 'A1']


def test_update_status_changes_only_status(service):
    created = service.create_order(make_order())

    updated = service.update_order(created.id, {'order_status': 'Completed'})

    assert updated.order_status == 'Completed'
    assert updated.model_dump(exclude={'order_status'}) == created.model_dump(exclude={'order_status'})
    assert service.get_order(created.id).order_status == 'Completed'


def test_status_can_be_toggled_back(service):
    created = service.create_order(make_order(order_status='Completed'))
    assert service.update_order(created.id, {'order_status': 'Pending'}).order_status == 'Pending'


def test_update_ignores_unknown_keys(service):
    created = service.create_order(make_order())

    updated = service.update_order(created.id, {'quantity': '7', 'id': 500, 'colour': 'red'})

    assert updated.id == created.id
    assert updated.quantity == 7.0


def test_update_trims_strings(service):
    created = service.create_order(make_order())
    assert service.update_order(created.id, {'customer_name': '  Sam  '}).customer_name == 'Sam'


def test_update_without_recognized_fields(service):
    created = service.create_order(make_order())

    with pytest.raises(EmptyUpdateError):
        service.update_order(created.id, {})
    with pytest.raises(EmptyUpdateError):
        service.update_order(created.id, {'unknown': 'value'})


@pytest.mark.parametrize('quantity', ['0', '-3', 'abc', None])
def test_update_with_invalid_quantity(service, quantity):
    created = service.create_order(make_order())

    with pytest.raises(InvalidQuantityError):
        service.update_order(created.id, {'quantity': quantity})

    assert service.get_order(created.id).quantity == 2.0


def test_update_with_invalid_status(service):
    created = service.create_order(make_order())

    with pytest.raises(OrderValidationError) as exc_info:
        service.update_order(created.id, {'order_status': 'Shipped'})

    assert exc_info.value.errors == ['Order status invalid']


def test_update_missing_order(service):
    service.create_order(make_order())
    before = service.list_orders()

    with pytest.raises(OrderNotFoundError):
        service.update_order(99999, {'order_status': 'Completed'})

    assert service.list_orders() == before


def test_update_to_existing_order_id(service):
    service.create_order(make_order(order_id='A1'))
    second = service.create_order(make_order(order_id='A2'))

    with pytest.raises(DuplicateOrderError):
        service.update_order(second.id, {'order_id': 'A1'})

    assert service.get_order(second.id).order_id == 'A2'


def test_delete_removes_order(service):
    keep = service.create_order(make_order(order_id='A1'))
    gone = service.create_order(make_order(order_id='A2'))

    service.delete_order(gone.id)

    assert [o.id for o in service.list_orders()] == [keep.id]
    with pytest.raises(OrderNotFoundError):
        service.delete_order(gone.id)


def test_get_missing_order(service):
    with pytest.raises(OrderNotFoundError):
        service.get_order(12345)


def test_commit_failure_becomes_storage_error(session, monkeypatch):
    repository = OrderRepository(session)

    def failing_commit():
        raise OperationalError('INSERT INTO orders', {}, Exception('connection lost'))

    monkeypatch.setattr(session, 'commit', failing_commit)

    with pytest.raises(StorageError) as exc_info:
        repository.create({
            'order_id': 'A1',
            'customer_name': 'Jane',
            'product_ordered': 'Loaf',
            'quantity': 1.0,
            'order_date': date(2024, 5, 1),
            'order_status': 'Pending',
        })

    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_update_integrity_failure_on_own_key_is_storage_error(service, session):
    created = service.create_order(make_order(order_id='A1'))
    repository = OrderRepository(session)

    # unchanged order_id alongside a value the CHECK constraint rejects
    with pytest.raises(StorageError):
        repository.update(created.id, {'order_id': 'A1', 'quantity': -1.0})

    assert service.get_order(created.id).quantity == 2.0
