"""
Order Service - Business Logic Layer
"""
import logging
from typing import Any, List, Mapping
from sqlalchemy.orm import Session

from order_tracker.errors import (
    EmptyUpdateError,
    OrderNotFoundError,
    OrderValidationError
)
from order_tracker.repositories.order_repository import OrderRepository
from order_tracker.schemas.order import OrderResponse
from order_tracker.validators import (
    ORDER_FIELDS,
    normalize_order_fields,
    parse_quantity,
    validate_order,
    validate_order_update
)

logger = logging.getLogger(__name__)


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.repository = OrderRepository(db)

    def list_orders(self) -> List[OrderResponse]:
        """Get all orders, newest first"""
        orders = self.repository.get_all()
        return [OrderResponse.model_validate(o) for o in orders]

    def get_order(self, id: int) -> OrderResponse:
        """
        Get order by ID

        Raises:
            OrderNotFoundError: If no order matches id
        """
        order = self.repository.get_by_id(id)
        if not order:
            raise OrderNotFoundError(id)
        return OrderResponse.model_validate(order)

    def create_order(self, record: Mapping[str, Any]) -> OrderResponse:
        """
        Create new order

        Steps:
        1. Validate every field rule
        2. Trim strings, parse quantity and order date
        3. Insert the row

        Args:
            record: Candidate order fields

        Returns:
            Stored order including id and created_at

        Raises:
            OrderValidationError: If any field rule is violated
            DuplicateOrderError: If order_id already exists
            StorageError: On any other persistence failure
        """
        errors = validate_order(record)
        if errors:
            raise OrderValidationError(errors)

        order = self.repository.create(normalize_order_fields(record))
        logger.info("Created order %s (id=%s)", order.order_id, order.id)
        return OrderResponse.model_validate(order)

    def update_order(self, id: int, fields: Mapping[str, Any]) -> OrderResponse:
        """
        Partially update an order

        Only supplied fields from the allowed set are written; unknown keys
        are ignored. Either status literal may be written at any time.

        Raises:
            EmptyUpdateError: If no recognized field was supplied
            InvalidQuantityError: If quantity is supplied and invalid
            OrderValidationError: If another supplied field is invalid
            OrderNotFoundError: If no order matches id
            DuplicateOrderError: If the new order_id belongs to another order
            StorageError: On any other persistence failure
        """
        supplied = {k: v for k, v in fields.items() if k in ORDER_FIELDS}
        if not supplied:
            raise EmptyUpdateError()

        if "quantity" in supplied:
            parse_quantity(supplied["quantity"])

        errors = validate_order_update(supplied)
        if errors:
            raise OrderValidationError(errors)

        order = self.repository.update(id, normalize_order_fields(supplied))
        if not order:
            raise OrderNotFoundError(id)

        logger.info("Updated order id=%s fields=%s", id, sorted(supplied))
        return OrderResponse.model_validate(order)

    def delete_order(self, id: int) -> None:
        """
        Delete order

        Raises:
            OrderNotFoundError: If no order matches id
        """
        if not self.repository.delete(id):
            raise OrderNotFoundError(id)
        logger.info("Deleted order id=%s", id)
