"""
Domain errors raised by the order store
"""
from typing import List


class OrderError(Exception):
    """Base exception for order operations"""
    pass


class OrderValidationError(OrderError):
    """One or more field rules were violated"""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class InvalidQuantityError(OrderError):
    """Quantity is missing, not numeric or not positive"""

    def __init__(self, message: str = "Quantity must be a positive number"):
        super().__init__(message)


class DuplicateOrderError(OrderError):
    """An order with the same order_id already exists"""

    def __init__(self, order_id: str):
        super().__init__(f"Order ID already exists: {order_id}")
        self.order_id = order_id


class OrderNotFoundError(OrderError):
    """No order matches the given id"""

    def __init__(self, id: int):
        super().__init__(f"Order with id={id} not found")
        self.id = id


class EmptyUpdateError(OrderError):
    """Update carried no recognized field"""

    def __init__(self):
        super().__init__("No fields to update")


class StorageError(OrderError):
    """Persistence failure not attributable to the caller"""
    pass
