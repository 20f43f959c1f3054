"""
Schemas package
"""
from order_tracker.schemas.order import (
    OrderBase,
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    DeleteResponse
)

__all__ = [
    "OrderBase",
    "OrderCreate",
    "OrderUpdate",
    "OrderResponse",
    "DeleteResponse"
]
