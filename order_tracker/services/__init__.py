"""
Services package
"""
from order_tracker.services.order_service import OrderService

__all__ = ["OrderService"]
