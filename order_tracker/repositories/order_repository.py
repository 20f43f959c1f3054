"""
Order Repository - Data Access Layer
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from order_tracker.errors import DuplicateOrderError, StorageError
from order_tracker.models.order import Order

logger = logging.getLogger(__name__)


class OrderRepository:
    """Repository for Order CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Order]:
        """Get all orders, newest first"""
        try:
            return self.db.query(Order).order_by(
                desc(Order.created_at), desc(Order.id)
            ).all()
        except SQLAlchemyError as e:
            raise StorageError("Failed to list orders") from e

    def get_by_id(self, id: int) -> Optional[Order]:
        """Get order by ID"""
        try:
            return self.db.query(Order).filter(Order.id == id).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load order {id}") from e

    def get_by_order_id(self, order_id: str) -> Optional[Order]:
        """Get order by business key"""
        try:
            return self.db.query(Order).filter(Order.order_id == order_id).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load order {order_id!r}") from e

    def create(self, values: dict) -> Order:
        """
        Create new order

        Args:
            values: Normalized column values

        Returns:
            Created order including generated id and created_at

        Raises:
            DuplicateOrderError: If order_id already exists
            StorageError: On any other persistence failure
        """
        order = Order(**values)
        self.db.add(order)
        self._commit(values.get("order_id"))
        self.db.refresh(order)
        return order

    def update(self, id: int, values: dict) -> Optional[Order]:
        """
        Update only the given columns of an existing order

        Returns:
            Updated order or None if not found
        """
        order = self.get_by_id(id)
        if not order:
            return None

        for field, value in values.items():
            setattr(order, field, value)

        self._commit(values.get("order_id"), exclude_id=id)
        self.db.refresh(order)
        return order

    def delete(self, id: int) -> bool:
        """Delete order"""
        order = self.get_by_id(id)
        if not order:
            return False

        self.db.delete(order)
        self._commit()
        return True

    def _commit(self, order_id: Optional[str] = None, exclude_id: Optional[int] = None) -> None:
        """Commit the pending write, translating storage errors"""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # The unique constraint rejected the write if another row holds the key
            holder = self.get_by_order_id(order_id) if order_id is not None else None
            if holder is not None and holder.id != exclude_id:
                logger.warning("Rejected duplicate order_id %r", order_id)
                raise DuplicateOrderError(order_id) from e
            raise StorageError("Integrity error while writing order") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("Failed to write order") from e
