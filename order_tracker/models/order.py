"""
SQLAlchemy Order model
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, CheckConstraint, UniqueConstraint
from order_tracker.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(String(100), nullable=False)  # Business key, user supplied
    customer_name = Column(String(255), nullable=False)
    product_ordered = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    order_date = Column(Date, nullable=False)
    order_status = Column(String(20), nullable=False, default='Pending', index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    # Constraints
    __table_args__ = (
        UniqueConstraint('order_id', name='uq_orders_order_id'),
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
        CheckConstraint("order_status IN ('Pending', 'Completed')", name='check_order_status_valid'),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, order_id='{self.order_id}', quantity={self.quantity}, order_status='{self.order_status}')>"
