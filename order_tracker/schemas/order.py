"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict, StrictBool, StrictFloat, StrictInt
from typing import Optional, Union
from datetime import date, datetime


class OrderBase(BaseModel):
    """
    Base Order schema

    Every field is optional at the shape level so that field rules can
    report all missing values together. Unknown keys are ignored.
    """
    order_id: Optional[str] = Field(None, description="Business key, unique across orders")
    customer_name: Optional[str] = Field(None, description="Customer name")
    product_ordered: Optional[str] = Field(None, description="Product ordered")
    # booleans stay booleans so the quantity rule can reject them
    quantity: Optional[Union[StrictBool, StrictInt, StrictFloat, str]] = Field(
        None, description="Quantity (must be positive)"
    )
    order_date: Optional[str] = Field(None, description="Order date (YYYY-MM-DD)")
    order_status: Optional[str] = Field(None, description="Pending or Completed")

    model_config = ConfigDict(extra="ignore")


class OrderCreate(OrderBase):
    """Schema for creating a new order (all fields required by validation)"""
    pass


class OrderUpdate(OrderBase):
    """Schema for partially updating an order (only supplied fields change)"""
    pass


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    order_id: str
    customer_name: str
    product_ordered: str
    quantity: float
    order_date: date
    order_status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DeleteResponse(BaseModel):
    """Schema for delete acknowledgment"""
    success: bool = True
