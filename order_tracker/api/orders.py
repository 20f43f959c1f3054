"""
Order API endpoints
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
from typing import List

from order_tracker.database import get_db
from order_tracker.errors import (
    DuplicateOrderError,
    EmptyUpdateError,
    InvalidQuantityError,
    OrderNotFoundError,
    OrderValidationError,
    StorageError
)
from order_tracker.services.order_service import OrderService
from order_tracker.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    DeleteResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])

ORDER_NOT_FOUND = "Order not found"
DATABASE_ERROR = "Database error"


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


def _database_error(e: StorageError) -> HTTPException:
    logger.exception("Storage failure: %s", e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=DATABASE_ERROR
    )


@router.get("", response_model=List[OrderResponse], summary="Get all orders")
def get_orders(service: OrderService = Depends(get_order_service)):
    """
    Retrieve all orders, newest first
    """
    try:
        return service.list_orders()
    except StorageError as e:
        raise _database_error(e)


@router.get("/{id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    id: int = Path(..., gt=0, description="Order ID"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID

    - **id**: Order ID
    """
    try:
        return service.get_order(id)
    except OrderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ORDER_NOT_FOUND
        )
    except StorageError as e:
        raise _database_error(e)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Create order")
def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order

    - **order_id**: Unique order identifier (required)
    - **customer_name**: Customer name (required)
    - **product_ordered**: Product ordered (required)
    - **quantity**: Quantity (required, must be positive)
    - **order_date**: Order date, YYYY-MM-DD (required)
    - **order_status**: Pending or Completed (required)
    """
    try:
        return service.create_order(order_data.model_dump())
    except OrderValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.errors
        )
    except DuplicateOrderError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order ID already exists"
        )
    except StorageError as e:
        raise _database_error(e)


@router.put("/{id}", response_model=OrderResponse, summary="Update order")
def update_order(
    order_data: OrderUpdate,
    id: int = Path(..., gt=0, description="Order ID"),
    service: OrderService = Depends(get_order_service)
):
    """
    Update an existing order

    All fields are optional. Only provided fields will be updated;
    commonly used to toggle **order_status** between Pending and Completed.

    - **id**: Order ID
    """
    try:
        return service.update_order(id, order_data.model_dump(exclude_unset=True))
    except EmptyUpdateError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except InvalidQuantityError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except OrderValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.errors
        )
    except DuplicateOrderError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order ID already exists"
        )
    except OrderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ORDER_NOT_FOUND
        )
    except StorageError as e:
        raise _database_error(e)


@router.delete("/{id}", response_model=DeleteResponse, summary="Delete order")
def delete_order(
    id: int = Path(..., gt=0, description="Order ID"),
    service: OrderService = Depends(get_order_service)
):
    """
    Delete an order

    - **id**: Order ID
    """
    try:
        service.delete_order(id)
    except OrderNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ORDER_NOT_FOUND
        )
    except StorageError as e:
        raise _database_error(e)
    return DeleteResponse(success=True)
