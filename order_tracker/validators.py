"""
Order field validation

Every rule is checked independently so that a single pass reports all
violations. Nothing here touches the database.
"""
import math
from datetime import date
from typing import Any, List, Mapping

from order_tracker.errors import InvalidQuantityError

ORDER_FIELDS = (
    "order_id",
    "customer_name",
    "product_ordered",
    "quantity",
    "order_date",
    "order_status",
)
ORDER_STATUSES = ("Pending", "Completed")
TEXT_FIELDS = ("order_id", "customer_name", "product_ordered")

REQUIRED_MESSAGES = {
    "order_id": "Order ID required",
    "customer_name": "Customer name required",
    "product_ordered": "Product ordered required",
}
QUANTITY_MESSAGE = "Quantity must be a positive number"
DATE_REQUIRED_MESSAGE = "Order date required"
DATE_INVALID_MESSAGE = "Order date must be a valid date (YYYY-MM-DD)"
STATUS_MESSAGE = "Order status invalid"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_quantity(value: Any) -> float:
    """
    Parse a quantity into a positive number

    Args:
        value: int, float or numeric string ("5", " 2.5 ")

    Returns:
        Quantity as float

    Raises:
        InvalidQuantityError: If missing, not numeric or not > 0
    """
    if value is None or isinstance(value, bool):
        raise InvalidQuantityError()

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidQuantityError()

    try:
        quantity = float(value)
    except (TypeError, ValueError):
        raise InvalidQuantityError()

    if not math.isfinite(quantity) or quantity <= 0:
        raise InvalidQuantityError()
    return quantity


def parse_order_date(value: Any) -> date:
    """Parse an ISO calendar date; raises ValueError when it is not one"""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")
    return date.fromisoformat(value.strip())


def _check_order_date(value: Any) -> List[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return [DATE_REQUIRED_MESSAGE]
    try:
        parse_order_date(value)
    except ValueError:
        return [DATE_INVALID_MESSAGE]
    return []


def _check_quantity(value: Any) -> List[str]:
    try:
        parse_quantity(value)
    except InvalidQuantityError:
        return [QUANTITY_MESSAGE]
    return []


def validate_order(data: Mapping[str, Any]) -> List[str]:
    """
    Validate a candidate order for creation

    Args:
        data: Candidate record; any field may be absent

    Returns:
        One message per violated rule, empty if the record is valid
    """
    errors = []

    for field in TEXT_FIELDS:
        if _is_blank(data.get(field)):
            errors.append(REQUIRED_MESSAGES[field])

    errors.extend(_check_quantity(data.get("quantity")))
    errors.extend(_check_order_date(data.get("order_date")))

    if data.get("order_status") not in ORDER_STATUSES:
        errors.append(STATUS_MESSAGE)

    return errors


def validate_order_update(fields: Mapping[str, Any]) -> List[str]:
    """
    Validate the fields supplied to a partial update

    Only keys present in ``fields`` are checked; an absent order_status
    is not an error here.
    """
    errors = []

    for field in TEXT_FIELDS:
        if field in fields and _is_blank(fields[field]):
            errors.append(REQUIRED_MESSAGES[field])

    if "quantity" in fields:
        errors.extend(_check_quantity(fields["quantity"]))
    if "order_date" in fields:
        errors.extend(_check_order_date(fields["order_date"]))
    if "order_status" in fields and fields["order_status"] not in ORDER_STATUSES:
        errors.append(STATUS_MESSAGE)

    return errors


def normalize_order_fields(fields: Mapping[str, Any]) -> dict:
    """
    Convert validated fields into column values

    Strings are trimmed, quantity becomes a float and order_date a date.
    Keys outside ORDER_FIELDS are dropped.
    """
    values = {}
    for field in ORDER_FIELDS:
        if field not in fields:
            continue
        value = fields[field]
        if field in TEXT_FIELDS:
            value = value.strip()
        elif field == "quantity":
            value = parse_quantity(value)
        elif field == "order_date":
            value = parse_order_date(value)
        values[field] = value
    return values
