"""Parsing of request bodies and query parameters into service arguments.

Every malformed input is reported as a ValidationError so it surfaces as a
400 response.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from starlette.requests import Request

from tokobook.domain.entities import ExpenseItemInput, OrderItemInput
from tokobook.domain.errors import ValidationError, required_field
from tokobook.utils import parse_amount, parse_date, parse_entity_id


async def read_json(request: Request) -> dict[str, Any]:
    """Return the request body as a JSON object."""
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_id(value: Any, label: str) -> int:
    """Parse a required entity ID.

    Raises:
        ValidationError: If the value is missing or not a positive integer
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(required_field(label))
    entity_id = parse_entity_id(value)
    if entity_id is None:
        raise ValidationError(f"Invalid {label}")
    return entity_id


def optional_id(value: Any, label: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_id(value, label)


def to_amount(value: Any, field: str) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(required_field(field))
    try:
        return parse_amount(value)
    except ValueError:
        raise ValidationError(f"Invalid {field.lower()}: '{value}'")


def to_date(value: Any, field: str, default: Optional[date] = None) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValidationError(required_field(field))
    try:
        return parse_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {field.lower()}: '{value}'")


def split_ref(value: Any) -> tuple[Any, Optional[str]]:
    """Split a reference into (ref, label).

    Select widgets send ``{"value": ..., "label": ...}``; plain strings and
    numbers carry no separate label.
    """
    if isinstance(value, Mapping):
        label = value.get("label")
        return value.get("value"), str(label) if label is not None else None
    return value, None


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _expense_item(raw: Any, position: int) -> ExpenseItemInput:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Item {position} must be an object")
    product, label = split_ref(raw.get("product"))
    name = raw.get("name") or label
    if name is None or not str(name).strip():
        raise ValidationError(required_field(f"Name of item {position}"))
    return ExpenseItemInput(
        product=product,
        name=str(name),
        quantity=to_amount(raw.get("quantity"), "Quantity"),
        price=to_amount(raw.get("price"), "Price"),
    )


def parse_expense_body(body: Mapping[str, Any]) -> dict[str, Any]:
    """Turn an expense body into ExpenseService keyword arguments.

    Expected shape: ``{store, items[], date?, total, attachments?, thumbnailPath?}``.
    A missing date means today.
    """
    store, store_label = split_ref(body.get("store"))
    if store_label and parse_entity_id(store) is None:
        store = store_label
    if store is None or not str(store).strip():
        raise ValidationError(required_field("Store"))

    items = body.get("items")
    if not isinstance(items, list) or not items:
        raise ValidationError("At least one item is required")

    attachments = body.get("attachments") or []
    if not isinstance(attachments, list) or not all(isinstance(a, str) for a in attachments):
        raise ValidationError("Attachments must be a list of paths")

    return {
        "store": store,
        "items": [_expense_item(raw, position) for position, raw in enumerate(items, start=1)],
        "date": to_date(body.get("date"), "Date", default=date.today()),
        "total": to_amount(body.get("total"), "Total"),
        "attachments": attachments,
        "thumbnail_path": _optional_text(body.get("thumbnailPath")),
    }


def _order_item(raw: Any, position: int) -> OrderItemInput:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Order item {position} must be an object")
    product, label = split_ref(raw.get("product"))
    name = label or raw.get("productName") or raw.get("name")
    if name is None and product is not None and parse_entity_id(product) is None:
        name = product
    if name is None or not str(name).strip():
        raise ValidationError(required_field(f"Product of order item {position}"))

    qty = to_amount(raw.get("qty"), "Qty")
    if qty != qty.to_integral_value():
        raise ValidationError(f"Invalid qty: '{raw.get('qty')}'")

    discount = raw.get("discount")
    return OrderItemInput(
        product=product,
        name=str(name),
        qty=int(qty),
        color=_optional_text(raw.get("color")),
        note=_optional_text(raw.get("note")),
        discount=to_amount(discount, "Discount") if discount not in (None, "") else Decimal("0"),
    )


def parse_order_body(body: Mapping[str, Any]) -> dict[str, Any]:
    """Turn an order body into OrderService keyword arguments.

    Expected shape: ``{customer, addressId, orderDate?, deadline, orderItems[]}``
    where ``customer`` and each item's ``product`` may be a plain value or a
    ``{value, label}`` object.
    """
    customer, customer_label = split_ref(body.get("customer"))
    items = body.get("orderItems")
    if (
        customer in (None, "")
        or body.get("addressId") in (None, "")
        or not isinstance(items, list)
        or not items
    ):
        raise ValidationError("Missing required fields: customer, addressId and orderItems")

    return {
        "customer": customer,
        "customer_label": customer_label,
        "address_id": require_id(body.get("addressId"), "Address ID"),
        "order_date": to_date(body.get("orderDate"), "Order date", default=date.today()),
        "deadline": to_date(body.get("deadline"), "Deadline"),
        "items": [_order_item(raw, position) for position, raw in enumerate(items, start=1)],
    }


ADDRESS_FIELDS = {
    "receiverName": "receiver_name",
    "phone": "phone",
    "street": "street",
    "landmark": "landmark",
    "city": "city",
    "state": "state",
    "country": "country",
    "postalCode": "postal_code",
}


def parse_address_body(body: Mapping[str, Any]) -> dict[str, Any]:
    """Turn an address body into CustomerService.create_address arguments."""
    fields = {
        attr: (str(body[key]) if body.get(key) is not None else None)
        for key, attr in ADDRESS_FIELDS.items()
    }
    return {"customer_id": require_id(body.get("customerId"), "Customer ID"), **fields}
