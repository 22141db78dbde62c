"""JSON rendering of domain entities and views.

Field names follow the JSON the web client already speaks (camelCase for
compound names, ``id`` for identifiers).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from tokobook.domain import entities


def decimal_to_json(value: Optional[Decimal]) -> int | float | None:
    """Render a Decimal as int when integral, else float."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def date_to_json(value: Optional[date | datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def store_to_json(store: entities.Store) -> dict[str, Any]:
    return {
        "id": store.id,
        "name": store.name,
        "address": store.address,
        "phone": store.phone,
        "mapsLink": store.maps_link,
        "createdAt": date_to_json(store.created_at),
    }


def product_to_json(product: entities.Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "storeId": product.store_id,
        "name": product.name,
        "price": decimal_to_json(product.price),
        "description": product.description,
        "createdAt": date_to_json(product.created_at),
    }


def customer_to_json(customer: entities.Customer) -> dict[str, Any]:
    return {
        "id": customer.id,
        "name": customer.name,
        "phone": customer.phone,
        "createdAt": date_to_json(customer.created_at),
    }


def address_to_json(address: entities.Address) -> dict[str, Any]:
    return {
        "id": address.id,
        "customerId": address.customer_id,
        "receiverName": address.receiver_name,
        "phone": address.phone,
        "street": address.street,
        "landmark": address.landmark,
        "city": address.city,
        "state": address.state,
        "country": address.country,
        "postalCode": address.postal_code,
        "createdAt": date_to_json(address.created_at),
    }


def expense_to_json(expense: entities.Expense) -> dict[str, Any]:
    """Render an expense as stored (item names are the submitted snapshots)."""
    return {
        "id": expense.id,
        "store": expense.store_id,
        "items": [
            {
                "product": item.product_id,
                "name": item.name,
                "quantity": decimal_to_json(item.quantity),
                "price": decimal_to_json(item.price),
            }
            for item in expense.items
        ],
        "date": date_to_json(expense.date),
        "total": decimal_to_json(expense.total),
        "attachments": list(expense.attachments),
        "thumbnailPath": expense.thumbnail_path,
        "createdAt": date_to_json(expense.created_at),
    }


def expense_view_to_json(view: entities.ExpenseView) -> dict[str, Any]:
    """Render an expense joined to its store and products for display."""
    return {
        "id": view.id,
        "store": view.store.id,
        "storeInfo": {"id": view.store.id, "name": view.store.name},
        "items": [
            {
                "product": item.product_id,
                "name": item.name,
                "storedName": item.stored_name,
                "quantity": decimal_to_json(item.quantity),
                "price": decimal_to_json(item.price),
                "productInfo": (
                    {
                        "id": item.product.id,
                        "storeId": item.product.store_id,
                        "name": item.product.name,
                        "price": decimal_to_json(item.product.price),
                    }
                    if item.product is not None
                    else None
                ),
            }
            for item in view.items
        ],
        "date": date_to_json(view.date),
        "total": decimal_to_json(view.total),
        "attachments": list(view.attachments),
        "thumbnailPath": view.thumbnail_path,
        "createdAt": date_to_json(view.created_at),
    }


def _order_items_to_json(items: tuple[entities.OrderItem, ...]) -> list[dict[str, Any]]:
    return [
        {
            "productId": item.product_id,
            "productName": item.product_name,
            "qty": item.qty,
            "color": item.color,
            "note": item.note,
            "discount": decimal_to_json(item.discount),
        }
        for item in items
    ]


def order_to_json(order: entities.Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "customerId": order.customer_id,
        "addressId": order.address_id,
        "orderDate": date_to_json(order.order_date),
        "deadline": date_to_json(order.deadline),
        "orderItems": _order_items_to_json(order.items),
        "createdAt": date_to_json(order.created_at),
    }


def order_view_to_json(view: entities.OrderView) -> dict[str, Any]:
    return {
        "id": view.id,
        "customerId": view.customer_id,
        "customerName": view.customer_name,
        "address": address_to_json(view.address) if view.address is not None else None,
        "orderDate": date_to_json(view.order_date),
        "deadline": date_to_json(view.deadline),
        "orderItems": _order_items_to_json(view.items),
        "createdAt": date_to_json(view.created_at),
    }
