"""Read-side queries that join transactions back to their entities for display.

Names are formatted for display on the way out; nothing read here is written
back, so the stored item snapshots stay as they were submitted.
"""

from datetime import date
from itertools import groupby
from typing import Optional

from tokobook.database.base import Database
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.entities import (
    Expense,
    ExpenseItemView,
    ExpenseView,
    Order,
    OrderView,
    ProductView,
    StoreView,
)
from tokobook.domain.formatting import format_display_name


class ExpenseQueryService:
    """Lists expenses with store and product names ready for display."""

    def __init__(self, db: Database, abbreviations: AbbreviationRegistry):
        self.db = db
        self.abbreviations = abbreviations

    def list_expenses(
        self,
        search: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        store_id: Optional[int] = None,
    ) -> list[ExpenseView]:
        """List expenses newest first (by date, then by creation).

        Args:
            search: Case-insensitive substring of the store name or of any
                stored item name
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            store_id: Optional store filter

        Returns:
            Expense views; not paginated
        """
        expenses = self.db.list_expenses(
            search=(search or "").strip() or None,
            start_date=start_date,
            end_date=end_date,
            store_id=store_id,
        )
        return self._to_views(expenses)

    def get_expense_view(self, expense_id: int) -> Optional[ExpenseView]:
        """Get one expense as a display view, or None if not found."""
        expense = self.db.get_expense(expense_id)
        if expense is None:
            return None
        return self._to_views([expense])[0]

    def _to_views(self, expenses: list[Expense]) -> list[ExpenseView]:
        abbreviations = self.abbreviations.get_all()
        stores = self.db.get_stores(e.store_id for e in expenses)
        products = self.db.get_products(
            item.product_id for e in expenses for item in e.items
        )

        views = []
        for expense in expenses:
            store = stores.get(expense.store_id)
            store_name = store.name if store is not None else ""

            items = []
            for item in expense.items:
                product = products.get(item.product_id)
                product_view = None
                display_name = item.name
                if product is not None:
                    display_name = format_display_name(product.name, abbreviations)
                    product_view = ProductView(
                        id=product.id,
                        store_id=product.store_id,
                        name=display_name,
                        price=product.price,
                    )
                items.append(
                    ExpenseItemView(
                        product_id=item.product_id,
                        name=display_name,
                        stored_name=item.name,
                        quantity=item.quantity,
                        price=item.price,
                        product=product_view,
                    )
                )

            views.append(
                ExpenseView(
                    id=expense.id,
                    date=expense.date,
                    total=expense.total,
                    store=StoreView(
                        id=expense.store_id,
                        name=format_display_name(store_name, abbreviations),
                    ),
                    items=tuple(items),
                    attachments=expense.attachments,
                    thumbnail_path=expense.thumbnail_path,
                    created_at=expense.created_at,
                )
            )
        return views


def group_by_day(views: list[ExpenseView]) -> list[tuple[date, list[ExpenseView]]]:
    """Group date-ordered expense views into (day, views) pairs, keeping order."""
    return [(day, list(group)) for day, group in groupby(views, key=lambda v: v.date)]


class OrderQueryService:
    """Lists orders joined to their customer and address."""

    def __init__(self, db: Database, abbreviations: AbbreviationRegistry):
        self.db = db
        self.abbreviations = abbreviations

    def list_orders(self, customer_id: Optional[int] = None) -> list[OrderView]:
        """List orders newest first, optionally for one customer."""
        return self._to_views(self.db.list_orders(customer_id=customer_id))

    def _to_views(self, orders: list[Order]) -> list[OrderView]:
        abbreviations = self.abbreviations.get_all()
        customers = self.db.get_customers(o.customer_id for o in orders)
        views = []
        for order in orders:
            customer = customers.get(order.customer_id)
            views.append(
                OrderView(
                    id=order.id,
                    customer_id=order.customer_id,
                    customer_name=format_display_name(
                        customer.name if customer is not None else "", abbreviations
                    ),
                    order_date=order.order_date,
                    deadline=order.deadline,
                    address=self.db.get_address(order.address_id),
                    items=order.items,
                    created_at=order.created_at,
                )
            )
        return views
