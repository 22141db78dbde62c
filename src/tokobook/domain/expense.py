"""Expense domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from tokobook.database.base import Database
from tokobook.domain.entities import (
    Expense as ExpenseEntity,
    ExpenseItem,
    ExpenseItemInput,
)
from tokobook.domain.errors import (
    NotFoundError,
    ValidationError,
    expense_not_found,
    required_field,
)
from tokobook.domain.resolver import EntityResolver
from tokobook.logging import get_logger
from tokobook.storage.attachments import AttachmentStore

LOG = get_logger("expense")


class ExpenseService:
    """Service for recording, replacing and deleting expenses.

    Stores and products referenced by an expense are resolved (and created
    when new) before the expense itself is written. The writes are sequential
    and not wrapped in a transaction.
    """

    def __init__(
        self,
        db: Database,
        resolver: EntityResolver,
        attachments: Optional[AttachmentStore] = None,
    ):
        """Initialize expense service.

        Args:
            db: Database instance
            resolver: Entity resolver for stores and products
            attachments: Attachment store used for cleanup on delete
        """
        self.db = db
        self.resolver = resolver
        self.attachments = attachments

    def _build_items(self, items: list[ExpenseItemInput], store_id: int) -> list[ExpenseItem]:
        """Resolve each line's product within the store.

        The line keeps the submitted name verbatim; only a newly created
        product gets a display-formatted name.
        """
        built = []
        for item in items:
            if not item.name or not str(item.name).strip():
                raise ValidationError(required_field("Item name"))
            product = item.product if item.product not in (None, "") else item.name
            resolution = self.resolver.resolve_product(
                product, item.name, store_id=store_id, price=item.price
            )
            built.append(
                ExpenseItem(
                    product_id=resolution.id,
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                )
            )
        return built

    def _resolve(
        self, store: str | int, items: list[ExpenseItemInput]
    ) -> tuple[int, list[ExpenseItem]]:
        if store is None or not str(store).strip():
            raise ValidationError(required_field("Store"))
        store_id = self.resolver.resolve_store(store).id
        return store_id, self._build_items(items, store_id)

    def create_expense(
        self,
        store: str | int,
        items: list[ExpenseItemInput],
        date: date,
        total: Decimal,
        attachments: Optional[list[str]] = None,
        thumbnail_path: Optional[str] = None,
    ) -> ExpenseEntity:
        """Record an expense.

        Args:
            store: Store ID or store name
            items: Line items; may be empty (callers enforce at least one)
            date: Purchase date
            total: Total as submitted; stored without recomputation
            attachments: Public paths of receipt photos
            thumbnail_path: Public path of the photo shown in lists

        Returns:
            Created expense entity

        Raises:
            ValidationError: If the store or an item name is missing
        """
        store_id, built_items = self._resolve(store, items)

        expense_id = self.db.create_expense(
            store_id=store_id,
            date=date,
            total=total,
            items=built_items,
            attachments=list(attachments or []),
            thumbnail_path=thumbnail_path or None,
        )
        LOG.info("Created expense %s with %d item(s)", expense_id, len(built_items))
        return self.db.get_expense(expense_id)

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        """Get expense by ID.

        Args:
            expense_id: Expense ID

        Returns:
            Expense entity or None if not found
        """
        return self.db.get_expense(expense_id)

    def require_expense(self, expense_id: int) -> ExpenseEntity:
        """Get expense by ID or raise NotFoundError."""
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise NotFoundError(expense_not_found(expense_id))
        return expense

    def update_expense(
        self,
        expense_id: int,
        store: str | int,
        items: list[ExpenseItemInput],
        date: date,
        total: Decimal,
        attachments: Optional[list[str]] = None,
        thumbnail_path: Optional[str] = None,
    ) -> ExpenseEntity:
        """Replace an expense.

        Store, items, date, total, attachments and thumbnail are all
        replaced; fields left out are cleared rather than kept.

        Raises:
            NotFoundError: If the expense doesn't exist
            ValidationError: If the store or an item name is missing
        """
        # Checked first so a missing expense creates no stores or products
        self.require_expense(expense_id)

        store_id, built_items = self._resolve(store, items)

        self.db.replace_expense(
            expense_id=expense_id,
            store_id=store_id,
            date=date,
            total=total,
            items=built_items,
            attachments=list(attachments or []),
            thumbnail_path=thumbnail_path or None,
        )
        LOG.info("Updated expense %s", expense_id)
        return self.db.get_expense(expense_id)

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense and, best effort, its attachment folder.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        self.require_expense(expense_id)
        self.db.delete_expense(expense_id)
        LOG.info("Deleted expense %s", expense_id)

        if self.attachments is not None:
            self.attachments.delete_folder(str(expense_id))

    def remove_attachment(self, expense_id: int, path: str) -> ExpenseEntity:
        """Delete an attachment file and drop its path from the expense.

        A file already missing from disk is tolerated.

        Raises:
            NotFoundError: If the expense doesn't exist
            ValidationError: If the path is outside the uploads area
        """
        if self.attachments is not None:
            # Validates the path before touching the record
            self.attachments.local_path(path)
        self.require_expense(expense_id)

        if self.attachments is not None:
            self.attachments.delete_file(path)
        self.db.remove_expense_attachment(expense_id, path)
        return self.db.get_expense(expense_id)
