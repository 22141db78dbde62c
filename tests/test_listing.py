"""Tests for read-side expense and order listings."""

from datetime import date
from decimal import Decimal

from tokobook.domain.entities import ExpenseItemInput
from tokobook.domain.listing import group_by_day


def _record(service, store, item_names, day, total="1000"):
    return service.create_expense(
        store=store,
        items=[
            ExpenseItemInput(product=name, name=name, quantity=Decimal("1"), price=Decimal("1000"))
            for name in item_names
        ],
        date=day,
        total=Decimal(total),
    )


def test_list_expenses_newest_first(expense_service, expense_queries):
    older = _record(expense_service, "Toko A", ["Gula"], date(2024, 1, 1))
    newer = _record(expense_service, "Toko B", ["Kopi"], date(2024, 1, 5))
    same_day_later = _record(expense_service, "Toko C", ["Teh"], date(2024, 1, 5))

    views = expense_queries.list_expenses()

    assert [v.id for v in views] == [same_day_later.id, newer.id, older.id]


def test_search_matches_store_or_item_name(expense_service, expense_queries):
    by_store = _record(expense_service, "Toko ABC", ["Gula"], date(2024, 1, 1))
    by_item = _record(expense_service, "Warung Bu Sri", ["Sabun abc wangi"], date(2024, 1, 2))
    _record(expense_service, "Toko XYZ", ["Kopi"], date(2024, 1, 3))

    views = expense_queries.list_expenses(search="abc")

    assert {v.id for v in views} == {by_store.id, by_item.id}


def test_search_treats_wildcards_literally(expense_service, expense_queries):
    _record(expense_service, "Toko ABC", ["Gula"], date(2024, 1, 1))
    assert expense_queries.list_expenses(search="%") == []
    assert expense_queries.list_expenses(search="_") == []


def test_blank_search_lists_everything(expense_service, expense_queries):
    _record(expense_service, "Toko ABC", ["Gula"], date(2024, 1, 1))
    assert len(expense_queries.list_expenses(search="   ")) == 1


def test_list_expenses_date_and_store_filters(expense_service, expense_queries):
    january = _record(expense_service, "Toko A", ["Gula"], date(2024, 1, 15))
    february = _record(expense_service, "Toko A", ["Gula"], date(2024, 2, 15))
    other_store = _record(expense_service, "Toko B", ["Gula"], date(2024, 2, 16))

    views = expense_queries.list_expenses(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))
    assert [v.id for v in views] == [other_store.id, february.id]

    views = expense_queries.list_expenses(store_id=january.store_id)
    assert [v.id for v in views] == [february.id, january.id]


def test_views_use_display_names(expense_service, expense_queries, abbreviations, temp_db):
    expense = _record(expense_service, "toko tki", ["minyak goreng"], date(2024, 1, 1))
    abbreviations.register("TKI")
    abbreviations.refresh()

    view = expense_queries.get_expense_view(expense.id)

    assert view.store.name == "Toko TKI"
    item = view.items[0]
    assert item.name == "Minyak Goreng"
    assert item.stored_name == "minyak goreng"
    assert item.product.id == item.product_id
    assert item.product.store_id == expense.store_id


def test_view_uses_canonical_product_name(expense_service, expense_queries, temp_db):
    expense = _record(expense_service, "Toko A", ["gula pasir"], date(2024, 1, 1))
    product_id = expense.items[0].product_id
    assert expense_queries.get_expense_view(expense.id).items[0].name == "Gula Pasir"
    assert temp_db.get_product(product_id).name == "Gula Pasir"


def test_get_expense_view_missing(expense_queries):
    assert expense_queries.get_expense_view(999) is None


def test_listing_does_not_modify_stored_items(expense_service, expense_queries, temp_db):
    expense = _record(expense_service, "Toko A", ["gula PASIR"], date(2024, 1, 1))
    expense_queries.list_expenses()
    assert temp_db.get_expense(expense.id).items[0].name == "gula PASIR"


def test_group_by_day(expense_service, expense_queries):
    a = _record(expense_service, "Toko A", ["Gula"], date(2024, 1, 1))
    b = _record(expense_service, "Toko B", ["Kopi"], date(2024, 1, 5))
    c = _record(expense_service, "Toko C", ["Teh"], date(2024, 1, 5))

    groups = group_by_day(expense_queries.list_expenses())

    assert [day for day, _ in groups] == [date(2024, 1, 5), date(2024, 1, 1)]
    assert [v.id for v in groups[0][1]] == [c.id, b.id]
    assert [v.id for v in groups[1][1]] == [a.id]


def test_group_by_day_empty():
    assert group_by_day([]) == []
