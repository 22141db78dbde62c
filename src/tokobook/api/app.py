from typing import Optional

from starlette.applications import Starlette
from starlette.datastructures import UploadFile
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from tokobook.api.error_handling import error_response, json_endpoint
from tokobook.api.payloads import (
    optional_id,
    parse_address_body,
    parse_expense_body,
    parse_order_body,
    read_json,
    require_id,
    to_date,
)
from tokobook.api.serializers import (
    address_to_json,
    customer_to_json,
    expense_to_json,
    expense_view_to_json,
    order_to_json,
    order_view_to_json,
    product_to_json,
    store_to_json,
)
from tokobook.config import Settings
from tokobook.database.base import Database
from tokobook.database.factories import create_sqlite_database
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.customer import CustomerService
from tokobook.domain.errors import ValidationError, required_field
from tokobook.domain.expense import ExpenseService
from tokobook.domain.listing import ExpenseQueryService, OrderQueryService
from tokobook.domain.order import OrderService
from tokobook.domain.resolver import EntityResolver
from tokobook.domain.store import StoreService
from tokobook.logging import get_logger
from tokobook.storage.attachments import PUBLIC_PREFIX, AttachmentStore, UploadedFile
from tokobook.utils.date_parser import get_date_range

LOG = get_logger("api")


def _query_text(request: Request, *names: str) -> Optional[str]:
    for name in names:
        value = request.query_params.get(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def create_app(db: Optional[Database] = None, settings: Optional[Settings] = None) -> Starlette:
    """Create the Starlette app serving the JSON API and uploaded files.

    Args:
        db: Database to use; defaults to the SQLite file from settings
        settings: Runtime settings; defaults to ``Settings.from_env()``
    """
    settings = settings or Settings.from_env()
    if db is None:
        db = create_sqlite_database(settings.database_path)

    abbreviations = AbbreviationRegistry(db)
    resolver = EntityResolver(db, abbreviations)
    attachments = AttachmentStore(
        settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
        max_files=settings.max_upload_files,
        allowed_types=settings.allowed_upload_types,
    )
    expenses = ExpenseService(db, resolver, attachments)
    expense_queries = ExpenseQueryService(db, abbreviations)
    stores = StoreService(db, resolver, abbreviations)
    customers = CustomerService(db, abbreviations)
    orders = OrderService(db, resolver)
    order_queries = OrderQueryService(db, abbreviations)

    async def health(_: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    # Abbreviations

    @json_endpoint
    async def list_abbreviations(_: Request) -> JSONResponse:
        return JSONResponse(abbreviations.list_abbreviations())

    @json_endpoint
    async def add_abbreviation(request: Request) -> JSONResponse:
        body = await read_json(request)
        name = str(body.get("name") or "")
        created = abbreviations.register(name)
        return JSONResponse(
            {"name": name.strip().upper(), "created": created}, status_code=201 if created else 200
        )

    # Expenses

    @json_endpoint
    async def list_expenses(request: Request) -> JSONResponse:
        store_id = optional_id(request.query_params.get("storeId"), "Store ID")
        period = _query_text(request, "period")
        if period:
            try:
                start_date, end_date = get_date_range(period)
            except ValueError as e:
                raise ValidationError(str(e))
        else:
            start = _query_text(request, "start_date", "startDate")
            end = _query_text(request, "end_date", "endDate")
            start_date = to_date(start, "Start date") if start else None
            end_date = to_date(end, "End date") if end else None

        views = expense_queries.list_expenses(
            search=request.query_params.get("search"),
            start_date=start_date,
            end_date=end_date,
            store_id=store_id,
        )
        return JSONResponse([expense_view_to_json(v) for v in views])

    @json_endpoint
    async def get_expense(request: Request) -> JSONResponse:
        expense_id = request.path_params["expense_id"]
        view = expense_queries.get_expense_view(expense_id)
        if view is None:
            return error_response("Expense not found", 404)
        return JSONResponse(expense_view_to_json(view))

    @json_endpoint
    async def create_expense(request: Request) -> JSONResponse:
        fields = parse_expense_body(await read_json(request))
        expense = expenses.create_expense(**fields)
        return JSONResponse(expense_to_json(expense), status_code=201)

    @json_endpoint
    async def update_expense(request: Request) -> JSONResponse:
        expense_id = require_id(request.query_params.get("id"), "Expense ID")
        fields = parse_expense_body(await read_json(request))
        expense = expenses.update_expense(expense_id, **fields)
        return JSONResponse(expense_to_json(expense))

    @json_endpoint
    async def delete_expense(request: Request) -> JSONResponse:
        expense_id = require_id(request.query_params.get("id"), "Expense ID")
        expenses.delete_expense(expense_id)
        return JSONResponse({"message": "Expense deleted successfully"})

    # Stores and products

    @json_endpoint
    async def search_stores(request: Request) -> JSONResponse:
        name = _query_text(request, "name")
        if name is None:
            raise ValidationError(required_field("Store name"))
        return JSONResponse([store_to_json(s) for s in stores.search_stores(name)])

    @json_endpoint
    async def create_store(request: Request) -> JSONResponse:
        body = await read_json(request)
        store, resolution = stores.create_store(
            body.get("name"),
            address=body.get("address"),
            phone=body.get("phone"),
            maps_link=body.get("mapsLink"),
        )
        return JSONResponse(store_to_json(store), status_code=201 if resolution.created else 200)

    @json_endpoint
    async def search_products(request: Request) -> JSONResponse:
        name = _query_text(request, "name")
        store_id = optional_id(request.query_params.get("storeId"), "Store ID")
        if name is None or store_id is None:
            raise ValidationError("Product name and store ID are required")
        return JSONResponse(
            [product_to_json(p) for p in stores.search_products(name, store_id=store_id)]
        )

    @json_endpoint
    async def get_product(request: Request) -> JSONResponse:
        product = stores.get_product(request.path_params["product_id"])
        if product is None:
            return error_response("Product not found", 404)
        return JSONResponse(product_to_json(product))

    # Customers and addresses

    @json_endpoint
    async def search_customers(request: Request) -> JSONResponse:
        found = customers.search_customers(_query_text(request, "name"))
        return JSONResponse([customer_to_json(c) for c in found])

    @json_endpoint
    async def create_customer(request: Request) -> JSONResponse:
        body = await read_json(request)
        customer = customers.create_customer(body.get("name"), phone=body.get("phone") or "")
        return JSONResponse(customer_to_json(customer), status_code=201)

    @json_endpoint
    async def list_addresses(request: Request) -> JSONResponse:
        customer_id = require_id(request.query_params.get("customerId"), "Customer ID")
        return JSONResponse([address_to_json(a) for a in customers.list_addresses(customer_id)])

    @json_endpoint
    async def create_address(request: Request) -> JSONResponse:
        fields = parse_address_body(await read_json(request))
        address = customers.create_address(**fields)
        return JSONResponse(address_to_json(address), status_code=201)

    # Orders

    @json_endpoint
    async def list_orders(request: Request) -> JSONResponse:
        customer_id = optional_id(request.query_params.get("customerId"), "Customer ID")
        views = order_queries.list_orders(customer_id=customer_id)
        return JSONResponse([order_view_to_json(v) for v in views])

    @json_endpoint
    async def create_order(request: Request) -> JSONResponse:
        fields = parse_order_body(await read_json(request))
        order = orders.create_order(**fields)
        return JSONResponse(order_to_json(order), status_code=201)

    # Uploads

    @json_endpoint
    async def upload_files(request: Request) -> JSONResponse:
        form = await request.form()
        try:
            folder_id = form.get("folderId")
            if not isinstance(folder_id, str) or not folder_id.strip():
                raise ValidationError(required_field("Folder ID"))
            uploads = [
                item
                for item in form.getlist("files") + form.getlist("files[]")
                if isinstance(item, UploadFile)
            ]
            files = [
                UploadedFile(
                    filename=upload.filename or "",
                    content_type=upload.content_type or "",
                    data=await upload.read(),
                )
                for upload in uploads
            ]
        finally:
            await form.close()

        paths = attachments.save(folder_id, files)
        return JSONResponse({"message": "Files uploaded successfully", "paths": paths})

    @json_endpoint
    async def delete_upload(request: Request) -> JSONResponse:
        expense_id = require_id(request.query_params.get("expenseId"), "Expense ID")
        image_path = _query_text(request, "imagePath")
        if image_path is None:
            raise ValidationError(required_field("Image path"))
        expense = expenses.remove_attachment(expense_id, image_path)
        return JSONResponse(
            {"message": "Image deleted successfully", "updatedExpense": expense_to_json(expense)}
        )

    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/abbreviations", list_abbreviations, methods=["GET"]),
        Route("/abbreviations", add_abbreviation, methods=["POST"]),
        Route("/expenses", list_expenses, methods=["GET"]),
        Route("/expenses", create_expense, methods=["POST"]),
        Route("/expenses", update_expense, methods=["PUT"]),
        Route("/expenses", delete_expense, methods=["DELETE"]),
        Route("/expenses/{expense_id:int}", get_expense, methods=["GET"]),
        Route("/stores", search_stores, methods=["GET"]),
        Route("/stores", create_store, methods=["POST"]),
        Route("/products", search_products, methods=["GET"]),
        Route("/products/{product_id:int}", get_product, methods=["GET"]),
        Route("/customers", search_customers, methods=["GET"]),
        Route("/customers", create_customer, methods=["POST"]),
        Route("/addresses", list_addresses, methods=["GET"]),
        Route("/addresses", create_address, methods=["POST"]),
        Route("/orders", list_orders, methods=["GET"]),
        Route("/orders", create_order, methods=["POST"]),
        Route("/uploads", upload_files, methods=["POST"]),
        Route("/uploads", delete_upload, methods=["DELETE"]),
        Mount(PUBLIC_PREFIX, StaticFiles(directory=str(settings.upload_dir)), name="uploads"),
    ]

    app = Starlette(debug=False, routes=routes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.db = db
    app.state.abbreviations = abbreviations
    app.state.settings = settings
    LOG.info("API ready (uploads in %s)", settings.upload_dir)
    return app
