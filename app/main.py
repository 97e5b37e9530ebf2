from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal

from fastapi import FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app import engine, sellers, transactions
from app.config import get_settings
from app.exceptions import (
    BadRequestError,
    CrmError,
    InvalidPaymentTypeError,
    ValidationFailedError,
)
from app.log import get_logger, setup_logging
from app.mappers import to_seller_response
from app.models import (
    BestDayResponse,
    SellerRequest,
    SellerResponse,
    TransactionRequest,
    TransactionResponse,
)
from app.store import store
from app.validation import EntityValidator, Violation

settings = get_settings()
setup_logging(settings)
logger = get_logger("litecrm.api")

# shared, stateless
validator = EntityValidator()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Auto-seed on startup so the service is immediately usable
    if settings.seed_on_startup:
        from scripts.seed_data import seed
        seed(store, settings.seed_random_seed)
    yield


app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Sellers, their transactions and sales analytics",
    lifespan=lifespan,
)


@app.exception_handler(CrmError)
async def handle_crm_error(request: Request, exc: CrmError):
    if isinstance(exc, BadRequestError):
        status = 400
    else:
        # NotFoundError and the empty analytics results
        status = 404
    logger.error("got %s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "message": exc.message, "details": exc.details},
    )


def _entity_for_path(path: str) -> str:
    if path.startswith("/api/v1/transactions"):
        return "transaction"
    if path.startswith("/api/v1/sellers"):
        return "seller"
    return "request"


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters get the same 400 errors as the service
    layer raises, instead of FastAPI's 422."""
    violations = []
    for err in exc.errors():
        # drop the "body" / "query" / "path" prefix
        field = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        if field == "payment_type":
            return await handle_crm_error(request, InvalidPaymentTypeError(err.get("input")))
        violations.append(Violation(field, err["msg"]))
    return await handle_crm_error(request, ValidationFailedError(_entity_for_path(request.url.path), violations))


def _naive(value: datetime) -> datetime:
    # stored timestamps are naive local time
    return value.replace(tzinfo=None)


# ── Sellers ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers", response_model=list[SellerResponse])
def list_sellers():
    return sellers.get_all_sellers(store)


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details", response_model=SellerResponse)
def get_seller(seller_id: int):
    return sellers.get_seller(store, seller_id)


@app.get(
    "/api/v1/sellers/{seller_id}/transactions",
    summary="List all transactions of a seller",
    response_model=list[TransactionResponse],
)
def get_seller_transactions(seller_id: int):
    return sellers.get_seller_transactions(store, seller_id)


@app.post("/api/v1/sellers", status_code=201, summary="Create a seller", response_model=SellerResponse)
def create_seller(body: SellerRequest):
    return sellers.create_seller(store, validator, body)


@app.put("/api/v1/sellers/{seller_id}", summary="Update a seller", response_model=SellerResponse)
def update_seller(seller_id: int, body: SellerRequest):
    return sellers.update_seller(store, validator, seller_id, body)


@app.delete(
    "/api/v1/sellers/{seller_id}",
    status_code=204,
    summary="Delete a seller together with its transactions",
)
def delete_seller(seller_id: int):
    sellers.delete_seller(store, seller_id)
    return Response(status_code=204)


# ── Transactions ─────────────────────────────────────────────────────────────

@app.get("/api/v1/transactions", summary="List all transactions", response_model=list[TransactionResponse])
def list_transactions():
    return transactions.get_all_transactions(store)


@app.get(
    "/api/v1/transactions/{txn_id}",
    summary="Get transaction details",
    response_model=TransactionResponse,
)
def get_transaction(txn_id: int):
    return transactions.get_transaction(store, txn_id)


@app.post(
    "/api/v1/transactions",
    status_code=201,
    summary="Create a transaction",
    response_model=TransactionResponse,
)
def create_transaction(body: TransactionRequest):
    return transactions.create_transaction(store, validator, body)


@app.put(
    "/api/v1/transactions/{txn_id}",
    summary="Update a transaction",
    response_model=TransactionResponse,
)
def update_transaction(txn_id: int, body: TransactionRequest):
    return transactions.update_transaction(store, validator, txn_id, body)


@app.delete("/api/v1/transactions/{txn_id}", status_code=204, summary="Delete a transaction")
def delete_transaction(txn_id: int):
    transactions.delete_transaction(store, txn_id)
    return Response(status_code=204)


# ── Analytics ────────────────────────────────────────────────────────────────

@app.get(
    "/api/v1/analytics/top-seller",
    summary="Seller with the largest total in the period around a date",
    response_model=SellerResponse,
)
def get_top_seller(
    period: str = Query(..., examples=["MONTH"], description="DAY, MONTH, QUARTER or YEAR"),
    reference_date: datetime = Query(..., alias="referenceDate", examples=["2026-03-15T10:00:00"]),
):
    seller = engine.get_top_seller(store, period, _naive(reference_date))
    return to_seller_response(seller)


@app.get(
    "/api/v1/analytics/sellers-max-sum",
    summary="Sellers whose total in [start, end) is below a threshold",
    response_model=list[SellerResponse],
)
def get_sellers_below_threshold(
    threshold: Decimal = Query(..., examples=["1000.00"]),
    start: datetime = Query(..., examples=["2026-03-01T00:00:00"]),
    end: datetime = Query(..., examples=["2026-04-01T00:00:00"]),
):
    found = engine.get_sellers_below_threshold(store, threshold, _naive(start), _naive(end))
    return [to_seller_response(s) for s in found]


@app.get(
    "/api/v1/analytics/best-day/{seller_id}",
    summary="Day with the most transactions for a seller",
    response_model=BestDayResponse,
)
def get_best_day(seller_id: int):
    return BestDayResponse(best_day=engine.get_best_day(store, seller_id))


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    from scripts.seed_data import seed
    with store.atomic():
        store.clear()
        seed(store, settings.seed_random_seed)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "transactions": len(store.transactions),
    }
