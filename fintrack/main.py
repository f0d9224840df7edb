"""
Fintrack — FastAPI app factory with startup seeding and the {"message"} error envelope.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack.config import BASE_FOLDER, DEMO_USER_ID, SEED_DEMO_DATA
from fintrack.data.seed import seed_demo_data
from fintrack.data.store import LedgerStore
from fintrack.errors import FintrackError
from fintrack.api.dependencies import set_store
from fintrack.api.router_meta import router as meta_router
from fintrack.api.router_dashboard import router as dashboard_router
from fintrack.api.router_transactions import router as transactions_router
from fintrack.api.router_categories import router as categories_router
from fintrack.api.router_bills import router as bills_router
from fintrack.api.router_credit_cards import router as credit_cards_router
from fintrack.api.router_goals import router as goals_router
from fintrack.api.router_reports import router as reports_router
from fintrack.api.router_upload import router as upload_router


def format_validation_error(exc: RequestValidationError) -> str:
    """Readable one-line summary of pydantic errors, e.g. 'Field required at "amount"'."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        msg = err.get("msg", "Invalid value")
        parts.append(f'{msg} at "{".".join(loc)}"' if loc else msg)
    return "Validation error: " + "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"message": format_validation_error(exc)}, status_code=400)

    @app.exception_handler(FintrackError)
    async def domain_error(request: Request, exc: FintrackError):
        return JSONResponse({"message": exc.message}, status_code=exc.status_code)


def create_app(store: Optional[LedgerStore] = None, seed: bool = SEED_DEMO_DATA) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build (and seed) the in-memory ledger at startup."""
        print(f"  FINTRACK_DATA_DIR = {BASE_FOLDER}")
        print(f"  Demo principal = user {DEMO_USER_ID}")

        ledger = store if store is not None else LedgerStore()
        if seed:
            seed_demo_data(ledger)
        set_store(ledger)

        counts = ledger.counts()
        print(f"\nFintrack ready — {counts['users']} users, {counts['transactions']} transactions\n")
        yield
        set_store(None)

    app = FastAPI(
        title="Fintrack API",
        description="Personal finance tracker — transactions, bills, credit cards, imports",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(meta_router)
    app.include_router(dashboard_router)
    app.include_router(transactions_router)
    app.include_router(categories_router)
    app.include_router(bills_router)
    app.include_router(credit_cards_router)
    app.include_router(goals_router)
    app.include_router(reports_router)
    app.include_router(upload_router)

    return app


app = create_app()
