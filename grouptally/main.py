"""
FastAPI entrypoint for GroupTally backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from grouptally.core.config import settings
from grouptally.core.exceptions import (
    GroupTallyError,
    LedgerValidationError,
    InvalidSplitError,
    InvalidCategoryError,
    GroupNotFoundError,
    MemberNotFoundError,
    ExpenseNotFoundError,
    SettlementNotFoundError,
    ReferentialIntegrityError,
    BalanceInconsistencyError,
)
from grouptally.core.utils import format_error
from grouptally.api.router import api_router
from grouptally.db.session import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables if they do not exist."""
    init_db()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="GroupTally API",
    description="Backend API for shared group expenses and settlements",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

NOT_FOUND_ERRORS = (
    GroupNotFoundError,
    MemberNotFoundError,
    ExpenseNotFoundError,
    SettlementNotFoundError,
)
UNPROCESSABLE_ERRORS = (LedgerValidationError, InvalidSplitError, InvalidCategoryError)


@app.exception_handler(GroupTallyError)
async def handle_domain_error(request: Request, exc: GroupTallyError):
    """Translate domain errors into JSON error responses."""
    if isinstance(exc, NOT_FOUND_ERRORS):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, UNPROCESSABLE_ERRORS):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_409_CONFLICT

    details = None
    if isinstance(exc, ReferentialIntegrityError):
        details = {"member_id": str(exc.member_id), "source": exc.source}
    elif isinstance(exc, BalanceInconsistencyError):
        details = {
            "debtor_total": str(exc.debtor_total),
            "creditor_total": str(exc.creditor_total),
        }

    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=format_error(str(exc), details)
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "GroupTally API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
