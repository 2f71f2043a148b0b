"""
JewelBox - Main FastAPI Application
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jewelbox.config import settings
from jewelbox.exceptions import BackendError, JewelBoxError

logging.basicConfig(
    level=getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Jewelry inventory valuation, sales and expenses",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JewelBoxError)
async def domain_error_handler(request: Request, exc: JewelBoxError):
    """Domain errors -> {"detail": message} with the error's status code."""
    if isinstance(exc, BackendError):
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    body = {"detail": exc.message}
    field = getattr(exc, "field", None)
    if field:
        body["field"] = field
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.on_event("startup")
def create_tables_in_debug():
    """Local development only: create missing tables. Production schema is managed in Supabase."""
    if not settings.DEBUG:
        return
    from jewelbox.database import Base, engine
    import jewelbox.models  # noqa: F401  registers tables on Base.metadata
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured (DEBUG)")


# Include routers
from jewelbox.api import (  # noqa: E402
    categories_router,
    expenses_router,
    gold_rates_router,
    inventory_router,
    items_router,
    sales_router,
)

app.include_router(items_router, prefix="/api/items", tags=["Items"])
app.include_router(categories_router, prefix="/api/categories", tags=["Expense Categories"])
app.include_router(expenses_router, prefix="/api/expenses", tags=["Expenses"])
app.include_router(inventory_router, prefix="/api/inventory", tags=["Inventory"])
app.include_router(sales_router, prefix="/api/sales", tags=["Sales"])
app.include_router(gold_rates_router, prefix="/api/gold-rates", tags=["Gold Rates"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("jewelbox.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
