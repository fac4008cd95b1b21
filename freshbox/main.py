from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from freshbox.core.config import settings
from freshbox.core.monitoring import monitoring
from freshbox.db.base import Base
from freshbox.db.session import engine, SessionLocal
from freshbox.api.routes_catalog import router as catalog_router
from freshbox.api.routes_order import router as order_router
from freshbox.api.routes_contact import router as contact_router
from freshbox.api.routes_stats import router as stats_router
from freshbox.api.routes_payment import router as payment_router
from freshbox.services.catalog_seed import seed_default_catalog

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DEFAULT_CATALOG:
        db = SessionLocal()
        try:
            seed_default_catalog(db)
        finally:
            db.close()
    logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Custom fruit and vegetable box storefront: catalog, checkout, order tracking and admin stats",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_request_metrics(request: Request, call_next):
    start_time = time.time()
    try:
        response = await call_next(request)
    except Exception as e:
        monitoring.record_error(str(e), request.url.path)
        monitoring.record_request(success=False, response_time_ms=(time.time() - start_time) * 1000)
        raise

    monitoring.record_request(
        success=response.status_code < 500,
        response_time_ms=(time.time() - start_time) * 1000,
    )
    return response


app.include_router(catalog_router, prefix="/api", tags=["Catalog"])
app.include_router(order_router, prefix="/api/orders", tags=["Order"])
app.include_router(contact_router, prefix="/api/contact", tags=["Contact"])
app.include_router(payment_router, prefix="/api/payment", tags=["Payment"])
app.include_router(stats_router, prefix="/api", tags=["Stats"])
