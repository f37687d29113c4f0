import logging

from fastapi import Depends, FastAPI
from app.database import create_db_and_tables
from app.config import settings
from app.dependencies.auth import get_current_user_id
from app.routes import (
    auth,
    health,
    orders,
)

from contextlib import asynccontextmanager

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="Order Management API", lifespan=lifespan)

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(
    orders.router,
    prefix="/order",
    tags=["Orders"],
    dependencies=[Depends(get_current_user_id)],
)
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "auth_endpoints": [
            "/auth/signup", "/auth/signin"
        ],
        "order_endpoints": [
            "/order", "/order/list", "/order/{order_id}"
        ],
        "health": [
            "/health/check"
        ]
    }
