import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.database import get_session
from app.models.order import Order

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check")
def health_check(response: Response, session: Session = Depends(get_session)):
    """Check that the order store answers queries; 503 when it does not."""
    database = "ok"
    orders = None

    try:
        orders = session.exec(select(func.count()).select_from(Order)).one()
    except SQLAlchemyError:
        logger.warning("Health check could not query the order store", exc_info=True)
        session.rollback()
        database = "failed"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "backend": session.get_bind().dialect.name,
        "orders": orders,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
