from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from freshbox.core.config import settings
from freshbox.core.monitoring import monitoring
from freshbox.crud import stats as crud_stats
from freshbox.db.deps import get_db
from freshbox.schemas.stats import OrderStats, BillingSummary

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
def get_system_health():
    return monitoring.get_health_status()

@router.get("/stats", response_model=OrderStats)
def get_stats(db: Session = Depends(get_db)):
    try:
        return crud_stats.get_order_stats(db, completed_only=settings.REVENUE_COMPLETED_ONLY)
    except SQLAlchemyError as e:
        logger.error(f"Stats query failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch statistics")

@router.get("/stats/billing", response_model=BillingSummary)
def get_billing_summary(db: Session = Depends(get_db)):
    try:
        return crud_stats.get_billing_summary(db)
    except SQLAlchemyError as e:
        logger.error(f"Billing summary query failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch billing summary")
