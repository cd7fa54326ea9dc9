"""
Health Check Router
Simple health check endpoint
"""
from datetime import datetime

from fastapi import APIRouter

from app.core.config import settings
from spend_insights_lib.constants import EXPENSE_CATEGORIES, PAYMENT_METHODS

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/vocabulary")
async def vocabulary():
    """Categories and payment methods the analytics engine understands."""
    return {
        "categories": list(EXPENSE_CATEGORIES),
        "payment_methods": list(PAYMENT_METHODS),
        "month_format": "YYYY-MM",
    }
