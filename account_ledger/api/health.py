"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from account_ledger.models.base import get_db
from account_ledger.services.account_service import AccountService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Return application health status.

    Counting the registered customers doubles as a check that
    the in-memory store still answers queries.
    """
    return {
        "status": "healthy",
        "service": "account-ledger",
        "customers": AccountService(db).count(),
    }
