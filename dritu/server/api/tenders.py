from fastapi import APIRouter, Depends
from sqlmodel import Session

from dritu.server.db.session import get_session
from dritu.services.summaries import dashboard_summary, emd_summary

router = APIRouter(tags=["tenders"])


# Registered before the generic /emds/{item_id} route
@router.get("/emds/summary", summary="EMD totals")
def get_emd_summary(session: Session = Depends(get_session)):
    return emd_summary(session)


@router.get("/dashboard", summary="Dashboard figures", tags=["dashboard"])
def get_dashboard(session: Session = Depends(get_session)):
    return dashboard_summary(session)
