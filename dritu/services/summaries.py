"""
Summary figures for the EMD screen and the dashboard start page.
"""

from datetime import date
from typing import Any, Dict, Optional

from sqlmodel import Session, select

from dritu.server.models import Emd, EmdStatus, Quotation, QuotationStatus, Tender, TenderStatus


def emd_summary(session: Session) -> Dict[str, Any]:
    """
    Total EMD amount, number of deposits still pending return and the
    forfeited amount.
    """
    emds = session.exec(select(Emd)).all()
    return {
        "total_amount": sum(float(e.amount or 0) for e in emds),
        "pending_count": sum(1 for e in emds if e.status == EmdStatus.pending),
        "forfeited_amount": sum(float(e.amount or 0) for e in emds if e.status == EmdStatus.forfeited),
    }


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round(part * 100 / whole)


def dashboard_summary(session: Session, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()

    quotations = session.exec(select(Quotation)).all()
    tenders = session.exec(select(Tender)).all()
    emds = session.exec(select(Emd)).all()

    won = sum(1 for t in tenders if t.status == TenderStatus.won)
    lost = sum(1 for t in tenders if t.status == TenderStatus.lost)

    # Won tenders keep a security deposit until its return date
    pending_security = sum(
        1
        for t in tenders
        if t.status == TenderStatus.won
        and (t.security_deposit or 0) > 0
        and (t.security_return_date is None or t.security_return_date >= today)
    )

    return {
        "active_quotations": sum(
            1 for q in quotations if q.status in (QuotationStatus.draft, QuotationStatus.sent)
        ),
        "active_tenders": sum(1 for t in tenders if t.status == TenderStatus.pending),
        "tender_statistics": {
            "total": len(tenders),
            "won": won,
            "won_percent": _percent(won, len(tenders)),
            "lost": lost,
            "lost_percent": _percent(lost, len(tenders)),
            "pending_emd_returns": sum(1 for e in emds if e.status == EmdStatus.pending),
            "pending_security_returns": pending_security,
        },
    }
