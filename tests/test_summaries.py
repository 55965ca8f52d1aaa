from datetime import date

from dritu.server.models import Emd, EmdStatus, Tender, TenderStatus
from dritu.services.summaries import dashboard_summary, emd_summary


def _tender(status, deposit=0.0, return_date=None):
    return Tender(
        title="T", client="C", submission_date=date(2025, 1, 1),
        status=status, security_deposit=deposit, security_return_date=return_date,
    )


def test_emd_summary(session):
    session.add_all([
        Emd(tender_reference="A", amount=1000, status=EmdStatus.pending),
        Emd(tender_reference="B", amount=2500, status=EmdStatus.forfeited),
        Emd(tender_reference="C", amount=500, status=EmdStatus.returned),
        Emd(tender_reference="D", amount=100, status=EmdStatus.pending),
    ])
    session.commit()

    s = emd_summary(session)
    assert s == {"total_amount": 4100, "pending_count": 2, "forfeited_amount": 2500}


def test_emd_summary_empty(session):
    assert emd_summary(session) == {"total_amount": 0, "pending_count": 0, "forfeited_amount": 0}


def test_dashboard_tender_statistics(session):
    today = date(2025, 6, 1)
    session.add_all([
        _tender(TenderStatus.won, 5000, date(2025, 12, 31)),
        _tender(TenderStatus.won, 5000, date(2025, 1, 31)),
        _tender(TenderStatus.lost),
        _tender(TenderStatus.pending),
    ])
    session.add(Emd(tender_reference="X", amount=10, status=EmdStatus.pending))
    session.commit()

    d = dashboard_summary(session, today=today)
    stats = d["tender_statistics"]
    assert d["active_tenders"] == 1
    assert d["active_quotations"] == 0
    assert stats["total"] == 4
    assert stats["won"] == 2 and stats["won_percent"] == 50
    assert stats["lost"] == 1 and stats["lost_percent"] == 25
    assert stats["pending_emd_returns"] == 1
    assert stats["pending_security_returns"] == 1


def test_dashboard_endpoint(client):
    r = client.get("/dashboard")
    assert r.status_code == 200
    assert r.json()["tender_statistics"]["won_percent"] == 0
