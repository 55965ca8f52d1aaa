from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlmodel import Session

from dritu.server.db.session import get_session
from dritu.services.quotation_document import build_context_from_quotation, render_quotation_html
from dritu.services.quotation_service import get_quotation, serialize_quotation

router = APIRouter(prefix="/quotations", tags=["quotations"])


@router.get(
    "/{quotation_id}/document",
    response_class=HTMLResponse,
    summary="Printable quotation (HTML)",
)
def get_quotation_document(quotation_id: int, session: Session = Depends(get_session)):
    quotation = serialize_quotation(get_quotation(session, quotation_id), session)
    html = render_quotation_html(build_context_from_quotation(quotation))
    return HTMLResponse(content=html)
