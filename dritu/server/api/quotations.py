# dritu/server/api/quotations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from dritu.server.db.session import get_session
from dritu.server.models import Product, QuotationStatus
from dritu.server.repository import Repository
from dritu.server.schemas.quotation import (
    QuotationCreate,
    QuotationDraftIn,
    QuotationDraftOut,
    QuotationLineIn,
    QuotationLineUpdate,
    QuotationOut,
    QuotationUpdate,
)
from dritu.services import quotation_service as svc

router = APIRouter(prefix="/quotations", tags=["quotations"])


# ==============================
# LIST / DRAFT / CREATE
# ==============================

@router.get("", response_model=List[QuotationOut], summary="List quotations")
@router.get("/", include_in_schema=False)
def list_quotations(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    status_filter: Optional[QuotationStatus] = Query(None, alias="status"),
    session: Session = Depends(get_session),
):
    return svc.list_quotations(
        session=session,
        skip=skip,
        limit=limit,
        status=status_filter.value if status_filter else None,
    )


@router.post("/draft", response_model=QuotationDraftOut, summary="Price products without saving")
def draft_quotation(payload: QuotationDraftIn, session: Session = Depends(get_session)):
    return svc.draft_quotation(lines=payload.lines, products=Repository(session, Product))


@router.post("", response_model=QuotationOut, status_code=status.HTTP_201_CREATED, summary="Save quotation")
def create_quotation(payload: QuotationCreate, session: Session = Depends(get_session)):
    q = svc.create_quotation(payload=payload, session=session)
    return svc.serialize_quotation(q, session)


# ==============================
# SINGLE QUOTATION
# ==============================

@router.get("/{quotation_id}", response_model=QuotationOut)
def get_quotation(quotation_id: int, session: Session = Depends(get_session)):
    return svc.serialize_quotation(svc.get_quotation(session, quotation_id), session)


@router.put("/{quotation_id}", response_model=QuotationOut)
def update_quotation(quotation_id: int, payload: QuotationUpdate, session: Session = Depends(get_session)):
    q = svc.update_quotation(quotation_id=quotation_id, payload=payload, session=session)
    return svc.serialize_quotation(q, session)


@router.delete("/{quotation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quotation(quotation_id: int, session: Session = Depends(get_session)):
    svc.delete_quotation(quotation_id=quotation_id, session=session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==============================
# LINES
# ==============================

@router.post("/{quotation_id}/lines", response_model=QuotationOut, status_code=status.HTTP_201_CREATED)
def add_line(quotation_id: int, payload: QuotationLineIn, session: Session = Depends(get_session)):
    q = svc.add_line(quotation_id=quotation_id, payload=payload, session=session)
    return svc.serialize_quotation(q, session)


@router.patch("/{quotation_id}/lines/{line_id}", response_model=QuotationOut)
def update_line(
    quotation_id: int,
    line_id: int,
    payload: QuotationLineUpdate,
    session: Session = Depends(get_session),
):
    q = svc.update_line(quotation_id=quotation_id, line_id=line_id, payload=payload, session=session)
    return svc.serialize_quotation(q, session)


@router.delete("/{quotation_id}/lines/{line_id}", response_model=QuotationOut)
def remove_line(quotation_id: int, line_id: int, session: Session = Depends(get_session)):
    q = svc.remove_line(quotation_id=quotation_id, line_id=line_id, session=session)
    return svc.serialize_quotation(q, session)
