# dritu/server/api/data.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response
from sqlmodel import Session

from dritu.core.exceptions import ValidationError
from dritu.server.db.session import get_session
from dritu.services.local_storage import import_local_storage
from dritu.services.spreadsheets import export_workbook

router = APIRouter(tags=["data"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("/import/local-storage", summary="Import a browser local-storage snapshot")
def import_snapshot(
    snapshot: Dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
):
    try:
        return import_local_storage(snapshot, session)
    except ValueError as exc:
        # json.JSONDecodeError is a ValueError too
        raise ValidationError(f"Invalid snapshot: {exc}") from exc


@router.get("/export.xlsx", summary="Download all data as an Excel workbook")
def export_xlsx(session: Session = Depends(get_session)):
    return Response(
        content=export_workbook(session),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="dritu-export.xlsx"'},
    )
