"""
Search / sort / pagination for list endpoints.

Search is a case-insensitive substring match OR-ed over the entity's
search fields, like the search boxes on the dashboard screens.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Type

from sqlalchemy import or_
from sqlmodel import SQLModel

from dritu.core.exceptions import ValidationError


@dataclass
class ListQuery:
    search: Optional[str] = None
    sort: Optional[str] = None
    desc: bool = False
    skip: int = 0
    limit: int = 50


def _column(model: Type[SQLModel], name: str):
    table = getattr(model, "__table__", None)
    if table is None or name not in table.columns:
        raise ValidationError(f"Unknown field '{name}' for {model.__name__}", field=name)
    return table.columns[name]


def apply_list_query(stmt, model: Type[SQLModel], query: ListQuery, search_fields: Sequence[str] = ()):
    term = (query.search or "").strip()
    if term and search_fields:
        pattern = f"%{term}%"
        stmt = stmt.where(or_(*[_column(model, f).ilike(pattern) for f in search_fields]))

    if query.sort:
        col = _column(model, query.sort)
        stmt = stmt.order_by(col.desc() if query.desc else col.asc())
    else:
        stmt = stmt.order_by(_column(model, "id").asc())

    return stmt.offset(max(query.skip, 0)).limit(max(query.limit, 1))
