"""
Generic entity repository on top of a SQLModel session.

One Repository instance per entity and request; the session is injected
by FastAPI (see repository_dependency), so there is no shared store.

Usage:
    repo = Repository(session, Product, search_fields=("name", "make", "model"))
    repo.list(ListQuery(search="dell", sort="price", desc=True))
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from fastapi import Depends
from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

from dritu.core.exceptions import RecordNotFoundError
from dritu.core.query import ListQuery, apply_list_query
from dritu.server.db.session import get_session

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class Repository(Generic[ModelT]):

    def __init__(self, session: Session, model: Type[ModelT], search_fields: Sequence[str] = ()):
        self.session = session
        self.model = model
        self.search_fields = tuple(search_fields)
        self.entity_name = model.__name__

    def list(self, query: Optional[ListQuery] = None) -> List[ModelT]:
        stmt = apply_list_query(select(self.model), self.model, query or ListQuery(), self.search_fields)
        return list(self.session.exec(stmt).all())

    def all(self) -> List[ModelT]:
        return list(self.session.exec(select(self.model).order_by(self.model.id)).all())

    def count(self, **filters: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for field, value in filters.items():
            stmt = stmt.where(getattr(self.model, field) == value)
        return int(self.session.exec(stmt).one())

    def get(self, item_id: int) -> ModelT:
        obj = self.session.get(self.model, item_id)
        if obj is None:
            raise RecordNotFoundError(self.entity_name, item_id)
        return obj

    def create(self, data: Dict[str, Any], commit: bool = True) -> ModelT:
        """With commit=False the row is only flushed (id assigned); the caller commits."""
        data = {k: v for k, v in data.items() if k != "id"}
        obj = self.model.model_validate(data)
        self.session.add(obj)
        if not commit:
            self.session.flush()
            return obj
        self.session.commit()
        self.session.refresh(obj)
        logger.info("[%s] Created: %s", self.entity_name, obj.id)
        return obj

    def update(self, item_id: int, data: Dict[str, Any]) -> ModelT:
        obj = self.get(item_id)
        obj.sqlmodel_update({k: v for k, v in data.items() if k != "id"})
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        logger.info("[%s] Updated: %s", self.entity_name, item_id)
        return obj

    def delete(self, item_id: int) -> None:
        obj = self.get(item_id)
        self.session.delete(obj)
        self.session.commit()
        logger.info("[%s] Deleted: %s", self.entity_name, item_id)


def repository_dependency(
    model: Type[ModelT],
    search_fields: Sequence[str] = (),
) -> Callable[..., Repository[ModelT]]:
    """FastAPI dependency building a Repository for `model` on the request session."""

    def _get_repository(session: Session = Depends(get_session)) -> Repository[ModelT]:
        return Repository(session, model, search_fields=search_fields)

    return _get_repository
