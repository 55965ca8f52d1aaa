# dritu/server/api/crud.py
"""
Router factory for the plain CRUD screens (products, companies, clients, ...).

Each entity from dritu.server.entities gets
  GET    /<entity>            list, ?q= search, ?sort=&desc= order, ?skip=&limit=
  GET    /<entity>/{item_id}
  POST   /<entity>            201
  PUT    /<entity>/{item_id}
  DELETE /<entity>/{item_id}  204
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from dritu.core.query import ListQuery
from dritu.server.entities import ENTITIES, EntityConfig
from dritu.server.repository import Repository, repository_dependency


def build_crud_router(entity: EntityConfig, router: Optional[APIRouter] = None) -> APIRouter:
    router = router or APIRouter(prefix=entity.prefix, tags=[entity.key])
    get_repo = repository_dependency(entity.model, entity.search_fields)
    Model = entity.model
    Payload = entity.payload

    @router.get("", response_model=List[Model], summary=f"List {entity.key}")
    @router.get("/", include_in_schema=False)
    def list_items(
        q: Optional[str] = None,
        sort: Optional[str] = None,
        desc: bool = False,
        skip: int = Query(0, ge=0),
        limit: int = Query(50, ge=1, le=500),
        repo: Repository = Depends(get_repo),
    ):
        return repo.list(ListQuery(search=q, sort=sort, desc=desc, skip=skip, limit=limit))

    @router.get("/{item_id}", response_model=Model)
    def get_item(item_id: int, repo: Repository = Depends(get_repo)):
        return repo.get(item_id)

    @router.post("", response_model=Model, status_code=status.HTTP_201_CREATED)
    def create_item(payload: Payload, repo: Repository = Depends(get_repo)):
        return repo.create(entity.prepare_data(payload.model_dump()))

    @router.put("/{item_id}", response_model=Model)
    def update_item(item_id: int, payload: Payload, repo: Repository = Depends(get_repo)):
        return repo.update(item_id, entity.prepare_data(payload.model_dump()))

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_item(item_id: int, repo: Repository = Depends(get_repo)):
        repo.delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def build_entity_routers() -> List[APIRouter]:
    return [build_crud_router(e) for e in ENTITIES]
