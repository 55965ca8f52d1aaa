# dritu/server/entities.py
"""
Registry of the plain CRUD entities.

Every dashboard screen except the quotation builder is the same table:
list + search + add/view/edit/delete. The registry holds what differs
between them; routers, seeding, export and local-storage import read it.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type

from sqlmodel import SQLModel

from dritu.server.models import (
    Client, ClientBase,
    Company, CompanyBase,
    Emd, EmdBase,
    Employee, EmployeeBase,
    Product, ProductBase,
    Sale, SaleBase,
    Service, ServiceBase,
    ServiceEngineer, ServiceEngineerBase,
    Tender, TenderBase,
    User, UserBase,
)
from dritu.services.pricing import apply_product_gst

STORAGE_KEY_PREFIX = "dritu-enterprise-"


@dataclass(frozen=True)
class EntityConfig:
    key: str                                   # plural name, also the URL segment
    model: Type[SQLModel]
    payload: Type[SQLModel]
    search_fields: Tuple[str, ...] = ()
    prepare: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    @property
    def prefix(self) -> str:
        return "/" + self.key.replace("_", "-")

    @property
    def storage_key(self) -> str:
        return STORAGE_KEY_PREFIX + self.key.replace("_", "-")

    def prepare_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.prepare(data) if self.prepare else dict(data)


ENTITIES: Tuple[EntityConfig, ...] = (
    EntityConfig("products", Product, ProductBase, ("name", "make", "model", "hsn_code"), apply_product_gst),
    EntityConfig("companies", Company, CompanyBase, ("name", "contact_person", "email", "gst_number")),
    EntityConfig("clients", Client, ClientBase, ("name", "institution", "department", "email")),
    EntityConfig("employees", Employee, EmployeeBase, ("name", "email", "department")),
    EntityConfig("sales", Sale, SaleBase, ("name", "stage")),
    EntityConfig("service_engineers", ServiceEngineer, ServiceEngineerBase, ("name", "email", "designation")),
    EntityConfig("users", User, UserBase, ("name", "email", "location")),
    EntityConfig("services", Service, ServiceBase, ("name", "short_name", "category")),
    EntityConfig("tenders", Tender, TenderBase, ("reference", "title", "client")),
    EntityConfig("emds", Emd, EmdBase, ("tender_reference", "tender_title", "client")),
)

ENTITIES_BY_KEY: Dict[str, EntityConfig] = {e.key: e for e in ENTITIES}
