# dritu/server/models/people.py
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class ActiveStatus(str, Enum):
    active = "Active"
    inactive = "Inactive"


class UserGroup(str, Enum):
    design = "Design"
    marketing = "Marketing"
    development = "Development"


class ServiceEngineerBase(SQLModel):
    name: str
    email: str = ""
    phone: str = ""
    designation: str = ""
    status: ActiveStatus = ActiveStatus.active


class ServiceEngineer(ServiceEngineerBase, table=True):
    __tablename__ = "service_engineer"
    id: Optional[int] = Field(default=None, primary_key=True)


class UserBase(SQLModel):
    name: str
    email: str = ""
    phone: str = ""
    location: str = ""
    group: UserGroup = UserGroup.development
    status: ActiveStatus = ActiveStatus.active
    avatar: Optional[str] = None


class User(UserBase, table=True):
    __tablename__ = "app_user"
    id: Optional[int] = Field(default=None, primary_key=True)
