# dritu/server/models/client.py
from datetime import date
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class DrProfile(str, Enum):
    phd_holder = "PhD Holder"
    doctor = "Doctor"
    teacher = "Teacher"
    professor = "Professor"


class JobRole(str, Enum):
    decision_maker = "Decision Maker"
    user = "User"
    influencer = "Influencer"
    director = "Director"


class ClientBase(SQLModel):
    name: str
    institution: str = ""
    department: str = ""
    dr_profile: DrProfile = DrProfile.doctor
    job_role: JobRole = JobRole.user
    phone: str = ""
    email: str = ""
    message: str = ""
    created_at: date = Field(default_factory=date.today)


class Client(ClientBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
