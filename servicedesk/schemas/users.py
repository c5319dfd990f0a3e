import datetime as dt

from pydantic import Field

from servicedesk.core.security import Role
from servicedesk.schemas._base import WireModel


class User(WireModel):
    id: int
    user_name: str
    first_name: str | None = None
    last_name: str | None = None
    email: str
    contact_one: str | None = None
    contact_two: str | None = None
    address: str | None = None
    role: Role
    enabled: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class UserCreate(WireModel):
    user_name: str
    email: str
    contact_one: str
    password: str = Field(min_length=1)
    role: Role = Role.customer


class UserUpdate(WireModel):
    user_name: str
    contact_one: str
    contact_two: str | None = None
    address: str | None = None


class UserFilters(WireModel):
    search: str | None = None
    role: Role | None = None
    status: str | None = None  # active|inactive


class UserStats(WireModel):
    total_users: int = 0
    active_users: int = 0
    admins: int = 0
    employees: int = 0
    customers: int = 0
