"""Domain records for users, employees and roles."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar


class Gender(str, enum.Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"


class MaritalStatus(str, enum.Enum):
    SINGLE = "0"
    MARRIED = "1"
    DIVORCED = "2"


class ActiveStatus(str, enum.Enum):
    ACTIVE = "active"
    RESIGN = "resign"


def _columns(row: Any) -> dict[str, Any]:
    if isinstance(row, Mapping):
        return dict(row)
    return {key: row[key] for key in row.keys()}


def _timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) > 10:
        return _timestamp(text).date()
    return date.fromisoformat(text)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


@dataclass
class Role:
    """A named role such as super_admin, admin or employee."""

    table_name: ClassVar[str] = "roles"

    name: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Any) -> Role:
        cols = _columns(row)
        return cls(
            name=_text(cols.get("name")),
            id=_optional_int(cols.get("id")),
            created_at=_timestamp(cols.get("created_at")),
            updated_at=_timestamp(cols.get("updated_at")),
        )


@dataclass
class User:
    """An account able to sign in."""

    table_name: ClassVar[str] = "users"

    full_name: str
    email: str
    password: str
    id: int | None = None
    email_verified_at: datetime | None = None
    phone: str | None = None
    remember_token: str | None = None
    employee: Employee | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Any) -> User:
        cols = _columns(row)
        return cls(
            full_name=_text(cols.get("full_name")),
            email=_text(cols.get("email")),
            password=_text(cols.get("password")),
            id=_optional_int(cols.get("id")),
            email_verified_at=_timestamp(cols.get("email_verified_at")),
            phone=cols.get("phone"),
            remember_token=cols.get("remember_token"),
            created_at=_timestamp(cols.get("created_at")),
            updated_at=_timestamp(cols.get("updated_at")),
        )


@dataclass
class Employee:
    """Personnel record belonging to exactly one user."""

    table_name: ClassVar[str] = "employees"

    user_id: int
    employee_id: str
    first_name: str
    full_name: str
    role_id: int
    id: int | None = None
    user_uuid: str = ""
    email: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    place_of_birth: str = ""
    gender: Gender = Gender.UNKNOWN
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    address: str = ""
    postal_code: str = ""
    active_status: ActiveStatus = ActiveStatus.ACTIVE
    user: User | None = None
    role: Role | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Any) -> Employee:
        cols = _columns(row)
        gender = cols.get("gender")
        marital = cols.get("marital_status")
        status = cols.get("active_status")
        return cls(
            user_id=int(cols["user_id"]),
            employee_id=_text(cols.get("employee_id")),
            first_name=_text(cols.get("first_name")),
            full_name=_text(cols.get("full_name")),
            role_id=int(cols["role_id"]),
            id=_optional_int(cols.get("id")),
            user_uuid=_text(cols.get("user_uuid")),
            email=_text(cols.get("email")),
            last_name=_text(cols.get("last_name")),
            date_of_birth=_date(cols.get("date_of_birth")),
            place_of_birth=_text(cols.get("place_of_birth")),
            gender=Gender(gender) if gender else Gender.UNKNOWN,
            marital_status=MaritalStatus(marital) if marital else MaritalStatus.SINGLE,
            address=_text(cols.get("address")),
            postal_code=_text(cols.get("postal_code")),
            active_status=ActiveStatus(status) if status else ActiveStatus.ACTIVE,
            created_at=_timestamp(cols.get("created_at")),
            updated_at=_timestamp(cols.get("updated_at")),
        )