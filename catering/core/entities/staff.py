"""Staff and role entities."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class Role(BaseModel):
    """A named set of permissions staff members can be assigned."""

    id: int | None = None
    business_id: int
    name: str
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class StaffMember(BaseModel):
    """
    A person working for the business.

    ``role_name`` and ``permissions`` are read from the assigned role and
    are never written back through the staff record.
    """

    id: int | None = None
    business_id: int
    name: str
    email: str | None = None
    phone: str | None = None
    role_id: int | None = None
    role_name: str | None = None
    permissions: list[str] = Field(default_factory=list)
    position: str | None = None
    hire_date: date | None = None
    is_active: bool = True
    deleted_at: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
