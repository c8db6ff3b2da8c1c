"""Business (tenant) entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Business(BaseModel):
    """A catering business; every other record is scoped to one."""

    id: int | None = None
    name: str
    tagline: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
