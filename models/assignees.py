from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
from .helper import id_generator


class Assignee(SQLModel, table=True):
    """Person who may be linked to zero or more tasks."""
    __tablename__ = "assignees"

    id: str = Field(default_factory=id_generator('assignee', 10), primary_key=True)
    name: str = Field(max_length=255, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    avatar: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
