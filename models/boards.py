from sqlmodel import SQLModel, Field
from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from .helper import id_generator


class TaskStatus(str, Enum):
    """Status label derived from the title of a task's column."""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class BoardColumn(SQLModel, table=True):
    """Ordered bucket of tasks, displayed left-to-right by order_index."""
    __tablename__ = "columns"

    id: str = Field(default_factory=id_generator('column', 10), primary_key=True)
    title: str = Field(max_length=255)
    order_index: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Task(SQLModel, table=True):
    """Unit of work belonging to one column, optionally assigned to one person."""
    __tablename__ = "tasks"

    id: str = Field(default_factory=id_generator('task', 10), primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.TODO)
    column_id: str = Field(foreign_key="columns.id", ondelete="CASCADE", index=True)
    assignee_id: Optional[str] = Field(
        default=None, foreign_key="assignees.id", ondelete="SET NULL", nullable=True, index=True
    )
    order_index: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
