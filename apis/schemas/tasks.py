from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from models.boards import TaskStatus
from .common import id_field, normalize_assignee_id, ID_MAX_LENGTH, ID_PATTERN, TITLE_MAX_LENGTH
from .assignees import AssigneeResponse


def assignee_field(description: str):
    return Field(default=None, max_length=ID_MAX_LENGTH, pattern=ID_PATTERN, description=description)


class CreateTaskRequest(BaseModel):
    """Schema for creating a new task."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    assignee_id: Optional[str] = assignee_field("Assignee ID (optional)")
    column_id: str = id_field("Column where the task is placed")

    model_config = {"str_strip_whitespace": True}

    @field_validator("assignee_id", mode="before")
    @classmethod
    def unassigned_to_none(cls, value):
        return normalize_assignee_id(value)


class UpdateTaskRequest(BaseModel):
    """Schema for updating a task. Changing column_id relocates the task."""
    task_id: str = id_field("Task ID")
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    assignee_id: Optional[str] = assignee_field("Assignee ID (optional)")
    column_id: str = id_field("Column where the task is placed")

    model_config = {"str_strip_whitespace": True}

    @field_validator("assignee_id", mode="before")
    @classmethod
    def unassigned_to_none(cls, value):
        return normalize_assignee_id(value)


class UpdateTaskAssigneeRequest(BaseModel):
    """Schema for assigning or unassigning a task."""
    task_id: str = id_field("Task ID")
    assignee_id: Optional[str] = assignee_field("Assignee ID, or null to unassign")

    @field_validator("assignee_id", mode="before")
    @classmethod
    def unassigned_to_none(cls, value):
        return normalize_assignee_id(value)


class TaskIdRequest(BaseModel):
    """Schema for deleting a task."""
    task_id: str = id_field("Task ID")


class MoveTaskRequest(BaseModel):
    """Schema for drag-and-drop moves."""
    task_id: str = id_field("Task ID")
    target_column_id: str = id_field("Destination column ID")
    target_index: int = Field(..., ge=0, description="Destination position within the column")


class TaskResponse(BaseModel):
    """Schema for task responses."""
    id: str = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(default=None, description="Task description")
    status: TaskStatus = Field(..., description="Status derived from the column title")
    column_id: str = Field(..., description="Column ID")
    assignee_id: Optional[str] = Field(default=None, description="Assignee ID")
    order_index: int = Field(..., description="Position within the column")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}


class TaskColumnSummary(BaseModel):
    """Column fields embedded in board task rows."""
    id: str = Field(..., description="Column ID")
    title: str = Field(..., description="Column title")
    order_index: int = Field(..., description="Position of the column on the board")

    model_config = {"from_attributes": True}


class TaskWithRelationsResponse(TaskResponse):
    """Task joined with its assignee and column, as rendered on the board."""
    assignee: Optional[AssigneeResponse] = Field(default=None, description="Assigned person")
    column: Optional[TaskColumnSummary] = Field(default=None, description="Owning column")
