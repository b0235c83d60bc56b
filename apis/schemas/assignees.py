from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .common import id_field


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CreateAssigneeRequest(BaseModel):
    """Schema for creating a new assignee."""
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Unique email address")
    avatar: Optional[str] = Field(default=None, description="Avatar image URL")

    model_config = {"str_strip_whitespace": True}


class UpdateAssigneeRequest(BaseModel):
    """Schema for updating an assignee. Omitted fields are left unchanged."""
    assignee_id: str = id_field("Assignee ID")
    name: Optional[str] = Field(default=None, min_length=1, max_length=255, description="New display name")
    email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN, description="New email address")
    avatar: Optional[str] = Field(default=None, description="New avatar image URL")

    model_config = {"str_strip_whitespace": True}


class AssigneeIdRequest(BaseModel):
    """Schema for deleting an assignee."""
    assignee_id: str = id_field("Assignee ID")


class AssigneeResponse(BaseModel):
    """Schema for assignee responses."""
    id: str = Field(..., description="Assignee ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    avatar: Optional[str] = Field(default=None, description="Avatar image URL")

    model_config = {"from_attributes": True}
