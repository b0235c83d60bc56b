from pydantic import BaseModel, Field
from datetime import datetime
from .common import id_field, TITLE_MAX_LENGTH


class CreateColumnRequest(BaseModel):
    """Schema for creating a new column."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Column title")

    model_config = {"str_strip_whitespace": True}


class UpdateColumnRequest(BaseModel):
    """Schema for renaming a column."""
    column_id: str = id_field("Column ID")
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="New column title")

    model_config = {"str_strip_whitespace": True}


class ColumnIdRequest(BaseModel):
    """Schema for operations addressed to one column (delete, list tasks)."""
    column_id: str = id_field("Column ID")


class ColumnResponse(BaseModel):
    """Schema for column responses."""
    id: str = Field(..., description="Column ID")
    title: str = Field(..., description="Column title")
    order_index: int = Field(..., description="Position of the column on the board")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {"from_attributes": True}
