from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


# Ids are generated as `<prefix>_<alphanumeric>`; anything outside this shape is rejected early.
ID_PATTERN = r"^[A-Za-z0-9_-]+$"
ID_MAX_LENGTH = 64
TITLE_MAX_LENGTH = 255

# Form layers send these when the "Unassigned" option is picked.
UNASSIGNED_VALUES = ("", "unassigned")


def normalize_assignee_id(value: Any) -> Any:
    """Map the "no assignee" sentinels to None."""
    if isinstance(value, str) and value.strip() in UNASSIGNED_VALUES:
        return None
    return value


def id_field(description: str):
    return Field(..., min_length=1, max_length=ID_MAX_LENGTH, pattern=ID_PATTERN, description=description)


class ActionResult(BaseModel):
    """Uniform result returned by every board action."""
    success: bool = Field(..., description="Whether the action succeeded")
    data: Optional[Any] = Field(default=None, description="Action payload on success")
    error: Optional[str] = Field(default=None, description="Human-readable error message")
    error_type: Optional[str] = Field(default=None, description="validation | reference | not_found | persistence")
    details: Optional[List[Dict[str, Any]]] = Field(default=None, description="Field-level validation messages")

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_type: str, details: Optional[List[Dict[str, Any]]] = None) -> "ActionResult":
        return cls(success=False, error=error, error_type=error_type, details=details)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict: `{success, data}` or `{success, error, error_type, details?}`."""
        payload = self.model_dump(mode="json")
        if self.success:
            return {"success": True, "data": payload["data"]}

        payload.pop("data")
        if self.details is None:
            payload.pop("details")
        return payload
