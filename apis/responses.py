from fastapi import status
from fastapi.responses import JSONResponse
from apis.schemas.common import ActionResult


STATUS_BY_ERROR_TYPE = {
    "validation": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "reference": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "persistence": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def action_response(result: ActionResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Render an ActionResult with a status code matching its outcome."""
    if result.success:
        status_code = success_status
    else:
        status_code = STATUS_BY_ERROR_TYPE.get(result.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content=result.to_payload())
