from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session
from typing import Any, Dict
from database import get_session
from board import actions
from .responses import action_response

router = APIRouter(prefix="/assignees", tags=["assignees"])


@router.get("")
async def list_assignees(
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """List assignees ordered by name."""
    result = await actions.list_assignees(db_session=db_session)
    return action_response(result)


@router.post("")
async def create_assignee(
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    result = await actions.create_assignee(payload, db_session=db_session)
    return action_response(result, success_status=status.HTTP_201_CREATED)


@router.put("/{assignee_id}")
async def update_assignee(
    assignee_id: str,
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    result = await actions.update_assignee({**payload, "assignee_id": assignee_id}, db_session=db_session)
    return action_response(result)


@router.delete("/{assignee_id}")
async def delete_assignee(
    assignee_id: str,
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Delete an assignee; their tasks become unassigned."""
    result = await actions.delete_assignee({"assignee_id": assignee_id}, db_session=db_session)
    return action_response(result)
