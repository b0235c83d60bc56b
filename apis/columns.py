from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session
from typing import Any, Dict
from database import get_session
from board import actions
from .responses import action_response

router = APIRouter(prefix="/columns", tags=["columns"])


@router.get("")
async def list_columns(
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """List columns in board order."""
    result = await actions.list_columns(db_session=db_session)
    return action_response(result)


@router.post("")
async def create_column(
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Create a column at the end of the board."""
    result = await actions.create_column(payload, db_session=db_session)
    return action_response(result, success_status=status.HTTP_201_CREATED)


@router.put("/{column_id}")
async def update_column(
    column_id: str,
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Rename a column."""
    result = await actions.update_column({**payload, "column_id": column_id}, db_session=db_session)
    return action_response(result)


@router.delete("/{column_id}")
async def delete_column(
    column_id: str,
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Delete a column and every task in it."""
    result = await actions.delete_column({"column_id": column_id}, db_session=db_session)
    return action_response(result)


@router.get("/{column_id}/tasks")
async def list_column_tasks(
    column_id: str,
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """List the tasks of one column in display order."""
    result = await actions.list_tasks_in_column({"column_id": column_id}, db_session=db_session)
    return action_response(result)
