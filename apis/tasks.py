from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session
from typing import Any, Dict
from database import get_session
from board import actions
from .responses import action_response

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """List all tasks with assignee and column, in board order."""
    result = await actions.list_tasks(db_session=db_session)
    return action_response(result)


@router.post("")
async def create_task(
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Create a task at the end of its column."""
    result = await actions.create_task(payload, db_session=db_session)
    return action_response(result, success_status=status.HTTP_201_CREATED)


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Update task title, description, assignee or column."""
    result = await actions.update_task({**payload, "task_id": task_id}, db_session=db_session)
    return action_response(result)


@router.put("/{task_id}/assignee")
async def update_task_assignee(
    task_id: str,
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Assign a task, or unassign it with a null assignee_id."""
    result = await actions.update_task_assignee({**payload, "task_id": task_id}, db_session=db_session)
    return action_response(result)


@router.post("/{task_id}/move")
async def move_task(
    task_id: str,
    payload: Dict[str, Any] = Body(default={}),
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Move a task to a position in the same or another column."""
    result = await actions.move_task({**payload, "task_id": task_id}, db_session=db_session)
    return action_response(result)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    db_session: Session = Depends(get_session)
) -> JSONResponse:
    """Delete a task."""
    result = await actions.delete_task({"task_id": task_id}, db_session=db_session)
    return action_response(result)
