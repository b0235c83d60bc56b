"""
Board actions: the operations a UI layer calls.

Every action validates its raw input, resolves references, delegates to the
ordering engine and entity store, asks connected clients to refresh, and
returns an ActionResult. Failures never escape as exceptions.
"""

from functools import wraps
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from apis.schemas.assignees import (
    AssigneeIdRequest, AssigneeResponse, CreateAssigneeRequest, UpdateAssigneeRequest
)
from apis.schemas.columns import ColumnIdRequest, ColumnResponse, CreateColumnRequest, UpdateColumnRequest
from apis.schemas.common import ActionResult
from apis.schemas.tasks import (
    CreateTaskRequest, MoveTaskRequest, TaskColumnSummary, TaskIdRequest, TaskResponse,
    TaskWithRelationsResponse, UpdateTaskAssigneeRequest, UpdateTaskRequest
)
from settings import logger
from ws_service.manager import notify_board_changed
from .errors import BoardError, InvalidReferenceError, NotFoundError, PersistenceError, ValidationError
from .ordering import OrderingEngine
from .status import status_of
from .store import EntityStore, TaskRow


SchemaT = TypeVar("SchemaT", bound=BaseModel)

GENERIC_FAILURE = "Something went wrong, please try again"


def board_action(func):
    """Wrap an action so its outcome is always an ActionResult."""
    @wraps(func)
    async def wrapper(*args, **kwargs) -> ActionResult:
        try:
            data = await func(*args, **kwargs)
        except PersistenceError as e:
            logger.error("Board action failed in the store", extra={
                "action": func.__name__,
                "error": e.message
            })
            return ActionResult.fail(GENERIC_FAILURE, e.error_type)
        except BoardError as e:
            logger.warning("Board action rejected", extra={
                "action": func.__name__,
                "error_type": e.error_type,
                "error": e.message
            })
            return ActionResult.fail(e.message, e.error_type, e.details)
        except Exception as e:
            logger.error("Unexpected error in board action", extra={
                "action": func.__name__,
                "error": str(e)
            })
            return ActionResult.fail(GENERIC_FAILURE, PersistenceError.error_type)
        return ActionResult.ok(data)
    return wrapper


def _validate(schema: Type[SchemaT], data: Any) -> SchemaT:
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def _require_column(store: EntityStore, column_id: str):
    column = store.get_column(column_id)
    if not column:
        raise InvalidReferenceError("Invalid column selected")
    return column


def _require_assignee(store: EntityStore, assignee_id: Optional[str]) -> None:
    if assignee_id is not None and not store.get_assignee(assignee_id):
        raise InvalidReferenceError("Invalid assignee selected")


def _require_task(store: EntityStore, task_id: str):
    task = store.get_task(task_id)
    if not task:
        raise NotFoundError("Task not found")
    return task


def _task_row_response(row: TaskRow) -> TaskWithRelationsResponse:
    task, assignee, column = row
    return TaskWithRelationsResponse(
        **TaskResponse.model_validate(task).model_dump(),
        assignee=AssigneeResponse.model_validate(assignee) if assignee else None,
        column=TaskColumnSummary.model_validate(column) if column else None
    )


# ── Reads ────────────────────────────────────────────────────────────────────

@board_action
async def list_columns(db_session: Session):
    """Columns in board order."""
    store = EntityStore(db_session)
    return [ColumnResponse.model_validate(column) for column in store.list_columns()]


@board_action
async def list_tasks(db_session: Session):
    """Every task with assignee and column, by (column order, task order)."""
    store = EntityStore(db_session)
    return [_task_row_response(row) for row in store.list_tasks()]


@board_action
async def list_tasks_in_column(data: Dict[str, Any], db_session: Session):
    request = _validate(ColumnIdRequest, data)
    store = EntityStore(db_session)

    if not store.get_column(request.column_id):
        raise NotFoundError("Column not found")

    return [_task_row_response(row) for row in store.list_tasks_in_column(request.column_id)]


@board_action
async def list_assignees(db_session: Session):
    store = EntityStore(db_session)
    return [AssigneeResponse.model_validate(assignee) for assignee in store.list_assignees()]


# ── Tasks ────────────────────────────────────────────────────────────────────

@board_action
async def create_task(data: Dict[str, Any], db_session: Session):
    """Create a task at the end of its column."""
    request = _validate(CreateTaskRequest, data)
    store = EntityStore(db_session)

    column = _require_column(store, request.column_id)
    _require_assignee(store, request.assignee_id)

    task = OrderingEngine(store).create_task(column, {
        "title": request.title,
        "description": request.description,
        "assignee_id": request.assignee_id,
    })

    logger.info("Task created", extra={
        "task_id": task.id,
        "column_id": column.id,
        "order_index": task.order_index
    })
    await notify_board_changed("task_created", task_id=task.id, column_id=column.id)
    return TaskResponse.model_validate(task)


@board_action
async def update_task(data: Dict[str, Any], db_session: Session):
    """Update a task; a new column_id relocates it to the end of that column."""
    request = _validate(UpdateTaskRequest, data)
    store = EntityStore(db_session)

    task = _require_task(store, request.task_id)
    column = _require_column(store, request.column_id)
    _require_assignee(store, request.assignee_id)

    fields = {
        "title": request.title,
        "description": request.description,
        "assignee_id": request.assignee_id,
    }

    if column.id != task.column_id:
        task = OrderingEngine(store).relocate_task(task, column, fields)
    else:
        task = store.update_task(task.id, {**fields, "status": status_of(column.title)})

    logger.info("Task updated", extra={"task_id": task.id, "column_id": task.column_id})
    await notify_board_changed("task_updated", task_id=task.id, column_id=task.column_id)
    return TaskResponse.model_validate(task)


@board_action
async def update_task_assignee(data: Dict[str, Any], db_session: Session):
    request = _validate(UpdateTaskAssigneeRequest, data)
    store = EntityStore(db_session)

    _require_task(store, request.task_id)
    _require_assignee(store, request.assignee_id)

    task = store.update_task(request.task_id, {"assignee_id": request.assignee_id})

    logger.info("Task assignee updated", extra={"task_id": task.id, "assignee_id": task.assignee_id})
    await notify_board_changed("task_assignee_updated", task_id=task.id, assignee_id=task.assignee_id)
    return TaskResponse.model_validate(task)


@board_action
async def delete_task(data: Dict[str, Any], db_session: Session):
    request = _validate(TaskIdRequest, data)
    store = EntityStore(db_session)

    store.delete_task(request.task_id)

    logger.info("Task deleted", extra={"task_id": request.task_id})
    await notify_board_changed("task_deleted", task_id=request.task_id)
    return {"task_id": request.task_id}


@board_action
async def move_task(data: Dict[str, Any], db_session: Session):
    """Drag-and-drop move. Moving a task onto its own position is a no-op."""
    request = _validate(MoveTaskRequest, data)
    store = EntityStore(db_session)

    task, changed = OrderingEngine(store).move_task(
        request.task_id, request.target_column_id, request.target_index
    )

    if changed:
        await notify_board_changed(
            "task_moved",
            task_id=task.id,
            column_id=task.column_id,
            order_index=task.order_index
        )
    return TaskResponse.model_validate(task)


# ── Columns ──────────────────────────────────────────────────────────────────

@board_action
async def create_column(data: Dict[str, Any], db_session: Session):
    """Create a column at the right end of the board."""
    request = _validate(CreateColumnRequest, data)
    store = EntityStore(db_session)

    column = OrderingEngine(store).create_column({"title": request.title})

    logger.info("Column created", extra={"column_id": column.id, "order_index": column.order_index})
    await notify_board_changed("column_created", column_id=column.id)
    return ColumnResponse.model_validate(column)


@board_action
async def update_column(data: Dict[str, Any], db_session: Session):
    """Rename a column. Existing tasks keep their status until they move."""
    request = _validate(UpdateColumnRequest, data)
    store = EntityStore(db_session)

    column = store.update_column(request.column_id, {"title": request.title})

    logger.info("Column updated", extra={"column_id": column.id, "title": column.title})
    await notify_board_changed("column_updated", column_id=column.id)
    return ColumnResponse.model_validate(column)


@board_action
async def delete_column(data: Dict[str, Any], db_session: Session):
    """Delete a column together with all of its tasks."""
    request = _validate(ColumnIdRequest, data)
    store = EntityStore(db_session)

    deleted_tasks = store.delete_column(request.column_id)

    logger.info("Column deleted", extra={"column_id": request.column_id, "deleted_tasks": deleted_tasks})
    await notify_board_changed("column_deleted", column_id=request.column_id)
    return {"column_id": request.column_id, "deleted_tasks": deleted_tasks}


# ── Assignees ────────────────────────────────────────────────────────────────

def _require_unique_email(store: EntityStore, email: str, assignee_id: Optional[str] = None) -> None:
    existing = store.get_assignee_by_email(email)
    if existing and existing.id != assignee_id:
        raise ValidationError(
            "Invalid input",
            details=[{"field": "email", "message": "Email already in use"}]
        )


@board_action
async def create_assignee(data: Dict[str, Any], db_session: Session):
    request = _validate(CreateAssigneeRequest, data)
    store = EntityStore(db_session)

    _require_unique_email(store, request.email)
    assignee = store.insert_assignee(request.model_dump())

    logger.info("Assignee created", extra={"assignee_id": assignee.id})
    await notify_board_changed("assignee_created", assignee_id=assignee.id)
    return AssigneeResponse.model_validate(assignee)


@board_action
async def update_assignee(data: Dict[str, Any], db_session: Session):
    request = _validate(UpdateAssigneeRequest, data)
    store = EntityStore(db_session)

    if not store.get_assignee(request.assignee_id):
        raise NotFoundError("Assignee not found")
    if request.email is not None:
        _require_unique_email(store, request.email, request.assignee_id)

    # name/email are required columns, so an explicit null leaves them unchanged; avatar can be cleared
    changes = {
        field: value
        for field, value in request.model_dump(exclude_unset=True, exclude={"assignee_id"}).items()
        if value is not None or field == "avatar"
    }
    assignee = store.update_assignee(request.assignee_id, changes)

    logger.info("Assignee updated", extra={"assignee_id": assignee.id})
    await notify_board_changed("assignee_updated", assignee_id=assignee.id)
    return AssigneeResponse.model_validate(assignee)


@board_action
async def delete_assignee(data: Dict[str, Any], db_session: Session):
    """Delete an assignee; their tasks stay on the board unassigned."""
    request = _validate(AssigneeIdRequest, data)
    store = EntityStore(db_session)

    unassigned_tasks = store.delete_assignee(request.assignee_id)

    logger.info("Assignee deleted", extra={
        "assignee_id": request.assignee_id,
        "unassigned_tasks": unassigned_tasks
    })
    await notify_board_changed("assignee_deleted", assignee_id=request.assignee_id)
    return {"assignee_id": request.assignee_id, "unassigned_tasks": unassigned_tasks}
