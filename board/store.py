"""
Entity store: CRUD for columns, tasks and assignees on one SQLModel session.

Each write commits on its own unless it runs inside `transaction()`, in which
case the whole block commits once (or rolls back on error). Database failures
are logged and re-raised as PersistenceError.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple

from sqlalchemy import delete, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from models.assignees import Assignee
from models.boards import BoardColumn, Task
from settings import logger
from .errors import NotFoundError, PersistenceError


TaskRow = Tuple[Task, Optional[Assignee], BoardColumn]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class EntityStore:
    """Persistence for the board entities."""

    def __init__(self, db_session: Session):
        self.db_session = db_session
        self._transaction_depth = 0

    # ── Transactions ─────────────────────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """Group several writes into a single commit."""
        self._transaction_depth += 1
        try:
            yield self
        except Exception:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self.db_session.rollback()
                logger.warning("Transaction rolled back")
            raise
        else:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self._commit()

    @property
    def in_transaction(self) -> bool:
        return self._transaction_depth > 0

    def _commit(self) -> None:
        try:
            if self.in_transaction:
                self.db_session.flush()
            else:
                self.db_session.commit()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error("Database write failed", extra={"error": str(e)})
            raise PersistenceError("Database operation failed") from e

    def _execute(self, statement) -> int:
        """Run a set-based UPDATE/DELETE and return the affected row count."""
        try:
            result = self.db_session.exec(statement)
        except SQLAlchemyError as e:
            self.db_session.rollback()
            logger.error("Database statement failed", extra={"error": str(e)})
            raise PersistenceError("Database operation failed") from e
        return result.rowcount or 0

    def _save(self, instance):
        self.db_session.add(instance)
        self._commit()
        self.db_session.refresh(instance)
        return instance

    # ── Columns ──────────────────────────────────────────────────────────────

    def list_columns(self) -> List[BoardColumn]:
        statement = select(BoardColumn).order_by(BoardColumn.order_index, BoardColumn.created_at)
        return list(self.db_session.exec(statement).all())

    def get_column(self, column_id: str) -> Optional[BoardColumn]:
        return self.db_session.get(BoardColumn, column_id)

    def max_column_order_index(self) -> Optional[int]:
        statement = select(func.max(BoardColumn.order_index))
        return self.db_session.exec(statement).one()

    def insert_column(self, data: Dict[str, Any]) -> BoardColumn:
        return self._save(BoardColumn(**data))

    def update_column(self, column_id: str, data: Dict[str, Any]) -> BoardColumn:
        column = self.get_column(column_id)
        if not column:
            raise NotFoundError("Column not found")

        for field, value in data.items():
            setattr(column, field, value)
        column.updated_at = _now()
        return self._save(column)

    def delete_column(self, column_id: str) -> int:
        """Delete a column and its tasks. Returns the number of tasks removed."""
        column = self.get_column(column_id)
        if not column:
            raise NotFoundError("Column not found")

        deleted_tasks = self._execute(delete(Task).where(Task.column_id == column_id))
        self.db_session.delete(column)
        self._commit()
        return deleted_tasks

    # ── Tasks ────────────────────────────────────────────────────────────────

    def _task_rows_statement(self):
        return (
            select(Task, Assignee, BoardColumn)
            .join(BoardColumn, Task.column_id == BoardColumn.id)
            .outerjoin(Assignee, Task.assignee_id == Assignee.id)
        )

    def list_tasks(self) -> List[TaskRow]:
        """All tasks with their assignee and column, in board order."""
        statement = self._task_rows_statement().order_by(
            BoardColumn.order_index, Task.order_index, Task.created_at
        )
        return list(self.db_session.exec(statement).all())

    def list_tasks_in_column(self, column_id: str) -> List[TaskRow]:
        statement = (
            self._task_rows_statement()
            .where(Task.column_id == column_id)
            .order_by(Task.order_index, Task.created_at)
        )
        return list(self.db_session.exec(statement).all())

    def get_task(self, task_id: str) -> Optional[Task]:
        return self.db_session.get(Task, task_id)

    def task_at(self, column_id: str, order_index: int) -> Optional[Task]:
        """First task found at `order_index` in a column, if any."""
        statement = (
            select(Task)
            .where(Task.column_id == column_id, Task.order_index == order_index)
            .order_by(Task.created_at)
        )
        return self.db_session.exec(statement).first()

    def max_task_order_index(self, column_id: str) -> Optional[int]:
        statement = select(func.max(Task.order_index)).where(Task.column_id == column_id)
        return self.db_session.exec(statement).one()

    def insert_task(self, data: Dict[str, Any]) -> Task:
        return self._save(Task(**data))

    def update_task(self, task_id: str, data: Dict[str, Any]) -> Task:
        task = self.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        for field, value in data.items():
            setattr(task, field, value)
        task.updated_at = _now()
        return self._save(task)

    def delete_task(self, task_id: str) -> None:
        task = self.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        self.db_session.delete(task)
        self._commit()

    def shift_tasks(
        self,
        column_id: str,
        start: int,
        delta: int,
        end: Optional[int] = None,
        exclude_task_id: Optional[str] = None
    ) -> int:
        """Add `delta` to order_index of tasks in [start, end] of one column."""
        statement = update(Task).where(Task.column_id == column_id, Task.order_index >= start)
        if end is not None:
            statement = statement.where(Task.order_index <= end)
        if exclude_task_id is not None:
            statement = statement.where(Task.id != exclude_task_id)
        statement = statement.values(order_index=Task.order_index + delta, updated_at=_now())

        shifted = self._execute(statement)
        self._commit()
        return shifted

    # ── Assignees ────────────────────────────────────────────────────────────

    def list_assignees(self) -> List[Assignee]:
        statement = select(Assignee).order_by(Assignee.name)
        return list(self.db_session.exec(statement).all())

    def get_assignee(self, assignee_id: str) -> Optional[Assignee]:
        return self.db_session.get(Assignee, assignee_id)

    def get_assignee_by_email(self, email: str) -> Optional[Assignee]:
        statement = select(Assignee).where(Assignee.email == email)
        return self.db_session.exec(statement).first()

    def insert_assignee(self, data: Dict[str, Any]) -> Assignee:
        return self._save(Assignee(**data))

    def update_assignee(self, assignee_id: str, data: Dict[str, Any]) -> Assignee:
        assignee = self.get_assignee(assignee_id)
        if not assignee:
            raise NotFoundError("Assignee not found")

        for field, value in data.items():
            setattr(assignee, field, value)
        assignee.updated_at = _now()
        return self._save(assignee)

    def delete_assignee(self, assignee_id: str) -> int:
        """Delete an assignee, unassigning its tasks. Returns tasks unassigned."""
        assignee = self.get_assignee(assignee_id)
        if not assignee:
            raise NotFoundError("Assignee not found")

        unassigned = self._execute(
            update(Task)
            .where(Task.assignee_id == assignee_id)
            .values(assignee_id=None, updated_at=_now())
        )
        self.db_session.delete(assignee)
        self._commit()
        return unassigned
