"""
Ordering engine: assigns and rebalances `order_index` values.

Create appends at the end of the target column. A move inside one column
either swaps with the task at the target index ("swap") or reinserts the task
and shifts everything in between by one ("shift"). A move across columns opens
a slot in the target column with one set-based update, then relocates the
task and re-derives its status. Every multi-step move runs in one store
transaction.
"""

from typing import Any, Dict, Optional, Tuple

import settings
from settings import logger
from models.boards import BoardColumn, Task
from .errors import NotFoundError, ValidationError
from .status import status_of
from .store import EntityStore


SWAP = "swap"
SHIFT = "shift"
REORDER_POLICIES = (SWAP, SHIFT)


class OrderingEngine:
    """Computes order_index/status assignments and persists them through the store."""

    def __init__(self, store: EntityStore, policy: Optional[str] = None):
        self.store = store
        self.policy = (policy or settings.REORDER_POLICY).lower()
        if self.policy not in REORDER_POLICIES:
            raise ValueError(f"Unknown reorder policy: {self.policy}")

    def next_task_index(self, column_id: str) -> int:
        current_max = self.store.max_task_order_index(column_id)
        return 0 if current_max is None else current_max + 1

    def next_column_index(self) -> int:
        current_max = self.store.max_column_order_index()
        return 0 if current_max is None else current_max + 1

    def create_column(self, data: Dict[str, Any]) -> BoardColumn:
        return self.store.insert_column({**data, "order_index": self.next_column_index()})

    def create_task(self, column: BoardColumn, data: Dict[str, Any]) -> Task:
        """Insert a task at the end of `column` with the column's status."""
        return self.store.insert_task({
            **data,
            "column_id": column.id,
            "order_index": self.next_task_index(column.id),
            "status": status_of(column.title),
        })

    def relocate_task(self, task: Task, column: BoardColumn, data: Dict[str, Any]) -> Task:
        """Update a task while moving it to the end of another column."""
        return self.store.update_task(task.id, {
            **data,
            "column_id": column.id,
            "order_index": self.next_task_index(column.id),
            "status": status_of(column.title),
        })

    def move_task(self, task_id: str, target_column_id: str, target_index: int) -> Tuple[Task, bool]:
        """
        Move a task to `target_index` of `target_column_id`.

        Returns the task and whether anything changed. Lookups happen before
        any write, so a missing task or column leaves the board untouched.
        """
        if target_index < 0:
            raise ValidationError(
                "Invalid target position",
                details=[{"field": "target_index", "message": "Must be greater than or equal to 0"}]
            )

        task = self.store.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        target_column = self.store.get_column(target_column_id)
        if not target_column:
            raise NotFoundError("Column not found")

        if task.column_id == target_column.id and task.order_index == target_index:
            logger.debug("Move skipped, task already in place", extra={
                "task_id": task.id,
                "column_id": target_column.id,
                "order_index": target_index
            })
            return task, False

        with self.store.transaction():
            if task.column_id == target_column.id:
                if self.policy == SHIFT:
                    moved = self._shift_within_column(task, target_index)
                else:
                    moved = self._swap_within_column(task, target_index)
            else:
                moved = self._move_across_columns(task, target_column, target_index)

        return moved, True

    def _swap_within_column(self, task: Task, target_index: int) -> Task:
        old_index = task.order_index
        occupant = self.store.task_at(task.column_id, target_index)

        if occupant and occupant.id != task.id:
            self.store.update_task(occupant.id, {"order_index": old_index})

        logger.info("Swapping task within column", extra={
            "task_id": task.id,
            "column_id": task.column_id,
            "from_index": old_index,
            "to_index": target_index,
            "swapped_with": occupant.id if occupant else None
        })
        return self.store.update_task(task.id, {"order_index": target_index})

    def _shift_within_column(self, task: Task, target_index: int) -> Task:
        old_index = task.order_index

        if target_index > old_index:
            shifted = self.store.shift_tasks(
                task.column_id, start=old_index + 1, end=target_index, delta=-1, exclude_task_id=task.id
            )
        else:
            shifted = self.store.shift_tasks(
                task.column_id, start=target_index, end=old_index - 1, delta=1, exclude_task_id=task.id
            )

        logger.info("Reinserting task within column", extra={
            "task_id": task.id,
            "column_id": task.column_id,
            "from_index": old_index,
            "to_index": target_index,
            "shifted_tasks": shifted
        })
        return self.store.update_task(task.id, {"order_index": target_index})

    def _move_across_columns(self, task: Task, target_column: BoardColumn, target_index: int) -> Task:
        source_column_id = task.column_id
        shifted = self.store.shift_tasks(target_column.id, start=target_index, delta=1)

        logger.info("Moving task across columns", extra={
            "task_id": task.id,
            "from_column_id": source_column_id,
            "to_column_id": target_column.id,
            "to_index": target_index,
            "shifted_tasks": shifted
        })
        return self.store.update_task(task.id, {
            "column_id": target_column.id,
            "order_index": target_index,
            "status": status_of(target_column.title),
        })
