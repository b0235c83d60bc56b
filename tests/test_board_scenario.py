"""
Feature: End-to-end board flow
  As a board user
  I want create and move to work together
  So that a task can travel across the board

Scenario: Create then move to an empty column
  Given "To Do" (order 0) holds A(0) and B(1)
  And "In Progress" (order 1) is empty
  When task C is created in "To Do"
  Then C gets order index 2
  When C is moved to "In Progress" at index 0
  Then C is in "In Progress" at index 0 with status "in-progress"
  And A and B are unchanged at 0 and 1 in "To Do"
"""

import pytest
from unittest.mock import patch, AsyncMock
from sqlmodel import create_engine, Session, SQLModel
from models.boards import Task, TaskStatus
from board import actions


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.mark.asyncio
async def test_create_then_move_to_empty_column(session):
    with patch("board.actions.notify_board_changed", new_callable=AsyncMock) as notify:
        # Given "To Do" holds A and B, and "In Progress" is empty
        todo = (await actions.create_column({"title": "To Do"}, db_session=session)).data
        in_progress = (await actions.create_column({"title": "In Progress"}, db_session=session)).data
        assert (todo.order_index, in_progress.order_index) == (0, 1)

        a = (await actions.create_task({"title": "A", "column_id": todo.id}, db_session=session)).data
        b = (await actions.create_task({"title": "B", "column_id": todo.id}, db_session=session)).data

        # When task C is created in "To Do"
        c = (await actions.create_task({"title": "C", "column_id": todo.id}, db_session=session)).data

        # Then C gets order index 2
        assert c.order_index == 2

        # When C is moved to "In Progress" at index 0
        moved = await actions.move_task(
            {"task_id": c.id, "target_column_id": in_progress.id, "target_index": 0},
            db_session=session
        )

        # Then C is in "In Progress" at index 0 with status "in-progress"
        assert moved.success is True
        assert moved.data.column_id == in_progress.id
        assert moved.data.order_index == 0
        assert moved.data.status == TaskStatus.IN_PROGRESS
        assert moved.to_payload()["data"]["status"] == "in-progress"

        # And A and B are unchanged
        session.expire_all()
        assert (session.get(Task, a.id).column_id, session.get(Task, a.id).order_index) == (todo.id, 0)
        assert (session.get(Task, b.id).column_id, session.get(Task, b.id).order_index) == (todo.id, 1)

        # Every write asked clients to refresh
        assert notify.await_count == 6
