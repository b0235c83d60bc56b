"""
Feature: List tasks
  As a board user
  I want to see every task with its assignee and column
  So that the board renders in the right order

Scenario: Board order regardless of insertion order
  Given tasks were inserted out of order across two columns
  When the task list is requested
  Then tasks are sorted by column order, then task order

Scenario: Relations are embedded
  Given an assigned and an unassigned task
  When the task list is requested
  Then the assigned one carries the assignee and both carry their column

Scenario: List tasks of one column
  When the tasks of a column are requested
  Then only that column's tasks are returned, by order_index

Scenario: List tasks when none exist
  When the task list is requested on an empty board
  Then the system returns an empty list
"""

import pytest
from sqlmodel import create_engine, Session, SQLModel
from models.boards import BoardColumn, Task
from models.assignees import Assignee
from board import actions


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="board")
def board_fixture(session):
    # Columns created right-to-left so creation order differs from board order
    done = BoardColumn(title="Done", order_index=1)
    todo = BoardColumn(title="To Do", order_index=0)
    assignee = Assignee(name="Sarah Wilson", email="sarah@example.com", avatar="https://example.com/sarah.png")
    session.add_all([done, todo, assignee])
    session.commit()

    session.add_all([
        Task(title="done-1", column_id=done.id, order_index=1),
        Task(title="todo-2", column_id=todo.id, order_index=2),
        Task(title="done-0", column_id=done.id, order_index=0, assignee_id=assignee.id),
        Task(title="todo-0", column_id=todo.id, order_index=0),
        Task(title="todo-1", column_id=todo.id, order_index=1),
    ])
    session.commit()
    return {"todo": todo.id, "done": done.id, "assignee": assignee.id}


@pytest.mark.asyncio
async def test_list_tasks_board_order(session, board):
    result = await actions.list_tasks(db_session=session)

    assert result.success is True
    assert [task.title for task in result.data] == ["todo-0", "todo-1", "todo-2", "done-0", "done-1"]

    keys = [(task.column.order_index, task.order_index) for task in result.data]
    assert keys == sorted(keys)


@pytest.mark.asyncio
async def test_list_tasks_embeds_relations(session, board):
    result = await actions.list_tasks(db_session=session)
    by_title = {task.title: task for task in result.data}

    assigned = by_title["done-0"]
    assert assigned.assignee.id == board["assignee"]
    assert assigned.assignee.name == "Sarah Wilson"
    assert assigned.assignee.avatar == "https://example.com/sarah.png"
    assert assigned.column.title == "Done"

    unassigned = by_title["todo-0"]
    assert unassigned.assignee is None
    assert unassigned.column.id == board["todo"]


@pytest.mark.asyncio
async def test_list_tasks_in_column(session, board):
    result = await actions.list_tasks_in_column({"column_id": board["done"]}, db_session=session)

    assert result.success is True
    assert [task.title for task in result.data] == ["done-0", "done-1"]


@pytest.mark.asyncio
async def test_list_tasks_in_missing_column(session, board):
    result = await actions.list_tasks_in_column({"column_id": "column_missing"}, db_session=session)

    assert result.success is False
    assert result.error_type == "not_found"


@pytest.mark.asyncio
async def test_list_tasks_empty(session):
    result = await actions.list_tasks(db_session=session)

    assert result.success is True
    assert result.data == []
