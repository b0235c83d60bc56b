"""
Feature: Manage assignees
  As a board user
  I want to keep the list of people tasks can be assigned to
  So that the assignee picker stays current

Scenario: Create and list assignees
  When assignees are created
  Then list_assignees returns them sorted by name

Scenario: Duplicate email
  Given an assignee with an email exists
  When another assignee is created with the same email
  Then a validation failure on "email" is returned

Scenario: Update an assignee
  When an assignee's name and avatar are changed
  Then the new values are stored and omitted fields are kept

Scenario: Delete an assignee
  Given an assignee with two tasks exists
  When the assignee is deleted
  Then both tasks remain on the board without an assignee
"""

import pytest
from unittest.mock import patch, AsyncMock
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


@pytest.fixture(name="notify")
def notify_fixture():
    with patch("board.actions.notify_board_changed", new_callable=AsyncMock) as notify:
        yield notify


@pytest.mark.asyncio
async def test_create_and_list_assignees(session, notify):
    for name, email in [("Maria Garcia", "maria@example.com"), ("David Kim", "david@example.com")]:
        result = await actions.create_assignee({"name": name, "email": email}, db_session=session)
        assert result.success is True
        assert result.data.id.startswith("assignee_")

    listed = await actions.list_assignees(db_session=session)

    assert listed.success is True
    assert [assignee.name for assignee in listed.data] == ["David Kim", "Maria Garcia"]


@pytest.mark.asyncio
async def test_create_assignee_invalid_email(session, notify):
    result = await actions.create_assignee({"name": "Nobody", "email": "not-an-email"}, db_session=session)

    assert result.success is False
    assert result.error_type == "validation"
    assert result.details[0]["field"] == "email"


@pytest.mark.asyncio
async def test_create_assignee_duplicate_email(session, notify):
    session.add(Assignee(name="Emily Brown", email="emily@example.com"))
    session.commit()

    result = await actions.create_assignee({"name": "Emily B.", "email": "emily@example.com"}, db_session=session)

    assert result.success is False
    assert result.error_type == "validation"
    assert result.details == [{"field": "email", "message": "Email already in use"}]


@pytest.mark.asyncio
async def test_update_assignee(session, notify):
    assignee = Assignee(name="John Doe", email="john@example.com")
    session.add(assignee)
    session.commit()

    result = await actions.update_assignee({
        "assignee_id": assignee.id,
        "name": "John D.",
        "avatar": "https://example.com/john.png"
    }, db_session=session)

    assert result.success is True
    assert result.data.name == "John D."
    assert result.data.email == "john@example.com"
    assert result.data.avatar == "https://example.com/john.png"


@pytest.mark.asyncio
async def test_update_assignee_keeps_own_email(session, notify):
    assignee = Assignee(name="John Doe", email="john@example.com")
    session.add(assignee)
    session.commit()

    result = await actions.update_assignee(
        {"assignee_id": assignee.id, "email": "john@example.com"},
        db_session=session
    )

    assert result.success is True


@pytest.mark.asyncio
async def test_update_missing_assignee(session, notify):
    result = await actions.update_assignee({"assignee_id": "assignee_missing", "name": "X"}, db_session=session)

    assert result.success is False
    assert result.error_type == "not_found"
    assert result.error == "Assignee not found"


@pytest.mark.asyncio
async def test_delete_assignee_unassigns_tasks(session, notify):
    # Given an assignee with two tasks exists
    column = BoardColumn(title="To Do")
    assignee = Assignee(name="Alex Chen", email="alex@example.com")
    session.add_all([column, assignee])
    session.commit()
    first = Task(title="One", column_id=column.id, order_index=0, assignee_id=assignee.id)
    second = Task(title="Two", column_id=column.id, order_index=1, assignee_id=assignee.id)
    session.add_all([first, second])
    session.commit()
    assignee_id = assignee.id

    # When the assignee is deleted
    result = await actions.delete_assignee({"assignee_id": assignee_id}, db_session=session)

    # Then both tasks remain on the board without an assignee
    assert result.success is True
    assert result.data == {"assignee_id": assignee_id, "unassigned_tasks": 2}
    assert session.get(Assignee, assignee_id) is None
    for task_id in (first.id, second.id):
        task = session.get(Task, task_id)
        assert task is not None
        assert task.assignee_id is None
    notify.assert_awaited_once_with("assignee_deleted", assignee_id=assignee_id)


@pytest.mark.asyncio
async def test_delete_missing_assignee(session, notify):
    result = await actions.delete_assignee({"assignee_id": "assignee_missing"}, db_session=session)

    assert result.success is False
    assert result.error_type == "not_found"
