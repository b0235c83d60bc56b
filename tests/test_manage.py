"""
Feature: Seed the board
  As an operator
  I want a command that prepares a fresh board
  So that the team can start working right away

Scenario: Seed an empty board
  Given no columns and no assignees exist
  When the board is seeded
  Then "To Do", "In Progress" and "Done" exist in that order
  And the sample assignees exist

Scenario: Seed is idempotent
  Given the board has already been seeded
  When the board is seeded again
  Then nothing new is created
"""

import pytest
from sqlmodel import create_engine, Session, SQLModel
from board.store import EntityStore
from manage import seed_board, DEFAULT_COLUMNS, SAMPLE_ASSIGNEES


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine("sqlite:///:memory:")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


def test_seed_empty_board(session):
    store = EntityStore(session)

    created = seed_board(store)

    assert created == {"columns": len(DEFAULT_COLUMNS), "assignees": len(SAMPLE_ASSIGNEES)}
    columns = store.list_columns()
    assert [column.title for column in columns] == ["To Do", "In Progress", "Done"]
    assert [column.order_index for column in columns] == [0, 1, 2]
    assert {assignee.email for assignee in store.list_assignees()} == {email for _, email, _ in SAMPLE_ASSIGNEES}


def test_seed_is_idempotent(session):
    store = EntityStore(session)
    seed_board(store)

    created = seed_board(store)

    assert created == {"columns": 0, "assignees": 0}
    assert len(store.list_columns()) == 3
