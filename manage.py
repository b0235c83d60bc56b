#!/usr/bin/env python3
"""
Management commands for Team Tasks.

Usage:
    python manage.py init_db
    python manage.py check_db
    python manage.py reset_db
    python manage.py seed
"""

import sys
from sqlalchemy import inspect
from sqlmodel import SQLModel
from database import engine, session_scope
from settings import logger
# Import all models to ensure tables are created
from models.assignees import Assignee  # noqa: F401
from models.boards import BoardColumn, Task  # noqa: F401
from board.ordering import OrderingEngine
from board.store import EntityStore


DEFAULT_COLUMNS = ["To Do", "In Progress", "Done"]

AVATAR_URL = "https://images.unsplash.com/{photo}?w=150&h=150&fit=crop&crop=face&auto=format"

SAMPLE_ASSIGNEES = [
    ("John Doe", "john@example.com", "photo-1472099645785-5658abf4ff4e"),
    ("Jane Smith", "jane@example.com", "photo-1494790108755-2616b612b786"),
    ("Mike Johnson", "mike@example.com", "photo-1507003211169-0a1dd7228f2d"),
    ("Sarah Wilson", "sarah@example.com", "photo-1438761681033-6461ffad8d80"),
    ("Alex Chen", "alex@example.com", "photo-1507591064344-4c6ce005b128"),
    ("Maria Garcia", "maria@example.com", "photo-1544005313-94ddf0286df2"),
    ("David Kim", "david@example.com", "photo-1500648767791-00dcc994a43e"),
    ("Emily Brown", "emily@example.com", "photo-1487412720507-e7ab37603c6f"),
]


def init_db():
    """Initialize database tables."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


def check_db():
    """Check database connection and tables."""
    try:
        tables = inspect(engine).get_table_names()
        logger.info(f"Database connected. Found {len(tables)} tables: {tables}")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)


def reset_db():
    """Drop and recreate all database tables."""
    logger.warning("Dropping all database tables...")
    SQLModel.metadata.drop_all(engine)
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database reset successfully")


def seed_board(store: EntityStore) -> dict:
    """Create the default columns and sample assignees on an empty board."""
    created = {"columns": 0, "assignees": 0}
    ordering = OrderingEngine(store)

    if not store.list_columns():
        for title in DEFAULT_COLUMNS:
            ordering.create_column({"title": title})
            created["columns"] += 1

    if not store.list_assignees():
        for name, email, photo in SAMPLE_ASSIGNEES:
            store.insert_assignee({"name": name, "email": email, "avatar": AVATAR_URL.format(photo=photo)})
            created["assignees"] += 1

    return created


def seed():
    """Seed the board with default columns and sample assignees."""
    SQLModel.metadata.create_all(engine)
    with session_scope() as session:
        created = seed_board(EntityStore(session))
    logger.info(f"Seed complete: {created['columns']} columns, {created['assignees']} assignees created")


def main():
    if len(sys.argv) < 2:
        print("Usage: python manage.py <command>")
        print("Commands:")
        print("  init_db   - Initialize database tables")
        print("  check_db  - Check database connection")
        print("  reset_db  - Drop and recreate all tables")
        print("  seed      - Create default columns and sample assignees")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init_db":
        init_db()
    elif command == "check_db":
        check_db()
    elif command == "reset_db":
        reset_db()
    elif command == "seed":
        seed()
    else:
        print(f"Unknown command: {command}")
        print("Run 'python manage.py' to see available commands")
        sys.exit(1)


if __name__ == "__main__":
    main()
