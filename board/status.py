from models.boards import TaskStatus


# Exact, case-sensitive titles. Anything else is treated as "todo".
STATUS_BY_COLUMN_TITLE = {
    "To Do": TaskStatus.TODO,
    "In Progress": TaskStatus.IN_PROGRESS,
    "Done": TaskStatus.DONE,
}

DEFAULT_STATUS = TaskStatus.TODO


def status_of(column_title: str) -> TaskStatus:
    """Status label for tasks placed in a column with this title."""
    return STATUS_BY_COLUMN_TITLE.get(column_title, DEFAULT_STATUS)
