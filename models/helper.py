import random
import string
from typing import Callable


ID_ALPHABET = string.ascii_letters + string.digits


def id_generator(prefix: str, length: int) -> Callable[[], str]:
    """Return a factory producing ids like `task_aB3dE9xQ2k`."""
    def generate() -> str:
        suffix = "".join(random.choices(ID_ALPHABET, k=length))
        return f"{prefix}_{suffix}"
    return generate
