"""Test helpers for Corn Cat integration tests.

    from tests.helpers import make_task, make_creature, make_save_file
"""

from tests.helpers.builders import make_creature, make_save_file, make_task

__all__ = [
    "make_creature",
    "make_save_file",
    "make_task",
]
