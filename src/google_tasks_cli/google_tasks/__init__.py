"""
Google Tasks API integration.
"""

from google_tasks_cli.google_tasks.api import get_all_tasks, get_task_lists, get_tasks

__all__ = [
    "get_all_tasks",
    "get_task_lists",
    "get_tasks",
]
