"""
Lightweight Google Tasks helper.

Scope required: https://www.googleapis.com/auth/tasks.readonly
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from google_tasks_cli.config import TasksSettings

logger = logging.getLogger(__name__)

MAX_FETCH_WORKERS = 8


def _service(creds: Credentials) -> Any:
    # httplib2 is not thread-safe, so every call gets its own service
    return build("tasks", "v1", credentials=creds, cache_discovery=False)


def get_task_lists(creds: Credentials) -> list[dict[str, Any]]:
    """Fetch all task lists; logs and returns [] on API errors."""
    try:
        resp = _service(creds).tasklists().list(maxResults=100).execute()
    except HttpError as e:
        logger.error(f"Error fetching task lists: {e}")
        return []
    return resp.get("items", [])


def get_tasks(
    creds: Credentials, task_list_id: str, settings: TasksSettings | None = None
) -> list[dict[str, Any]]:
    """Fetch tasks from one list; logs and returns [] on API errors."""
    settings = settings or TasksSettings()
    params: dict[str, Any] = {
        "tasklist": task_list_id,
        "maxResults": 100,
        "showCompleted": settings.show_completed,
        "showDeleted": settings.show_deleted,
        "showHidden": settings.show_hidden,
    }
    try:
        resp = _service(creds).tasks().list(**params).execute()
    except HttpError as e:
        logger.error(f"Error fetching tasks for list {task_list_id}: {e}")
        return []
    return resp.get("items", [])


def get_all_tasks(
    creds: Credentials,
    task_lists: list[dict[str, Any]],
    settings: TasksSettings | None = None,
) -> list[list[dict[str, Any]]]:
    """
    Fetch the tasks of every list concurrently.

    Returns:
        One task list per entry of ``task_lists``, in the same order.
    """
    if not task_lists:
        return []
    workers = min(MAX_FETCH_WORKERS, len(task_lists))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda tl: get_tasks(creds, tl["id"], settings), task_lists))
