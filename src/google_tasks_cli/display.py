"""
Console formatting for media items and tasks.

Every formatter returns a list of lines; the CLI prints them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


def _format_due(due: str | None) -> str:
    """Render an RFC 3339 due timestamp as a date.

    Tasks only carry the date portion of ``due``, so the time is dropped.
    Unparseable values are passed through unchanged.
    """
    if not due:
        return ""
    try:
        return datetime.fromisoformat(due.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return due


def format_media_item(item: dict[str, Any], index: int) -> list[str]:
    lines = [
        f"{index}. {item.get('filename', '')}",
        f"   ID: {item.get('id', '')}",
        f"   Type: {item.get('mimeType', '')}",
        f"   URL: {item.get('productUrl', '')}",
    ]
    if item.get("description"):
        lines.append(f"   Description: {item['description']}")

    metadata = item.get("mediaMetadata")
    if metadata:
        lines.append(f"   Created: {metadata.get('creationTime', '')}")
        if metadata.get("width") and metadata.get("height"):
            lines.append(f"   Dimensions: {metadata['width']}x{metadata['height']}")
        photo = metadata.get("photo") or {}
        camera = f"{photo.get('cameraMake') or ''} {photo.get('cameraModel') or ''}".strip()
        if camera:
            lines.append(f"   Camera: {camera}")
    return lines


def format_media_items(items: list[dict[str, Any]]) -> list[str]:
    """Numbered listing of media items, one blank line after each."""
    lines = ["", f"📸 Found {len(items)} media items:", ""]
    for index, item in enumerate(items, start=1):
        lines.extend(format_media_item(item, index))
        lines.append("")
    return lines


def format_upload_summary(item: dict[str, Any]) -> list[str]:
    lines = [
        "",
        "=== UPLOAD SUCCESSFUL ===",
        f"File: {item.get('filename', '')}",
        f"ID: {item.get('id', '')}",
        f"URL: {item.get('productUrl', '')}",
        f"MIME Type: {item.get('mimeType', '')}",
    ]
    metadata = item.get("mediaMetadata")
    if metadata:
        lines.append(f"Creation Time: {metadata.get('creationTime', '')}")
        if metadata.get("width") and metadata.get("height"):
            lines.append(f"Dimensions: {metadata['width']}x{metadata['height']}")
    return lines


def format_task(task: dict[str, Any], index: int) -> list[str]:
    status = "✅" if task.get("status") == "completed" else "⭕"
    due = _format_due(task.get("due"))
    due_text = f" (Due: {due})" if due else ""
    lines = [f"{index}. {status} {task.get('title', '')}{due_text}"]
    if task.get("notes"):
        lines.append(f"   📝 {task['notes']}")
    links = task.get("links") or []
    if links:
        lines.append(" 🔗 Links:")
        for link in links:
            lines.append(
                f"   {link.get('type', '')}: [{link.get('description', '')}]({link.get('link', '')})"
            )
    return lines


def format_task_report(
    task_lists: list[dict[str, Any]], all_tasks: list[list[dict[str, Any]]]
) -> list[str]:
    """
    Format tasks grouped by list.

    Args:
        task_lists: Task list resources
        all_tasks: Tasks per list, aligned with ``task_lists``

    Returns:
        Lines to print; lists without tasks are skipped
    """
    lines = ["", "=== YOUR CURRENT TASKS ===", ""]
    total = 0
    for task_list, tasks in zip(task_lists, all_tasks):
        if not tasks:
            continue
        lines.append(f"📋 {task_list.get('title', '')} ({len(tasks)} tasks)")
        lines.append("─" * 40)
        for index, task in enumerate(tasks, start=1):
            lines.extend(format_task(task, index))
            total += 1
        lines.append("")

    if total == 0:
        lines.append("🎉 No pending tasks found! You're all caught up!")
    else:
        lines.append(f"📊 Total pending tasks: {total}")
    return lines
