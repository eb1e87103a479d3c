"""
Google Photos Library API integration.

Provides listing, lookup and upload of media items.
"""

from google_tasks_cli.google_photos.api import (
    GooglePhotosError,
    NewMediaItem,
    batch_create_media_items,
    get_media_item,
    get_mime_type,
    list_all_media_items,
    list_media_items,
    upload_bytes,
    upload_file,
)

__all__ = [
    "GooglePhotosError",
    "NewMediaItem",
    "batch_create_media_items",
    "get_media_item",
    "get_mime_type",
    "list_all_media_items",
    "list_media_items",
    "upload_bytes",
    "upload_file",
]
