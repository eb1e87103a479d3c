# Photos Library API calls
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)

BASE_URL = "https://photoslibrary.googleapis.com/v1"
UPLOAD_URL = f"{BASE_URL}/uploads"

DEFAULT_MIME_TYPE = "application/octet-stream"
MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".heic": "image/heic",
    ".avif": "image/avif",
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
}


class GooglePhotosError(RuntimeError):
    """A Photos Library request failed or returned an unusable response."""


@dataclass
class NewMediaItem:
    """An uploaded file waiting to be turned into a media item."""

    upload_token: str
    file_name: str
    description: str | None = None

    def to_request(self) -> dict[str, Any]:
        return {
            "description": self.description or "",
            "simpleMediaItem": {
                "fileName": self.file_name,
                "uploadToken": self.upload_token,
            },
        }


def get_mime_type(file_name: str | Path) -> str:
    """Content type for a file name, by extension."""
    return MIME_TYPES.get(Path(file_name).suffix.lower(), DEFAULT_MIME_TYPE)


def _access_token(creds: Credentials) -> str:
    if not creds.token:
        raise GooglePhotosError("No access token available")
    return creds.token


def _headers(creds: Credentials, **extra: str) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {_access_token(creds)}", "Content-Type": "application/json"}
    headers.update(extra)
    return headers


def _parse_json(r: requests.Response, action: str) -> dict[str, Any]:
    """Decode a JSON response, raising GooglePhotosError for errors and bad bodies."""
    try:
        parsed = r.json()
    except ValueError as e:
        if not r.ok:
            raise GooglePhotosError(f"{action} failed: {r.status_code} - {r.text}") from e
        raise GooglePhotosError(f"Failed to parse response: {e}") from e
    if not r.ok:
        message = None
        if isinstance(parsed, dict):
            message = (parsed.get("error") or {}).get("message")
        raise GooglePhotosError(f"{action} failed: {r.status_code} - {message or r.text}")
    return parsed


def list_media_items(
    creds: Credentials, page_size: int = 25, page_token: str | None = None
) -> dict[str, Any]:
    """
    List one page of media items from the user's library.

    Returns:
        The raw response: ``mediaItems`` (may be absent) and ``nextPageToken``
        when more pages exist.
    """
    logger.info(f"📋 Listing media items (pageSize: {page_size})...")
    params: dict[str, str | int] = {"pageSize": page_size}
    if page_token:
        params["pageToken"] = page_token
    try:
        r = requests.get(
            f"{BASE_URL}/mediaItems",
            headers=_headers(creds),
            params=params,
            timeout=30,
        )
    except requests.RequestException as e:
        raise GooglePhotosError(f"List request failed: {e}") from e
    parsed = _parse_json(r, "List request")
    logger.info(f"✅ Successfully retrieved {len(parsed.get('mediaItems') or [])} media items")
    return parsed


def list_all_media_items(creds: Credentials, page_size: int = 25) -> list[dict[str, Any]]:
    """Walk every page of the library, keeping items in page order."""
    all_items: list[dict[str, Any]] = []
    next_page_token = None
    while True:
        response = list_media_items(creds, page_size=page_size, page_token=next_page_token)
        all_items.extend(response.get("mediaItems") or [])
        next_page_token = response.get("nextPageToken")
        if not next_page_token:
            break
        logger.info(f"📄 Fetching next page... ({len(all_items)} items so far)")
    return all_items


def get_media_item(creds: Credentials, media_item_id: str) -> dict[str, Any]:
    """Fetch a single media item by ID."""
    logger.info(f"🔍 Getting media item: {media_item_id}...")
    try:
        r = requests.get(
            f"{BASE_URL}/mediaItems/{media_item_id}",
            headers=_headers(creds),
            timeout=30,
        )
    except requests.RequestException as e:
        raise GooglePhotosError(f"Get media item request failed: {e}") from e
    parsed = _parse_json(r, "Get media item")
    logger.info("✅ Successfully retrieved media item")
    return parsed


def upload_bytes(creds: Credentials, file_path: Path | str) -> str:
    """Upload a file's raw bytes and return the upload token."""
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise GooglePhotosError(f"Failed to upload bytes: {e}") from e

    logger.info(f"📤 Uploading {path.name} ({len(data)} bytes)...")
    headers = {
        "Authorization": f"Bearer {_access_token(creds)}",
        "Content-Type": "application/octet-stream",
        "X-Goog-Upload-Content-Type": get_mime_type(path.name),
        "X-Goog-Upload-File-Name": path.name,
        "X-Goog-Upload-Protocol": "raw",
    }
    try:
        r = requests.post(UPLOAD_URL, data=data, headers=headers, timeout=60)
    except requests.RequestException as e:
        raise GooglePhotosError(f"Upload request failed: {e}") from e
    if not r.ok:
        raise GooglePhotosError(f"Upload failed: {r.status_code} - {r.text}")
    logger.info("✅ File uploaded successfully, got upload token")
    return r.text  # uploadToken


def batch_create_media_items(creds: Credentials, items: list[NewMediaItem]) -> dict[str, Any]:
    """Turn upload tokens into media items."""
    logger.info(f"📝 Creating {len(items)} media item(s)...")
    body = {"newMediaItems": [item.to_request() for item in items]}
    try:
        r = requests.post(
            f"{BASE_URL}/mediaItems:batchCreate",
            headers=_headers(creds),
            json=body,
            timeout=60,
        )
    except requests.RequestException as e:
        raise GooglePhotosError(f"BatchCreate request failed: {e}") from e
    parsed = _parse_json(r, "BatchCreate")
    logger.info("✅ Media items created successfully")
    return parsed


def upload_file(
    creds: Credentials, file_path: Path | str, description: str | None = None
) -> dict[str, Any]:
    """
    Upload a single file to Google Photos.

    Args:
        creds: Authorized credentials
        file_path: File to upload
        description: Optional description for the new media item

    Returns:
        The created media item

    Raises:
        GooglePhotosError: If either the upload or the item creation fails
    """
    path = Path(file_path)
    upload_token = upload_bytes(creds, path)
    response = batch_create_media_items(
        creds, [NewMediaItem(upload_token, path.name, description)]
    )

    results = response.get("newMediaItemResults") or []
    if not results:
        raise GooglePhotosError("No results returned from batchCreate")

    result = results[0]
    media_item = result.get("mediaItem")
    if media_item:
        logger.info(f"🎉 Successfully uploaded {path.name}")
        logger.info(f"📷 Media Item ID: {media_item.get('id')}")
        return media_item

    message = (result.get("status") or {}).get("message") or "Unknown error"
    raise GooglePhotosError(f"Failed to create media item: {message}")
