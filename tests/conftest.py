"""Shared pytest fixtures for google_tasks_cli tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from google_tasks_cli.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real shell configuration out of Settings."""
    for name in ("OP_VAULT", "OP_ITEM_NAME", "OP_CLI_PATH", "XDG_DATA_HOME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings with the token file inside the temp directory."""
    return Settings(token_path=temp_dir / "data" / "token.json")


@pytest.fixture
def mock_creds() -> MagicMock:
    """Authorized google-auth credentials stand-in."""
    creds = MagicMock()
    creds.token = "test_token"
    creds.valid = True
    return creds


@pytest.fixture
def sample_config_yaml(temp_dir: Path) -> Path:
    """Write a sample configuration YAML file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text(
        "log_level: DEBUG\n"
        f"token_path: {temp_dir / 'token.json'}\n"
        "onepassword:\n"
        "  vault: Work\n"
        "  item_name: Photos Client\n"
        "oauth:\n"
        "  redirect_port: 3100\n"
        "photos:\n"
        "  page_size: 50\n"
        "  upload_path: images/dog.png\n"
        "tasks:\n"
        "  show_completed: true\n"
    )
    return config_path


@pytest.fixture
def make_response():
    """Factory for requests.Response stand-ins."""

    def _make(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.text = text
        if json_data is None:
            response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        else:
            response.json.return_value = json_data
        return response

    return _make
