"""
google_tasks_cli - Personal Google Tasks and Google Photos command-line tools.

OAuth client credentials are read from 1Password; tokens obtained through the
authorization-code flow are stored in a single JSON file.
"""

__version__ = "0.1.0"

from google_tasks_cli.auth import authorize
from google_tasks_cli.config import Settings

__all__ = [
    "__version__",
    "Settings",
    "authorize",
]
