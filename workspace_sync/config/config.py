"""
Configuration module for workspace synchronization.

Values are read from the environment (optionally seeded from a .env file).
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_github_token() -> Optional[str]:
    """Get the GitHub personal access token at call time.

    Read lazily so that a rotated token is picked up by new sessions.
    """
    return os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN") or None


# GitHub API configuration
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_USER_AGENT = os.getenv("GITHUB_USER_AGENT", "WorkspaceSync-Agent")
GITHUB_REQUEST_TIMEOUT = float(os.getenv("GITHUB_REQUEST_TIMEOUT", "150"))
GITHUB_CONNECT_TIMEOUT = float(os.getenv("GITHUB_CONNECT_TIMEOUT", "60"))

# Publish / revert fan-out
BLOB_UPLOAD_CONCURRENCY = int(os.getenv("BLOB_UPLOAD_CONCURRENCY", "8"))

# Commit history
COMMIT_STATUS_DELAY_SECONDS = float(os.getenv("COMMIT_STATUS_DELAY_SECONDS", "0.1"))
DEFAULT_HISTORY_BRANCH = os.getenv("DEFAULT_HISTORY_BRANCH", "main")

# GitHub stops listing directory entries past this count on the Contents API
CONTENTS_LISTING_LIMIT = int(os.getenv("CONTENTS_LISTING_LIMIT", "1000"))
