"""Configuration constants and .env loading.

WHY: The API endpoint, protocol version, rate limit window and dump
locations are plain data. Keeping them in one module makes them easy to
find and to override per deployment.

HOW: python-dotenv loads the .env file on import. Every default can be
overridden through an environment variable. load_user_agent() gives a
clear error when the mandatory User-Agent is missing.

RULES:
- NationStates requires an identifying User-Agent on every request
- The user agent is never hardcoded
- RATE_LIMIT_AMOUNT keeps one request of the 50-per-30s allowance in reserve
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# API endpoints
# ---------------------------------------------------------------------------

NS_API_URL = os.getenv("NS_API_URL", "https://www.nationstates.net/cgi-bin/api.cgi")
NS_API_VERSION = os.getenv("NS_API_VERSION", "12")
NS_DUMP_URL = os.getenv("NS_DUMP_URL", "https://www.nationstates.net")

# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

RATE_LIMIT_ENABLED = os.getenv("NS_RATE_LIMIT", "true").lower() == "true"
RATE_LIMIT_PERIOD_S = 30.0
RATE_LIMIT_AMOUNT = 49
RATE_LIMIT_BUFFER_S = 0.2

# ---------------------------------------------------------------------------
# Data dumps
# ---------------------------------------------------------------------------

DUMP_DIRECTORY = os.getenv("NS_DUMP_DIR", "./nsdumps")
DUMP_CHUNK_SIZE = 64 * 1024

# Tag the API uses to report an application-level failure inside a document.
ERROR_TAG = "ERROR"


def load_user_agent() -> str:
    """Load the User-Agent string from the environment.

    RULES:
    - Raises ValueError if NS_USER_AGENT is missing or blank
    """
    agent = os.getenv("NS_USER_AGENT", "").strip()
    if not agent:
        raise ValueError(
            "NationStates user agent not configured. "
            "Add NS_USER_AGENT (e.g. your nation name or e-mail) to the .env file."
        )
    return agent


def load_password() -> str | None:
    """Load the nation password for private shards, if one is configured.

    RULES:
    - Returns None when NS_PASSWORD is missing or blank
    """
    return os.getenv("NS_PASSWORD", "").strip() or None
