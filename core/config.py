# =============================================================================
# core/config.py  —  Environment Configuration
# =============================================================================
#
# Every setting comes from the environment (optionally via a .env file) and
# is read through a getter, so tests can monkeypatch os.environ and see the
# change immediately.
# =============================================================================

import json
import logging
import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


DEFAULT_UML_API_BASE_URL = (
    "https://www.uml.edu/student-dashboard/api/ClassSchedule/RealTime/Search"
)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number of seconds, got {raw!r}.") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}.")
    return value


def get_uml_api_base_url() -> str:
    return os.environ.get("UML_API_BASE_URL", DEFAULT_UML_API_BASE_URL)


def get_course_details_timeout() -> float:
    return _float_env("COURSE_DETAILS_TIMEOUT", 15.0)


def get_course_search_timeout() -> float:
    return _float_env("COURSE_SEARCH_TIMEOUT", 20.0)


def get_max_duration() -> float:
    """Upper bound, in seconds, on a single course tool invocation."""
    return _float_env("MCP_MAX_DURATION", 60.0)


def get_transport() -> str:
    transport = os.environ.get("MCP_TRANSPORT", "stdio").lower()
    if transport not in ("stdio", "http", "sse"):
        raise RuntimeError(f"MCP_TRANSPORT must be stdio, http or sse, got {transport!r}.")
    return transport


def get_host() -> str:
    return os.environ.get("MCP_HOST", "127.0.0.1")


def get_port() -> int:
    raw = os.environ.get("MCP_PORT", "8000")
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"MCP_PORT must be an integer, got {raw!r}.") from exc


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def get_environment_config() -> dict[str, Any]:
    """Effective settings, for logging."""
    return {
        "UML_API_BASE_URL": get_uml_api_base_url(),
        "COURSE_DETAILS_TIMEOUT": get_course_details_timeout(),
        "COURSE_SEARCH_TIMEOUT": get_course_search_timeout(),
        "MCP_MAX_DURATION": get_max_duration(),
        "MCP_TRANSPORT": get_transport(),
        "MCP_HOST": get_host(),
        "MCP_PORT": get_port(),
        "LOG_LEVEL": get_log_level(),
    }


def log_environment_config(logger: logging.Logger) -> None:
    logger.debug("Loaded environment variables:\n%s", json.dumps(get_environment_config(), indent=2))
