# =============================================================================
# core/course_api.py  —  UML Class-Schedule Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the UML real-time class-schedule search endpoint in two modes:
#     - fetch_course_details(): one class by term + class number
#     - search_courses():       classes by term + subject codes
#
# ONE REQUEST, BOUNDED:
#   Each call issues a single GET.  The deadline is applied both as the
#   httpx timeout and as an asyncio.wait_for() around the whole exchange,
#   so the call resolves within the deadline however the server behaves.
#   Nothing is retried.
#
# ERRORS:
#   Every failure leaves this module as a CourseApiError carrying one
#   CourseApiErrorKind.  The tool layer only has to render str(error).
#
# CONTEXT BUDGET:
#   Search results are cut to MAX_SEARCH_CLASSES records and the reported
#   Count is clamped to MAX_SEARCH_COUNT.  The tool advertises "at most 20"
#   while only 7 records are ever returned.
#   TODO: confirm with the course-search owners which of the two limits is
#   intended before changing either.
# =============================================================================

import asyncio
import logging
from enum import Enum
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from core import config
from core.models import CourseEnvelope


logger = logging.getLogger(__name__)

MAX_SEARCH_CLASSES = 7
MAX_SEARCH_COUNT = 20


class CourseApiErrorKind(str, Enum):
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    APPLICATION = "application"
    UNKNOWN = "unknown"


_DEFAULT_MESSAGES = {
    CourseApiErrorKind.TIMEOUT: "Request timed out while contacting the UML API",
    CourseApiErrorKind.TRANSPORT: "UML API request failed",
    CourseApiErrorKind.APPLICATION: "UML API responded with an error",
    CourseApiErrorKind.UNKNOWN: "Unexpected error",
}


class CourseApiError(Exception):
    """A failed call to the UML API, classified once by kind."""

    def __init__(self, kind: CourseApiErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)


def make_client(timeout: float) -> httpx.AsyncClient:
    """Build the HTTP client used for a single UML API call."""
    return httpx.AsyncClient(
        headers={"accept": "application/json"},
        timeout=httpx.Timeout(timeout),
    )


def _body_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"] or None
    return None


async def _get_envelope(
    params: list[tuple[str, str]],
    timeout: float,
    client: Optional[httpx.AsyncClient] = None,
) -> tuple[dict[str, Any], CourseEnvelope]:
    """GET the search endpoint and return (raw JSON, validated envelope)."""
    url = config.get_uml_api_base_url()
    owns_client = client is None
    if owns_client:
        client = make_client(timeout)

    logger.debug("GET %s params=%s timeout=%ss", url, params, timeout)
    try:
        response = await asyncio.wait_for(
            client.get(url, params=params, headers={"accept": "application/json"}),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        logger.warning("UML API request timed out after %ss", timeout)
        raise CourseApiError(CourseApiErrorKind.TIMEOUT) from exc
    except httpx.HTTPError as exc:
        logger.error("UML API transport error: %s", exc)
        raise CourseApiError(CourseApiErrorKind.TRANSPORT, str(exc)) from exc
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        logger.error("UML API returned HTTP %s", response.status_code)
        raise CourseApiError(
            CourseApiErrorKind.TRANSPORT,
            _body_message(response)
            or f"HTTP {response.status_code} {response.reason_phrase}",
        )

    try:
        raw = response.json()
    except ValueError as exc:
        logger.error("UML API returned a non-JSON body. First 400: %r", response.text[:400])
        raise CourseApiError(
            CourseApiErrorKind.UNKNOWN, "UML API returned a non-JSON response"
        ) from exc

    if not isinstance(raw, dict):
        raise CourseApiError(
            CourseApiErrorKind.UNKNOWN, "Unexpected response shape from the UML API"
        )
    try:
        envelope = CourseEnvelope.model_validate(raw)
    except ValidationError as exc:
        logger.error("UML API envelope failed validation: %s", exc)
        raise CourseApiError(
            CourseApiErrorKind.UNKNOWN, "Unexpected response shape from the UML API"
        ) from exc

    if envelope.isError:
        raise CourseApiError(CourseApiErrorKind.APPLICATION, envelope.message)

    return raw, envelope


async def fetch_course_details(
    term: str,
    class_number: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Any]:
    """Fetch a single class offering.

    Args:
        term: Numeric UML term code (e.g., "3530").
        class_number: Numeric class number (e.g., "9670").
        client: Optional pre-built client; one is created per call otherwise.

    Returns:
        The first matching class record, or None when nothing matched.

    Raises:
        CourseApiError: On timeout, HTTP failure, or an error envelope.
    """
    params = [("term", term), ("classNumber", class_number)]
    _, envelope = await _get_envelope(params, config.get_course_details_timeout(), client)
    classes = envelope.classes
    if not classes:
        return None
    return classes[0]


def _limit_search_results(raw: dict[str, Any], envelope: CourseEnvelope) -> dict[str, Any]:
    classes = envelope.classes
    count = envelope.data.Count if envelope.data and envelope.data.Count is not None else len(classes)

    data = dict(raw.get("data") or {})
    data["Classes"] = classes[:MAX_SEARCH_CLASSES]
    data["Count"] = min(count, MAX_SEARCH_COUNT)

    limited = dict(raw)
    limited["data"] = data
    return limited


async def search_courses(
    term: str,
    subjects: Sequence[str],
    course_offering_mode: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> dict[str, Any]:
    """Search class offerings for one term across one or more subjects.

    Returns the API envelope unchanged except for ``data.Classes`` (at most
    MAX_SEARCH_CLASSES records) and ``data.Count`` (at most MAX_SEARCH_COUNT).
    """
    params = [("term", term)]
    params.extend(("subjects", subject) for subject in subjects)
    if course_offering_mode is not None:
        params.append(("courseOfferingModes", str(course_offering_mode)))

    raw, envelope = await _get_envelope(params, config.get_course_search_timeout(), client)
    limited = _limit_search_results(raw, envelope)
    logger.debug(
        "Search returned %d classes, kept %d",
        len(envelope.classes),
        len(limited["data"]["Classes"]),
    )
    return limited
