"""
- HTTP call to the historical events source (api-ninjas by default)
Given a year, return the events the source knows for it.
Anything that goes wrong (no internet, timeout, non-2xx, bad body) becomes
SourceUnavailable. Unlike the old random.org client there is no local
fallback: without real events there is nothing to play.
"""

import asyncio
import logging
from typing import Any, List, Optional

import requests

from . import config
from .exceptions import SourceUnavailable
from .models import HistoricalEvent

logger = logging.getLogger(__name__)


def fetch_events(
    year: int,
    api_key: Optional[str] = None,
    url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> List[HistoricalEvent]:
    if api_key is None:
        api_key = config.HISTORY_API_KEY
    if url is None:
        url = config.HISTORY_API_URL
    if timeout_seconds is None:
        timeout_seconds = config.HISTORY_API_TIMEOUT

    # The key is passed out of band, never in the query string
    headers = {}
    if api_key:
        headers["X-Api-Key"] = api_key

    try:
        response = requests.get(url, params={"year": year}, headers=headers, timeout=timeout_seconds)

        # If the response was not 2xx, this will raise an error
        response.raise_for_status()

        # The body looks like:
        #   [{"year": "1969", "month": "07", "day": "20", "event": "..."}, ...]
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Historical events request for year %s failed: %s", year, exc)
        raise SourceUnavailable(f"Could not retrieve events for year {year}.") from exc

    return parse_events(payload)


def parse_events(payload: Any) -> List[HistoricalEvent]:
    """
    Turn the JSON body into HistoricalEvent records.
    An empty list is a valid answer (the source knows nothing about that year);
    a missing body or a record without text is not.
    """
    if payload is None:
        raise SourceUnavailable("Historical events source returned an empty body.")
    if not isinstance(payload, list):
        raise SourceUnavailable("Historical events source returned an unexpected payload.")

    events = []
    for item in payload:
        if not isinstance(item, dict):
            raise SourceUnavailable("Historical event record is not an object.")
        text = item.get("event", item.get("description"))
        if not isinstance(text, str) or text.strip() == "":
            raise SourceUnavailable("Historical event record has no description.")
        events.append(
            HistoricalEvent(
                description=text.strip(),
                year=_optional_str(item.get("year")),
                month=_optional_str(item.get("month")),
                day=_optional_str(item.get("day")),
            )
        )
    return events


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


async def fetch_events_async(year: int, **kwargs: Any) -> List[HistoricalEvent]:
    # requests is blocking; run it in a worker thread so the event loop stays free
    return await asyncio.to_thread(fetch_events, year, **kwargs)
