"""
Pick the secret year.

Draw a year at random, ask the events source about it, and keep it only if
the source knows more than 5 events. Otherwise draw again, up to a fixed
number of candidates, waiting a little longer after each rejected one.

If the source itself fails we stop right away (SourceUnavailable): retrying
a dead source would only hide the problem from the player.
"""

import asyncio
import logging
import random
from secrets import randbelow
from typing import Awaitable, Callable, List, Optional

from . import config
from .events_client import fetch_events_async
from .exceptions import SourceUnavailable
from .models import MIN_EVENTS_EXCLUSIVE, HistoricalEvent, SecretYear, format_year

logger = logging.getLogger(__name__)

FetchEvents = Callable[[int], Awaitable[List[HistoricalEvent]]]


async def select_year(
    fetch_events: Optional[FetchEvents] = None,
    min_year: Optional[int] = None,
    max_year: Optional[int] = None,
    max_attempts: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
    backoff_cap_seconds: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> SecretYear:
    if fetch_events is None:
        fetch_events = fetch_events_async
    if min_year is None:
        min_year = config.MIN_YEAR
    if max_year is None:
        max_year = config.MAX_YEAR
    if max_attempts is None:
        max_attempts = config.YEAR_SELECTION_MAX_ATTEMPTS
    if backoff_seconds is None:
        backoff_seconds = config.YEAR_SELECTION_BACKOFF
    if backoff_cap_seconds is None:
        backoff_cap_seconds = config.YEAR_SELECTION_BACKOFF_CAP

    if min_year > max_year:
        raise ValueError(f"min_year ({min_year}) is greater than max_year ({max_year}).")
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1.")

    attempt = 0
    while attempt < max_attempts:
        attempt += 1

        # 1. Uniform draw in [min_year, max_year]
        if rng is not None:
            candidate = rng.randint(min_year, max_year)
        else:
            candidate = min_year + randbelow(max_year - min_year + 1)

        # 2. Ask the source (SourceUnavailable propagates as is)
        events = await fetch_events(candidate)

        # 3. Commit only a year with enough events
        if len(events) > MIN_EVENTS_EXCLUSIVE:
            logger.info("Secret year selected after %d candidate(s)", attempt)
            return SecretYear(year=format_year(candidate), events=tuple(events))

        logger.info(
            "Rejected candidate year %d: %d event(s), need more than %d",
            candidate, len(events), MIN_EVENTS_EXCLUSIVE,
        )

        # 4. Back off before the next draw (not after the last one)
        if backoff_seconds > 0 and attempt < max_attempts:
            delay = min(backoff_seconds * (2 ** (attempt - 1)), backoff_cap_seconds)
            logger.debug("Waiting %.2fs before next candidate", delay)
            await asyncio.sleep(delay)

    logger.warning("No usable year found after %d candidate(s)", max_attempts)
    raise SourceUnavailable(
        f"No year with more than {MIN_EVENTS_EXCLUSIVE} events found after {max_attempts} attempts."
    )
