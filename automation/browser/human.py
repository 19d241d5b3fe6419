"""Randomized pauses that space out page interactions like a person would."""

from __future__ import annotations
from tracking import t

import asyncio
import random
from typing import Tuple


async def human_delay(delay_range: Tuple[float, float]) -> float:
    """Sleep for a uniformly random duration within ``delay_range``.

    Returns the number of seconds slept so callers can log it.
    """
    t('automation.browser.human.human_delay')
    minimum, maximum = delay_range
    seconds = random.uniform(minimum, maximum)
    await asyncio.sleep(seconds)
    return seconds
