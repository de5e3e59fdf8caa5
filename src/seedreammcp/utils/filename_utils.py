"""Local filenames for downloaded images."""

import re
from datetime import datetime, timezone
from typing import Optional

MAX_PROMPT_CHARS = 50


def make_filename(prompt: str, index: int, seed: Optional[int], now: Optional[datetime] = None) -> str:
    """
    Derive a filename from the prompt, image index and seed.

    The prompt is lower-cased, stripped of anything outside ``[a-z0-9\\s]``,
    whitespace runs become single underscores and the result is cut to 50
    characters. A millisecond UTC timestamp is the only disambiguator, so two
    calls in the same millisecond with the same prompt, seed and index
    produce the same name.

    Args:
        prompt: Prompt text the image was generated from
        index: 1-based image position within its result
        seed: Seed reported by the model (``noseed`` is used when absent)
        now: Timestamp override, defaults to the current UTC time

    Returns:
        Filename such as ``a_cute_robot_42_1_2025-01-01T12-00-00-000Z.png``
    """
    safe_prompt = re.sub(r"[^a-z0-9\s]", "", prompt.lower())
    safe_prompt = re.sub(r"\s+", "_", safe_prompt)[:MAX_PROMPT_CHARS]

    seed_part = str(seed) if seed is not None else "noseed"
    return f"{safe_prompt}_{seed_part}_{index}_{_timestamp(now)}.png"


def _timestamp(now: Optional[datetime] = None) -> str:
    # ISO-8601 with ':' and '.' replaced so the name is valid on every filesystem
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"
