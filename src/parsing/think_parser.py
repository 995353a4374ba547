"""Splits a model's thinking segment out of its raw answer text.

Reasoning models wrap their intermediate thoughts in ``<think>...</think>``
before the final answer.
"""

import re

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"

_THINK_PATTERN = re.compile(
    re.escape(THINK_OPEN) + r"(.*?)" + re.escape(THINK_CLOSE),
    re.DOTALL,
)


def split_reasoning(text: str) -> tuple[str, str]:
    """Separate the visible answer from the thinking segment.

    The inner text of the first closed ``<think>`` region becomes the
    reasoning. Every closed region is removed from the answer. An
    unterminated ``<think>`` is left in the answer untouched.

    Args:
        text: Raw completion text.

    Returns:
        Tuple of (answer, reasoning), both stripped. Reasoning is empty
        when no region is present.
    """
    match = _THINK_PATTERN.search(text)
    if match is None:
        return text.strip(), ""

    reasoning = match.group(1).strip()
    answer = _THINK_PATTERN.sub("", text).strip()
    return answer, reasoning
