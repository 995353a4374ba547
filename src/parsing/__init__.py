"""Text post-processing for completion responses.

Responsibilities:
    - Locating the ``<think>`` segment in raw model output
    - Returning the visible answer and the reasoning trace separately

Pure functions with no I/O, so they can be tested in isolation.
"""

from src.parsing.think_parser import THINK_CLOSE, THINK_OPEN, split_reasoning

__all__ = ["THINK_CLOSE", "THINK_OPEN", "split_reasoning"]
