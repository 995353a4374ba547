"""Test package for Thinking Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: Send/answer workflow across all layers

The completion service is replaced by httpx.MockTransport except in live
tests, which are skipped without an API key.
Leverages pytest with pytest-check for soft assertions.
"""
