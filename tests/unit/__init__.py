"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Thinking-segment extraction
    - agent/: Configuration and the completion client over a mock transport
    - storage/: Chat and settings persistence
    - session/: Store transitions and controller orchestration

Uses fakes for the completion service. Leverages pytest-check for multiple
assertions per test.
"""
