"""Thinking Chat - single-user chat client for reasoning models.

Combines NiceGUI for the interface, httpx for the completion service,
and Pydantic for data validation and local persistence.

Components:
    - agent: Completion service configuration and client
    - parsing: Thinking-segment extraction from model output
    - session: Chat state and the send/answer flow
    - storage: Local persistence of chats and settings
    - ui: Web interface for chat interactions
    - models: Shared data models
"""

__version__ = "0.1.0"
