"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Sidebar with chat list, new chat, rename and delete
    - Message display with collapsible thinking traces and timestamps
    - Edit-and-resend of past user messages
    - Settings dialog for theme, font size and timestamps

Contains minimal business logic. Delegates all state changes to the
ChatController.
"""
