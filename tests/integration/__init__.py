"""Integration tests for the send/answer flow.

Runs the real client, store and repository together over a mocked
transport. Live tests require GROQ_API_KEY.
"""
