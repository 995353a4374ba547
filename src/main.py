"""Main application entry point.

Runs the NiceGUI chat interface. Chats and settings are kept in NiceGUI's
general storage next to the application.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Validates the completion configuration up front so a missing API key
    fails at boot instead of on the first message.
    """
    from nicegui import ui

    from src.agent.config import get_completion_config
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_completion_config()
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8080"))

    logger.info(f"Using model {config.model_name} at {config.base_url}")
    logger.info(f"Chat UI available at http://{host}:{port}/")

    ui.run(
        title="Thinking Chat",
        host=host,
        port=port,
        reload=False,
        show=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "thinking-chat-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
