"""Main application entry point.

Runs the NiceGUI console (port 8080 by default) against the RAG backend
configured by RAG_API_BASE_URL. Environment variables are loaded from .env file.
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
    """Application entry point."""
    from nicegui import ui

    from rag_console.client.config import get_client_config
    from rag_console.ui.console_page import console_page  # noqa: F401 - Registers the page

    config = get_client_config()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))

    logger.info(f"Using RAG backend at {config.base_url}")
    logger.info(f"Console UI available at http://localhost:{port}/")

    ui.run(
        title="RAG Console",
        host=host,
        port=port,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "rag-console-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
