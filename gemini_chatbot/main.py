"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import subprocess
import sys
import time

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

DEFAULT_PORT = "3000"


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles the API routes and the static index page,
    NiceGUI serves the chat page at /chat.
    """
    import uvicorn
    from nicegui import ui

    from gemini_chatbot.api.app import create_app
    from gemini_chatbot.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    # Mount NiceGUI onto FastAPI, API routes registered first take precedence
    ui.run_with(
        app,
        title="Gemini AI Chatbot",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "gemini-chatbot-secret"),
    )

    port = int(os.getenv("PORT", DEFAULT_PORT))
    logger.info(f"Gemini AI Server running on http://localhost:{port}")
    logger.info(f"Chat API: http://localhost:{port}/api/chat")
    logger.info(f"Health check: http://localhost:{port}/api/health")
    logger.info(f"Chat UI available at http://localhost:{port}/chat")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def separate_commands(host: str, port: str) -> list[list[str]]:
    """Command lines for the API server and the standalone chat page."""
    return [
        [
            sys.executable,
            "-m",
            "uvicorn",
            "gemini_chatbot.api.app:app",
            "--host",
            host,
            "--port",
            port,
        ],
        [sys.executable, "-m", "gemini_chatbot.ui.chat_page"],
    ]


def run_separate() -> None:
    """Run the API and the chat page as two processes.

    The API listens on PORT (default 3000), the chat page on 8080 and
    reaches the API through API_BASE_URL. Stops both when either exits.
    """
    port = os.getenv("PORT", DEFAULT_PORT)
    logger.info(f"Starting API on http://localhost:{port}")
    logger.info("Starting chat page on http://localhost:8080/chat")

    processes = [
        subprocess.Popen(command)
        for command in separate_commands(os.getenv("HOST", "0.0.0.0"), port)
    ]
    try:
        while all(process.poll() is None for process in processes):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for process in processes:
            process.terminate()
            process.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on one port).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Gemini Chatbot in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
