"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers, static files and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from gemini_chatbot import __version__
from gemini_chatbot.api.chat import router as chat_router
from gemini_chatbot.api.config import ServerConfig, get_server_config
from gemini_chatbot.api.generate import missing_file_message
from gemini_chatbot.api.generate import router as generate_router
from gemini_chatbot.errors import ChatbotError, InputValidationError
from gemini_chatbot.provider.config import get_agent_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Gemini Chatbot API...")
    if get_agent_config().has_api_key:
        logger.info("Gemini API key configured")
    else:
        logger.warning(
            "GEMINI_API_KEY not found in environment variables! "
            "Create a .env file with GEMINI_API_KEY=your_api_key_here"
        )
    yield
    # Shutdown
    logger.info("Shutting down Gemini Chatbot API...")


async def chatbot_error_handler(request: Request, exc: ChatbotError) -> JSONResponse:
    """Render a ChatbotError as its JSON error body."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report FastAPI input validation failures with the service error body.

    On attachment routes the only field that can fail is the file part, so
    the route's missing-file message is used.
    """
    logger.warning(f"Request validation failed on {request.url.path}: {exc.errors()}")
    message = missing_file_message(request.url.path)
    error = InputValidationError(message or "Invalid request")
    return await chatbot_error_handler(request, error)


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Optional server configuration.
                Loads from environment if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_server_config()

    application = FastAPI(
        title="Gemini Chatbot API",
        description=(
            "Mediation API between a chat client and Google Gemini. Accepts "
            "multi-turn chat, bare prompts and image, document or audio "
            "attachments and returns the generated text."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.config = config

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    application.add_exception_handler(ChatbotError, chatbot_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_error_handler)

    application.include_router(chat_router)
    application.include_router(generate_router)

    application.mount(
        "/static",
        StaticFiles(directory=config.public_dir, check_dir=False),
        name="static",
    )

    @application.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        """Serve the static landing page."""
        return FileResponse(config.public_dir / "index.html")

    return application


app = create_app()
