"""MindBridge API - FastAPI application entry point."""
import asyncio
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from .config import get_settings  # noqa: E402
from .routes import auth, mood, journal, goals, dashboard, navigation, resources, quotes  # noqa: E402
from .services.container import get_app_state  # noqa: E402

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = get_app_state()
    loading = asyncio.create_task(state.translations.load(state.translations.current_language))
    await state.translations.wait_until_ready(settings.translation_ready_timeout)
    state.navigator.navigate("home")
    logger.info("MindBridge API ready")
    yield
    if not loading.done():
        loading.cancel()
    await state.aclose()


app = FastAPI(
    title="MindBridge API",
    description="Local mood, journal and goal tracking with session-gated navigation",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(mood.router)
app.include_router(journal.router)
app.include_router(goals.router)
app.include_router(dashboard.router)
app.include_router(navigation.router)
app.include_router(resources.router)
app.include_router(quotes.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "mindbridge-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.mindbridge_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
