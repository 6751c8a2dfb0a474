"""FastAPI main application"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api import diagram
from config import settings
from services.diagram_themes import THEMES

CURRENT_VERSION = "1.0.0"

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the application"""
    logger.info(f"🚀 Diagram API starting on {settings.api_host}:{settings.api_port}")
    logger.info(f"🎨 Themes: {', '.join(t.value for t in THEMES)} (default {settings.default_theme})")
    logger.info(f"✅ Diagram API v{CURRENT_VERSION} ready!")

    yield

    logger.info("👋 Diagram API shutting down")

app = FastAPI(
    title="Diagram API",
    description="Deterministic SVG concept diagrams with validate-or-placeholder fallbacks",
    version=CURRENT_VERSION,
    lifespan=lifespan
)

# CORS middleware
# Allow all origins since backend binds to localhost only (not network-exposed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diagram.router)

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Diagram API",
        "version": CURRENT_VERSION,
        "docs": "/docs"
    }

@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    config = uvicorn.Config(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="warning"
    )
    server = uvicorn.Server(config)
    server.run()
