"""
Portfolio Server
================

FastAPI server for the portfolio board.

Features:
- Serves the static front end (index page, CSS, JS)
- Board sessions: random card layout, drag and tag filters
- Project list loaded from projects.json (written by portfolio.sync)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse

from .config import settings

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Import board manager and project store
from .board.state_manager import BoardStateManager
from .services.project_store import ProjectStore

# Import API routers
from .api import board_routes, project_routes


# Shared service instances
state_manager: BoardStateManager = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global state_manager

    logger.info("[PORTFOLIO] Starting up...")

    # A missing or broken projects.json only means no project cards
    projects = ProjectStore(settings.PROJECTS_FILE).load()

    state_manager = BoardStateManager(
        projects=projects,
        resize_delay=settings.RESIZE_DEBOUNCE_SEC,
        session_ttl=settings.SESSION_TTL_SEC,
        max_sessions=settings.MAX_SESSIONS
    )

    # Inject into route modules
    board_routes.state_manager = state_manager
    project_routes.state_manager = state_manager

    logger.info(f"[PORTFOLIO] Services initialized ({len(projects)} projects)")

    yield

    # Cleanup
    logger.info("[PORTFOLIO] Shutting down...")
    state_manager.close()


# Create FastAPI app
app = FastAPI(
    title="Portfolio",
    description="Portfolio board with random card layout, dragging and tag filters",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(board_routes.router)
app.include_router(project_routes.router)


# Static files (frontend)
frontend_dir = settings.FRONTEND_DIR
if frontend_dir.exists():
    css_dir = frontend_dir / "css"
    js_dir = frontend_dir / "js"
    if css_dir.exists():
        app.mount("/css", StaticFiles(directory=str(css_dir)), name="css")
    if js_dir.exists():
        app.mount("/js", StaticFiles(directory=str(js_dir)), name="js")
    app.mount("/static", StaticFiles(directory=str(frontend_dir)), name="static")


@app.get("/")
async def root():
    """Serve the home page or return API info."""
    index_path = frontend_dir / "index.html"
    if index_path.exists():
        return FileResponse(str(index_path))
    return {
        "service": "Portfolio",
        "version": "1.0.0",
        "status": "running",
        "frontend": "Frontend not found. Create frontend/index.html",
        "endpoints": {
            "board": "/api/board/session",
            "projects": "/api/projects"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "portfolio",
        "projects": len(state_manager.projects) if state_manager else 0
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "portfolio.server:app",
        host="0.0.0.0",
        port=8080,
        reload=True
    )
