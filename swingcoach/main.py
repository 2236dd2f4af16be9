"""
SwingCoach API

FastAPI application that grades golf swings from pose frames.

Run with:
    uvicorn swingcoach.main:app --reload --host 0.0.0.0 --port 8000

API docs available at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import router as api_router, API_VERSION
from .core.config import DEFAULT_PARAMETERS

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup code before app starts accepting requests,
    and cleanup code when app shuts down.
    """
    # Startup
    logger.info("SwingCoach API starting up...")
    logger.info(f"Analysis parameters version {DEFAULT_PARAMETERS.version}")
    logger.info("API docs: http://localhost:8000/docs")

    yield  # App runs here

    # Shutdown
    logger.info("SwingCoach API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="SwingCoach API",
    description="""
    **Golf Swing Phase & Metrics Analyzer**

    Segments a golf swing into seven phases and grades it from a
    sequence of pose landmarks.

    ## Endpoints

    - `GET /api/health` - Health check
    - `POST /api/analysis/frames` - Analyze a swing from pose frames

    Frames are produced by any pose estimator and must carry the
    `nose`, `left/right_shoulder`, `left/right_wrist` and `left/right_hip`
    landmarks in normalized coordinates. At least 30 frames are required.
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",      # React dev server
        "http://localhost:5173",      # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Routes
# =============================================================================

app.include_router(api_router, prefix="/api")


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "SwingCoach API",
        "version": API_VERSION,
        "description": "Golf swing phase segmentation and grading",
        "docs": "/docs",
        "health": "/api/health",
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "swingcoach.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
