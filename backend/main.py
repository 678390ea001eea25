"""
Hotel Room Mapper – FastAPI Backend

Main entry point. Sets up logging and CORS, includes all routes, initializes DB.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import APP_NAME, APP_VERSION, CORS_ORIGINS, LOG_LEVEL
from database import init_db

# Import route modules
from routes.hotels import router as hotels_router
from routes.floors import router as floors_router
from routes.rooms import router as rooms_router
from routes.coordinates import router as coordinates_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    await init_db()
    logger.info("%s %s started", APP_NAME, APP_VERSION)
    yield


app = FastAPI(
    title=APP_NAME,
    description="Draw, store and query room rectangles over hotel floor-plan images",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(hotels_router)
app.include_router(floors_router)
app.include_router(rooms_router)
app.include_router(coordinates_router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": APP_VERSION}


if __name__ == "__main__":
    import uvicorn
    from config import HOST, PORT
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
