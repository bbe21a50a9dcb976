"""FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .api.routes import levels, solve

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Deterministic generation, solving and replay of sliding-maze levels",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(levels.router)
app.include_router(solve.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Maze Level Generator API",
        "max_level": settings.max_level,
        "endpoints": {
            "level": "/api/levels/{level_number}",
            "difficulty": "/api/levels/{level_number}/difficulty",
            "solution": "/api/levels/{level_number}/solution",
            "play": "/api/levels/{level_number}/play",
            "solve": "/api/solve",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import logging
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    uvicorn.run(
        "mazegen.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
