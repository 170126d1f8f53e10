from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mathbase.api import curriculum, games, health, progress, stats
from mathbase.core.config import get_settings

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Arithmetic practice games, lesson progress and per-game statistics",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:19006",  # Expo web
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(games.router)
app.include_router(stats.router)
app.include_router(progress.router)
app.include_router(curriculum.router)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "docs": "/docs",
        "health": "/health",
    }
