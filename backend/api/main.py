"""
Logistics Back Office API — FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from core.config import get_settings
from db.session import Database

settings = get_settings()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database handle on startup, dispose it on shutdown."""
    db = Database.from_settings(settings)
    if settings.database_auto_create:
        await db.create_all()
    app.state.db = db
    logger.info("Logistics API starting up", version=settings.app_version, env=settings.app_env)
    try:
        yield
    finally:
        await db.dispose()
        logger.info("Logistics API shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Back-office API for drivers, fleet, routes and logistics documents",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Import and register routers
from api.v1.routers import auth, delivery_routes, documents, drivers, users, vehicles

app.include_router(users.router)
app.include_router(auth.router)
app.include_router(drivers.router)
app.include_router(vehicles.router)
app.include_router(delivery_routes.router)
for document_router in documents.routers:
    app.include_router(document_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "healthy", "version": settings.app_version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.host, port=settings.port)
