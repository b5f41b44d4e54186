"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workhours.config import settings
from workhours.database import database
from workhours.routers import auth, categories, clients, invoices, users, work_entries


def setup_logging(level: str = settings.log_level) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    await database.connect()
    yield
    await database.disconnect()


app = FastAPI(
    title="Work Hours API",
    description="Work hours and invoicing backend for auto-entrepreneurs",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(work_entries.router)
app.include_router(clients.router)
app.include_router(categories.router)
app.include_router(invoices.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "Work Hours API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "database": "MongoDB"}


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "workhours.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
