"""Main FastAPI application."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from worldclock.api.routes import router
from worldclock.core.config import settings
from worldclock.core.state import get_board_state

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="World Clock API",
    description="World clocks and wall-time conversion between IANA time zones",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, tags=["worldclock"])


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting World Clock API")
    logger.info(f"Server will run on {settings.host}:{settings.port}")
    await get_board_state().ensure_catalog()


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Shutting down World Clock API")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "worldclock.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level
    )
