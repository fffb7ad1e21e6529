from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from api import admin, auth, owner, stores, users
from config.settings import DATA_DIR
from init_db import init_database
from utils.logging_utils import configure_logging
import logging
import sys

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    log_file = configure_logging(DATA_DIR / "logs")
    logger.info(f"Logging initialized: {log_file}")

    init_database()
    logger.info("✅ Ratings API ready")

    yield

    logger.info("Application shutdown complete")


app = FastAPI(
    title="Ratings Platform API",
    description="Store ratings with role-based access and owner upgrade requests",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS - allow all origins for the browser client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(admin.router, prefix="/api", tags=["admin"])
app.include_router(users.router, prefix="/api", tags=["user"])
app.include_router(stores.router, prefix="/api", tags=["stores"])
app.include_router(owner.router, prefix="/api", tags=["owner"])


@app.get("/api/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "Ratings Platform API",
        "version": "1.0.0"
    }


@app.get("/")
def root():
    """Root endpoint - API only mode"""
    return {
        "message": "Ratings Platform API",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn
    import socket
    from constants import ServerConfig

    # Check if port is available
    def is_port_in_use(port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((ServerConfig.HOST, port))
                return False
            except OSError:
                return True

    if is_port_in_use(ServerConfig.PORT):
        logger.error(f"❌ Port {ServerConfig.PORT} is already in use!")
        logger.error(f"   To fix: Run 'lsof -ti:{ServerConfig.PORT} | xargs kill -9'")
        sys.exit(1)

    configure_logging(DATA_DIR / "logs")
    logger.info(f"🚀 Starting Ratings Platform on {ServerConfig.url()}...")
    uvicorn.run(app, host=ServerConfig.HOST, port=ServerConfig.PORT)
