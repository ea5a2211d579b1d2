"""FastAPI application serving the org canvas."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file before any module reads them

from orgcanvas.errors import (
    CanvasError,
    ConnectionNotFound,
    DuplicateConnection,
    NodeNotFound,
    PersistenceFailure,
    SelfConnection,
    error_payload,
)
from server import db
from server.connection_routes import router as connection_router
from server.node_routes import router as node_router
from server.path_routes import router as path_router

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[CanvasError], int] = {
    NodeNotFound: 404,
    ConnectionNotFound: 404,
    DuplicateConnection: 409,
    SelfConnection: 422,
    PersistenceFailure: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables on startup."""
    db.init_all()
    logger.info("canvas database at %s", db.CANVAS_DB_PATH)
    yield


app = FastAPI(
    title="Org Canvas API",
    description="API server for canvas nodes, connections and rendered paths",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CanvasError)
async def canvas_error_handler(request: Request, exc: CanvasError) -> JSONResponse:
    status = ERROR_STATUS.get(type(exc), 400)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content=error_payload(exc))


# include routes
app.include_router(node_router, prefix="/api")
app.include_router(connection_router, prefix="/api")
app.include_router(path_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "db": str(db.CANVAS_DB_PATH),
        "endpoints": {
            "nodes": "/api/nodes",
            "connections": "/api/connections",
            "paths": "/api/paths",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
