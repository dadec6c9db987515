"""
Floorplan Boundary Designer API.

Serves two surfaces:
  /api/boundary/*, /api/rooms/categories   stateless vertex extraction and lookup
  /api/projects/*                         persisted room graph + boundary sessions

Run with `python main.py` or `uvicorn main:app`.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import CORS_ORIGINS, LOG_LEVEL
from database import init_db

from routes.project import router as project_router
from routes.boundary import router as boundary_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the project tables before the first request."""
    await init_db()
    yield


app = FastAPI(
    title="Floorplan Boundary Designer",
    description="Room graph and boundary drawing backend for floorplan generation",
    version="1.0.0",
    lifespan=lifespan,
)

# The drawing frontend runs on a separate dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(project_router)
app.include_router(boundary_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "version": "1.0.0"}


if __name__ == "__main__":
    import uvicorn
    from config import HOST, PORT
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
