"""Application configuration via environment variables."""

import math
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{BASE_DIR / 'floorplan.db'}")

# Drawing surfaces (boundary canvas and connectivity graph share a size)
CANVAS_WIDTH = int(os.getenv("CANVAS_WIDTH", "500"))
CANVAS_HEIGHT = int(os.getenv("CANVAS_HEIGHT", "500"))

# Boundary extraction
BOUNDARY_POINT_TOLERANCE = float(os.getenv("BOUNDARY_POINT_TOLERANCE", "1e-10"))
if not math.isfinite(BOUNDARY_POINT_TOLERANCE) or BOUNDARY_POINT_TOLERANCE <= 0:
    raise ValueError(
        f"BOUNDARY_POINT_TOLERANCE must be a positive number, got {BOUNDARY_POINT_TOLERANCE}"
    )

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
