"""Point the app at a throwaway sqlite database before config is imported."""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="floorplan-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
