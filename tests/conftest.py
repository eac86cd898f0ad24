"""
Test environment: an in-memory SQLite database, a cheap bcrypt cost and a
throwaway upload directory. These must be set before taskboard is imported
because settings are read once at import time.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="taskboard-uploads-")
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ.setdefault("LOG_LEVEL", "WARNING")
