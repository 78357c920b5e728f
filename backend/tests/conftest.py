import os
import tempfile
from pathlib import Path

# app.db.session builds its engine at import time; point it away from Postgres.
os.environ.setdefault(
    "TWEALTH_DATABASE_URL",
    f"sqlite+pysqlite:///{Path(tempfile.gettempdir()) / 'twealth-tests.db'}",
)
os.environ.setdefault("TWEALTH_SEED_DEMO_DATA", "false")
os.environ.setdefault("TWEALTH_AUTO_CREATE_SCHEMA", "false")
