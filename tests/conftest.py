import os

# tests never talk to postgres; the app engine is pointed at sqlite instead
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
