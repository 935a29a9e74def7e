# app/core/config.py

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Admin
ADMIN_SECRET = os.getenv("ADMIN_SECRET", "")

# Key-value store backend: "redis", "sql" or "memory"
STORE_BACKEND = os.getenv("STORE_BACKEND", "redis").lower()
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./promo.db")

# Expiry of the Redis allocation lock, so a crashed worker cannot hold it forever
LOCK_TIMEOUT_SECONDS = float(os.getenv("LOCK_TIMEOUT_SECONDS", "10"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_JSON = os.getenv("LOG_JSON", "false").lower() == "true"
