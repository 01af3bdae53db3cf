"""Global pytest configuration."""

import os

# Keep test output quiet and independent of a developer's .env
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DEFAULT_VIEW_MODE", "by-day")
