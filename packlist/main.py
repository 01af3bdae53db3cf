"""FastAPI application."""

from fastapi import FastAPI

from packlist.api.routes.health import router as health_router
from packlist.api.routes.metrics import router as metrics_router
from packlist.api.routes.packing import router as packing_router
from packlist.config import get_settings
from packlist.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Packing List API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(packing_router, tags=["packing"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Packing List API", "version": "0.1.0"}
