from fastapi import FastAPI

from debug_toolbar.api.toolbars import router as toolbars_router
from debug_toolbar.config import get_settings
from debug_toolbar.observability import configure_logging
from debug_toolbar.observability.middleware import ToolbarMiddleware


app = FastAPI(title="Debug Toolbar", version="0.1.0")
app.add_middleware(ToolbarMiddleware)
app.include_router(toolbars_router)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
