from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import os
import logging

from routers.api import router as api_router
from schemas import AppHealthOK
from core.errors import StoreUnavailable
from core.service_manager import service_manager
from core.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the sample store on startup and release it on shutdown."""
    service_manager.start_services(settings.db_path, default_timezone=settings.timezone)
    logger.info(f"Image base directory: {settings.image_base_dir}")
    try:
        yield
    finally:
        service_manager.stop_services()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error(f"Store unavailable while serving {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health", tags=["meta"], response_model=AppHealthOK)
async def healthcheck() -> AppHealthOK:
    return AppHealthOK(status="ok", app=settings.app_name)


# mount API router under /api
app.include_router(api_router, prefix="/api")

# serve the built dashboard when present; API routes above take precedence
if os.path.isdir(settings.client_dist_path):
    app.mount("/", StaticFiles(directory=settings.client_dist_path, html=True), name="client")
else:
    @app.get("/", tags=["meta"])
    async def read_root() -> dict[str, str]:
        return {"message": settings.app_name}

logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
