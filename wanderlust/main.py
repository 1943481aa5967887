import logging
import time
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from wanderlust.config import settings
from wanderlust.database import db as default_db, get_db
from wanderlust.routes import listings, reviews
from wanderlust.utils.errors import AppError, RouteNotFoundError
from wanderlust.utils.logging_config import configure_logging
from wanderlust.utils.templates import render

configure_logging(level=settings.log_level, log_dir=settings.log_dir)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}


def render_error(request: Request, status_code: int, message: str):
    err = {"status_code": status_code, "message": message}
    return render(request, "error.html", {"err": err}, status_code=status_code)


def create_app() -> FastAPI:
    app = FastAPI(title="Wanderlust", version="0.1.0")

    @app.on_event("startup")
    async def check_database() -> None:
        try:
            await default_db.command("ping")
            logger.info("Connected to MongoDB at %s", settings.mongo_uri)
        except Exception:
            logger.exception("MongoDB connection failed")

    @app.middleware("http")
    async def method_override(request: Request, call_next):
        # HTML forms can only POST; ?_method=PUT|DELETE picks the real verb
        if request.method == "POST":
            override = request.query_params.get("_method", "").upper()
            if override in OVERRIDABLE_METHODS:
                request.scope["method"] = override
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error")
            return render_error(request, 500, AppError.message)
        duration_ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration_ms)
        return response

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return render_error(request, exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            err = RouteNotFoundError()
            return render_error(request, err.status_code, err.message)
        return render_error(request, exc.status_code, str(exc.detail))

    app.include_router(listings.router)
    app.include_router(reviews.router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/css/style.css", include_in_schema=False)
    async def stylesheet():
        return FileResponse(STATIC_DIR / "css" / "style.css", media_type="text/css")

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hi, I am root"

    @app.get("/health")
    async def health_check(db=Depends(get_db)):
        """Report whether the database answers a ping"""
        try:
            await db.command("ping")
            return {"status": "healthy", "database": "connected"}
        except Exception as e:
            return {"status": "unhealthy", "database": "disconnected", "error": str(e)}

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("wanderlust.main:app", host=settings.host, port=settings.port)
