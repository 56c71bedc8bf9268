import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitecms.core.config import Settings, settings
from sitecms.core.errors import DatabaseError, PayloadTooLarge, SiteError
from sitecms.db.bootstrap import run_startup
from sitecms.db.session import make_engine, make_session_factory
from sitecms.services.uploads import MediaStorage
from sitecms.api.deps import identity_from_header
from sitecms.api.routes.auth import router as auth_router
from sitecms.api.routes.about import router as about_router
from sitecms.api.routes.media import router as media_router
from sitecms.api.routes.links import router as links_router

logger = logging.getLogger(__name__)

# room for multipart boundaries and the text fields next to the file;
# the exact per-file cap is enforced while the file is copied
MULTIPART_OVERHEAD = 64 * 1024


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return "Invalid request"
    e = errs[0]
    field = ".".join(str(p) for p in e.get("loc", ()) if p not in ("body", "query", "path"))
    msg = e.get("msg", "invalid value")
    return f"{field}: {msg}" if field else msg


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or settings
    app = FastAPI(title="sitecms")

    engine = make_engine(cfg.database_url)
    app.state.settings = cfg
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.media_storage = MediaStorage(cfg.media_dir, cfg.max_upload_bytes)

    origins = [o.strip() for o in (cfg.cors_origins or "").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    upload_path = f"{cfg.api_prefix}/media"
    body_limit = cfg.max_upload_bytes + MULTIPART_OVERHEAD

    @app.middleware("http")
    async def _reject_oversized_uploads(request: Request, call_next):
        if request.method == "POST" and request.url.path == upload_path:
            length = request.headers.get("content-length")
            if length and length.isdigit() and int(length) > body_limit:
                # auth failures win over size, as they do on the route itself
                try:
                    identity_from_header(cfg, request.headers.get("authorization"))
                except SiteError as e:
                    return _error(e.status_code, e.message)
                return _error(PayloadTooLarge.status_code, PayloadTooLarge.message)
        return await call_next(request)

    @app.exception_handler(SiteError)
    async def _site_error(request: Request, exc: SiteError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def _db_error(request: Request, exc: SQLAlchemyError):
        logger.exception("database error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(DatabaseError.status_code, DatabaseError.message)

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(SiteError.status_code, SiteError.message)

    @app.get("/health")
    @app.get(f"{cfg.api_prefix}/health")
    def health():
        return {"status": "ok"}

    app.include_router(auth_router, prefix=cfg.api_prefix)
    app.include_router(about_router, prefix=cfg.api_prefix)
    app.include_router(media_router, prefix=cfg.api_prefix)
    app.include_router(links_router, prefix=cfg.api_prefix)

    app.mount("/media", StaticFiles(directory=cfg.media_dir, check_dir=False), name="media")

    @app.on_event("startup")
    async def _startup():
        await run_startup(engine, cfg)
        logger.info("sitecms ready, api under %s", cfg.api_prefix)

    @app.on_event("shutdown")
    def _shutdown():
        engine.dispose()

    return app


app = create_app()


def run():
    import uvicorn

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
