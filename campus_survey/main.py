import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_survey.api.routers import router as api_router
from campus_survey.core.config import settings
from campus_survey.core.lifespan import lifespan
from campus_survey.db.store import DocumentStore

logging.basicConfig(level=settings.LOG_LEVEL)


def create_app(store: DocumentStore | None = None) -> FastAPI:
    app = FastAPI(
        title="Campus Survey API",
        lifespan=lifespan,
        root_path=settings.ROOT_PATH
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    # Every error body is {"error": ...}
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
