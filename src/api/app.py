from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.error(
        f"Server error: {exc.base_error.code} {exc.base_error.message} "
        f"reason={exc.base_error.reason}"
    )
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


def create_app(ApplicationConfig, dispatcher=None) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if dispatcher is None:
        from src.depends import build_notification_dispatcher

        dispatcher = build_notification_dispatcher(ApplicationConfig)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.notification_dispatcher.close()

    app = FastAPI(title="Strata API", version="0.1.0", lifespan=lifespan)
    app.state.notification_dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        access,
        admin,
        health_check,
        maintenance,
        notifications,
        records,
        repair_requests,
    )

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(repair_requests.router, prefix=prefix, tags=["Repair Requests"])
    app.include_router(maintenance.router, prefix=prefix, tags=["Maintenance"])
    app.include_router(notifications.router, prefix=prefix, tags=["Notifications"])
    app.include_router(access.router, prefix=prefix, tags=["Access"])
    app.include_router(records.router, prefix=prefix, tags=["Records"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
