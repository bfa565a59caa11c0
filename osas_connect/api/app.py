from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="OSAS Connect API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from osas_connect.api.routes import (
        applications,
        audit,
        health_check,
        invitations,
        reports,
        users,
    )

    prefix = ApplicationConfig.API_PREFIX

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(applications.router, prefix=prefix, tags=["Applications"])
    app.include_router(invitations.router, prefix=prefix, tags=["Invitations"])
    app.include_router(users.router, prefix=prefix, tags=["Users"])
    app.include_router(reports.router, prefix=prefix, tags=["Reports"])
    app.include_router(audit.router, prefix=prefix, tags=["Audit"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
