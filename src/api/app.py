from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, MessageError, ServerError
from .utils.actions import ActionValidationError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_message_error(request: Request, exc: MessageError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_action_validation_error(request: Request, exc: ActionValidationError):
    return JSONResponse(status_code=status.HTTP_200_OK, content={"error": exc.message})


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Team SaaS API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        account,
        activity,
        auth,
        auth_actions,
        billing,
        health_check,
        team,
        team_actions,
    )

    api_prefix = ApplicationConfig.API_PREFIX

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=api_prefix, tags=["Authentication"])
    app.include_router(team.router, prefix=api_prefix, tags=["Team"])
    app.include_router(activity.router, prefix=api_prefix, tags=["Activity"])
    app.include_router(billing.router, prefix=api_prefix, tags=["Billing"])
    app.include_router(auth_actions.router, tags=["Auth Actions"])
    app.include_router(account.router, tags=["Account Actions"])
    app.include_router(team_actions.router, tags=["Team Actions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(MessageError, handle_message_error)
    app.add_exception_handler(ActionValidationError, handle_action_validation_error)

    return app
