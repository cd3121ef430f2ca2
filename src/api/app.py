import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.app.errors import ApplicationError
from .error import ClientError, ServerError, to_http_error

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"Server error: {exc.base_error.code} {exc.base_error.details}",
        exc_info=exc.base_error.__cause__ or exc.base_error,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_application_error(request: Request, exc: ApplicationError):
    http_error = to_http_error(exc)
    if isinstance(http_error, ClientError):
        return await handle_client_error(request, http_error)
    return await handle_server_error(request, http_error)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src.depends import create_tables

    await create_tables()
    yield


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Session & Credential Recovery API", version="0.1.0", lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import environment_auth, health_check, tenant_auth

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(tenant_auth.router, tags=["Tenant Authentication"])
    app.include_router(environment_auth.router, tags=["Environment Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(ApplicationError, handle_application_error)

    return app
