import json
import logging
import socket
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from .config import settings
from .api.routes import api_router
from .database import init_db
from .middleware import SecurityHeadersMiddleware
from .schemas.response import ErrorDetail
from .services.error_handling import ServiceError
from .utils import create_response, error_response

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "The requested resource was not found"
BAD_REQUEST_MESSAGE = "An error occurred while processing your request"
METHOD_NOT_ALLOWED_MESSAGE = "The requested URL does not support this method"
MALFORMED_JSON_MESSAGE = "Malformed JSON request"
INTERNAL_ERROR_MESSAGE = "An internal server error occurred"

DOCS_URL = "/docs"

PUBLIC_PATHS = {"/", "/health", DOCS_URL, "/redoc", "/openapi.json", "/docs/oauth2-redirect"}


def get_server_ip() -> str:
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as e:
        logger.error(f"Error resolving host address: {str(e)}")
        return "unknown"


def log_server_details():
    protocol = "https" if settings.SSL_KEYFILE else "http"
    logger.info(
        f"\n\n\tAccess Swagger UI URL: {protocol}://{get_server_ip()}:{settings.PORT}{DOCS_URL}"
        f"\n\tActive Profile: {settings.ENVIRONMENT}\n"
    )


def write_openapi_document(app: FastAPI, output_file: str):
    """Write the pretty-printed OpenAPI document to ``output_file``."""
    try:
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(app.openapi(), f, indent=2)
        logger.info(f"OpenAPI documentation generated successfully at {output_file}")
    except OSError as e:
        logger.error(f"Failed to write OpenAPI documentation to {output_file}: {str(e)}")


def validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        raw_loc = error.get("loc", ())
        loc = [str(part) for part in raw_loc if part not in ("body", "path", "query", "header")]
        # Body locations already carry aliases; parameters carry Python names
        if raw_loc and raw_loc[0] != "body":
            loc = [to_camel(part) for part in loc]
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if error.get("type") == "value_error" and ctx_error else error.get("msg", "Invalid value")
        errors.append(ErrorDetail(field=".".join(loc), message=message))
    return errors


def create_app() -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        log_server_details()
        if settings.OPENAPI_OUTPUT_FILE and settings.ENVIRONMENT.lower() not in ("test", "prod"):
            write_openapi_document(app, settings.OPENAPI_OUTPUT_FILE)
        yield

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=DOCS_URL,
        redoc_url="/redoc",
        lifespan=lifespan
    )

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        description = f"{app.description}<br/>Active Profile: <b>{settings.ENVIRONMENT.upper()}</b>"

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=description,
            routes=app.routes,
        )

        bearer = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        if settings.mock_tokens_enabled:
            bearer["description"] = "Paste a test token like `admin-token` or `user-token`"

        openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})["bearerAuth"] = bearer

        for path, path_item in openapi_schema.get("paths", {}).items():
            for method, operation in path_item.items():
                if path in PUBLIC_PATHS:
                    operation.pop("security", None)
                else:
                    operation["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    app.openapi = custom_openapi


    @app.get("/", include_in_schema=False)
    def root():
        return create_response({
            "version": settings.API_VERSION,
            "status": "operational"
        })


    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Translate service errors into the failure envelope."""
        logger.error(f"{type(exc).__name__} occurred: {exc.message}")
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)
        if exc.status_code == status.HTTP_400_BAD_REQUEST:
            return error_response(status.HTTP_400_BAD_REQUEST, BAD_REQUEST_MESSAGE)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            logger.error(f"Malformed JSON request: {exc.errors()}")
            return error_response(status.HTTP_400_BAD_REQUEST, MALFORMED_JSON_MESSAGE)

        errors = validation_errors(exc)
        logger.error(f"Validation errors: {[error.model_dump() for error in errors]}")
        return error_response(status.HTTP_400_BAD_REQUEST, "", errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        headers = getattr(exc, "headers", None)
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = NOT_FOUND_MESSAGE
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = METHOD_NOT_ALLOWED_MESSAGE
        else:
            message = str(exc.detail)

        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
        return error_response(exc.status_code, message, headers=headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions with a generic 500 response."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "customer_api.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        ssl_keyfile=settings.SSL_KEYFILE or None,
        ssl_certfile=settings.SSL_CERTFILE or None,
        reload=False
    )
