from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging

from string_analyzer import config
from string_analyzer.api.routes import router
from string_analyzer.exceptions import StringAnalyzerError
from string_analyzer.store import RecordStore

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    app = FastAPI(
        title=config.APP_NAME,
        description="Analyze and store string properties, then query them with filters or plain English",
        version=config.APP_VERSION,
    )

    # Store lives exactly as long as the app
    app.state.store = store if store is not None else RecordStore(allow_empty=config.ALLOW_EMPTY_VALUES)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, tags=["strings"])

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": config.APP_NAME,
            "version": config.APP_VERSION,
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string",
                "GET /docs": "API documentation",
            },
        }

    @app.get("/health")
    def health_check(request: Request):
        """Health check endpoint"""
        return {"status": "healthy", "total_strings": len(request.app.state.store)}

    register_exception_handlers(app)
    logger.info(f"✅ {config.APP_NAME} ready (allow_empty_values={app.state.store.allow_empty})")
    return app


def register_exception_handlers(app: FastAPI) -> None:
    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        status_code = status.HTTP_400_BAD_REQUEST
        for error in exc.errors():
            loc = error["loc"]
            field = str(loc[-1]) if loc else "request"
            errors[field] = error["msg"]
            # A present but non-string "value" is unprocessable rather than malformed
            if loc[:2] == ("body", "value") and error["type"] != "missing":
                status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

        return JSONResponse(
            status_code=status_code,
            content={
                "error": "Invalid request body or query parameters",
                "details": errors,
            },
        )

    # Domain errors carry their own status code
    @app.exception_handler(StringAnalyzerError)
    async def domain_exception_handler(request: Request, exc: StringAnalyzerError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, **exc.context},
        )

    # HTTPException handler, also covers router 404/405 raised by Starlette
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # If detail is already a dict with 'error' key, return as is
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.detail,
                headers=exc.headers,
            )
        # Otherwise wrap it
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


app = create_app()


def run() -> None:
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host=config.HOST, port=config.PORT, reload=config.RELOAD)


if __name__ == "__main__":
    run()
