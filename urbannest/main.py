from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pymongo import MongoClient
from urbannest.core.config import settings
from urbannest.core.logging_config import setup_logging
from urbannest.api.routes import router
from urbannest.core.handlers import register_exception_handlers
from urbannest.core.middleware import TokenAuthMiddleware, exempt_paths, exempt_prefixes

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    mongo_client = MongoClient(settings.MONGO_URI)
    app.state.mongo_client = mongo_client
    app.state.db = mongo_client[settings.MONGO_DB]
    logger.info("Connected to MongoDB database '%s'", settings.MONGO_DB)
    try:
        yield
    finally:
        mongo_client.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Authentication and account recovery for the UrbanNest marketplace",
    lifespan=lifespan,
    docs_url="/docs",
    openapi_url="/openapi.json",
)


# Custom OpenAPI schema with Bearer token security
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Authentication and account recovery for the UrbanNest marketplace",
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "Bearer": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Enter a valid JWT token",
        }
    }

    # Apply security to all routes except public ones
    for path, path_item in openapi_schema["paths"].items():
        if path in exempt_paths or path.startswith(tuple(exempt_prefixes)):
            continue

        for operation in path_item.values():
            if isinstance(operation, dict) and "operationId" in operation:
                operation.setdefault("security", [{"Bearer": []}])

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

register_exception_handlers(app)

app.add_middleware(
    TokenAuthMiddleware,
)

app.include_router(router)


@app.get(
    "/health",
    tags=["health"],
    summary="Health Check",
    description="Check if the API is running",
)
def health():
    """
    Health check endpoint to verify the API is running.

    Returns:
        dict: Status of the API
    """
    return {"status": "ok"}
