import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import database
from config import Settings
from context import AppContext
from routers import all_routers
from services import ServiceError, ValidationError, PersistenceError

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _field_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
    return errors


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    settings = settings or (context.settings if context else Settings.from_env())
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = context or AppContext.build(settings)
        app.state.context = ctx
        if await database.ping(ctx.db):
            logger.info("MongoDB connected (%s)", settings.db_name)
        else:
            logger.error("MongoDB connection failed; serving with database disconnected")
        if not ctx.dispatcher.channels:
            logger.info("No notification channels configured")
        yield
        await ctx.close()

    app = FastAPI(title="Blood Donation Coordination API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        body = {"message": exc.message}
        if isinstance(exc, ValidationError) and exc.errors:
            body["errors"] = exc.errors
        if isinstance(exc, PersistenceError):
            body = {"message": "Internal server error"}
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return await service_error_handler(
            request, ValidationError("Missing or invalid fields", errors=_field_errors(exc))
        )

    for router in all_routers:
        app.include_router(router, prefix="/api")

    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
