# pairchat/main.py
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pairchat.api import activity, auth, chats, health, websocket
from pairchat.config import AppConfig
from pairchat.domain.errors import (
    INVALID_ARGUMENT,
    UNKNOWN_ERROR,
    ApplicationError,
    AuthorizationError,
    UnknownStorageError,
)
from pairchat.infrastructure.database import Database, create_database, create_engine
from pairchat.infrastructure.event_dispatcher import EventDispatcher
from pairchat.infrastructure.event_handlers import EventHandlers, NotificationHandlers
from pairchat.infrastructure.redis_client import RedisClient
from pairchat.infrastructure.security import SecurityService
from pairchat.infrastructure.seed import init_admin_user
from pairchat.realtime.handlers import RealtimeHandlers
from pairchat.realtime.registry import ConnectionRegistry


class Application:
    def __init__(self, config: AppConfig, database: Database | None = None):
        self.config = config
        self.logger = self.setup_logger()
        self.database = database or create_database(create_engine(config.DATABASE_URL))
        self.security_service = SecurityService(config)
        self.event_dispatcher = EventDispatcher(self.logger)
        self.registry = ConnectionRegistry(self.logger)
        self.realtime_handlers = RealtimeHandlers(
            self.database, self.security_service, self.event_dispatcher, self.logger
        )
        self.notification_handlers = NotificationHandlers(self.registry, self.logger)

        # Register event handlers
        self.event_dispatcher.register(
            "MessageSent", self.notification_handlers.notify_message_sent
        )

        self.redis_client: RedisClient | None = None
        if config.REDIS_HOST:
            self.redis_client = RedisClient(
                config.REDIS_HOST, config.REDIS_PORT, self.logger
            )
            self.event_handlers = EventHandlers(
                self.redis_client, self.logger, config.PUBLISH_TIMEOUT_SECONDS
            )
            self.event_dispatcher.register(
                "ActivityRecorded", self.event_handlers.publish_activity_recorded
            )

    @asynccontextmanager
    async def lifespan(self, app: FastAPI):
        await self.database.connect()
        if self.config.ADMIN_USERNAME and self.config.ADMIN_PASSWORD:
            await init_admin_user(
                self.database,
                self.security_service,
                self.config.ADMIN_USERNAME,
                self.config.ADMIN_PASSWORD,
                self.logger,
            )
        if self.redis_client:
            await self.redis_client.connect()
        yield
        await self.registry.close_all()
        if self.redis_client:
            await self.redis_client.disconnect()
        await self.database.disconnect()

    def setup_logger(self):
        logger = logging.getLogger("PairChat")
        logger.setLevel(self.config.LOG_LEVEL.upper())

        # several applications may live in one process (tests)
        if not logger.handlers:
            c_handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            c_handler.setFormatter(formatter)
            logger.addHandler(c_handler)

        return logger

    def create_app(self) -> FastAPI:
        app = FastAPI(
            title=self.config.PROJECT_NAME,
            version=self.config.PROJECT_VERSION,
            description=self.config.PROJECT_DESCRIPTION,
            openapi_url=f"{self.config.API_V1_STR}/openapi.json",
            lifespan=self.lifespan,
        )

        app.state.config = self.config
        app.state.security_service = self.security_service
        app.state.event_dispatcher = self.event_dispatcher
        app.state.database = self.database
        app.state.registry = self.registry
        app.state.realtime_handlers = self.realtime_handlers
        app.state.logger = self.logger

        # Create routers
        app.include_router(health.router, prefix=self.config.API_V1_STR, tags=["health"])
        app.include_router(auth.router, prefix=self.config.API_V1_STR, tags=["auth"])
        app.include_router(
            chats.router,
            prefix=f"{self.config.API_V1_STR}/dashboard",
            tags=["chats"],
        )
        app.include_router(
            activity.router,
            prefix=f"{self.config.API_V1_STR}/dashboard",
            tags=["activity"],
        )
        app.include_router(
            websocket.router,
            prefix=f"{self.config.API_V1_STR}/dashboard",
            tags=["realtime"],
        )

        logger = self.logger

        @app.exception_handler(AuthorizationError)
        async def authorization_exception_handler(
            request: Request, exc: AuthorizationError
        ):
            return JSONResponse(status_code=403, content={"error": exc.message})

        @app.exception_handler(ApplicationError)
        async def application_exception_handler(
            request: Request, exc: ApplicationError
        ):
            if isinstance(exc, UnknownStorageError):
                logger.error(
                    f"Storage failure on {request.url.path}", exc_info=exc.cause
                )
            return JSONResponse(status_code=400, content={"error": exc.message})

        @app.exception_handler(RequestValidationError)
        async def request_validation_exception_handler(
            request: Request, exc: RequestValidationError
        ):
            return JSONResponse(status_code=400, content={"error": INVALID_ARGUMENT})

        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(request: Request, exc: StarletteHTTPException):
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.detail},
                headers=getattr(exc, "headers", None),
            )

        @app.exception_handler(Exception)
        async def global_exception_handler(request: Request, exc: Exception):
            logger.exception(f"Unhandled error on {request.url.path}")
            return JSONResponse(status_code=500, content={"error": UNKNOWN_ERROR})

        return app


def create() -> FastAPI:
    config = AppConfig()
    application = Application(config)
    app = application.create_app()
    application.logger.info("Application created and configured")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pairchat.main:create", factory=True, host="127.0.0.1", port=8000)
