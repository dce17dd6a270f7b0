from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.cors import CORSMiddleware

from quiet_hours.api.v1.exception_handlers import register_exception_handlers
from quiet_hours.api.v1.routers.email_router import email_router
from quiet_hours.api.v1.routers.notification_router import notification_router
from quiet_hours.api.v1.routers.profile_router import profile_router
from quiet_hours.api.v1.routers.quiet_block_router import quiet_block_router
from quiet_hours.api.v1.routers.webhook_router import webhook_router
from quiet_hours.core.config import settings
from quiet_hours.db.session import db_manager, init_db
from quiet_hours.middlewares.logging_middleware import LoggingMiddleware
from quiet_hours.middlewares.rate_limit import limiter
from quiet_hours.utils.email import SMTPEmailSender
from quiet_hours.utils.logger import configure_logging, get_logger


# Configure logging to prevent duplicates
configure_logging(settings.debug)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Built once per process and handed to handlers through get_email_sender
    if settings.database.auto_create_tables:
        init_db(db_manager.engine)
    app.state.email_sender = SMTPEmailSender(settings.smtp, settings.dashboard_url)
    logger.info("Quiet Hours Scheduler started")
    yield
    logger.info("Quiet Hours Scheduler stopped")


app = FastAPI(title="Quiet Hours Scheduler", lifespan=lifespan)

allowed_origins = settings.allowed_hosts_list or ["http://localhost:3000"]
logger.info(f"CORS allowed origins: {allowed_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# 1) SlowAPI Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# 2) Logging middleware
app.add_middleware(LoggingMiddleware)

# 3) Domain / validation / database errors
register_exception_handlers(app)

# Prometheus instrumentation
Instrumentator().instrument(app).expose(app)

app.include_router(quiet_block_router, prefix="/api/v1")
app.include_router(notification_router, prefix="/api/v1")
app.include_router(email_router, prefix="/api/v1")
app.include_router(webhook_router, prefix="/api/v1")
app.include_router(profile_router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "healthy", "message": "Backend is running"}


@app.get("/")
async def root():
    return {"message": "Quiet Hours Scheduler"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
