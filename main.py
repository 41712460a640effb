import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from contextlib import asynccontextmanager
from loanlink.core.config import settings
from loanlink.core.database import Database
from loanlink.core.exceptions import ConfigurationError, configuration_error_handler
from loanlink.modules.auth.router import router as auth_router
from loanlink.modules.users.router import router as users_router
from loanlink.modules.loans.router import router as loans_router
from loanlink.modules.applications.router import router as applications_router
from loanlink.modules.payments.router import router as payments_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup
    try:
        app.state.db = Database.connect(settings.MONGODB_URI, settings.DATABASE_NAME)
        logger.info(f"Using MongoDB database {settings.DATABASE_NAME}")
    except ConfigurationError as e:
        app.state.db = None
        logger.error(f"Database unavailable: {e}")

    if not settings.ACCESS_TOKEN_SECRET:
        logger.error("ACCESS_TOKEN_SECRET is not set; token endpoints will fail")
    if not settings.STRIPE_SECRET_KEY:
        logger.warning("STRIPE_SECRET_KEY is not set; payment intents will fail")

    yield

    # Shutdown
    if app.state.db is not None:
        await app.state.db.close()


app = FastAPI(
    title="LoanLink API",
    description="Microloan marketplace backend",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ConfigurationError, configuration_error_handler)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(loans_router)
app.include_router(applications_router)
app.include_router(payments_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Root endpoint"""
    return f"{settings.APP_NAME} Server is running"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
