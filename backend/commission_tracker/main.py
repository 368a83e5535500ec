import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from commission_tracker.core.config import settings
from commission_tracker.api import statements, carriers, reps, dashboard
from commission_tracker.api import parse as parse_api
from commission_tracker.api import assistant as assistant_api

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

DEMO_REPS = [
    {"name": "Alex Morgan", "email": "alex.morgan@example.com", "commission_rate": Decimal("0.1200")},
    {"name": "Jordan Lee", "email": "jordan.lee@example.com", "commission_rate": Decimal("0.1000")},
    {"name": "Riley Chen", "email": "riley.chen@example.com", "commission_rate": Decimal("0.1500")},
    {"name": "Sam Patel", "email": "sam.patel@example.com", "commission_rate": Decimal("0.0800")},
]


def init_database():
    """Create tables and seed demo reps on an empty database."""
    from commission_tracker.core.database import engine, Base, SessionLocal
    from commission_tracker.models import Statement, Carrier, Rep  # noqa: F401 - register tables

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")

    if not settings.SEED_DEMO_DATA:
        return

    db = SessionLocal()
    try:
        if db.query(Rep).count() == 0:
            for rep in DEMO_REPS:
                db.add(Rep(**rep))
            db.commit()
            logger.info(f"Seeded {len(DEMO_REPS)} demo reps")
    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        db.rollback()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run database init on startup."""
    init_database()
    yield


# Disable API docs in production
docs_url = "/docs" if settings.ENVIRONMENT != "production" else None
redoc_url = "/redoc" if settings.ENVIRONMENT != "production" else None

app = FastAPI(
    title=settings.APP_NAME,
    description="Commission statement upload, parsing and dashboard API",
    version=VERSION,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url,
)


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Every error is JSON ``{error}``; the parse endpoint also carries ``success: false``."""
    content = {"error": message}
    if request.url.path.startswith(parse_api.router.prefix):
        content = {"success": False, "error": message}
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return error_response(request, 500, "Internal server error")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return error_response(request, exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return error_response(request, 400, "Invalid request body")


# CORS - local dev frontend + optional deployed frontend
allowed_origins = [
    "http://localhost:3000",
]
frontend_url = settings.FRONTEND_URL
if frontend_url and frontend_url not in allowed_origins:
    allowed_origins.append(frontend_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "commission-statement-tracker", "version": VERSION}


# Include routers
app.include_router(statements.router)
app.include_router(carriers.router)
app.include_router(reps.router)
app.include_router(parse_api.router)
app.include_router(dashboard.router)
app.include_router(assistant_api.router)
