"""
Grow Ledger - FastAPI Backend
Hauptanwendung und Router-Konfiguration
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import engine, Base
from app.api.v1 import rooms, strains, batches, costs, dashboard

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup und Shutdown Events"""
    # Startup: Tabellen erstellen (für Entwicklung)
    # In Produktion: Alembic Migrations verwenden
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## Grow Ledger API

    Chargen-, Ernte- und Kostenverwaltung für Indoor-Anbau.

    ### Features
    - **Räume**: Lampenkapazität und Belegung
    - **Chargen**: Sortenzuteilung, Chargencodes, Statuswechsel
    - **Ernte**: Erfassung nach Größenklassen, Wirtschaftlichkeit
    - **Kosten**: Kostenbuchungen, Cost-to-Grow, Dashboard
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health Check
@app.get("/health", tags=["System"])
async def health_check():
    """
    Systemstatus prüfen.
    Wird von Docker für Health Checks verwendet.
    """
    return {"status": "healthy", "version": settings.app_version}


@app.get("/", tags=["System"])
async def root():
    """API Root - Zeigt Willkommensnachricht"""
    return {
        "message": "Willkommen bei Grow Ledger",
        "version": settings.app_version,
        "docs": "/docs",
    }


# API Router einbinden
app.include_router(
    rooms.router,
    prefix="/api/v1/rooms",
    tags=["Räume"]
)

app.include_router(
    strains.router,
    prefix="/api/v1/strains",
    tags=["Sorten"]
)

app.include_router(
    batches.router,
    prefix="/api/v1/batches",
    tags=["Chargen"]
)

app.include_router(
    costs.router,
    prefix="/api/v1/cost-entries",
    tags=["Kosten"]
)

app.include_router(
    dashboard.router,
    prefix="/api/v1/dashboard",
    tags=["Dashboard"]
)


# Exception Handler
@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request, exc):
    """Nicht abgefangene Datenbankfehler"""
    logger.error(f"Datenbankfehler bei {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Datenbankfehler. Bitte erneut versuchen.",
            "error": str(exc) if settings.debug else None
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Globaler Exception Handler"""
    logger.exception(f"Unerwarteter Fehler bei {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Ein interner Fehler ist aufgetreten.",
            "error": str(exc) if settings.debug else None
        }
    )
