"""Visitor Management System – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.middleware.sessions import SessionMiddleware

from visitdesk.config import get_settings
from visitdesk.database import Base, SessionLocal, engine, get_db
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from visitdesk.models import Admin, Visitor, Visit, AppSettings, VisitorReport, SystemLog  # noqa: F401
from visitdesk.routers import (
    admin, analytics, auth, integration, notifications, reports, settings as settings_router, trash, visitors,
)
from visitdesk.services.app_settings import get_or_create_settings
from visitdesk.services.auth import ensure_default_admin
from visitdesk.services.auto_checkout import AutoCheckoutScheduler
from visitdesk.services.errors import VisitDeskError

settings = get_settings()
log = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            ensure_default_admin(db)
            get_or_create_settings(db)
            db.commit()
        finally:
            db.close()
    except Exception as e:
        log.warning("Database startup failed (tables/default admin skipped). Check DATABASE_URL. Error: %s", e)

    scheduler = AutoCheckoutScheduler(
        SessionLocal,
        hour=settings.auto_checkout_hour,
        minute=settings.auto_checkout_minute,
    )
    app.state.auto_checkout = scheduler
    if settings.auto_checkout_enabled:
        scheduler.start()
    yield
    scheduler.shutdown()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age_seconds,
    same_site="strict" if settings.is_production else "lax",
    https_only=settings.is_production,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VisitDeskError)
def visitdesk_error_handler(request: Request, exc: VisitDeskError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(auth.router)
app.include_router(settings_router.router)
app.include_router(visitors.router)
app.include_router(admin.router)
app.include_router(trash.router)
app.include_router(reports.router)
app.include_router(analytics.router)
app.include_router(integration.router)
app.include_router(notifications.router)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.post("/api/seed")
def seed(count: int = Query(50, ge=1, le=1000), db: Session = Depends(get_db)):
    """Dev/demo only: create random visitors and visits."""
    if settings.is_production:
        raise HTTPException(status_code=403, detail="Seed operation not allowed in production")
    from visitdesk.seed import seed_demo_visitors
    seed_demo_visitors(db, count)
    return {"message": f"Database seeded with {count} visitors"}
