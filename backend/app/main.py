# Estate Leads CRM backend entrypoint.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.settings import get_settings
from backend.app.core.logging import configure_logging
from backend.app.api import register
from backend.app.api import login
from backend.app.api import admin_users
from backend.app.api import leads
from backend.app.api import feedback
from backend.app.api import search
from backend.app.api import units
from backend.app.api import projects
from backend.app.api import settings as account_settings
from backend.app.core.dev_seed import ensure_default_dev_users
from backend.app.db.session import SessionLocal

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(admin_users.router)
app.include_router(admin_users.sales_router)
app.include_router(leads.router)
app.include_router(feedback.router)
app.include_router(search.router)
app.include_router(units.router)
app.include_router(projects.router)
app.include_router(account_settings.router)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred"})


@app.get("/")
def read_root():
    return {"app": "Estate Leads CRM backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def seed_default_dev_users():
    if settings.environment != "development":
        return
    db = SessionLocal()
    try:
        ensure_default_dev_users(db)
    finally:
        db.close()
