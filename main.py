import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.config.settings import settings
from taskboard.database import init_db
from taskboard.logging_setup import setup_logging
from taskboard.routers import auth, tasks
from taskboard.utils.auth import require_bearer_token
from taskboard.utils.errors import register_exception_handlers

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("taskboard.main")

app = FastAPI(title="Task Management API")

# Token gate for /api/tasks; added before CORS so CORS stays outermost
app.middleware("http")(require_bearer_token)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Route registration
app.include_router(auth.router)
app.include_router(tasks.router)


# Startup and shutdown events
@app.on_event("startup")
def startup_event():
    """Create missing tables before the first request is served"""
    logger.info(f"Starting Task Management API ({settings.ENVIRONMENT})")
    if settings.uses_default_secret() and not settings.is_development():
        logger.warning("SECRET_KEY is not set; tokens are signed with the development placeholder")
    init_db()


# Root route
@app.get("/")
def read_root():
    return {
        "success": True,
        "message": "Task Management API is running",
        "endpoints": {
            "auth": {
                "register": "POST /api/auth/register",
                "login": "POST /api/auth/login",
                "me": "GET /api/auth/me (Protected)",
            },
            "tasks": {
                "getAll": "GET /api/tasks (Protected)",
                "getOne": "GET /api/tasks/:id (Protected)",
                "create": "POST /api/tasks (Protected)",
                "update": "PUT /api/tasks/:id (Protected)",
                "delete": "DELETE /api/tasks/:id (Protected)",
                "stats": "GET /api/tasks/stats (Protected)",
            },
        },
    }


@app.get("/health")
def health():
    return {"status": "ok"}
