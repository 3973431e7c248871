import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CORS_ORIGINS, ENV, IS_DEV, LOG_FILE, LOG_LEVEL
from .database import create_tables
from .errors import TaskboardError
from .logging_setup import setup_logging
from .routers import auth, projects, statistics, tasks, users
from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Taskboard API",
    description="Multi-user project and task tracker with collaborator access control",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _failure(status_code: int, message: str, errors=None, headers=None, error=None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors or None, error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _failure(exc.status_code, exc.message, exc.errors, headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        # Drop the "body"/"query"/"path" prefix so the field name is what the client sent.
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return _failure(400, "Validation error", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if exc.status_code != 404 else "Resource not found"
    return _failure(exc.status_code, str(message), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _failure(500, "Internal server error", error=str(exc) if IS_DEV else None)


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
app.include_router(statistics.router, prefix="/api/statistics", tags=["statistics"])


# Create tables on startup
@app.on_event("startup")
def on_startup():
    setup_logging(level=LOG_LEVEL, log_file=LOG_FILE)
    create_tables()
    logger.info("Taskboard API started env=%s", ENV)


@app.get("/")
def read_root():
    return {"success": True, "message": "Taskboard API"}


@app.get("/health")
def health_check():
    return {"success": True, "message": "Server is running", "status": "healthy"}
