# FastAPI entry point; wires routers, error handlers and database startup
# app/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.endpoints import (
    mentor as mentor_router,
    history as history_router,
    feedback as feedback_router,
)
from app.services.completion_client import completion_client
from app.utils.db import init_models
from app.utils.errors import MentorError
from app.utils.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info("Coding Mentor API starting up...")

    # Create database tables if they don't exist
    await init_models()

    if not completion_client.is_configured:
        logger.warning("OPENAI_API_KEY is not set; AI endpoints will answer 'AI service not configured'.")

    logger.info("Startup complete.")
    yield
    # On shutdown
    logger.info("Coding Mentor API shutting down...")

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Coding Mentor API",
    description="AI-generated code reviews, hints, debugging help and learning roadmaps.",
    version="1.0.0",
    lifespan=lifespan
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to your frontend's domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error Handlers: every error body is {"message": ...} ---
@app.exception_handler(MentorError)
async def mentor_error_handler(request: Request, exc: MentorError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    location = ".".join(str(part) for part in errors[0].get("loc", ())) if errors else ""
    logger.debug(f"Rejected request to {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"message": f"{location}: {message}" if location else message})

# --- API Routers ---
app.include_router(mentor_router.router, tags=["AI Assistance"])
app.include_router(history_router.router, tags=["History"])
app.include_router(feedback_router.router, tags=["Feedback"])

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {"message": "Welcome to the Coding Mentor API"}
