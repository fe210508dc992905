"""
Meal planner: FastAPI backend for AI-generated weekly dinner plans.

Run with: uvicorn meal_planner.main:app --reload

Architecture:
- Forwards prompts to OpenAI with a fixed meal JSON schema, retrying once on bad output
- Conversation history travels with each request; the server keeps no session state
- Merges meal ingredients into a grocery list
- Optionally persists weekly plans to Supabase
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meal_planner.config import get_settings
from meal_planner.errors import MealPlannerError
from meal_planner.api import health, meals
from meal_planner.api import grocery as grocery_api
from meal_planner.api import plans as plans_api

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    logger.info("Starting meal planner backend...")

    if not settings.openai_configured:
        logger.warning("OPENAI_API_KEY not set - meal generation will fail!")
    if settings.persistence_enabled:
        logger.info("Supabase configured - plan persistence enabled")
    else:
        logger.info("Supabase not configured - plan persistence disabled")

    yield

    logger.info("Shutting down meal planner backend...")


app = FastAPI(
    title="meal-planner",
    description="AI meal planning API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS - allow frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MealPlannerError)
async def meal_planner_error_handler(request: Request, exc: MealPlannerError):
    """Render domain errors as ``{"error": message}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same 400 shape as prompt checks."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first["loc"] if p != "body")
        message = f"{location}: {first['msg']}" if location else first["msg"]
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(meals.router)  # /generate-meals, /reroll-meal, /meal-poc
app.include_router(grocery_api.router)  # /grocery-list
app.include_router(plans_api.router)  # /api/plans


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "meal-planner",
        "version": "0.1.0",
        "description": "AI meal planning API with grocery lists and weekly plan storage",
        "docs": "/docs",
        "endpoints": {
            "health": "/health",
            "generate-meals": "/generate-meals",
            "reroll-meal": "/reroll-meal",
            "meal-poc": "/meal-poc",
            "grocery-list": "/grocery-list",
            "plans": "/api/plans",
        },
        "persistence_enabled": settings.persistence_enabled,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "meal_planner.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=not settings.is_production,
    )
