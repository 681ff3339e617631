"""
ChefGPT generation service - Main Entry Point

LLM-backed recipe, meal plan and food photo analysis generator.
"""
import os
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from chefgpt.core.config import settings
from chefgpt.core.logger import logger
from chefgpt.core.limiter import limiter
from chefgpt.routes import recipes, meal_plans, nutrition
from chefgpt.services.chef_service import ChefService
from chefgpt.services.completion_client import CompletionClient


# Validate configuration on startup
try:
    settings.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    raise


# Create FastAPI app
app = FastAPI(
    title="ChefGPT Generation Service",
    description="AI recipe, meal plan and nutrition estimate generator",
    version="1.0.0"
)

# Attach rate limiter and its error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# One completion client per process, handed to routes through get_chef_service
app.state.chef_service = ChefService(CompletionClient.from_settings(settings))


app.include_router(recipes.router, tags=["Recipes"])
app.include_router(meal_plans.router, tags=["Meal Plans"])
app.include_router(nutrition.router, tags=["Nutrition"])


@app.get("/")
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
def root(request: Request):
    """Health check endpoint."""
    return {"message": "ChefGPT generation service running"}


@app.get("/health")
def health():
    """
    Detailed health status.
    Returns 'degraded' if required environment variables are missing.
    """
    required_vars = ["OPENAI_API_KEY", "INTERNAL_API_SECRET"]
    missing = [v for v in required_vars if not os.environ.get(v)]

    if missing:
        return JSONResponse(
            status_code=200,
            content={
                "status": "degraded",
                "service": "chefgpt",
                "version": "1.0.0",
                "missing_config": missing,
                "message": f"Missing required environment variables: {', '.join(missing)}"
            }
        )

    return {
        "status": "healthy",
        "service": "chefgpt",
        "version": "1.0.0",
        "model": settings.OPENAI_MODEL
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "chefgpt.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
