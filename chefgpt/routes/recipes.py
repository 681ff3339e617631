"""
Recipe generation routes.
"""
import time
from fastapi import APIRouter, HTTPException, Depends, Request

from chefgpt.models.recipe import GenerationRequest, RecipeAPIResponse
from chefgpt.services.chef_service import ChefService
from chefgpt.core.config import settings
from chefgpt.core.deps import get_chef_service
from chefgpt.core.exceptions import MalformedResponse, UpstreamFailure
from chefgpt.core.logger import log_request, log_response, log_error
from chefgpt.core.auth import verify_internal_secret
from chefgpt.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])


@router.post("/generate-recipe", response_model=RecipeAPIResponse)
@limiter.limit(settings.RATE_LIMIT_GENERATION)
async def generate_recipe(
    request: Request,
    req: GenerationRequest,
    chef: ChefService = Depends(get_chef_service)
):
    """
    Generate a recipe in one of the chef modes.

    pantry, master, macros, mixology and meal-plan each select a different
    persona; every other field is optional context.
    """
    log_request("/generate-recipe")
    started = time.perf_counter()

    try:
        recipe = await chef.generate_recipe(req)
        log_response("/generate-recipe", "success", (time.perf_counter() - started) * 1000)
        return {"status": "success", "recipe": recipe}
    except MalformedResponse as e:
        log_error("Recipe generation", e)
        raise HTTPException(status_code=502, detail=f"AI generation failed to produce valid JSON: {e.reason}")
    except UpstreamFailure as e:
        log_error("Recipe generation", e)
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        log_error("Recipe generation", e)
        raise HTTPException(status_code=500, detail="Recipe generation failed")
