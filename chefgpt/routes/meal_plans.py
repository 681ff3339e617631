"""
Meal plan generation routes.
"""
import time
from fastapi import APIRouter, HTTPException, Depends, Request

from chefgpt.models.meal_plan import MealPlanRequest, MealPlanAPIResponse
from chefgpt.services.chef_service import ChefService
from chefgpt.core.config import settings
from chefgpt.core.deps import get_chef_service
from chefgpt.core.exceptions import MalformedResponse, UpstreamFailure
from chefgpt.core.logger import log_request, log_response, log_error
from chefgpt.core.auth import verify_internal_secret
from chefgpt.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])


@router.post("/generate-meal-plan", response_model=MealPlanAPIResponse)
@limiter.limit(settings.RATE_LIMIT_GENERATION)
async def generate_meal_plan(
    request: Request,
    req: MealPlanRequest,
    chef: ChefService = Depends(get_chef_service)
):
    """
    Generate a multi-day meal plan with a shopping list.

    The daily calorie target is the explicit targetCalories, or computed
    from userStats and activityLevel when those are complete.
    """
    log_request("/generate-meal-plan")
    started = time.perf_counter()

    try:
        plan = await chef.generate_meal_plan(req)
        log_response("/generate-meal-plan", "success", (time.perf_counter() - started) * 1000)
        return {"status": "success", "plan": plan}
    except MalformedResponse as e:
        log_error("Meal plan generation", e)
        raise HTTPException(status_code=502, detail=f"AI generation failed to produce valid JSON: {e.reason}")
    except UpstreamFailure as e:
        log_error("Meal plan generation", e)
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        log_error("Meal plan generation", e)
        raise HTTPException(status_code=500, detail="Meal plan generation failed")
