"""
Food analysis and calorie target routes.
"""
import time
from fastapi import APIRouter, HTTPException, Depends, Request

from chefgpt.models.nutrition import (
    CalorieTargetAPIResponse,
    CalorieTargetRequest,
    FoodAnalysisAPIResponse,
    FoodAnalysisRequest,
)
from chefgpt.services import calorie_calculator, image_service
from chefgpt.services.chef_service import ChefService
from chefgpt.core.config import settings
from chefgpt.core.deps import get_chef_service
from chefgpt.core.exceptions import MalformedResponse, UpstreamFailure
from chefgpt.core.logger import log_request, log_response, log_error
from chefgpt.core.auth import verify_internal_secret
from chefgpt.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])


@router.post("/analyze-food", response_model=FoodAnalysisAPIResponse)
@limiter.limit(settings.RATE_LIMIT_GENERATION)
async def analyze_food(
    request: Request,
    req: FoodAnalysisRequest,
    chef: ChefService = Depends(get_chef_service)
):
    """
    Analyze a food photo for calories and macros.

    Accepts an image URL or an inline base64 image, re-encodes it as
    JPEG and asks the model for a per-item breakdown.
    """
    log_request("/analyze-food")
    started = time.perf_counter()

    # Load image
    try:
        if req.imageBase64:
            image_bytes = image_service.decode_base64_image(req.imageBase64)
        else:
            image_bytes = await image_service.download_image(req.imageUrl)
        image_base64 = image_service.image_to_base64(image_service.prepare_image(image_bytes))
    except Exception as e:
        log_error("Image download", e)
        raise HTTPException(status_code=400, detail="Could not download or process image")

    # Analyze with AI
    try:
        analysis = await chef.analyze_food(image_base64, req.cuisine, req.mealType)
        log_response("/analyze-food", "success", (time.perf_counter() - started) * 1000)
        return {"status": "success", "analysis": analysis}
    except MalformedResponse as e:
        log_error("Food analysis", e)
        raise HTTPException(status_code=502, detail=f"AI generation failed to produce valid JSON: {e.reason}")
    except UpstreamFailure as e:
        log_error("Food analysis", e)
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        log_error("Food analysis", e)
        raise HTTPException(status_code=500, detail="Food analysis failed")


@router.post("/calorie-target", response_model=CalorieTargetAPIResponse)
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def calorie_target(request: Request, req: CalorieTargetRequest):
    """
    Daily calorie target from Mifflin-St Jeor BMR and activity level.

    An explicit override skips the formula.
    """
    log_request("/calorie-target")

    try:
        target = calorie_calculator.calculate_calorie_target(req)
    except ValueError as e:
        log_error("Calorie target", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "target": target}
