"""
Generation pipeline: build prompt, call the completion service once,
normalize the answer.
"""
from typing import Optional

from chefgpt.core.config import settings
from chefgpt.core.logger import log_generation
from chefgpt.models.recipe import GenerationRequest, GeneratedRecipe
from chefgpt.models.meal_plan import MealPlan, MealPlanRequest
from chefgpt.models.nutrition import FoodAnalysis
from chefgpt.services import normalizer, prompt_builder
from chefgpt.services.completion_client import CompletionClient


class ChefService:
    """Stateless orchestrator; one instance can serve concurrent requests."""

    def __init__(self, client: CompletionClient):
        self.client = client

    async def generate_recipe(self, req: GenerationRequest) -> GeneratedRecipe:
        """
        Generate one recipe for the request's chef mode.

        Raises:
            UpstreamFailure: Completion call failed
            MalformedResponse: Response held no usable JSON
        """
        system_prompt = prompt_builder.get_persona(req.chefMode)
        user_prompt = prompt_builder.build_recipe_user_prompt(req)

        text = await self.client.complete(
            system_prompt,
            user_prompt,
            temperature=settings.TEMPERATURE_CREATIVE
        )
        recipe = normalizer.normalize_recipe(text, req)
        log_generation("recipe", f"'{recipe.title}' (mode={req.chefMode or 'generic'})")
        return recipe

    async def generate_meal_plan(self, req: MealPlanRequest) -> MealPlan:
        """Generate a multi-day meal plan."""
        system_prompt, user_prompt = prompt_builder.build_meal_plan_prompt(req)

        text = await self.client.complete(
            system_prompt,
            user_prompt,
            temperature=settings.TEMPERATURE_CREATIVE
        )
        plan = normalizer.normalize_meal_plan(text, req)
        log_generation("meal plan", f"{req.days} days, {len(plan.meals)} meals")
        return plan

    async def analyze_food(
        self,
        image_base64: str,
        cuisine: Optional[str] = None,
        meal_type: Optional[str] = None
    ) -> FoodAnalysis:
        """Estimate foods, calories and macros in a photo."""
        system_prompt, user_prompt = prompt_builder.build_food_analysis_prompt(cuisine, meal_type)

        text = await self.client.complete_with_image(
            system_prompt,
            user_prompt,
            image_base64,
            temperature=settings.TEMPERATURE_ANALYSIS
        )
        analysis = normalizer.normalize_food_analysis(text)
        log_generation("food analysis", f"{len(analysis.foods)} items, {analysis.totalCalories} kcal")
        return analysis
