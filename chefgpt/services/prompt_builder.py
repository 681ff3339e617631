"""
Prompt construction for recipes, meal plans and food photo analysis.

Every builder is a pure function of its request. Optional fields that are
absent, blank or empty never produce a line in the prompt.
"""
from typing import Optional

from chefgpt.models.recipe import ChefMode, GenerationRequest
from chefgpt.models.meal_plan import MealPlanRequest
from chefgpt.services import calorie_calculator


BASE_PERSONA = (
    "You are a professional chef AI assistant. Create detailed, accurate recipes "
    "with proper nutritional information. Always respond with valid JSON."
)

PERSONAS: dict[str, str] = {
    ChefMode.PANTRY.value: (
        "You are PantryChef - focus on using available ingredients efficiently "
        "to minimize waste."
    ),
    ChefMode.MASTER.value: (
        "You are MasterChef - create restaurant-quality recipes with detailed techniques."
    ),
    ChefMode.MACROS.value: (
        "You are MacrosChef - focus on hitting specific macronutrient targets "
        "precisely while maintaining flavor."
    ),
    ChefMode.MIXOLOGY.value: (
        "You are MixologyMaestro - create creative cocktails and beverages with "
        "proper mixing techniques and balanced proportions."
    ),
    ChefMode.MEAL_PLAN.value: (
        "You are MealPlanChef - create balanced, nutritious meals that fit into "
        "broader multi-meal planning goals."
    ),
}

RECIPE_JSON_SHAPE = """
Respond with JSON ONLY in this exact format:
{
  "title": string,
  "description": string,
  "ingredients": string[],
  "instructions": string[],
  "prepTime": number (minutes),
  "cookTime": number (minutes),
  "servings": number,
  "calories": number (per serving),
  "macros": { "protein": number, "carbs": number, "fat": number, "fiber": number },
  "tags": string[],
  "difficulty": string,
  "cuisine": string,
  "tips": string[]
}"""

MEAL_PLAN_SYSTEM_PROMPT = (
    "You are MealPlanChef, an AI nutritionist and meal planning expert. Create "
    "personalized meal plans based on user goals, dietary restrictions, and "
    "nutritional needs. Always respond with valid JSON."
)

# Share of the daily target per meal
MEAL_CALORIE_SPLIT = [
    ("Breakfast", 25),
    ("Lunch", 35),
    ("Dinner", 30),
    ("Snacks", 10),
]

MEAL_PLAN_JSON_SHAPE = """
Respond with JSON ONLY in this format:
{
  "totalCalories": number (daily),
  "dailyMacros": { "protein": number, "carbs": number, "fat": number, "fiber": number },
  "meals": [
    {
      "day": number,
      "mealType": string,
      "recipe": {
        "title": string,
        "description": string,
        "ingredients": string[],
        "instructions": string[],
        "prepTime": number,
        "cookTime": number,
        "servings": number,
        "calories": number,
        "macros": { "protein": number, "carbs": number, "fat": number, "fiber": number },
        "tags": string[],
        "difficulty": string,
        "cuisine": string
      }
    }
  ],
  "shoppingList": string[],
  "tips": string[]
}"""

FOOD_ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert nutritionist and food analyst. Analyze food images to "
    "identify ingredients, estimate portions, and calculate nutritional "
    "information. Be as accurate as possible with calorie and macro estimations."
)

FOOD_ANALYSIS_JSON_SHAPE = """
Respond with JSON ONLY in this format:
{
  "foods": [
    {
      "name": string,
      "quantity": string,
      "calories": number,
      "macros": { "protein": number, "carbs": number, "fat": number, "fiber": number }
    }
  ],
  "totalCalories": number,
  "totalMacros": { "protein": number, "carbs": number, "fat": number, "fiber": number },
  "confidence": number (0-1)
}"""


def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return any(_present(v) for v in value)
    return True


def _join(items: list) -> str:
    return ", ".join(str(i).strip() for i in items if _present(i))


def _format_number(value: float) -> str:
    return f"{value:g}"


def get_persona(mode: Optional[str]) -> str:
    """
    System instruction for a chef mode.

    Unknown or missing modes fall back to the generic chef persona.
    """
    key = getattr(mode, "value", mode)
    persona = PERSONAS.get(key) if key else None
    if persona is None:
        return BASE_PERSONA
    return f"{BASE_PERSONA} {persona}"


def build_recipe_user_prompt(req: GenerationRequest) -> str:
    """Context lines for each present request field, then the JSON shape."""
    prompt = "Create a recipe with the following requirements:"

    if _present(req.ingredients):
        prompt += f"\n- Use these ingredients: {_join(req.ingredients)}"
    if _present(req.mealType):
        prompt += f"\n- Meal type: {req.mealType}"
    if _present(req.cuisine):
        prompt += f"\n- Cuisine: {req.cuisine}"
    if _present(req.dietaryRestrictions):
        prompt += f"\n- Dietary restrictions: {_join(req.dietaryRestrictions)}"
    if req.cookingTime is not None:
        prompt += f"\n- Maximum cooking time: {req.cookingTime} minutes"
    if req.servings is not None:
        prompt += f"\n- Servings: {req.servings}"
    if _present(req.difficulty):
        prompt += f"\n- Difficulty level: {req.difficulty}"
    if _present(req.equipment):
        prompt += f"\n- Available equipment: {_join(req.equipment)}"
    if _present(req.goal):
        prompt += f"\n- Goal: {req.goal}"

    if req.macroTargets is not None:
        targets = []
        if req.macroTargets.calories is not None:
            targets.append(f"{_format_number(req.macroTargets.calories)} calories")
        if req.macroTargets.protein is not None:
            targets.append(f"{_format_number(req.macroTargets.protein)}g protein")
        if req.macroTargets.carbs is not None:
            targets.append(f"{_format_number(req.macroTargets.carbs)}g carbs")
        if req.macroTargets.fat is not None:
            targets.append(f"{_format_number(req.macroTargets.fat)}g fat")
        if targets:
            prompt += f"\n- Target nutrition per serving: {', '.join(targets)}"

    return prompt + "\n" + RECIPE_JSON_SHAPE


def build_recipe_prompt(req: GenerationRequest) -> str:
    """Full single-string prompt: persona, blank line, user instruction."""
    return f"{get_persona(req.chefMode)}\n\n{build_recipe_user_prompt(req)}"


def _daily_calorie_target(req: MealPlanRequest) -> Optional[int]:
    if req.targetCalories is not None:
        return req.targetCalories

    stats = req.userStats
    if stats is None or None in (stats.gender, stats.weight, stats.height, stats.age):
        return None

    try:
        return calorie_calculator.calculate_daily_calories(
            sex=stats.gender,
            weight_kg=stats.weight,
            height_cm=stats.height,
            age=stats.age,
            activity_level=req.activityLevel or "sedentary",
        )
    except ValueError:
        # Free-text activity level; let the model size the plan itself
        return None


def build_meal_plan_prompt(req: MealPlanRequest) -> tuple[str, str]:
    """
    Build the system and user prompts for a meal plan.

    Returns:
        (system_prompt, user_prompt)
    """
    plan_desc = f"Create a {req.days}-day meal plan with the following requirements:"

    if _present(req.goal):
        plan_desc += f"\n- Goal: {req.goal}"
    if _present(req.dietaryRestrictions):
        plan_desc += f"\n- Dietary restrictions: {_join(req.dietaryRestrictions)}"
    if _present(req.activityLevel):
        plan_desc += f"\n- Activity level: {req.activityLevel}"

    stats = req.userStats
    if stats is not None:
        details = []
        if _present(stats.gender):
            details.append(stats.gender)
        if stats.age is not None:
            details.append(f"{stats.age} years old")
        if stats.height is not None:
            details.append(f"{_format_number(stats.height)}cm")
        if stats.weight is not None:
            details.append(f"{_format_number(stats.weight)}kg")
        if details:
            plan_desc += f"\n- Person details: {', '.join(details)}"

    prefs = req.preferences
    if prefs is not None:
        if _present(prefs.cuisines):
            plan_desc += f"\n- Preferred cuisines: {_join(prefs.cuisines)}"
        if _present(prefs.excludeIngredients):
            plan_desc += f"\n- Never use: {_join(prefs.excludeIngredients)}"

    target = _daily_calorie_target(req)
    if target is not None:
        plan_desc += f"\n- Daily calorie target: {target}"
        plan_desc += "\n\nFor each day, split the calories as:"
        for meal, share in MEAL_CALORIE_SPLIT:
            plan_desc += f"\n- {meal}: {share}% (~{round(target * share / 100)} kcal)"

    plan_desc += (
        "\n\nInclude breakfast, lunch, and dinner for each day. Provide detailed "
        "recipes with ingredients, instructions, prep/cook times, and accurate "
        "nutritional information."
    )

    return MEAL_PLAN_SYSTEM_PROMPT, plan_desc + "\n" + MEAL_PLAN_JSON_SHAPE


def build_food_analysis_prompt(
    cuisine: Optional[str] = None,
    meal_type: Optional[str] = None
) -> tuple[str, str]:
    """
    Build the system and user prompts for food photo analysis.

    Returns:
        (system_prompt, user_prompt)
    """
    prompt = (
        "Analyze this food image and provide detailed nutritional information. "
        "Identify all visible foods, estimate portion sizes, and calculate "
        "calories and macronutrients."
    )
    if _present(cuisine):
        prompt += f"\n- Cuisine/context: {cuisine}"
    if _present(meal_type):
        prompt += f"\n- Meal type: {meal_type}"

    return FOOD_ANALYSIS_SYSTEM_PROMPT, prompt + "\n" + FOOD_ANALYSIS_JSON_SHAPE
