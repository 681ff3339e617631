"""
Turn raw completion text into fully-defaulted records.

Extraction slices the text from the first opening brace/bracket to the
last matching closer and parses it. That is fragile when the model wraps
example JSON in prose, so callers should also ask the provider for JSON
output where it is supported; this module is the fallback path.

Once parsed, every field is coerced: lists that are missing or not lists
become [], numbers that are missing or unusable become 0 (or a fallback
from the request), strings fall back to fixed defaults. The only failure is
finding no JSON at all.
"""
import json
import math
import re
from typing import Any, Optional

from chefgpt.core.exceptions import MalformedResponse
from chefgpt.models.recipe import GenerationRequest, GeneratedRecipe, Macros
from chefgpt.models.meal_plan import MealPlan, MealPlanDay, MealPlanEntry, MealPlanRequest
from chefgpt.models.nutrition import FoodAnalysis, FoodItem


DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_DIFFICULTY = "medium"
DEFAULT_CUISINE = "international"
DEFAULT_MEAL_TYPE = "meal"
DEFAULT_FOOD_NAME = "Unknown food"
DEFAULT_QUANTITY = "1 serving"

_CLOSERS = {"{": "}", "[": "]"}

# Leading number of strings like "12g" or "350 kcal"
_LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


# --- Extraction ---

def extract_json(text: str, allow_array: bool = False) -> Any:
    """
    Parse the first JSON value embedded in free text.

    Args:
        text: Raw completion text
        allow_array: Also accept a top-level array starting with "["

    Returns:
        Parsed dict (or list when allow_array is set)

    Raises:
        MalformedResponse: No opener/closer found or the slice is not JSON
    """
    if not isinstance(text, str):
        raise MalformedResponse("No valid JSON found in response", reason="response is not text")

    openers = "{[" if allow_array else "{"
    positions = [pos for pos in (text.find(ch) for ch in openers) if pos != -1]
    if not positions:
        raise MalformedResponse("No valid JSON found in response", reason="no JSON object in text")

    start = min(positions)
    end = text.rfind(_CLOSERS[text[start]])
    if end < start:
        raise MalformedResponse("No valid JSON found in response", reason="unterminated JSON value")

    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"AI did not return valid JSON: {e.msg}", reason=str(e)) from e
    except (ValueError, RecursionError) as e:
        # Oversized integer literals and runaway nesting
        raise MalformedResponse("AI did not return valid JSON", reason=str(e) or type(e).__name__) from e


# --- Field coercion ---

def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _flatten_item(item: dict) -> str:
    """{"name": "egg", "amount": 2, "unit": "large"} -> "2 large egg"."""
    name = _scalar_text(item.get("name") or item.get("item"))
    if not name:
        return ""
    parts = [_scalar_text(item.get(key)) for key in ("amount", "quantity", "unit")]
    return " ".join([p for p in parts if p] + [name])


def to_list(value: Any) -> list[str]:
    """
    Lists pass through as strings; anything else becomes [].

    Objects with a name are flattened to "amount unit name"; other
    containers and nulls are dropped.
    """
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        text = _flatten_item(item) if isinstance(item, dict) else _scalar_text(item)
        if text:
            items.append(text)
    return items


def to_number(value: Any, fallback: float = 0) -> float:
    """Numbers and numeric strings ("12", "12g") pass; anything else is the fallback."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return fallback
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return fallback
        number = float(match.group(0))
    else:
        return fallback
    if math.isnan(number) or math.isinf(number):
        return fallback
    return number


def to_int(value: Any, fallback: int = 0) -> int:
    return int(round(to_number(value, fallback)))


def to_non_negative(value: Any, fallback: float = 0) -> float:
    return max(0.0, to_number(value, fallback))


def to_str(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def coerce_macros(value: Any) -> Macros:
    """Missing or partial macro objects fill in with zeros."""
    data = _as_dict(value)
    return Macros(
        protein=to_non_negative(data.get("protein")),
        carbs=to_non_negative(data.get("carbs")),
        fat=to_non_negative(data.get("fat")),
        fiber=to_non_negative(data.get("fiber")),
    )


def coerce_recipe(data: Any, req: Optional[GenerationRequest] = None) -> GeneratedRecipe:
    """
    Coerce a parsed recipe object into a GeneratedRecipe.

    The request, when given, supplies fallbacks for cook time, servings,
    difficulty and cuisine.
    """
    data = _as_dict(data)
    cook_fallback = req.cookingTime if req and req.cookingTime is not None else 0
    servings_fallback = req.servings if req and req.servings is not None else 0
    difficulty_default = to_str(req.difficulty, DEFAULT_DIFFICULTY) if req else DEFAULT_DIFFICULTY
    cuisine_default = to_str(req.cuisine, DEFAULT_CUISINE) if req else DEFAULT_CUISINE

    return GeneratedRecipe(
        title=to_str(data.get("title"), DEFAULT_TITLE),
        description=to_str(data.get("description"), ""),
        ingredients=to_list(data.get("ingredients")),
        instructions=to_list(data.get("instructions")),
        prepTime=max(0, to_int(data.get("prepTime"))),
        cookTime=max(0, to_int(data.get("cookTime"), cook_fallback)),
        servings=max(0, to_int(data.get("servings"), servings_fallback)),
        calories=max(0, to_int(data.get("calories"))),
        macros=coerce_macros(data.get("macros")),
        tags=to_list(data.get("tags")),
        difficulty=to_str(data.get("difficulty"), difficulty_default),
        cuisine=to_str(data.get("cuisine"), cuisine_default),
        tips=to_list(data.get("tips")),
    )


def coerce_meal_plan_day(data: Any, index: int, calorie_fallback: int = 0) -> MealPlanDay:
    data = _as_dict(data)
    snacks = data.get("snacks")
    return MealPlanDay(
        date=to_str(data.get("date"), f"Day {index + 1}"),
        breakfast=coerce_recipe(data.get("breakfast")),
        lunch=coerce_recipe(data.get("lunch")),
        dinner=coerce_recipe(data.get("dinner")),
        snacks=[coerce_recipe(s) for s in snacks] if isinstance(snacks, list) else [],
        totalCalories=max(0, to_int(data.get("totalCalories"), calorie_fallback)),
        totalProtein=to_non_negative(data.get("totalProtein")),
        totalCarbs=to_non_negative(data.get("totalCarbs")),
        totalFat=to_non_negative(data.get("totalFat")),
    )


def coerce_meal_plan_days(data: Any, calorie_fallback: int = 0) -> list[MealPlanDay]:
    """Every element becomes a day, so the day count always matches the input."""
    if not isinstance(data, list):
        return []
    return [coerce_meal_plan_day(day, i, calorie_fallback) for i, day in enumerate(data)]


def _fold_days(days: list[MealPlanDay]) -> MealPlan:
    """Build a plan from per-day summaries; plan totals are daily averages."""
    meals = []
    for i, day in enumerate(days, start=1):
        meals.append(MealPlanEntry(day=i, mealType="breakfast", recipe=day.breakfast))
        meals.append(MealPlanEntry(day=i, mealType="lunch", recipe=day.lunch))
        meals.append(MealPlanEntry(day=i, mealType="dinner", recipe=day.dinner))
        for snack in day.snacks:
            meals.append(MealPlanEntry(day=i, mealType="snack", recipe=snack))

    count = len(days) or 1
    # Days carry no fiber total
    fiber = sum(m.recipe.macros.fiber for m in meals) / count
    return MealPlan(
        totalCalories=round(sum(d.totalCalories for d in days) / count),
        dailyMacros=Macros(
            protein=sum(d.totalProtein for d in days) / count,
            carbs=sum(d.totalCarbs for d in days) / count,
            fat=sum(d.totalFat for d in days) / count,
            fiber=fiber,
        ),
        meals=meals,
        days=days,
    )


def coerce_meal_plan(data: Any, req: Optional[MealPlanRequest] = None) -> MealPlan:
    """
    Coerce a parsed meal plan (object or day array) into a MealPlan.

    A missing calorie total, for the plan or for a single day, falls back
    to the requested target calories.
    """
    calorie_fallback = req.targetCalories if req and req.targetCalories is not None else 0
    if isinstance(data, list):
        return _fold_days(coerce_meal_plan_days(data, calorie_fallback))

    data = _as_dict(data)

    meals = []
    raw_meals = data.get("meals")
    if isinstance(raw_meals, list):
        for i, raw in enumerate(raw_meals):
            entry = _as_dict(raw)
            meals.append(MealPlanEntry(
                day=max(1, to_int(entry.get("day"), i + 1)),
                mealType=to_str(entry.get("mealType"), DEFAULT_MEAL_TYPE),
                recipe=coerce_recipe(entry.get("recipe")),
            ))

    return MealPlan(
        totalCalories=max(0, to_int(data.get("totalCalories"), calorie_fallback)),
        dailyMacros=coerce_macros(data.get("dailyMacros")),
        meals=meals,
        shoppingList=to_list(data.get("shoppingList")),
        tips=to_list(data.get("tips")),
        days=coerce_meal_plan_days(data.get("days"), calorie_fallback),
    )


def coerce_food_item(data: Any) -> FoodItem:
    data = _as_dict(data)
    quantity = data.get("quantity")
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
        quantity = str(quantity)
    return FoodItem(
        name=to_str(data.get("name"), DEFAULT_FOOD_NAME),
        quantity=to_str(quantity, DEFAULT_QUANTITY),
        calories=max(0, to_int(data.get("calories"))),
        macros=coerce_macros(data.get("macros")),
    )


def coerce_food_analysis(data: Any) -> FoodAnalysis:
    data = _as_dict(data)
    foods = data.get("foods")
    confidence = to_number(data.get("confidence"))
    return FoodAnalysis(
        foods=[coerce_food_item(f) for f in foods] if isinstance(foods, list) else [],
        totalCalories=max(0, to_int(data.get("totalCalories"))),
        totalMacros=coerce_macros(data.get("totalMacros")),
        confidence=min(1.0, max(0.0, confidence)),
    )


# --- Text entry points ---

def _expect_object(value: Any, kind: str) -> dict:
    if not isinstance(value, dict):
        raise MalformedResponse(
            f"AI did not return a JSON object for {kind}",
            reason=f"expected object, got {type(value).__name__}",
        )
    return value


def normalize_recipe(text: str, req: Optional[GenerationRequest] = None) -> GeneratedRecipe:
    """Extract and coerce a recipe from completion text."""
    return coerce_recipe(_expect_object(extract_json(text), "recipe"), req)


def normalize_meal_plan(text: str, req: Optional[MealPlanRequest] = None) -> MealPlan:
    """Extract and coerce a meal plan; accepts an object or a day array."""
    return coerce_meal_plan(extract_json(text, allow_array=True), req)


def normalize_meal_plan_days(text: str) -> list[MealPlanDay]:
    """Extract a day-array meal plan, preserving the number of days."""
    data = extract_json(text, allow_array=True)
    if isinstance(data, dict):
        data = data.get("days")
    if not isinstance(data, list):
        raise MalformedResponse(
            "AI did not return a list of meal plan days",
            reason="expected array of days",
        )
    return coerce_meal_plan_days(data)


def normalize_food_analysis(text: str) -> FoodAnalysis:
    """Extract and coerce a food photo analysis."""
    return coerce_food_analysis(_expect_object(extract_json(text), "food analysis"))
