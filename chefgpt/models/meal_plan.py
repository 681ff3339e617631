"""
Pydantic models for meal-plan generation.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from chefgpt.models.recipe import GeneratedRecipe, Macros


class UserStats(BaseModel):
    """Body stats used to size the plan."""

    age: Optional[int] = Field(None, ge=10, le=120)
    gender: Optional[str] = Field(None, examples=["male", "female"])
    weight: Optional[float] = Field(None, ge=20, le=400, description="Weight in kg")
    height: Optional[float] = Field(None, ge=50, le=300, description="Height in cm")


class MealPlanPreferences(BaseModel):
    cuisines: list[str] = []
    excludeIngredients: list[str] = []


class MealPlanRequest(BaseModel):
    """Request model for meal-plan generation."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "days": 3,
                "goal": "lose_weight",
                "dietaryRestrictions": ["gluten-free"],
                "activityLevel": "lightly_active",
                "userStats": {"age": 30, "gender": "female", "weight": 65, "height": 168}
            }
        },
    )

    days: int = Field(default=7, ge=1, le=14)
    goal: Optional[str] = Field(None, examples=["eat_healthy", "lose_weight", "gain_muscle", "maintain_weight"])
    dietaryRestrictions: list[str] = Field(default=[])
    activityLevel: Optional[str] = Field(None, examples=["sedentary", "moderately_active"])
    userStats: Optional[UserStats] = None
    preferences: Optional[MealPlanPreferences] = None
    targetCalories: Optional[int] = Field(None, ge=800, le=6000, description="Overrides the computed target")


class MealPlanEntry(BaseModel):
    """One (day, meal type, recipe) slot of a plan."""

    day: int
    mealType: str = "meal"
    recipe: GeneratedRecipe


class MealPlanDay(BaseModel):
    """Per-day summary, present when the model answers day by day."""

    date: str
    breakfast: GeneratedRecipe
    lunch: GeneratedRecipe
    dinner: GeneratedRecipe
    snacks: list[GeneratedRecipe] = []
    totalCalories: int = 0
    totalProtein: float = 0
    totalCarbs: float = 0
    totalFat: float = 0


class MealPlan(BaseModel):
    """Fully-defaulted meal plan produced by the normalizer."""

    totalCalories: int = 0
    dailyMacros: Macros = Field(default_factory=Macros)
    meals: list[MealPlanEntry] = []
    shoppingList: list[str] = []
    tips: list[str] = []
    days: list[MealPlanDay] = []


class MealPlanAPIResponse(BaseModel):
    """API wrapper response for the meal-plan endpoint."""

    status: str = "success"
    plan: MealPlan
