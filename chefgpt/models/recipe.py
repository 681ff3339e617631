"""
Pydantic models for recipe generation requests and generated recipes.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ChefMode(str, Enum):
    """Persona/strategy selector sent with every recipe request."""

    PANTRY = "pantry"
    MASTER = "master"
    MACROS = "macros"
    MIXOLOGY = "mixology"
    MEAL_PLAN = "meal-plan"


class MacroTargets(BaseModel):
    """Per-serving nutrition targets the recipe should hit."""

    model_config = ConfigDict(frozen=True)

    calories: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0, description="Grams")
    carbs: Optional[float] = Field(None, ge=0, description="Grams")
    fat: Optional[float] = Field(None, ge=0, description="Grams")


class GenerationRequest(BaseModel):
    """Request model for recipe generation. Every field is optional."""

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "chefMode": "pantry",
                "ingredients": ["egg", "spinach"],
                "mealType": "breakfast",
                "dietaryRestrictions": ["vegetarian"],
                "cookingTime": 20,
                "servings": 2
            }
        },
    )

    chefMode: Optional[ChefMode] = Field(None, description="Chef persona to use")
    ingredients: list[str] = Field(default=[], description="Ingredients on hand")
    mealType: Optional[str] = Field(None, examples=["breakfast", "lunch", "dinner", "snack"])
    cuisine: Optional[str] = Field(None, max_length=100)
    dietaryRestrictions: list[str] = Field(default=[])
    cookingTime: Optional[int] = Field(None, ge=1, le=600, description="Maximum minutes")
    servings: Optional[int] = Field(None, ge=1, le=50)
    difficulty: Optional[str] = Field(None, examples=["easy", "medium", "hard"])
    equipment: list[str] = Field(default=[], description="Available kitchen equipment")
    goal: Optional[str] = Field(None, max_length=200)
    macroTargets: Optional[MacroTargets] = None


class Macros(BaseModel):
    """Macro breakdown in grams; every value is non-negative."""

    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class GeneratedRecipe(BaseModel):
    """Fully-defaulted recipe produced by the normalizer."""

    title: str = "Untitled Recipe"
    description: str = ""
    ingredients: list[str] = []
    instructions: list[str] = []
    prepTime: int = 0
    cookTime: int = 0
    servings: int = 0
    calories: int = 0
    macros: Macros = Field(default_factory=Macros)
    tags: list[str] = []
    difficulty: str = "medium"
    cuisine: str = "international"
    tips: list[str] = []


class RecipeAPIResponse(BaseModel):
    """API wrapper response for the recipe endpoint."""

    status: str = "success"
    recipe: GeneratedRecipe
