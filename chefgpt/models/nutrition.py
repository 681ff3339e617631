"""
Pydantic models for food photo analysis and calorie targets.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from chefgpt.models.recipe import Macros


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


# --- Food Analysis Models ---

class FoodAnalysisRequest(BaseModel):
    """Request model for food image analysis. Exactly one image source is needed."""

    imageUrl: Optional[str] = None
    imageBase64: Optional[str] = Field(None, description="Raw base64, no data: prefix")
    cuisine: Optional[str] = Field(None, description="Cuisine/context hint")
    mealType: Optional[str] = None

    @model_validator(mode="after")
    def check_image_source(self):
        if not self.imageUrl and not self.imageBase64:
            raise ValueError("Either imageUrl or imageBase64 is required")
        return self


class FoodItem(BaseModel):
    """Single food detected in a photo."""

    name: str = "Unknown food"
    quantity: str = "1 serving"
    calories: int = 0
    macros: Macros = Field(default_factory=Macros)


class FoodAnalysis(BaseModel):
    """Fully-defaulted food analysis produced by the normalizer."""

    foods: list[FoodItem] = []
    totalCalories: int = 0
    totalMacros: Macros = Field(default_factory=Macros)
    confidence: float = Field(0, ge=0, le=1)


class FoodAnalysisAPIResponse(BaseModel):
    status: str = "success"
    analysis: FoodAnalysis


# --- Calorie Target Models ---

class CalorieTargetRequest(BaseModel):
    """Biometric inputs for the daily calorie target."""

    sex: Sex
    weight: float = Field(..., ge=20, le=400, description="Weight in kg")
    height: float = Field(..., ge=50, le=300, description="Height in cm")
    age: int = Field(..., ge=10, le=120)
    activityLevel: ActivityLevel = ActivityLevel.SEDENTARY
    override: Optional[int] = Field(None, ge=800, le=6000, description="Skip the formula")


class CalorieTarget(BaseModel):
    """Daily calorie target with the numbers it was derived from."""

    bmr: Optional[float] = None
    activityMultiplier: Optional[float] = None
    dailyCalories: int
    bmi: float
    bmiCategory: str


class CalorieTargetAPIResponse(BaseModel):
    status: str = "success"
    target: CalorieTarget
