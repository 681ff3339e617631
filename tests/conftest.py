"""
Pytest fixtures for the ChefGPT generation service tests.
"""
import base64
import io
import json
import os

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock
from PIL import Image

# Mock environment variables before importing app
os.environ.setdefault("OPENAI_API_KEY", "test-api-key")
os.environ.setdefault("INTERNAL_API_SECRET", "test-internal-secret")

from chefgpt.main import app
from chefgpt.core.deps import get_chef_service
from chefgpt.core.limiter import limiter
from chefgpt.services.chef_service import ChefService


@pytest.fixture(autouse=True)
def no_rate_limits():
    """Route tests would otherwise trip the per-IP limits."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-Internal-Secret": os.environ["INTERNAL_API_SECRET"]}


@pytest.fixture
def mock_completion():
    """Completion client double whose calls return canned text."""
    completion = MagicMock()
    completion.model = "test-model"
    completion.complete = AsyncMock(return_value="{}")
    completion.complete_with_image = AsyncMock(return_value="{}")
    return completion


@pytest.fixture
def chef_service(mock_completion):
    return ChefService(mock_completion)


@pytest.fixture
def override_chef(chef_service):
    """Route requests to a ChefService backed by the mock completion client."""
    app.dependency_overrides[get_chef_service] = lambda: chef_service
    yield chef_service
    app.dependency_overrides.pop(get_chef_service, None)


@pytest.fixture
def sample_recipe_response():
    """Complete recipe JSON as the model would send it."""
    return {
        "title": "Spinach Frittata",
        "description": "Fluffy eggs with wilted spinach",
        "ingredients": ["4 eggs", "2 cups spinach", "1 tbsp olive oil"],
        "instructions": ["Whisk eggs", "Wilt spinach in oil", "Add eggs and bake"],
        "prepTime": 5,
        "cookTime": 15,
        "servings": 2,
        "calories": 240,
        "macros": {"protein": 16, "carbs": 3, "fat": 18, "fiber": 1.5},
        "tags": ["vegetarian", "low-carb"],
        "difficulty": "easy",
        "cuisine": "Italian",
        "tips": ["Use a cast iron pan"]
    }


@pytest.fixture
def sample_meal_plan_response(sample_recipe_response):
    """Object-shaped meal plan JSON."""
    return {
        "totalCalories": 1800,
        "dailyMacros": {"protein": 120, "carbs": 180, "fat": 60, "fiber": 30},
        "meals": [
            {"day": 1, "mealType": "breakfast", "recipe": sample_recipe_response},
            {"day": 1, "mealType": "dinner", "recipe": {"title": "Grilled Salmon"}}
        ],
        "shoppingList": ["eggs", "spinach", "salmon"],
        "tips": ["Prep vegetables on Sunday"]
    }


@pytest.fixture
def sample_food_analysis_response():
    return {
        "foods": [
            {
                "name": "Grilled chicken",
                "quantity": "150g",
                "calories": 250,
                "macros": {"protein": 45, "carbs": 0, "fat": 6, "fiber": 0}
            },
            {
                "name": "Brown rice",
                "quantity": "1 cup",
                "calories": 215,
                "macros": {"protein": 5, "carbs": 45, "fat": 2, "fiber": 3.5}
            }
        ],
        "totalCalories": 465,
        "totalMacros": {"protein": 50, "carbs": 45, "fat": 8, "fiber": 3.5},
        "confidence": 0.8
    }


@pytest.fixture
def as_text():
    """Wrap a payload in chatty prose the way models often do."""
    def _wrap(payload) -> str:
        return f"Sure! Here is your result:\n```json\n{json.dumps(payload)}\n```\nEnjoy!"
    return _wrap


@pytest.fixture
def png_base64():
    """Small valid PNG, base64 encoded."""
    buf = io.BytesIO()
    Image.new("RGBA", (64, 48), (200, 120, 40, 255)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode()
