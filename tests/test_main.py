"""
Tests for the FastAPI application endpoints.
"""
import json

from chefgpt.core.exceptions import UpstreamFailure


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "ChefGPT generation service running"}

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "chefgpt"
        assert "version" in data


class TestInternalAuth:
    """Generation routes require the internal secret header."""

    def test_missing_secret_is_forbidden(self, client):
        response = client.post("/generate-recipe", json={})
        assert response.status_code == 403

    def test_wrong_secret_is_forbidden(self, client):
        response = client.post(
            "/generate-recipe",
            json={},
            headers={"X-Internal-Secret": "nope"}
        )
        assert response.status_code == 403


class TestRecipeEndpoint:
    """Tests for recipe generation endpoint."""

    def test_generates_recipe(self, client, auth_headers, override_chef, mock_completion,
                              sample_recipe_response, as_text):
        mock_completion.complete.return_value = as_text(sample_recipe_response)

        response = client.post(
            "/generate-recipe",
            json={"chefMode": "pantry", "ingredients": ["egg", "spinach"]},
            headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["recipe"]["title"] == "Spinach Frittata"
        assert body["recipe"]["macros"]["protein"] == 16

    def test_empty_request_is_valid(self, client, auth_headers, override_chef, mock_completion):
        mock_completion.complete.return_value = '{"title": "Surprise"}'

        response = client.post("/generate-recipe", json={}, headers=auth_headers)

        assert response.status_code == 200
        recipe = response.json()["recipe"]
        assert recipe["tags"] == []
        assert recipe["macros"] == {"protein": 0, "carbs": 0, "fat": 0, "fiber": 0}

    def test_unknown_chef_mode_rejected(self, client, auth_headers, override_chef):
        response = client.post("/generate-recipe", json={"chefMode": "sushi"}, headers=auth_headers)
        assert response.status_code == 422

    def test_malformed_response_is_bad_gateway(self, client, auth_headers, override_chef, mock_completion):
        mock_completion.complete.return_value = "I'm sorry, I can't help with that."

        response = client.post("/generate-recipe", json={}, headers=auth_headers)

        assert response.status_code == 502
        assert "valid JSON" in response.json()["detail"]

    def test_unparseable_integer_is_bad_gateway(self, client, auth_headers, override_chef, mock_completion):
        mock_completion.complete.return_value = '{"calories": ' + "9" * 5000 + "}"

        response = client.post("/generate-recipe", json={}, headers=auth_headers)

        assert response.status_code == 502
        assert "valid JSON" in response.json()["detail"]

    def test_upstream_failure_is_surfaced(self, client, auth_headers, override_chef, mock_completion):
        mock_completion.complete.side_effect = UpstreamFailure("Completion service error: quota exceeded")

        response = client.post("/generate-recipe", json={}, headers=auth_headers)

        assert response.status_code == 502
        assert response.json()["detail"] == "Completion service error: quota exceeded"
        mock_completion.complete.assert_awaited_once()


class TestMealPlanEndpoint:
    """Tests for meal plan generation endpoint."""

    def test_generates_meal_plan(self, client, auth_headers, override_chef, mock_completion,
                                 sample_meal_plan_response):
        mock_completion.complete.return_value = json.dumps(sample_meal_plan_response)

        response = client.post(
            "/generate-meal-plan",
            json={"days": 1, "goal": "eat_healthy"},
            headers=auth_headers
        )

        assert response.status_code == 200
        plan = response.json()["plan"]
        assert plan["totalCalories"] == 1800
        assert len(plan["meals"]) == 2
        assert plan["shoppingList"] == ["eggs", "spinach", "salmon"]

    def test_rejects_too_many_days(self, client, auth_headers, override_chef):
        response = client.post("/generate-meal-plan", json={"days": 60}, headers=auth_headers)
        assert response.status_code == 422


class TestAnalyzeFoodEndpoint:
    """Tests for food photo analysis endpoint."""

    def test_analyzes_inline_image(self, client, auth_headers, override_chef, mock_completion,
                                   sample_food_analysis_response, png_base64):
        mock_completion.complete_with_image.return_value = json.dumps(sample_food_analysis_response)

        response = client.post(
            "/analyze-food",
            json={"imageBase64": png_base64, "mealType": "lunch"},
            headers=auth_headers
        )

        assert response.status_code == 200
        analysis = response.json()["analysis"]
        assert analysis["totalCalories"] == 465
        assert [f["name"] for f in analysis["foods"]] == ["Grilled chicken", "Brown rice"]
        mock_completion.complete_with_image.assert_awaited_once()

    def test_requires_an_image(self, client, auth_headers, override_chef):
        response = client.post("/analyze-food", json={"cuisine": "Thai"}, headers=auth_headers)
        assert response.status_code == 422

    def test_unreadable_image_is_bad_request(self, client, auth_headers, override_chef, mock_completion):
        response = client.post(
            "/analyze-food",
            json={"imageBase64": "bm90IGFuIGltYWdl"},  # "not an image"
            headers=auth_headers
        )
        assert response.status_code == 400
        mock_completion.complete_with_image.assert_not_awaited()


class TestCalorieTargetEndpoint:

    def test_computes_target(self, client, auth_headers):
        response = client.post(
            "/calorie-target",
            json={"sex": "male", "weight": 70, "height": 175, "age": 30, "activityLevel": "sedentary"},
            headers=auth_headers
        )

        assert response.status_code == 200
        target = response.json()["target"]
        assert target["bmr"] == 1648.8
        assert target["activityMultiplier"] == 1.2
        assert abs(target["dailyCalories"] - 1978.5) <= 1
        assert target["bmiCategory"] == "Normal"

    def test_override_skips_formula(self, client, auth_headers):
        response = client.post(
            "/calorie-target",
            json={"sex": "female", "weight": 60, "height": 165, "age": 28, "override": 1700},
            headers=auth_headers
        )

        assert response.status_code == 200
        target = response.json()["target"]
        assert target["dailyCalories"] == 1700
        assert target["bmr"] is None

    def test_validates_ranges(self, client, auth_headers):
        response = client.post(
            "/calorie-target",
            json={"sex": "male", "weight": 5, "height": 175, "age": 30},
            headers=auth_headers
        )
        assert response.status_code == 422
