"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all tests.
"""

import json
import os
import sys
import pytest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, AsyncMock

# Add backend to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment before settings are first read
os.environ["TESTING"] = "true"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
for var in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY"):
    os.environ.pop(var, None)


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def app():
    """FastAPI test application."""
    from meal_planner.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Sync test client for API tests."""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
async def async_client(app):
    """Async test client for API tests."""
    from httpx import AsyncClient, ASGITransport
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


# =============================================================================
# OpenAI Fixtures
# =============================================================================


@pytest.fixture
def openai_response():
    """Factory for minimal stand-ins of OpenAI Responses API results."""
    def _response(output_text):
        return SimpleNamespace(output_text=output_text)
    return _response


@pytest.fixture
def mock_openai():
    """Mock AsyncOpenAI client; set ``responses.create`` side effects per test."""
    mock = MagicMock()
    mock.responses.create = AsyncMock()
    return mock


@pytest.fixture
def generator(mock_openai):
    """MealGenerator wired to the mock OpenAI client."""
    from meal_planner.services.generation import MealGenerator
    return MealGenerator(mock_openai, model="gpt-4o-mini")


@pytest.fixture
def override_generator(app, generator):
    """Route API requests to the mock-backed generator."""
    from meal_planner.services.generation import get_meal_generator
    app.dependency_overrides[get_meal_generator] = lambda: generator
    return generator


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock = MagicMock()
    mock.table.return_value.select.return_value.execute.return_value.data = []
    mock.table.return_value.upsert.return_value.execute.return_value.data = []
    mock.table.return_value.delete.return_value.execute.return_value.data = [{}]
    return mock


@pytest.fixture
def test_user_id():
    """Test user ID for database operations."""
    return "test-user-00000000-0000-0000-0000-000000000000"


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_meal_dict():
    """A valid meal as the model returns it."""
    return {
        "id": "meal-1",
        "day": "Mon",
        "name": "Grilled Chicken",
        "description": "Healthy grilled chicken dinner",
        "prepMinutes": 10,
        "cookMinutes": 20,
        "ingredients": [
            {"item": "Chicken breast", "quantity": "1 lb"},
            {"item": "Olive oil", "quantity": "2 tbsp"},
        ],
        "steps": ["Season chicken", "Grill for 20 minutes"],
    }


@pytest.fixture
def sample_week_dicts(sample_meal_dict):
    """Three dinners for Mon/Tue/Wed."""
    tuesday = {
        "id": "meal-2",
        "day": "Tue",
        "name": "Chicken Stir-fry",
        "description": "Quick stir-fry",
        "prepMinutes": 15,
        "cookMinutes": 10,
        "ingredients": [
            {"item": "olive oil", "quantity": "1 tbsp"},
            {"item": "Mixed vegetables", "quantity": "2 cups"},
        ],
        "steps": ["Cook chicken", "Add vegetables"],
        "tags": ["quick"],
    }
    wednesday = {
        "id": "meal-3",
        "day": "Wed",
        "name": "Veggie Tacos",
        "description": "Black bean tacos",
        "prepMinutes": 10,
        "cookMinutes": 10,
        "ingredients": [
            {"item": "Tortillas", "quantity": "8 small"},
            {"item": "Mixed vegetables", "quantity": "1 cup"},
        ],
        "steps": ["Warm tortillas", "Fill and serve"],
    }
    return [sample_meal_dict, tuesday, wednesday]


@pytest.fixture
def meals_json(sample_week_dicts):
    """Valid model output text for the sample week."""
    return json.dumps({"meals": sample_week_dicts})


@pytest.fixture
def sample_meals(sample_week_dicts):
    from meal_planner.models.meals import Meal
    return [Meal.model_validate(m) for m in sample_week_dicts]


@pytest.fixture
def sample_plan_row(test_user_id, sample_week_dicts):
    """A ``plans`` row as Supabase returns it."""
    return {
        "id": "plan-123",
        "user_id": test_user_id,
        "week_start": "2024-12-16",
        "meals": sample_week_dicts,
        "created_at": "2024-12-16T00:00:00+00:00",
        "updated_at": "2024-12-17T08:30:00+00:00",
    }
