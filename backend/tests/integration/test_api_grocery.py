"""
Integration tests for the grocery list endpoint.
"""

import pytest


class TestGroceryListEndpoint:
    """POST /grocery-list"""

    @pytest.mark.integration
    def test_merges_generated_meals(self, client, sample_week_dicts):
        response = client.post("/grocery-list", json={"meals": sample_week_dicts})

        assert response.status_code == 200
        data = response.json()
        assert data["mealsIncluded"] == 3
        assert data["itemsCount"] == len(data["items"]) == 4

        by_name = {item["item"]: item for item in data["items"]}
        assert list(by_name) == ["Chicken breast", "Mixed vegetables", "Olive oil", "Tortillas"]
        assert by_name["Olive oil"]["quantity"] == "3 tablespoons"
        assert by_name["Olive oil"]["originalQuantities"] == ["2 tbsp", "1 tbsp"]
        assert by_name["Mixed vegetables"]["quantity"] == "3 cups"
        assert by_name["Tortillas"]["quantity"] == "8 small"

    @pytest.mark.integration
    def test_accepts_partial_meals(self, client):
        """Only ingredients matter; other meal fields may be missing."""
        response = client.post("/grocery-list", json={"meals": [
            {"ingredients": [{"item": "Rice", "quantity": "1 cup"}]},
            {"name": "Leftovers", "ingredients": [{"item": "rice", "quantity": "1/2 cup"}]},
        ]})

        assert response.status_code == 200
        assert response.json()["items"] == [
            {"item": "Rice", "quantity": "1.50 cups", "originalQuantities": ["1 cup", "1/2 cup"]}
        ]

    @pytest.mark.integration
    def test_empty_meal_list(self, client):
        response = client.post("/grocery-list", json={"meals": []})

        assert response.status_code == 200
        assert response.json() == {"items": [], "itemsCount": 0, "mealsIncluded": 0}

    @pytest.mark.integration
    def test_missing_meals(self, client):
        response = client.post("/grocery-list", json={})

        assert response.status_code == 400
        assert "meals" in response.json()["error"]
