"""
Saved recipe (bookmark) endpoint tests
"""

from fastapi.testclient import TestClient


class TestSaveRecipe:
    """Test saving and unsaving recipes"""

    def test_save_recipe(self, client: TestClient, signup_and_login, create_recipe):
        signup_and_login()
        recipe = create_recipe()

        response = client.post("/api/save", json={"recipeId": recipe["id"]})
        assert response.status_code == 201
        assert response.json() == {"success": True, "message": "Recipe saved"}

        assert client.get("/api/user/").json()["savedRecipes"] == [recipe["id"]]

    def test_save_twice(self, client: TestClient, signup_and_login, create_recipe):
        """A recipe appears at most once in a user's saved list"""
        signup_and_login()
        recipe = create_recipe()

        assert client.post("/api/save", json={"recipeId": recipe["id"]}).status_code == 201

        response = client.post("/api/save", json={"recipeId": recipe["id"]})
        assert response.status_code == 400
        assert response.json()["message"] == "Recipe already saved"

        assert client.get("/api/user/").json()["savedRecipes"] == [recipe["id"]]

    def test_save_requires_id(self, client: TestClient, signup_and_login):
        signup_and_login()

        response = client.post("/api/save", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Recipe ID required"

    def test_save_unknown_recipe(self, client: TestClient, signup_and_login):
        signup_and_login()

        response = client.post("/api/save", json={"recipeId": "missing"})
        assert response.status_code == 404
        assert response.json()["message"] == "Recipe not found"

    def test_save_requires_session(self, client: TestClient):
        assert client.post("/api/save", json={"recipeId": "anything"}).status_code == 401

    def test_saves_are_per_user(self, client: TestClient, signup_and_login, create_recipe):
        signup_and_login(username="one", email="one@example.com")
        recipe = create_recipe()
        client.post("/api/save", json={"recipeId": recipe["id"]})

        signup_and_login(username="two", email="two@example.com")
        assert client.get("/api/saved").json()["results"] == []
        assert client.post("/api/save", json={"recipeId": recipe["id"]}).status_code == 201

    def test_unsave_recipe(self, client: TestClient, signup_and_login, create_recipe):
        signup_and_login()
        recipe = create_recipe()
        client.post("/api/save", json={"recipeId": recipe["id"]})

        response = client.post("/api/unsave", json={"recipeId": recipe["id"]})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Recipe unsaved"}

        assert client.get("/api/user/").json()["savedRecipes"] == []

    def test_unsave_not_saved(self, client: TestClient, signup_and_login, create_recipe):
        """Unsaving a recipe that is not saved leaves the list unchanged"""
        signup_and_login()
        saved = create_recipe(title="Saved")
        other = create_recipe(title="Other")
        client.post("/api/save", json={"recipeId": saved["id"]})

        response = client.post("/api/unsave", json={"recipeId": other["id"]})
        assert response.status_code == 404
        assert response.json()["message"] == "Recipe not saved"

        assert client.get("/api/user/").json()["savedRecipes"] == [saved["id"]]

    def test_unsave_without_id(self, client: TestClient, signup_and_login):
        signup_and_login()
        assert client.post("/api/unsave", json={}).status_code == 404


class TestSavedList:
    """Test listing saved recipes"""

    def test_saved_list_returns_full_recipes(self, client: TestClient, signup_and_login, create_recipe):
        signup_and_login()
        soup = create_recipe(title="Soup", ingredients=["water", "leek"], category="Lunch")
        cake = create_recipe(title="Cake", category="Dessert")
        create_recipe(title="Unsaved")

        client.post("/api/save", json={"recipeId": cake["id"]})
        client.post("/api/save", json={"recipeId": soup["id"]})

        response = client.get("/api/saved")
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert [r["id"] for r in data["results"]] == [cake["id"], soup["id"]]

        saved_soup = data["results"][1]
        assert saved_soup["title"] == "Soup"
        assert saved_soup["ingredients"] == ["water", "leek"]
        assert saved_soup["category"] == "Lunch"
        assert saved_soup["image"] == soup["image"]

    def test_saved_list_empty(self, client: TestClient, signup_and_login):
        signup_and_login()

        response = client.get("/api/saved")
        assert response.status_code == 200
        assert response.json() == {"success": True, "results": []}

    def test_saved_list_requires_session(self, client: TestClient):
        assert client.get("/api/saved").status_code == 401
