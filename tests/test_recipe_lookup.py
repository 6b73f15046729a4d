from fastapi.testclient import TestClient

from app import models


def create_full_recipe(client: TestClient, user, pantry):
    response = client.post(
        "/recipe",
        json={
            "userId": user.id,
            "title": "Crêpes",
            "steps": ["Whisk", "Rest", "Cook"],
            "tags": ["french", "sweet"],
            "ingredients": [
                {"ingredientId": pantry["flour"], "metricId": pantry["g"], "amount": 250},
                {"ingredientId": pantry["milk"], "metricId": pantry["cup"], "amount": 2},
            ],
        },
    )
    assert response.status_code == 200, response.text
    return response.json()["recipe"]


def test_read_recipe_by_username_and_slug(client: TestClient, user, pantry):
    recipe = create_full_recipe(client, user, pantry)
    assert recipe["slug"].startswith("crepes-")

    response = client.get(f"/recipe/chef/{recipe['slug']}")
    assert response.status_code == 200, response.text
    data = response.json()

    assert data["id"] == recipe["id"]
    assert data["title"] == recipe["title"]
    assert [step["content"] for step in data["recipeSteps"]] == ["Whisk", "Rest", "Cook"]
    assert [step["position"] for step in data["recipeSteps"]] == [1, 2, 3]
    assert sorted(tag["name"] for tag in data["tags"]) == ["french", "sweet"]
    assert data["recipeComments"] == []

    ingredients = sorted(data["ingredients"], key=lambda i: i["ingredient"])
    assert [(i["ingredient"], i["metric"], i["amount"]) for i in ingredients] == [
        ("flour", "g", 250),
        ("milk", "cup", 2),
    ]
    assert all(i["recipeId"] == recipe["id"] for i in ingredients)

    # The raw join collections are not exposed
    assert "recipeHasTags" not in data
    assert "recipeHasIngredients" not in data


def test_read_recipe_username_is_case_insensitive(client: TestClient, user, pantry):
    recipe = create_full_recipe(client, user, pantry)
    response = client.get(f"/recipe/CHEF/{recipe['slug']}")
    assert response.status_code == 200
    assert response.json()["id"] == recipe["id"]


def test_read_recipe_includes_comments(client: TestClient, db, user, pantry):
    recipe = create_full_recipe(client, user, pantry)
    db.add(models.RecipeComment(recipe_id=recipe["id"], user_id=user.id, body="Lovely"))
    db.commit()

    data = client.get(f"/recipe/chef/{recipe['slug']}").json()
    assert [c["body"] for c in data["recipeComments"]] == ["Lovely"]
    assert data["recipeComments"][0]["userId"] == user.id


def test_read_recipe_unknown_user(client: TestClient):
    response = client.get("/recipe/nobody/some-slug")
    assert response.status_code == 404
    assert response.json() == {"msg": "User not found"}


def test_read_recipe_unknown_slug(client: TestClient, user, pantry):
    create_full_recipe(client, user, pantry)
    response = client.get("/recipe/chef/missing-slug")
    assert response.status_code == 404
    assert response.json() == {"msg": "Recipe not found"}


def test_read_recipe_under_other_user(client: TestClient, db, user, pantry):
    recipe = create_full_recipe(client, user, pantry)
    db.add(models.User(username="baker"))
    db.commit()

    response = client.get(f"/recipe/baker/{recipe['slug']}")
    assert response.status_code == 404
    assert response.json() == {"msg": "Recipe not found"}


def test_duplicate_slugs_return_lowest_id(client: TestClient, db, user):
    for title in ("First", "Second"):
        db.add(models.Recipe(user_id=user.id, title=title, slug="same-slug"))
    db.commit()

    data = client.get("/recipe/chef/same-slug").json()
    assert data["title"] == "First"
