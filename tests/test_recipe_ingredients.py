"""Recipe composition API tests."""

import pytest


@pytest.fixture
def recipe(create_recipe):
    return create_recipe("Stir Fry")


@pytest.fixture
def rice(make_ingredient):
    return make_ingredient("Rice", "Grains")


@pytest.fixture
def onion(make_ingredient):
    return make_ingredient("Onion", "Vegetables")


def add(client, headers, recipe_id, ingredient_id, quantity=1, unit="cup", notes=None):
    return client.post(
        f"/recipes/{recipe_id}/ingredients",
        headers=headers,
        json={"ingredient_id": ingredient_id, "quantity": quantity, "unit": unit, "notes": notes},
    )


def test_add_recipe_ingredient(client, auth_headers, recipe, rice):
    """Test adding an ingredient to an owned recipe."""
    response = add(client, auth_headers, recipe["id"], rice, 2.5, " cups ", " rinsed ")
    assert response.status_code == 201
    data = response.json()
    assert data["recipe_id"] == recipe["id"]
    assert data["ingredient_id"] == rice
    assert data["quantity"] == 2.5
    assert data["unit"] == "cups"
    assert data["notes"] == "rinsed"
    assert data["ingredient"]["name"] == "Rice"


def test_add_recipe_ingredient_duplicate(client, auth_headers, recipe, rice):
    """Test the same ingredient cannot be added twice."""
    assert add(client, auth_headers, recipe["id"], rice).status_code == 201

    response = add(client, auth_headers, recipe["id"], rice, 5, "grams")
    assert response.status_code == 409
    assert response.json()["message"] == "ingredient already added to this recipe"


@pytest.mark.parametrize("quantity", [0, -1])
def test_add_recipe_ingredient_bad_quantity(client, auth_headers, recipe, rice, quantity):
    """Test quantity must be positive."""
    response = add(client, auth_headers, recipe["id"], rice, quantity)
    assert response.status_code == 400
    assert response.json() == {
        "error": "invariant_violation",
        "code": 400,
        "message": "quantity must be greater than 0",
    }


def test_add_recipe_ingredient_quantity_too_large(client, auth_headers, recipe, rice):
    """Test quantities beyond the column precision are rejected."""
    response = add(client, auth_headers, recipe["id"], rice, 1_000_000)
    assert response.status_code == 400
    assert response.json()["error"] == "invariant_violation"


@pytest.mark.parametrize("quantity", [0.004, 0.125, 1.001])
def test_add_recipe_ingredient_too_many_decimals(client, auth_headers, recipe, rice, quantity):
    """Test quantities finer than hundredths are rejected rather than rounded."""
    response = add(client, auth_headers, recipe["id"], rice, quantity)
    assert response.status_code == 400
    assert response.json() == {
        "error": "invariant_violation",
        "code": 400,
        "message": "quantity must have at most 2 decimal places",
    }

    assert client.get(f"/recipes/{recipe['id']}/ingredients").json() == []


def test_add_recipe_ingredient_padded_unit(client, auth_headers, recipe, rice):
    """Test a unit padded past the length limit is trimmed, not rejected."""
    response = add(client, auth_headers, recipe["id"], rice, 100, "  grams" + " " * 14)
    assert response.status_code == 201
    assert response.json()["unit"] == "grams"

    response = add(client, auth_headers, recipe["id"], rice, 1, "u" * 21)
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


def test_add_recipe_ingredient_blank_unit(client, auth_headers, recipe, rice):
    """Test unit must not be blank."""
    response = add(client, auth_headers, recipe["id"], rice, 1, "   ")
    assert response.status_code == 400
    assert response.json()["message"] == "unit is required"


def test_add_unknown_ingredient(client, auth_headers, recipe):
    """Test adding an ingredient that is not in the catalogue."""
    response = add(client, auth_headers, recipe["id"], 99999)
    assert response.status_code == 404
    assert response.json()["message"] == "ingredient not found"


def test_add_to_unknown_recipe(client, auth_headers, rice):
    """Test adding to a missing recipe is not found."""
    assert add(client, auth_headers, 99999, rice).status_code == 404


def test_add_to_foreign_recipe(client, other_headers, recipe, rice):
    """Test only the owner can change the composition."""
    response = add(client, other_headers, recipe["id"], rice)
    assert response.status_code == 403

    assert client.get(f"/recipes/{recipe['id']}/ingredients").json() == []


def test_add_requires_principal(client, recipe, rice):
    """Test composition writes need gateway headers."""
    assert add(client, {}, recipe["id"], rice).status_code == 401


def test_get_recipe_ingredients(client, auth_headers, recipe, rice, onion):
    """Test rows come back in insertion order with the ingredient joined."""
    add(client, auth_headers, recipe["id"], onion, 2, "pieces")
    add(client, auth_headers, recipe["id"], rice, 1, "cup")

    response = client.get(f"/recipes/{recipe['id']}/ingredients")
    assert response.status_code == 200
    assert [row["ingredient"]["name"] for row in response.json()] == ["Onion", "Rice"]

    assert client.get("/recipes/99999/ingredients").status_code == 404


def test_update_recipe_ingredient(client, auth_headers, recipe, rice):
    """Test changing quantity, unit and notes of a row."""
    add(client, auth_headers, recipe["id"], rice, 1, "cup", "white")

    response = client.put(
        f"/recipes/{recipe['id']}/ingredients/{rice}",
        headers=auth_headers,
        json={"quantity": 300, "unit": "grams"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["quantity"] == 300
    assert data["unit"] == "grams"
    assert data["notes"] is None


def test_update_recipe_ingredient_missing_row(client, auth_headers, recipe, rice):
    """Test updating an ingredient the recipe does not use."""
    response = client.put(
        f"/recipes/{recipe['id']}/ingredients/{rice}",
        headers=auth_headers,
        json={"quantity": 1, "unit": "cup"},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "ingredient not found in recipe"


def test_update_recipe_ingredient_foreign(client, auth_headers, other_headers, recipe, rice):
    """Test a non-owner cannot update a row."""
    add(client, auth_headers, recipe["id"], rice)

    response = client.put(
        f"/recipes/{recipe['id']}/ingredients/{rice}",
        headers=other_headers,
        json={"quantity": 9, "unit": "cup"},
    )
    assert response.status_code == 403


def test_remove_recipe_ingredient(client, auth_headers, recipe, rice):
    """Test removing a row, then removing it again."""
    add(client, auth_headers, recipe["id"], rice)

    url = f"/recipes/{recipe['id']}/ingredients/{rice}"
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.get(f"/recipes/{recipe['id']}/ingredients").json() == []
    assert client.delete(url, headers=auth_headers).status_code == 404


def test_remove_recipe_ingredient_foreign(client, auth_headers, other_headers, recipe, rice):
    """Test a non-owner cannot remove a row."""
    add(client, auth_headers, recipe["id"], rice)

    response = client.delete(f"/recipes/{recipe['id']}/ingredients/{rice}", headers=other_headers)
    assert response.status_code == 403


def test_set_recipe_ingredients(client, auth_headers, recipe, rice, onion):
    """Test replacing the whole composition."""
    add(client, auth_headers, recipe["id"], rice)

    response = client.put(
        f"/recipes/{recipe['id']}/ingredients",
        headers=auth_headers,
        json=[
            {"ingredient_id": onion, "quantity": 2, "unit": "pieces"},
            {"ingredient_id": rice, "quantity": 250, "unit": "grams"},
        ],
    )
    assert response.status_code == 200
    rows = response.json()
    assert [(row["ingredient_id"], row["unit"]) for row in rows] == [
        (onion, "pieces"),
        (rice, "grams"),
    ]


def test_set_recipe_ingredients_empty(client, auth_headers, recipe, rice):
    """Test an empty list clears the composition."""
    add(client, auth_headers, recipe["id"], rice)

    response = client.put(f"/recipes/{recipe['id']}/ingredients", headers=auth_headers, json=[])
    assert response.status_code == 200
    assert response.json() == []


def test_set_recipe_ingredients_is_atomic(client, auth_headers, recipe, rice, onion):
    """Test one bad row leaves the old composition untouched."""
    add(client, auth_headers, recipe["id"], rice, 1, "cup")

    for rows in (
        [
            {"ingredient_id": onion, "quantity": 2, "unit": "pieces"},
            {"ingredient_id": 99999, "quantity": 1, "unit": "cup"},
        ],
        [
            {"ingredient_id": onion, "quantity": 2, "unit": "pieces"},
            {"ingredient_id": onion, "quantity": 3, "unit": "pieces"},
        ],
        [{"ingredient_id": onion, "quantity": -2, "unit": "pieces"}],
    ):
        response = client.put(
            f"/recipes/{recipe['id']}/ingredients", headers=auth_headers, json=rows
        )
        assert response.status_code in (400, 404, 409)

    rows = client.get(f"/recipes/{recipe['id']}/ingredients").json()
    assert [(row["ingredient_id"], row["quantity"]) for row in rows] == [(rice, 1)]


def test_set_recipe_ingredients_foreign(client, other_headers, recipe, rice):
    """Test a non-owner cannot replace the composition."""
    response = client.put(
        f"/recipes/{recipe['id']}/ingredients",
        headers=other_headers,
        json=[{"ingredient_id": rice, "quantity": 1, "unit": "cup"}],
    )
    assert response.status_code == 403
