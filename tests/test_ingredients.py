"""Ingredient catalogue API tests."""


def test_create_ingredient(client, auth_headers):
    """Test adding an ingredient to the catalogue."""
    response = client.post(
        "/ingredients",
        headers=auth_headers,
        json={"name": " Basil ", "description": "Fresh basil", "category": "Herbs"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Basil"
    assert data["description"] == "Fresh basil"
    assert data["category"] == "Herbs"


def test_create_ingredient_padding_not_counted(client, auth_headers):
    """Test name and category are trimmed before their length limits apply."""
    name = "b" * 100
    response = client.post(
        "/ingredients",
        headers=auth_headers,
        json={"name": f"  {name}  ", "category": "  Herbs" + " " * 50},
    )
    assert response.status_code == 201
    assert response.json()["name"] == name
    assert response.json()["category"] == "Herbs"


def test_create_ingredient_requires_principal(client):
    """Test catalogue writes need gateway headers."""
    response = client.post("/ingredients", json={"name": "Basil"})
    assert response.status_code == 401


def test_create_ingredient_blank_name(client, auth_headers):
    """Test a blank name is rejected."""
    response = client.post("/ingredients", headers=auth_headers, json={"name": "  "})
    assert response.status_code == 400
    assert response.json()["message"] == "ingredient name is required"


def test_create_ingredient_duplicate(client, auth_headers, make_ingredient):
    """Test ingredient names are unique."""
    make_ingredient("Garlic", "Vegetables")

    response = client.post("/ingredients", headers=auth_headers, json={"name": "Garlic"})
    assert response.status_code == 409
    assert response.json()["message"] == "ingredient with this name already exists"


def test_list_ingredients(client, make_ingredient):
    """Test ingredients are listed by category, uncategorized last."""
    make_ingredient("Salt", "Spices")
    make_ingredient("Water")
    make_ingredient("Onion", "Vegetables")
    make_ingredient("Garlic", "Vegetables")

    response = client.get("/ingredients")
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Salt", "Garlic", "Onion", "Water"]


def test_search_ingredients(client, make_ingredient):
    """Test case-insensitive substring search on the name."""
    make_ingredient("Chicken Breast", "Meat")
    make_ingredient("Chicken Thigh", "Meat")
    make_ingredient("Rice", "Grains")

    response = client.get("/ingredients?search=CHICKEN")
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Chicken Breast", "Chicken Thigh"]


def test_search_ingredients_escapes_wildcards(client, make_ingredient):
    """Test LIKE wildcards in the search term match literally."""
    make_ingredient("Rice")

    response = client.get("/ingredients", params={"search": "%"})
    assert response.status_code == 200
    assert response.json() == []


def test_filter_ingredients_by_category(client, make_ingredient):
    """Test the category filter is an exact match."""
    make_ingredient("Onion", "Vegetables")
    make_ingredient("Salt", "Spices")

    response = client.get("/ingredients?category=Vegetables")
    assert [i["name"] for i in response.json()] == ["Onion"]

    response = client.get("/ingredients?category=vegetables")
    assert response.json() == []


def test_search_takes_precedence_over_category(client, make_ingredient):
    """Test search wins when both filters are sent."""
    make_ingredient("Onion", "Vegetables")
    make_ingredient("Onion Powder", "Spices")

    response = client.get("/ingredients?search=onion&category=Vegetables")
    assert [i["name"] for i in response.json()] == ["Onion", "Onion Powder"]


def test_get_ingredient(client, make_ingredient):
    """Test getting an ingredient by ID."""
    ingredient_id = make_ingredient("Pepper", "Spices")

    response = client.get(f"/ingredients/{ingredient_id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Pepper"

    assert client.get("/ingredients/99999").status_code == 404
    assert client.get("/ingredients/0").status_code == 400


def test_update_ingredient(client, auth_headers, make_ingredient):
    """Test a partial ingredient update."""
    ingredient_id = make_ingredient("Pepper", "Spices")

    response = client.put(
        f"/ingredients/{ingredient_id}", headers=auth_headers, json={"name": "Black Pepper"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Black Pepper"
    assert response.json()["category"] == "Spices"


def test_update_ingredient_duplicate_name(client, auth_headers, make_ingredient):
    """Test renaming onto an existing name is a conflict."""
    make_ingredient("Salt")
    pepper = make_ingredient("Pepper")

    response = client.put(f"/ingredients/{pepper}", headers=auth_headers, json={"name": "Salt"})
    assert response.status_code == 409


def test_ingredient_recipes(client, create_recipe, make_ingredient):
    """Test listing the recipes that use an ingredient."""
    rice = make_ingredient("Rice")
    create_recipe("Rice Bowl", ingredients=[{"ingredient_id": rice, "quantity": 1, "unit": "cup"}])
    create_recipe("Toast")

    response = client.get(f"/ingredients/{rice}/recipes")
    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Rice Bowl"]

    assert client.get("/ingredients/99999/recipes").status_code == 404


def test_delete_ingredient(client, auth_headers, make_ingredient):
    """Test deleting an unused ingredient."""
    ingredient_id = make_ingredient("Parsley")

    response = client.delete(f"/ingredients/{ingredient_id}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/ingredients/{ingredient_id}").status_code == 404


def test_delete_ingredient_in_use(client, auth_headers, create_recipe, make_ingredient):
    """Test an ingredient used by a recipe cannot be deleted."""
    garlic = make_ingredient("Garlic")
    recipe = create_recipe(
        ingredients=[{"ingredient_id": garlic, "quantity": 2, "unit": "cloves"}]
    )

    response = client.delete(f"/ingredients/{garlic}", headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["message"] == "cannot delete ingredient - it is used in recipes"

    # Both rows are untouched
    assert client.get(f"/ingredients/{garlic}").status_code == 200
    rows = client.get(f"/recipes/{recipe['id']}/ingredients").json()
    assert [row["ingredient_id"] for row in rows] == [garlic]


def test_delete_missing_ingredient(client, auth_headers):
    """Test deleting an unknown ingredient is not found."""
    response = client.delete("/ingredients/99999", headers=auth_headers)
    assert response.status_code == 404
