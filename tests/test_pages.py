"""Tests for the HTML pages."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from food_log.api.app import create_app
from tests.conftest import LOG_DAY, make_food_input


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def test_root_redirects_to_today(client) -> None:
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == f"/log/{date.today():%Y-%m-%d}"


def test_empty_log_page(client) -> None:
    response = client.get("/log/2025-01-06")

    assert response.status_code == 200
    assert "Monday, 06 January 2025" in response.text
    assert "No food logged for this date." in response.text
    assert 'href="/log/2025-01-05"' in response.text
    assert 'href="/log/2025-01-07"' in response.text


def test_log_page_lists_entries_and_total(client, container) -> None:
    food_id = container.library_service.create_food(
        make_food_input(name="Toast <rye>", energy=250.0)
    )
    container.log_service.log_food(LOG_DAY, food_id, None, 100.0)

    response = client.get("/log/2025-01-06")

    assert response.status_code == 200
    assert "Toast &lt;rye&gt;" in response.text
    assert f'href="/library/{food_id}"' in response.text
    assert '<tr class="total">' in response.text
    assert "<td>250.0</td>" in response.text


def test_log_page_marks_deleted_serving(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input())
    serving_id = container.library_service.add_serving(food_id, "bowl", 60.0)
    container.log_service.log_food(LOG_DAY, food_id, serving_id, 1.0)
    container.library_service.delete_serving(serving_id)

    response = client.get("/log/2025-01-06")

    assert "(serving deleted)" in response.text


def test_invalid_date_page(client) -> None:
    response = client.get("/log/yesterday")

    assert response.status_code == 422
    assert "invalid date: yesterday" in response.text


def test_library_pages(client, container) -> None:
    assert "The library is empty." in client.get("/library").text

    food_id = container.library_service.create_food(
        make_food_input(name="Cheddar", brand="Dairy Co")
    )
    listing = client.get("/library").text
    assert "1 foods." in listing
    assert "Cheddar" in listing
    assert "Dairy Co" in listing

    detail = client.get(f"/library/{food_id}").text
    assert "Nutrition per 100 g" in detail
    assert "No custom serving sizes defined." in detail

    container.library_service.add_serving(food_id, "slice", 20.0)
    assert "slice: 20 g" in client.get(f"/library/{food_id}").text


def test_missing_food_page(client) -> None:
    response = client.get("/library/12")

    assert response.status_code == 404
    assert "Food 12 not found." in response.text


def test_log_page_at_calendar_edges(client) -> None:
    first = client.get("/log/0001-01-01")
    last = client.get("/log/9999-12-31")

    assert first.status_code == 200
    assert "Previous" not in first.text
    assert 'href="/log/0001-01-02"' in first.text
    assert last.status_code == 200
    assert "Next &rarr;" not in last.text
    assert 'href="/log/9999-12-30"' in last.text


def _food_form(**overrides: str) -> dict[str, str]:
    form = {
        "name": "Granola",
        "brand": "Mill",
        "serving_unit": "g",
        "energy": "450",
        "protein": "10",
        "fat": "15",
        "fat_saturated": "2",
        "carbs": "65",
        "carbs_sugars": "20",
        "fibre": "7",
        "sodium": "30",
    }
    form.update(overrides)
    return form


def test_new_food_form_creates_food(client, container) -> None:
    page = client.get("/library/new")
    assert page.status_code == 200
    assert 'action="/library/new"' in page.text

    response = client.post("/library/new", data=_food_form(), follow_redirects=False)

    assert response.status_code == 303
    (food,) = container.library_service.list_foods()
    assert response.headers["location"] == f"/library/{food.id}"
    assert container.library_service.get_food(food.id).nutrition.energy == 450.0


def test_new_food_form_rejects_bad_input(client, container) -> None:
    bad_unit = client.post("/library/new", data=_food_form(serving_unit="oz"))
    bad_number = client.post("/library/new", data=_food_form(energy="lots"))

    assert bad_unit.status_code == 422
    assert "Invalid value for serving unit" in bad_unit.text
    assert bad_number.status_code == 422
    assert "invalid amount" in bad_number.text
    assert container.library_service.count_foods() == 0


def test_edit_food_form(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input(name="Tea"))

    page = client.get(f"/library/{food_id}/edit")
    assert 'value="Tea"' in page.text
    assert f'action="/library/{food_id}/edit"' in page.text

    response = client.post(
        f"/library/{food_id}/edit",
        data=_food_form(name="Green Tea", serving_unit="ml", energy="1"),
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == f"/library/{food_id}"
    food = container.library_service.get_food(food_id)
    assert food.name == "Green Tea"
    assert food.serving_unit.value == "ml"


def test_serving_forms(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input())

    response = client.post(
        f"/library/{food_id}/servings",
        data={"serving_name": "scoop", "serving_amount": "30"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == f"/library/{food_id}"
    (serving,) = container.library_service.list_servings(food_id)
    assert serving.name == "scoop"

    detail = client.get(f"/library/{food_id}").text
    delete_action = f"/library/{food_id}/servings/{serving.id}/delete"
    assert delete_action in detail

    response = client.post(delete_action, follow_redirects=False)
    assert response.status_code == 303
    assert container.library_service.list_servings(food_id) == []


def test_serving_form_rejects_zero_amount(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input())

    response = client.post(
        f"/library/{food_id}/servings",
        data={"serving_name": "scoop", "serving_amount": "0"},
    )

    assert response.status_code == 422
    assert container.library_service.list_servings(food_id) == []


def test_log_food_form(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input(name="Rice"))
    serving_id = container.library_service.add_serving(food_id, "cup", 180.0)

    log_page = client.get("/log/2025-01-06").text
    assert 'href="/log/2025-01-06/new"' in log_page

    form_page = client.get("/log/2025-01-06/new")
    assert form_page.status_code == 200
    assert f'<option value="{food_id}">Rice</option>' in form_page.text
    assert f'<option value="{serving_id}">cup (180)</option>' in form_page.text

    base = client.post(
        "/log/2025-01-06/new",
        data={"food_id": str(food_id), "serving_id": "", "amount": "150"},
        follow_redirects=False,
    )
    with_serving = client.post(
        "/log/2025-01-06/new",
        data={"food_id": str(food_id), "serving_id": str(serving_id), "amount": "1"},
        follow_redirects=False,
    )

    assert base.status_code == 303
    assert base.headers["location"] == "/log/2025-01-06"
    assert with_serving.status_code == 303
    entries = container.log_service.list_entries(LOG_DAY)
    assert [entry.serving_id for entry in entries] == [None, serving_id]


def test_log_food_form_with_empty_library(client) -> None:
    response = client.get("/log/2025-01-06/new")

    assert "The library is empty." in response.text
    assert 'href="/library/new"' in response.text


def test_log_food_form_rejects_bad_input(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input())

    bad_amount = client.post(
        "/log/2025-01-06/new", data={"food_id": str(food_id), "amount": "a lot"}
    )
    bad_food = client.post(
        "/log/2025-01-06/new",
        data={"food_id": "99999999999999999999", "amount": "1"},
    )

    assert bad_amount.status_code == 422
    assert bad_food.status_code == 422
    assert container.log_service.list_entries(LOG_DAY) == []


def test_delete_entry_form(client, container) -> None:
    food_id = container.library_service.create_food(make_food_input())
    entry_id = container.log_service.log_food(LOG_DAY, food_id, None, 1.0)
    delete_action = f"/log/2025-01-06/entry/{entry_id}/delete"

    assert delete_action in client.get("/log/2025-01-06").text

    response = client.post(delete_action, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/log/2025-01-06"
    assert container.log_service.list_entries(LOG_DAY) == []
