"""JSON API endpoints over the library and the daily log."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from food_log.api.models import (
    EntryPayload,
    FoodPayload,
    ResourceId,
    ServingPayload,
)
from food_log.domain.log import format_log_date, parse_log_date

if TYPE_CHECKING:
    from datetime import date

    from food_log.containers import AppContainer
    from food_log.domain.library import Food, FoodListItem, ServingSize
    from food_log.domain.log import DaySummary, Entry, EntryLine

router = APIRouter(prefix="/api", tags=["api"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/foods")
def list_foods(request: Request) -> dict[str, object]:
    """Return the library ordered by name."""
    foods = _container(request).library_service.list_foods()
    return {"foods": [_food_list_item_json(food) for food in foods]}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
def create_food(payload: FoodPayload, request: Request) -> dict[str, object]:
    """Add a food to the library."""
    library = _container(request).library_service
    food_id = library.create_food(payload.to_input())
    return {"food": _food_json(library.get_food(food_id))}


@router.get("/foods/count")
def count_foods(request: Request) -> dict[str, int]:
    """Return the number of foods in the library."""
    return {"count": _container(request).library_service.count_foods()}


@router.get("/foods/{food_id}")
def get_food(food_id: ResourceId, request: Request) -> dict[str, object]:
    """Return a food with its serving sizes."""
    library = _container(request).library_service
    food = library.get_food(food_id)
    servings = library.list_servings(food_id)
    return {
        "food": _food_json(food),
        "servings": [_serving_json(serving) for serving in servings],
    }


@router.put("/foods/{food_id}")
def edit_food(
    food_id: ResourceId, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Replace every field of a food."""
    library = _container(request).library_service
    return {"food": _food_json(library.edit_food(food_id, payload.to_input()))}


@router.get("/foods/{food_id}/servings")
def list_servings(food_id: ResourceId, request: Request) -> dict[str, object]:
    """Return the serving sizes of a food."""
    servings = _container(request).library_service.list_servings(food_id)
    return {"servings": [_serving_json(serving) for serving in servings]}


@router.post("/foods/{food_id}/servings", status_code=status.HTTP_201_CREATED)
def create_serving(
    food_id: ResourceId, payload: ServingPayload, request: Request
) -> dict[str, object]:
    """Add a serving size to a food."""
    library = _container(request).library_service
    serving_id = library.add_serving(food_id, payload.name, payload.amount)
    return {"id": serving_id}


@router.delete("/servings/{serving_id}")
def delete_serving(serving_id: ResourceId, request: Request) -> dict[str, str]:
    """Delete a serving size."""
    _container(request).library_service.delete_serving(serving_id)
    return {"status": "ok"}


@router.get("/log/{day}")
def list_entries(day: str, request: Request) -> dict[str, object]:
    """Return the raw entries logged on a date."""
    entries = _container(request).log_service.list_entries(parse_log_date(day))
    return {"entries": [_entry_json(entry) for entry in entries]}


@router.post("/log/{day}", status_code=status.HTTP_201_CREATED)
def create_entry(
    day: str, payload: EntryPayload, request: Request
) -> dict[str, object]:
    """Log a food on a date."""
    entry_id = _container(request).log_service.log_food(
        parse_log_date(day), payload.food_id, payload.serving_id, payload.amount
    )
    return {"id": entry_id}


@router.delete("/entries/{entry_id}")
def delete_entry(entry_id: ResourceId, request: Request) -> dict[str, str]:
    """Delete a log entry."""
    _container(request).log_service.delete_entry(entry_id)
    return {"status": "ok"}


@router.get("/log/{day}/summary")
def day_summary(day: str, request: Request) -> dict[str, object]:
    """Return per-entry nutrition and the total for a date."""
    summary = _container(request).summary_service.summarize(parse_log_date(day))
    return _summary_json(summary)


def _food_list_item_json(food: FoodListItem) -> dict[str, object]:
    return {"id": food.id, "name": food.name, "brand": food.brand}


def _food_json(food: Food) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "brand": food.brand,
        "serving_unit": food.serving_unit.value,
        **food.nutrition.as_dict(),
        "created_at": food.created_at.isoformat(),
    }


def _serving_json(serving: ServingSize) -> dict[str, object]:
    return {
        "id": serving.id,
        "food_id": serving.food_id,
        "name": serving.name,
        "amount": serving.amount,
        "created_at": serving.created_at.isoformat(),
    }


def _entry_json(entry: Entry) -> dict[str, object]:
    return {
        "id": entry.id,
        "date": format_log_date(entry.day),
        "food_id": entry.food_id,
        "serving_id": entry.serving_id,
        "amount": entry.amount,
        "created_at": entry.created_at.isoformat(),
    }


def _line_json(line: EntryLine) -> dict[str, object]:
    return {
        "entry": _entry_json(line.entry),
        "food": _food_list_item_json(line.food),
        "unit": line.unit_label,
        "multiplier": line.multiplier,
        "factor": line.factor,
        "serving_missing": line.serving_missing,
        "nutrition": line.nutrition.as_dict(),
    }


def _summary_json(summary: DaySummary) -> dict[str, object]:
    return {
        "date": format_log_date(summary.day),
        "previous": _optional_date(summary.previous_day),
        "next": _optional_date(summary.next_day),
        "entries": [_line_json(line) for line in summary.lines],
        "total": summary.total.as_dict(),
    }


def _optional_date(value: date | None) -> str | None:
    return format_log_date(value) if value is not None else None
