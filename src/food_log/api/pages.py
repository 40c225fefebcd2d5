"""Server-rendered HTML pages for the log and the library."""

from __future__ import annotations

from datetime import date
from html import escape
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from food_log.api.models import EntryForm, FoodForm, ResourceId, ServingForm
from food_log.domain.library import parse_id
from food_log.domain.log import (
    format_log_date,
    humanize_date,
    parse_amount,
    parse_log_date,
)
from food_log.domain.nutrition import ServingUnit

if TYPE_CHECKING:
    from food_log.containers import AppContainer
    from food_log.domain.library import Food, FoodListItem, ServingSize
    from food_log.domain.log import DaySummary, EntryLine
    from food_log.domain.nutrition import Nutrition

router = APIRouter(tags=["pages"])

TITLE = "food_log"

NUTRIENT_LABELS = (
    ("energy", "Energy (kcal)"),
    ("protein", "Protein (g)"),
    ("fat", "Fat (g)"),
    ("fat_saturated", "Saturated Fat (g)"),
    ("carbs", "Carbohydrate (g)"),
    ("carbs_sugars", "Sugars (g)"),
    ("fibre", "Fibre (g)"),
    ("sodium", "Sodium (mg)"),
)


def log_url(day: date) -> str:
    return f"/log/{format_log_date(day)}"


def food_url(food_id: int) -> str:
    return f"/library/{food_id}"


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/")
def root() -> RedirectResponse:
    """Redirect to today's log."""
    return RedirectResponse(log_url(date.today()))


@router.get("/log/{day}", response_class=HTMLResponse)
def log_view(day: str, request: Request) -> HTMLResponse:
    """Render the entries and totals for a date."""
    summary = _container(request).summary_service.summarize(parse_log_date(day))
    return HTMLResponse(render_page(render_log(summary)))


@router.get("/log/{day}/new", response_class=HTMLResponse)
def log_new_form(day: str, request: Request) -> HTMLResponse:
    """Render the form for logging a food on a date."""
    log_day = parse_log_date(day)
    library = _container(request).library_service
    foods = library.list_foods()
    servings = {food.id: library.list_servings(food.id) for food in foods}
    return HTMLResponse(render_page(render_log_form(log_day, foods, servings)))


@router.post("/log/{day}/new")
def log_new(
    day: str, form: Annotated[EntryForm, Form()], request: Request
) -> RedirectResponse:
    """Log a food and go back to the day."""
    log_day = parse_log_date(day)
    _container(request).log_service.log_food(
        log_day,
        parse_id(form.food_id),
        form.parsed_serving_id(),
        parse_amount(form.amount),
    )
    return _see_other(log_url(log_day))


@router.post("/log/{day}/entry/{entry_id}/delete")
def log_delete(day: str, entry_id: ResourceId, request: Request) -> RedirectResponse:
    """Delete an entry and go back to the day."""
    log_day = parse_log_date(day)
    _container(request).log_service.delete_entry(entry_id)
    return _see_other(log_url(log_day))


@router.get("/library", response_class=HTMLResponse)
def library_view(request: Request) -> HTMLResponse:
    """Render the food library."""
    foods = _container(request).library_service.list_foods()
    return HTMLResponse(render_page(render_library(foods)))


@router.get("/library/new", response_class=HTMLResponse)
def food_new_form() -> HTMLResponse:
    """Render the form for a new food."""
    return HTMLResponse(render_page(render_food_form(None)))


@router.post("/library/new")
def food_new(form: Annotated[FoodForm, Form()], request: Request) -> RedirectResponse:
    """Create a food and show it."""
    food_id = _container(request).library_service.create_food(form.to_input())
    return _see_other(food_url(food_id))


@router.get("/library/{food_id}", response_class=HTMLResponse)
def food_view(food_id: ResourceId, request: Request) -> HTMLResponse:
    """Render a food's nutrition facts and serving sizes."""
    library = _container(request).library_service
    food = library.get_food(food_id)
    servings = library.list_servings(food_id)
    return HTMLResponse(render_page(render_food(food, servings)))


@router.get("/library/{food_id}/edit", response_class=HTMLResponse)
def food_edit_form(food_id: ResourceId, request: Request) -> HTMLResponse:
    """Render the edit form filled with a food's current values."""
    food = _container(request).library_service.get_food(food_id)
    return HTMLResponse(render_page(render_food_form(food)))


@router.post("/library/{food_id}/edit")
def food_edit(
    food_id: ResourceId, form: Annotated[FoodForm, Form()], request: Request
) -> RedirectResponse:
    """Save a food and show it."""
    _container(request).library_service.edit_food(food_id, form.to_input())
    return _see_other(food_url(food_id))


@router.post("/library/{food_id}/servings")
def serving_new(
    food_id: ResourceId, form: Annotated[ServingForm, Form()], request: Request
) -> RedirectResponse:
    """Add a serving size and go back to the food."""
    _container(request).library_service.add_serving(
        food_id, form.serving_name.strip(), parse_amount(form.serving_amount)
    )
    return _see_other(food_url(food_id))


@router.post("/library/{food_id}/servings/{serving_id}/delete")
def serving_delete(
    food_id: ResourceId, serving_id: ResourceId, request: Request
) -> RedirectResponse:
    """Delete a serving size and go back to the food."""
    _container(request).library_service.delete_serving(serving_id)
    return _see_other(food_url(food_id))


def render_page(body: str) -> str:
    """Wrap a page body in the site layout."""
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "  <head>\n"
        '    <meta charset="utf-8" />\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1" />\n'
        f"    <title>{TITLE}</title>\n"
        f"    <style>{_STYLE}</style>\n"
        "  </head>\n"
        "  <body>\n"
        '    <nav><a href="/">Today</a> <a href="/library">Library</a></nav>\n'
        f"{body}\n"
        "  </body>\n"
        "</html>\n"
    )


def render_error(title: str, message: str) -> str:
    """Render an error page body."""
    return f"<h1>{escape(title)}</h1>\n<p>{escape(message)}</p>"


def render_log(summary: DaySummary) -> str:
    """Render the day log with previous/next navigation."""
    links = []
    if summary.previous_day is not None:
        links.append(f'<a href="{log_url(summary.previous_day)}">&larr; Previous</a>')
    if summary.next_day is not None:
        links.append(f'<a href="{log_url(summary.next_day)}">Next &rarr;</a>')
    nav = f"<p>{' '.join(links)}</p>"
    heading = f"<h1>{escape(humanize_date(summary.day))}</h1>"
    log_food = f'<p><a href="{log_url(summary.day)}/new">Log Food</a></p>'
    if not summary.lines:
        return (
            f"{heading}\n{nav}\n<p>No food logged for this date.</p>\n{log_food}"
        )
    rows = "\n".join(_log_row(summary.day, line) for line in summary.lines)
    total = (
        '<tr class="total"><td>Total</td><td></td><td></td><td></td><td></td>'
        f"{_nutrient_cells(summary.total)}<td></td></tr>"
    )
    return (
        f"{heading}\n{nav}\n<table>\n<thead><tr>"
        "<th>Time</th><th>Food</th><th>Brand</th><th>Amount</th><th>Unit</th>"
        f"{_NUTRIENT_HEADERS}<th></th></tr></thead>\n"
        f"<tbody>\n{rows}\n{total}\n</tbody>\n</table>\n{log_food}"
    )


def render_log_form(
    day: date, foods: list[FoodListItem], servings: dict[int, list[ServingSize]]
) -> str:
    """Render the form for logging a food on a date."""
    heading = f"<h1>Log Food for {format_log_date(day)}</h1>"
    if not foods:
        return (
            f"{heading}\n<p>The library is empty. "
            '<a href="/library/new">Add a food</a> first.</p>'
        )
    food_options = "\n".join(
        f'<option value="{food.id}">{escape(food.name)}'
        f"{_brand_suffix(food.brand)}</option>"
        for food in foods
    )
    serving_groups = "\n".join(
        f'<optgroup label="{escape(food.name, quote=True)}">'
        + "".join(
            f'<option value="{serving.id}">{escape(serving.name)} '
            f"({serving.amount:g})</option>"
            for serving in servings[food.id]
        )
        + "</optgroup>"
        for food in foods
        if servings[food.id]
    )
    return (
        f"{heading}\n"
        f'<form method="post" action="{log_url(day)}/new">\n'
        '<label for="food_id">Food</label>\n'
        f'<select id="food_id" name="food_id">\n{food_options}\n</select><br />\n'
        '<label for="serving_id">Serving Size (optional)</label>\n'
        '<select id="serving_id" name="serving_id">\n'
        '<option value="">Base unit (g or ml)</option>\n'
        f"{serving_groups}\n</select><br />\n"
        f"{_number_input('amount', 'Amount', None)}\n"
        '<input type="submit" value="Log Food" />\n'
        "</form>"
    )


def render_library(foods: list[FoodListItem]) -> str:
    """Render the library listing."""
    new_food = '<p><a href="/library/new">New Food</a></p>'
    if not foods:
        return f"<h1>Library</h1>\n<p>The library is empty.</p>\n{new_food}"
    items = "\n".join(
        f'<li><a href="{food_url(food.id)}">{escape(food.name)}</a>'
        f"{_brand_suffix(food.brand)}</li>"
        for food in foods
    )
    return (
        f"<h1>Library</h1>\n<p>{len(foods)} foods.</p>\n<ul>\n{items}\n</ul>\n"
        f"{new_food}"
    )


def render_food(food: Food, servings: list[ServingSize]) -> str:
    """Render a food's nutrition facts and serving sizes."""
    unit = food.serving_unit.symbol
    facts = food.nutrition
    rows = [
        ("Energy", facts.energy, "kcal"),
        ("Protein", facts.protein, "g"),
        ("Fat", facts.fat, "g"),
        ("&mdash; Saturated Fat", facts.fat_saturated, "g"),
        ("Carbohydrate", facts.carbs, "g"),
        ("&mdash; Sugars", facts.carbs_sugars, "g"),
        ("Fibre", facts.fibre, "g"),
        ("Sodium", facts.sodium, "mg"),
    ]
    table = "\n".join(
        f"<tr><td>{label}</td><td>{value:g} {suffix}</td></tr>"
        for label, value, suffix in rows
    )
    url = food_url(food.id)
    if servings:
        serving_items = "\n".join(
            f"<li>{escape(serving.name)}: {serving.amount:g} {unit} "
            f'<form method="post" action="{url}/servings/{serving.id}/delete" '
            'class="inline"><input type="submit" value="Delete" /></form></li>'
            for serving in servings
        )
        serving_html = f"<ul>\n{serving_items}\n</ul>"
    else:
        serving_html = "<p>No custom serving sizes defined.</p>"
    serving_form = (
        f'<form method="post" action="{url}/servings">\n'
        f"{_text_input('serving_name', 'Name', '')}\n"
        f"{_number_input('serving_amount', f'Amount ({unit})', None)}\n"
        '<input type="submit" value="Add Serving" />\n'
        "</form>"
    )
    return (
        f"<h1>{escape(food.name)}</h1>\n"
        f"<h2>{escape(food.brand)}</h2>\n"
        f"<p>Nutrition per 100 {unit}</p>\n"
        "<table>\n<tr><th>Nutrient</th><th>Amount</th></tr>\n"
        f"{table}\n</table>\n"
        f"<h2>Serving Sizes</h2>\n{serving_html}\n{serving_form}\n"
        f'<p><a href="{url}/edit">Edit</a> <a href="/library">Back</a></p>'
    )


def render_food_form(food: Food | None) -> str:
    """Render the new-food form, or the edit form when a food is given."""
    if food is None:
        heading = "Library: New Food"
        action = "/library/new"
        name, brand, unit = "", "", ServingUnit.GRAMS
        values: dict[str, float] = {}
    else:
        heading = f"Edit {food.name}"
        action = f"{food_url(food.id)}/edit"
        name, brand, unit = food.name, food.brand, food.serving_unit
        values = food.nutrition.as_dict()
    unit_options = "".join(
        f'<option value="{option.value}"'
        f"{' selected' if option is unit else ''}>{option.symbol}</option>"
        for option in ServingUnit
    )
    nutrient_inputs = "\n".join(
        _number_input(field, label, values.get(field))
        for field, label in NUTRIENT_LABELS
    )
    return (
        f"<h1>{escape(heading)}</h1>\n"
        f'<form method="post" action="{action}">\n'
        f"{_text_input('name', 'Name', name)}\n"
        f"{_text_input('brand', 'Brand', brand)}\n"
        '<label for="serving_unit">Serving Unit</label>\n'
        f'<select id="serving_unit" name="serving_unit">{unit_options}</select>'
        "<br />\n"
        f"{nutrient_inputs}\n"
        '<input type="submit" value="Save" />\n'
        "</form>"
    )


def _log_row(day: date, line: EntryLine) -> str:
    unit = escape(line.unit_label)
    if line.serving_missing:
        unit += ' <span class="warning">(serving deleted)</span>'
    logged_at = line.entry.created_at.astimezone().strftime("%H:%M")
    delete_url = f"{log_url(day)}/entry/{line.entry.id}/delete"
    return (
        f"<tr><td>{logged_at}</td>"
        f'<td><a href="{food_url(line.food.id)}">{escape(line.food.name)}</a></td>'
        f"<td>{escape(line.food.brand)}</td>"
        f"<td>{line.entry.amount:.1f}</td><td>{unit}</td>"
        f"{_nutrient_cells(line.nutrition)}"
        f'<td><form method="post" action="{delete_url}" class="inline">'
        '<input type="submit" value="Delete" /></form></td></tr>'
    )


def _text_input(name: str, label: str, value: str) -> str:
    return (
        f'<label for="{name}">{label}</label>\n'
        f'<input type="text" id="{name}" name="{name}" '
        f'value="{escape(value, quote=True)}" /><br />'
    )


def _number_input(name: str, label: str, value: float | None) -> str:
    shown = "" if value is None else f"{value:g}"
    return (
        f'<label for="{name}">{label}</label>\n'
        f'<input type="number" step="any" min="0" id="{name}" name="{name}" '
        f'value="{shown}" /><br />'
    )


def _nutrient_cells(nutrition: Nutrition) -> str:
    return "".join(f"<td>{value:.1f}</td>" for value in nutrition.as_dict().values())


def _brand_suffix(brand: str) -> str:
    return f" &mdash; {escape(brand)}" if brand else ""


_NUTRIENT_HEADERS = (
    "<th>Energy (kcal)</th><th>Protein (g)</th><th>Fat (g)</th>"
    "<th>Sat. Fat (g)</th><th>Carbs (g)</th><th>Sugars (g)</th>"
    "<th>Fibre (g)</th><th>Sodium (mg)</th>"
)

_STYLE = """
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      nav a { margin-right: 1rem; }
      table { border-collapse: collapse; }
      th, td { padding: 0.3rem 0.6rem; border-bottom: 1px solid #ddd; }
      tr.total td { font-weight: bold; }
      form.inline { display: inline; }
      label { display: inline-block; min-width: 12rem; }
      .warning { color: #a00; }
"""
