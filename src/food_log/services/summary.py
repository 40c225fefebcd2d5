"""Daily nutrition totals for the food log."""

import logging
from dataclasses import dataclass
from datetime import date

from food_log.domain.library import Food, ServingSize
from food_log.domain.log import DaySummary, Entry, EntryLine
from food_log.domain.nutrition import sum_nutrition
from food_log.services.library import LibraryRepository
from food_log.services.log import EntryRepository

# Nutrition facts are per 100 base units.
BASE_UNIT_MULTIPLIER = 0.01

_logger = logging.getLogger(__name__)


@dataclass
class DaySummaryService:
    """Resolves a day's entries against the library and totals them."""

    library: LibraryRepository
    entries: EntryRepository

    def summarize(self, day: date) -> DaySummary:
        """Return per-entry nutrition and the total for a date.

        Raises NotFoundError if an entry's food no longer exists.
        """
        foods: dict[int, Food] = {}
        lines = []
        for entry in self.entries.list_entries(day):
            food = foods.get(entry.food_id)
            if food is None:
                food = self.library.get_food(entry.food_id)
                foods[entry.food_id] = food
            serving = self._resolve_serving(entry, food)
            lines.append(resolve_line(entry, food, serving))
        return DaySummary(
            day=day,
            lines=lines,
            total=sum_nutrition(line.nutrition for line in lines),
        )

    def _resolve_serving(self, entry: Entry, food: Food) -> ServingSize | None:
        if entry.serving_id is None:
            return None
        serving = self.library.get_serving(entry.serving_id)
        if serving is None or serving.food_id != food.id:
            _logger.warning(
                "Entry references a missing serving, using the base unit: "
                "entry_id=%s serving_id=%s food_id=%s",
                entry.id,
                entry.serving_id,
                food.id,
            )
            return None
        return serving


def resolve_line(entry: Entry, food: Food, serving: ServingSize | None) -> EntryLine:
    """Scale a food's nutrition by an entry's amount.

    With a serving, one unit of the amount is `serving.amount` base units;
    without one, it is one base unit.
    """
    if serving is not None:
        multiplier = serving.amount / 100.0
        unit_label = serving.name
    else:
        multiplier = BASE_UNIT_MULTIPLIER
        unit_label = food.serving_unit.symbol
    factor = entry.amount * multiplier
    return EntryLine(
        entry=entry,
        food=food,
        unit_label=unit_label,
        multiplier=multiplier,
        factor=factor,
        nutrition=food.nutrition.scale(factor),
        serving_missing=entry.serving_id is not None and serving is None,
    )
