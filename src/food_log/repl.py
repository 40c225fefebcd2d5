"""Interactive console over the library and the log."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TextIO

from food_log.containers import AppContainer
from food_log.domain.library import parse_id
from food_log.domain.log import format_log_date, parse_amount, parse_log_date
from food_log.errors import FoodLogError, ValidationError

PROMPT = "> "


@dataclass(frozen=True)
class ReplCommandSpec:
    """Declarative console command definition."""

    name: str
    usage: str
    description: str


class ReplCommand(Enum):
    """Commands understood by the console."""

    COUNT = ReplCommandSpec("count", "count", "Number of foods in the library")
    FOODS = ReplCommandSpec("foods", "foods", "List the library")
    DAY = ReplCommandSpec("day", "day [YYYY-MM-DD]", "Totals for a date")
    LOG = ReplCommandSpec(
        "log", "log FOOD_ID AMOUNT [SERVING_ID]", "Log a food for today"
    )
    HELP = ReplCommandSpec("help", "help", "Show this help")
    QUIT = ReplCommandSpec("q", "q", "Quit")

    @classmethod
    def lookup(cls, name: str) -> "ReplCommand | None":
        for command in cls:
            if command.value.name == name:
                return command
        return None


def run_repl(container: AppContainer, stdin: TextIO, stdout: TextIO) -> None:
    """Read commands until `q` or end of input."""
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        name, _, argument = line.strip().partition(" ")
        command = ReplCommand.lookup(name)
        if command is ReplCommand.QUIT:
            stdout.write("Bye!\n")
            break
        if command is None:
            stdout.write("Unknown command. Type `help` for a list.\n")
            continue
        try:
            stdout.write(_execute(container, command, argument.strip()) + "\n")
        except FoodLogError as exc:
            stdout.write(f"Error: {exc.message}\n")


def _execute(container: AppContainer, command: ReplCommand, argument: str) -> str:
    match command:
        case ReplCommand.COUNT:
            count = container.library_service.count_foods()
            return f"The library has {count} foods."
        case ReplCommand.FOODS:
            foods = container.library_service.list_foods()
            if not foods:
                return "The library is empty."
            return "\n".join(
                f"{food.id}: {food.name}" + (f" ({food.brand})" if food.brand else "")
                for food in foods
            )
        case ReplCommand.DAY:
            day = parse_log_date(argument) if argument else date.today()
            summary = container.summary_service.summarize(day)
            total = summary.total
            return (
                f"{format_log_date(day)}: {len(summary.lines)} entries, "
                f"{total.energy:.0f} kcal, {total.protein:.1f}P / "
                f"{total.fat:.1f}F / {total.carbs:.1f}C"
            )
        case ReplCommand.LOG:
            return _log_food(container, argument)
        case _:
            return "\n".join(
                f"{entry.usage:<34} {entry.description}"
                for entry in (item.value for item in ReplCommand)
            )


def _log_food(container: AppContainer, argument: str) -> str:
    parts = argument.split()
    if len(parts) not in (2, 3):
        raise ValidationError(f"Usage: {ReplCommand.LOG.value.usage}")
    food_id = parse_id(parts[0])
    amount = parse_amount(parts[1])
    serving_id = parse_id(parts[2]) if len(parts) == 3 else None
    entry_id = container.log_service.log_food(
        date.today(), food_id, serving_id, amount
    )
    return f"Logged entry {entry_id}."
