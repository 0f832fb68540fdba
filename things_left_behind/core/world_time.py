from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TimeUnit = Literal["days", "weeks", "months", "years"]

DAYS: TimeUnit = "days"
WEEKS: TimeUnit = "weeks"
MONTHS: TimeUnit = "months"
YEARS: TimeUnit = "years"

DAYS_PER_UNIT: dict[str, int] = {
    DAYS: 1,
    WEEKS: 7,
    MONTHS: 30,
    YEARS: 365,
}


@dataclass(frozen=True, slots=True)
class WorldTime:
    apocalypse_year: int
    elapsed_amount: float = 0
    elapsed_unit: TimeUnit = DAYS

    def __post_init__(self) -> None:
        if self.elapsed_unit not in DAYS_PER_UNIT:
            raise ValueError(f"Unknown elapsed unit '{self.elapsed_unit}'.")
        if self.elapsed_amount < 0:
            raise ValueError("Elapsed amount cannot be negative.")

    def get_current_year(self) -> int:
        # Only whole years move the calendar; shorter spans stay in the apocalypse year.
        if self.elapsed_unit == YEARS:
            return self.apocalypse_year + int(self.elapsed_amount)
        return self.apocalypse_year

    def get_elapsed_days(self) -> float:
        return self.elapsed_amount * DAYS_PER_UNIT[self.elapsed_unit]
