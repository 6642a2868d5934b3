"""Calendar projection result models."""

from dataclasses import dataclass, field
from enum import Enum

from .progress import WorkoutLog


class FrequencyConfidence(str, Enum):
    """How much history backs a frequency estimate."""

    DEFAULT = "default"
    LOW = "low"
    HIGH = "high"


class CalendarCellType(str, Enum):
    """Classification of a single calendar date."""

    PAST_COMPLETED = "past-completed"
    PAST_MISSED = "past-missed"
    TODAY = "today"
    PROJECTED = "projected"
    REST = "rest"
    DELOAD = "deload"
    EXPLICIT_REST = "explicit-rest"


@dataclass
class FrequencyEstimate:
    """Observed training pace."""

    workouts_per_week: float
    avg_days_between_workouts: float
    confidence: FrequencyConfidence

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "workoutsPerWeek": self.workouts_per_week,
            "avgDaysBetweenWorkouts": self.avg_days_between_workouts,
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class Slot:
    """A (day number, cycle) pair identifying a workout."""

    day_number: int
    cycle: int


@dataclass
class ProjectedDay:
    """A workout projected onto a future date."""

    date: str
    day_number: int
    cycle: int
    day_name: str


@dataclass
class DeloadWeek:
    """A Monday-Sunday deload week."""

    start_date: str
    end_date: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"startDate": self.start_date, "endDate": self.end_date}


@dataclass
class CalendarWorkout:
    """Workout information attached to a calendar cell."""

    day_number: int
    day_name: str
    cycle: int
    log: WorkoutLog | None = None
    is_deload: bool | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = {
            "dayNumber": self.day_number,
            "dayName": self.day_name,
            "cycle": self.cycle,
        }
        if self.log is not None:
            data["log"] = self.log.to_dict()
        if self.is_deload is not None:
            data["isDeload"] = self.is_deload
        return data


@dataclass
class CalendarCell:
    """One calendar date."""

    date: str
    day_of_week: int  # 0=Mon, 6=Sun
    is_today: bool
    type: CalendarCellType
    workout: CalendarWorkout | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "isToday": self.is_today,
            "type": self.type.value,
        }
        if self.workout is not None:
            data["workout"] = self.workout.to_dict()
        return data


@dataclass
class CalendarWeekRow:
    """A Monday-Sunday row of the calendar."""

    week_label: str
    week_start_date: str
    is_current_week: bool
    is_deload_week: bool
    cells: list[CalendarCell] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "weekLabel": self.week_label,
            "weekStartDate": self.week_start_date,
            "isCurrentWeek": self.is_current_week,
            "isDeloadWeek": self.is_deload_week,
            "cells": [cell.to_dict() for cell in self.cells],
        }


@dataclass
class NextWorkout:
    """The workout the user should do next."""

    day_number: int
    day_name: str
    cycle: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "dayNumber": self.day_number,
            "dayName": self.day_name,
            "cycle": self.cycle,
        }


@dataclass
class CalendarProjection:
    """Complete calendar view: pace, week rows, and the next workout."""

    frequency: FrequencyEstimate
    weeks: list[CalendarWeekRow]
    next_workout: NextWorkout | None

    @property
    def cells(self) -> list[CalendarCell]:
        """All cells across all weeks in date order."""
        return [cell for week in self.weeks for cell in week.cells]

    def find_cell(self, iso_date: str) -> CalendarCell | None:
        """Look up the cell for a date, if it is in the visible range."""
        for cell in self.cells:
            if cell.date == iso_date:
                return cell
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "frequency": self.frequency.to_dict(),
            "weeks": [week.to_dict() for week in self.weeks],
            "nextWorkout": self.next_workout.to_dict() if self.next_workout else None,
        }
