"""Workout completion validation results."""

from dataclasses import dataclass, field
from enum import Enum


class MissingField(str, Enum):
    """Why a set counts as incomplete."""

    WEIGHT = "weight"
    REPS = "reps"
    COMPLETED = "completed"


@dataclass
class IncompleteSetInfo:
    """An incomplete set found during validation."""

    exercise_index: int
    exercise_name: str
    set_index: int
    set_number: int
    missing_fields: list[MissingField]
    is_optional: bool

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exerciseIndex": self.exercise_index,
            "exerciseName": self.exercise_name,
            "setIndex": self.set_index,
            "setNumber": self.set_number,
            "missingFields": [f.value for f in self.missing_fields],
            "isOptional": self.is_optional,
        }


@dataclass
class ValidationResult:
    """Outcome of checking a workout before it can be finished."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    incomplete_sets: list[IncompleteSetInfo] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "isValid": self.is_valid,
            "errors": self.errors,
            "incompleteSets": [s.to_dict() for s in self.incomplete_sets],
        }
