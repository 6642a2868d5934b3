"""Training program data models and the fixed Sanctum program table."""

from dataclasses import dataclass, field
from enum import Enum


class ExerciseCategory(str, Enum):
    """Muscle categories used for rest timers and badge colors."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    ABS = "abs"


# Both tables must cover every ExerciseCategory member.
REST_TIMER_SECONDS: dict[ExerciseCategory, int] = {
    ExerciseCategory.CHEST: 180,
    ExerciseCategory.BACK: 180,
    ExerciseCategory.LEGS: 180,
    ExerciseCategory.SHOULDERS: 120,
    ExerciseCategory.BICEPS: 90,
    ExerciseCategory.TRICEPS: 90,
    ExerciseCategory.ABS: 90,
}

# Terminal colors (click.style names) for category badges
CATEGORY_BADGE_COLORS: dict[ExerciseCategory, str] = {
    ExerciseCategory.CHEST: "red",
    ExerciseCategory.BACK: "white",
    ExerciseCategory.SHOULDERS: "cyan",
    ExerciseCategory.BICEPS: "magenta",
    ExerciseCategory.TRICEPS: "bright_red",
    ExerciseCategory.LEGS: "green",
    ExerciseCategory.ABS: "yellow",
}


def get_rest_timer_seconds(category: ExerciseCategory) -> int:
    """Rest duration between sets for a muscle category."""
    return REST_TIMER_SECONDS[category]


def get_badge_color(category: ExerciseCategory) -> str:
    """Badge color for a muscle category."""
    return CATEGORY_BADGE_COLORS[category]


def abbreviate_day_name(name: str) -> str:
    """Short label for a day name.

    "Chest/Back" -> "C/B"; single names are cut to four characters.
    """
    parts = name.split("/")
    if len(parts) > 1:
        return "/".join(part.strip()[:1] for part in parts)
    return name[:4]


@dataclass
class ProgramExercise:
    """An exercise slot within a workout day."""

    order: int
    name: str
    category: ExerciseCategory
    sets: int
    reps: str  # rep range, e.g. "6-12"
    rest: str  # display string, e.g. "3 min"
    notes: str = ""
    substitutions: list[str] = field(default_factory=list)
    optional: bool = False
    rir: str | None = None
    intensity_technique: str | None = None
    per_side: bool = False

    @property
    def rest_seconds(self) -> int:
        """Rest timer duration derived from the category."""
        return get_rest_timer_seconds(self.category)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "order": self.order,
            "name": self.name,
            "category": self.category.value,
            "sets": self.sets,
            "reps": self.reps,
            "rest": self.rest,
            "notes": self.notes,
            "substitutions": self.substitutions,
            "optional": self.optional,
            "rir": self.rir,
            "intensityTechnique": self.intensity_technique,
            "perSide": self.per_side,
        }


@dataclass
class WorkoutDay:
    """A single day of the training cycle."""

    day_number: int
    name: str
    exercises: list[ProgramExercise]

    @property
    def abbreviation(self) -> str:
        """Short label for calendar cells."""
        return abbreviate_day_name(self.name)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "dayNumber": self.day_number,
            "name": self.name,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


@dataclass
class Program:
    """A fixed multi-day training program."""

    program_name: str
    days_per_cycle: int
    deload_interval_weeks: int
    workout_days: list[WorkoutDay]

    def get_workout_day(self, day_number: int) -> WorkoutDay | None:
        """Look up a workout day by its 1-based number."""
        for day in self.workout_days:
            if day.day_number == day_number:
                return day
        return None

    def get_exercises_for_day(self, day_number: int) -> list[ProgramExercise]:
        """Exercises for a day, or an empty list for unknown days."""
        day = self.get_workout_day(day_number)
        return day.exercises if day else []

    def get_day_name(self, day_number: int) -> str:
        """Day name, falling back to "Day N" for unknown days."""
        day = self.get_workout_day(day_number)
        return day.name if day else f"Day {day_number}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "programName": self.program_name,
            "daysPerCycle": self.days_per_cycle,
            "deloadIntervalWeeks": self.deload_interval_weeks,
            "workoutDays": [day.to_dict() for day in self.workout_days],
        }

    def get_summary(self) -> str:
        """Generate a plain-text summary of the program."""
        summary = f"Program: {self.program_name}\n"
        summary += (
            f"{self.days_per_cycle} days per cycle, "
            f"deload every {self.deload_interval_weeks} weeks\n\n"
        )

        for day in self.workout_days:
            summary += f"Day {day.day_number}: {day.name}\n"
            for ex in day.exercises:
                line = f"  {ex.order}. {ex.name}: {ex.sets}x{ex.reps}"
                if ex.per_side:
                    line += " (per side)"
                if ex.optional:
                    line += " [optional]"
                summary += line + f", rest {ex.rest}\n"
            summary += "\n"

        return summary


def _ex(
    order: int,
    name: str,
    category: ExerciseCategory,
    rest: str,
    notes: str = "",
    per_side: bool = False,
) -> ProgramExercise:
    # Every Sanctum exercise is 2 sets of 6-12
    return ProgramExercise(
        order=order,
        name=name,
        category=category,
        sets=2,
        reps="6-12",
        rest=rest,
        notes=notes,
        per_side=per_side,
    )


_C = ExerciseCategory

SANCTUM_PROGRAM = Program(
    program_name="Sanctum",
    days_per_cycle=6,
    deload_interval_weeks=5,
    workout_days=[
        WorkoutDay(
            day_number=1,
            name="Pull",
            exercises=[
                _ex(1, "ISO High Row", _C.BACK, "3 min"),
                _ex(2, "Pronated Grip Elbows Flared ISO Lat Row", _C.BACK, "3 min"),
                _ex(3, "Wide Neutral Grip Lat Pulldown", _C.BACK, "3 min"),
                _ex(4, "Supinated Grip Cable Row", _C.BACK, "3 min"),
                _ex(5, "Dual Handle Rope Face Pulls", _C.SHOULDERS, "2 min"),
                _ex(6, "Hyperextensions", _C.BACK, "3 min"),
                _ex(7, "Dual Handle Rope Bicep Curls", _C.BICEPS, "90 sec"),
                _ex(8, "Bayesian Curls", _C.BICEPS, "90 sec"),
            ],
        ),
        WorkoutDay(
            day_number=2,
            name="Push",
            exercises=[
                _ex(1, "Pec Deck", _C.CHEST, "3 min"),
                _ex(2, "Incline Machine Press (Power Smith)", _C.CHEST, "3 min"),
                _ex(3, "Decline Bench Press", _C.CHEST, "3 min"),
                _ex(4, "Vertical Pec Fly", _C.CHEST, "3 min"),
                _ex(5, "Behind The Neck Press", _C.SHOULDERS, "2 min"),
                _ex(6, "Hip High Cable Raises", _C.SHOULDERS, "2 min"),
                _ex(7, "Lean Forward Dips", _C.TRICEPS, "90 sec"),
                _ex(8, "Overhead Tricep Extensions", _C.TRICEPS, "90 sec"),
            ],
        ),
        WorkoutDay(
            day_number=3,
            name="Legs (A)",
            exercises=[
                _ex(1, "Calf Raises", _C.LEGS, "3 min"),
                _ex(2, "Leg Curls", _C.LEGS, "3 min"),
                _ex(3, "Leg Extensions", _C.LEGS, "3 min"),
                _ex(4, "Hack Squat", _C.LEGS, "3 min"),
                _ex(5, "Bulgarian Split Squats", _C.LEGS, "3 min", per_side=True),
                _ex(6, "DB Romanian Deadlift", _C.LEGS, "3 min"),
                _ex(7, "Abductors", _C.LEGS, "3 min"),
                _ex(8, "Adductors", _C.LEGS, "3 min"),
                _ex(9, "Ab Crunch Machine", _C.ABS, "90 sec"),
                _ex(10, "Roman Chair Leg Raises", _C.ABS, "90 sec"),
            ],
        ),
        WorkoutDay(
            day_number=4,
            name="Chest/Back",
            exercises=[
                _ex(1, "Incline Barbell Press", _C.CHEST, "3 min"),
                _ex(2, "Iso Lateral Wide Chest Press", _C.CHEST, "3 min"),
                _ex(3, "Pec Deck", _C.CHEST, "3 min"),
                _ex(4, "High to Low Chest Flies", _C.CHEST, "3 min"),
                _ex(5, "Single Arm Cable Row", _C.BACK, "3 min", per_side=True),
                _ex(6, "Supinated Close Grip Lat Pulldown", _C.BACK, "3 min"),
                _ex(7, "Neutral Grip Elbows Flared Cable Row", _C.BACK, "3 min"),
                _ex(8, "T Bar Upper Back Row into Kelso Shrug", _C.BACK, "3 min"),
            ],
        ),
        WorkoutDay(
            day_number=5,
            name="Shoulders/Arms",
            exercises=[
                _ex(1, "Reverse Pec Deck", _C.SHOULDERS, "2 min"),
                _ex(2, "DB Y-Raises", _C.SHOULDERS, "2 min"),
                _ex(3, "Power Smith Shoulder Press", _C.SHOULDERS, "2 min"),
                _ex(
                    4,
                    "21s Ez Bar Bicep Curl",
                    _C.BICEPS,
                    "90 sec",
                    notes="7 bottom half + 7 top half + 7 full ROM",
                ),
                _ex(5, "DB Hammer Curl", _C.BICEPS, "90 sec"),
                _ex(6, "Preacher Bicep Curl", _C.BICEPS, "90 sec"),
                _ex(7, "DB Skull Crushers", _C.TRICEPS, "90 sec"),
                _ex(8, "Single Arm Overhead Extensions", _C.TRICEPS, "90 sec", per_side=True),
                _ex(9, "Tricep Pushdown", _C.TRICEPS, "90 sec"),
            ],
        ),
        WorkoutDay(
            day_number=6,
            name="Legs (B)",
            exercises=[
                _ex(1, "Calf Raises", _C.LEGS, "3 min"),
                _ex(2, "Leg Curls", _C.LEGS, "3 min"),
                _ex(3, "Leg Extensions", _C.LEGS, "3 min"),
                _ex(4, "Hip Thrust", _C.LEGS, "3 min"),
                _ex(5, "Leg Press", _C.LEGS, "3 min"),
                _ex(6, "Step-Ups", _C.LEGS, "3 min", per_side=True),
                _ex(7, "Stiff Leg Deadlift", _C.LEGS, "3 min"),
                _ex(8, "Ab Crunch Machine", _C.ABS, "90 sec"),
                _ex(9, "Roman Chair Leg Raises", _C.ABS, "90 sec"),
            ],
        ),
    ],
)
