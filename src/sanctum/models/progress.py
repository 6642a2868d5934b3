"""Workout logs and user progress tracking models.

Serialized field names are camelCase so exported backups stay compatible
with existing Sanctum data files.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from ..utils.dates import parse_local_date, to_iso_date, to_local_date


@dataclass
class SetLog:
    """A single logged set."""

    set_number: int
    weight: float | None = None
    reps: int | None = None
    completed: bool = False
    timestamp: int | None = None  # epoch ms

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = {
            "setNumber": self.set_number,
            "weight": self.weight,
            "reps": self.reps,
            "completed": self.completed,
        }
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SetLog":
        """Create from dictionary."""
        return cls(
            set_number=data["setNumber"],
            weight=data.get("weight"),
            reps=data.get("reps"),
            completed=data.get("completed", False),
            timestamp=data.get("timestamp"),
        )


@dataclass
class ExerciseLog:
    """Logged sets for one exercise of a workout."""

    exercise_name: str
    sets: list[SetLog]
    notes: str = ""
    skipped: bool = False
    replaced_with: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = {
            "exerciseName": self.exercise_name,
            "sets": [s.to_dict() for s in self.sets],
            "notes": self.notes,
        }
        if self.skipped:
            data["skipped"] = True
        if self.replaced_with:
            data["replacedWith"] = self.replaced_with
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseLog":
        """Create from dictionary."""
        return cls(
            exercise_name=data["exerciseName"],
            sets=[SetLog.from_dict(s) for s in data.get("sets", [])],
            notes=data.get("notes", ""),
            skipped=data.get("skipped", False),
            replaced_with=data.get("replacedWith"),
        )


@dataclass
class WorkoutLog:
    """A finished (or abandoned) workout session.

    ``sequence`` is a creation counter assigned by
    :meth:`UserProgress.add_workout_log`; it orders logs that share a date.
    """

    id: str
    date: str  # ISO YYYY-MM-DD
    cycle: int
    day_number: int
    day_name: str
    exercises: list[ExerciseLog] = field(default_factory=list)
    completed: bool = True
    total_volume: float | None = None
    duration: int | None = None  # seconds
    session_notes: str | None = None
    is_deload: bool = False
    sequence: int = 0

    @property
    def recency_key(self) -> tuple[int, str]:
        """Ordering key among logs on the same date (higher is newer)."""
        return (self.sequence, self.id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = {
            "id": self.id,
            "date": self.date,
            "cycle": self.cycle,
            "dayNumber": self.day_number,
            "dayName": self.day_name,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "completed": self.completed,
        }
        if self.total_volume is not None:
            data["totalVolume"] = self.total_volume
        if self.duration is not None:
            data["duration"] = self.duration
        if self.session_notes:
            data["sessionNotes"] = self.session_notes
        if self.is_deload:
            data["isDeload"] = True
        if self.sequence:
            data["sequence"] = self.sequence
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutLog":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            date=data["date"],
            cycle=data["cycle"],
            day_number=data["dayNumber"],
            day_name=data.get("dayName", ""),
            exercises=[ExerciseLog.from_dict(ex) for ex in data.get("exercises", [])],
            completed=data.get("completed", False),
            total_volume=data.get("totalVolume"),
            duration=data.get("duration"),
            session_notes=data.get("sessionNotes"),
            is_deload=data.get("isDeload", False),
            sequence=data.get("sequence", 0),
        )


@dataclass
class RestTimerState:
    """A running rest timer inside an active workout."""

    exercise_index: int
    set_index: int
    started_at: int  # epoch ms
    duration: int  # seconds

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exerciseIndex": self.exercise_index,
            "setIndex": self.set_index,
            "startedAt": self.started_at,
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RestTimerState":
        """Create from dictionary."""
        return cls(
            exercise_index=data["exerciseIndex"],
            set_index=data["setIndex"],
            started_at=data["startedAt"],
            duration=data["duration"],
        )


@dataclass
class ActiveWorkout:
    """In-progress workout session state."""

    day_number: int
    cycle: int
    exercises: list[ExerciseLog]
    start_time: int  # epoch ms
    rest_timer: RestTimerState | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "dayNumber": self.day_number,
            "cycle": self.cycle,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "startTime": self.start_time,
            "restTimer": self.rest_timer.to_dict() if self.rest_timer else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActiveWorkout":
        """Create from dictionary."""
        rest_timer = None
        if data.get("restTimer"):
            rest_timer = RestTimerState.from_dict(data["restTimer"])

        return cls(
            day_number=data["dayNumber"],
            cycle=data["cycle"],
            exercises=[ExerciseLog.from_dict(ex) for ex in data["exercises"]],
            start_time=data["startTime"],
            rest_timer=rest_timer,
        )


@dataclass
class UserProgress:
    """Root user state: cycle position, deload state, logs, and rest days."""

    current_cycle: int
    cycle_start_date: str
    deload_interval_weeks: int
    is_deload_week: bool = False
    last_deload_date: str | None = None
    workout_logs: list[WorkoutLog] = field(default_factory=list)
    rest_days: list[str] = field(default_factory=list)

    @classmethod
    def default(
        cls, today: date | datetime | None = None, deload_interval_weeks: int = 5
    ) -> "UserProgress":
        """Fresh progress starting cycle 1 today."""
        return cls(
            current_cycle=1,
            cycle_start_date=to_iso_date(today or datetime.now()),
            deload_interval_weeks=deload_interval_weeks,
        )

    @property
    def completed_logs(self) -> list[WorkoutLog]:
        """Logs that count toward history, volume, and projection."""
        return [log for log in self.workout_logs if log.completed]

    def add_workout_log(self, log: WorkoutLog) -> WorkoutLog:
        """Append a log, assigning it the next sequence number."""
        if not log.sequence:
            log.sequence = max((l.sequence for l in self.workout_logs), default=0) + 1
        self.workout_logs.append(log)
        return log

    def update_cycle(self, cycle: int) -> None:
        """Jump to a specific cycle number."""
        self.current_cycle = cycle

    def update_deload_interval(self, weeks: int) -> None:
        """Change the number of weeks between deloads."""
        self.deload_interval_weeks = weeks

    def get_last_workout_for_day(self, day_number: int) -> WorkoutLog | None:
        """Most recent completed log for a program day."""
        day_logs = [
            log for log in self.completed_logs if log.day_number == day_number
        ]
        if not day_logs:
            return None
        return max(day_logs, key=lambda log: (log.date, log.recency_key))

    def get_exercise_history(self, exercise_name: str) -> list[WorkoutLog]:
        """Logs containing an exercise, newest first."""
        logs = [
            log
            for log in self.workout_logs
            if any(ex.exercise_name == exercise_name for ex in log.exercises)
        ]
        return sorted(logs, key=lambda log: (log.date, log.recency_key), reverse=True)

    def get_logs_for_cycle(self, cycle: int) -> list[WorkoutLog]:
        """Completed logs of a cycle ordered by day number."""
        logs = [log for log in self.completed_logs if log.cycle == cycle]
        return sorted(logs, key=lambda log: log.day_number)

    def get_cycle_numbers(self) -> list[int]:
        """Distinct cycles with logs plus the current one, newest first."""
        cycles = {log.cycle for log in self.workout_logs}
        cycles.add(self.current_cycle)
        return sorted(cycles, reverse=True)

    def should_suggest_deload(self, now: date | datetime | None = None) -> bool:
        """True once the deload interval has elapsed since the anchor date."""
        today = to_local_date(now or datetime.now())
        anchor = parse_local_date(self.last_deload_date or self.cycle_start_date)
        weeks_since = (today - anchor).days / 7
        return weeks_since >= self.deload_interval_weeks

    def record_deload(self, today: date | datetime | None = None) -> None:
        """Record that a deload happened today without entering deload mode."""
        self.last_deload_date = to_iso_date(today or datetime.now())

    def start_deload(self) -> None:
        """Enter an active deload period."""
        self.is_deload_week = True

    def end_deload(self, today: date | datetime | None = None) -> None:
        """Leave the active deload period, anchoring the next one to today."""
        self.is_deload_week = False
        self.last_deload_date = to_iso_date(today or datetime.now())

    def add_rest_day(self, iso_date: str) -> bool:
        """Mark a date as explicit rest. Returns False if already marked."""
        if iso_date in self.rest_days:
            return False
        self.rest_days.append(iso_date)
        return True

    def remove_rest_day(self, iso_date: str) -> bool:
        """Unmark a rest date. Returns False if it was not marked."""
        if iso_date not in self.rest_days:
            return False
        self.rest_days = [d for d in self.rest_days if d != iso_date]
        return True

    def is_rest_day(self, iso_date: str) -> bool:
        """Check whether a date is marked as explicit rest."""
        return iso_date in self.rest_days

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and export."""
        data = {
            "currentCycle": self.current_cycle,
            "cycleStartDate": self.cycle_start_date,
            "deloadIntervalWeeks": self.deload_interval_weeks,
            "isDeloadWeek": self.is_deload_week,
            "workoutLogs": [log.to_dict() for log in self.workout_logs],
            "restDays": list(self.rest_days),
        }
        if self.last_deload_date:
            data["lastDeloadDate"] = self.last_deload_date
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserProgress":
        """Create from dictionary.

        Older backups may lack ``isDeloadWeek`` or ``restDays``; both get
        defaults. Duplicate rest days are collapsed.
        """
        return cls(
            current_cycle=data["currentCycle"],
            cycle_start_date=data["cycleStartDate"],
            deload_interval_weeks=data["deloadIntervalWeeks"],
            is_deload_week=data.get("isDeloadWeek", False),
            last_deload_date=data.get("lastDeloadDate"),
            workout_logs=[WorkoutLog.from_dict(log) for log in data["workoutLogs"]],
            rest_days=list(dict.fromkeys(data.get("restDays") or [])),
        )
