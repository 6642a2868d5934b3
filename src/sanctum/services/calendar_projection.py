"""Training calendar projection.

Infers workout frequency from recent history, projects upcoming workout
days onto calendar dates, schedules deload weeks, and merges everything
with logged workouts and explicit rest days into week rows.

Every function here is pure: progress and the current time are passed in,
nothing is read from storage or the system clock unless ``now`` is omitted.
"""

from datetime import date, datetime, time

from ..models.calendar import (
    CalendarCell,
    CalendarCellType,
    CalendarProjection,
    CalendarWeekRow,
    CalendarWorkout,
    DeloadWeek,
    FrequencyConfidence,
    FrequencyEstimate,
    NextWorkout,
    ProjectedDay,
    Slot,
)
from ..models.program import SANCTUM_PROGRAM, Program
from ..models.progress import UserProgress, WorkoutLog
from ..utils.dates import (
    add_days,
    day_of_week,
    format_week_range,
    get_monday,
    parse_local_date,
    to_iso_date,
    to_local_date,
)
from ..utils.numbers import round_half_up

DEFAULT_WORKOUTS_PER_WEEK = 5
FREQUENCY_WINDOW_DAYS = 28
MIN_LOGS_FOR_ESTIMATE = 2
HIGH_CONFIDENCE_LOGS = 6
PROJECTION_SLOTS = 60
HISTORY_DAYS = 21
DELOAD_LOOKAHEAD_DAYS = 28
OVERDUE_SAME_WEEK_CUTOFF = 2  # Wednesday

THIS_WEEK_LABEL = "This Week"
DELOAD_WEEK_LABEL = "Deload Week"


def _as_datetime(now: date | datetime | None) -> datetime:
    if now is None:
        return datetime.now()
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time())


def default_frequency() -> FrequencyEstimate:
    """Assumed pace when there is not enough history."""
    return FrequencyEstimate(
        workouts_per_week=DEFAULT_WORKOUTS_PER_WEEK,
        avg_days_between_workouts=7 / DEFAULT_WORKOUTS_PER_WEEK,
        confidence=FrequencyConfidence.DEFAULT,
    )


def estimate_frequency(
    workout_logs: list[WorkoutLog], now: date | datetime | None = None
) -> FrequencyEstimate:
    """Estimate workouts per week from the last four weeks.

    Deload workouts are ignored since they do not reflect the normal
    training pace. Several logs on one date count as one training day.
    """
    now_dt = _as_datetime(now)
    cutoff = to_iso_date(add_days(now_dt, -FREQUENCY_WINDOW_DAYS))

    recent_logs = sorted(
        (
            log
            for log in workout_logs
            if log.completed and log.date >= cutoff and not log.is_deload
        ),
        key=lambda log: log.date,
    )

    if len(recent_logs) < MIN_LOGS_FOR_ESTIMATE:
        return default_frequency()

    unique_dates = {log.date for log in recent_logs}
    first_date = datetime.combine(parse_local_date(recent_logs[0].date), time())
    span_days = (now_dt - first_date).total_seconds() / 86400
    day_span = max(1, round_half_up(span_days))
    week_span = day_span / 7

    workouts_per_week = round_half_up(len(unique_dates) / week_span, 1)
    clamped = max(1, min(7, workouts_per_week))
    avg_days_between = round_half_up(7 / clamped, 1)

    if len(recent_logs) >= HIGH_CONFIDENCE_LOGS:
        confidence = FrequencyConfidence.HIGH
    else:
        confidence = FrequencyConfidence.LOW

    return FrequencyEstimate(
        workouts_per_week=clamped,
        avg_days_between_workouts=avg_days_between,
        confidence=confidence,
    )


def get_next_workout_day(
    progress: UserProgress, program: Program = SANCTUM_PROGRAM
) -> Slot:
    """First program day not yet completed in the current cycle.

    Skipped days are offered again before later ones. When every day of
    the cycle is done, the next slot is day 1 of the following cycle.
    """
    cycle = progress.current_cycle
    completed_days = {
        log.day_number
        for log in progress.workout_logs
        if log.cycle == cycle and log.completed
    }

    for day_number in range(1, program.days_per_cycle + 1):
        if day_number not in completed_days:
            return Slot(day_number=day_number, cycle=cycle)

    return Slot(day_number=1, cycle=cycle + 1)


def project_future_days(
    start_date: date | datetime,
    start_cycle: int,
    start_day: int,
    avg_days_between: float,
    count: int,
    program: Program = SANCTUM_PROGRAM,
) -> list[ProjectedDay]:
    """Walk forward through the program at a fixed day spacing.

    Dates advance by ``avg_days_between`` rounded to whole days; weekends
    and holidays are not considered.
    """
    step = int(round_half_up(avg_days_between))
    current = to_local_date(start_date)
    day_number = start_day
    cycle = start_cycle
    result: list[ProjectedDay] = []

    for _ in range(count):
        result.append(
            ProjectedDay(
                date=to_iso_date(current),
                day_number=day_number,
                cycle=cycle,
                day_name=program.get_day_name(day_number),
            )
        )

        day_number += 1
        if day_number > program.days_per_cycle:
            day_number = 1
            cycle += 1

        current = add_days(current, step)

    return result


def calculate_deload_weeks(
    progress: UserProgress,
    frequency: FrequencyEstimate | None = None,
    count: int = 2,
    now: date | datetime | None = None,
) -> list[DeloadWeek]:
    """Upcoming deload weeks as Monday-Sunday ranges.

    The first deload falls ``deload_interval_weeks`` after the last deload
    (or the cycle start). An overdue deload moves to the current week when
    today is Monday-Wednesday, otherwise to next week. Later deloads follow
    every ``deload_interval_weeks + 1`` weeks since the deload week itself
    does not count toward the interval.

    ``frequency`` is accepted for callers that already computed it; the
    schedule does not depend on it.
    """
    now_dt = _as_datetime(now)
    interval = progress.deload_interval_weeks
    anchor = parse_local_date(progress.last_deload_date or progress.cycle_start_date)

    target = add_days(anchor, interval * 7)
    if datetime.combine(target, time()) < now_dt:
        monday = get_monday(now_dt)
        if day_of_week(now_dt) <= OVERDUE_SAME_WEEK_CUTOFF:
            target = monday
        else:
            target = add_days(monday, 7)

    weeks: list[DeloadWeek] = []
    for _ in range(count):
        deload_monday = get_monday(target)
        weeks.append(
            DeloadWeek(
                start_date=to_iso_date(deload_monday),
                end_date=to_iso_date(add_days(deload_monday, 6)),
            )
        )
        target = add_days(deload_monday, (interval + 1) * 7)

    return weeks


def _latest_log_by_date(logs: list[WorkoutLog]) -> dict[str, WorkoutLog]:
    by_date: dict[str, WorkoutLog] = {}
    for log in logs:
        if not log.completed:
            continue
        existing = by_date.get(log.date)
        if existing is None or log.recency_key > existing.recency_key:
            by_date[log.date] = log
    return by_date


def _classify_cell(
    cell_date: date,
    today: date,
    log: WorkoutLog | None,
    projected: ProjectedDay | None,
    is_rest_day: bool,
    is_deload_week: bool,
) -> tuple[CalendarCellType, CalendarWorkout | None]:
    """Resolve a date's cell type using the fixed precedence order."""
    is_today = cell_date == today
    is_past = cell_date < today

    if log is not None:
        return CalendarCellType.PAST_COMPLETED, CalendarWorkout(
            day_number=log.day_number,
            day_name=log.day_name,
            cycle=log.cycle,
            log=log,
            is_deload=log.is_deload,
        )

    if is_rest_day:
        return CalendarCellType.EXPLICIT_REST, None

    if is_today:
        workout = None
        if projected is not None:
            workout = CalendarWorkout(
                day_number=projected.day_number,
                day_name=projected.day_name,
                cycle=projected.cycle,
            )
        return CalendarCellType.TODAY, workout

    if is_deload_week and not is_past:
        return CalendarCellType.DELOAD, None

    if projected is not None and not is_past:
        return CalendarCellType.PROJECTED, CalendarWorkout(
            day_number=projected.day_number,
            day_name=projected.day_name,
            cycle=projected.cycle,
        )

    if is_past:
        return CalendarCellType.PAST_MISSED, None

    return CalendarCellType.REST, None


def build_calendar_projection(
    progress: UserProgress,
    now: date | datetime | None = None,
    program: Program = SANCTUM_PROGRAM,
) -> CalendarProjection:
    """Build the full calendar view for the current progress.

    Covers three weeks of history through the end of the second upcoming
    deload week (or four weeks ahead while a deload is active).
    """
    now_dt = _as_datetime(now)
    today = now_dt.date()
    today_str = to_iso_date(today)

    frequency = estimate_frequency(progress.workout_logs, now_dt)
    next_slot = get_next_workout_day(progress, program)
    next_day = program.get_workout_day(next_slot.day_number)

    # An active deload is ended manually, so nothing further is scheduled
    if progress.is_deload_week:
        deload_weeks: list[DeloadWeek] = []
    else:
        deload_weeks = calculate_deload_weeks(progress, frequency, 2, now_dt)

    deload_dates: set[str] = set()
    for week in deload_weeks:
        start = parse_local_date(week.start_date)
        deload_dates.update(to_iso_date(add_days(start, i)) for i in range(7))
    deload_mondays = {week.start_date for week in deload_weeks}

    rest_days = set(progress.rest_days)
    log_by_date = _latest_log_by_date(progress.workout_logs)

    projection_start = add_days(today, 1) if today_str in rest_days else today
    projected_by_date: dict[str, ProjectedDay] = {}
    for projected in project_future_days(
        projection_start,
        next_slot.cycle,
        next_slot.day_number,
        frequency.avg_days_between_workouts,
        PROJECTION_SLOTS,
        program,
    ):
        if projected.date in deload_dates or projected.date in rest_days:
            continue
        projected_by_date.setdefault(projected.date, projected)

    range_start = get_monday(add_days(today, -HISTORY_DAYS))
    if deload_weeks:
        range_end = parse_local_date(deload_weeks[-1].end_date)
    else:
        range_end = add_days(today, DELOAD_LOOKAHEAD_DAYS)
    range_end_sunday = add_days(get_monday(range_end), 6)
    current_monday = get_monday(today)

    weeks: list[CalendarWeekRow] = []
    week_monday = range_start
    while week_monday <= range_end_sunday:
        monday_str = to_iso_date(week_monday)
        is_current_week = week_monday == current_monday
        if progress.is_deload_week and is_current_week:
            is_deload_week = True
        else:
            is_deload_week = monday_str in deload_mondays

        cells: list[CalendarCell] = []
        for dow in range(7):
            cell_date = add_days(week_monday, dow)
            cell_str = to_iso_date(cell_date)
            cell_type, workout = _classify_cell(
                cell_date,
                today,
                log_by_date.get(cell_str),
                projected_by_date.get(cell_str),
                cell_str in rest_days,
                is_deload_week,
            )
            cells.append(
                CalendarCell(
                    date=cell_str,
                    day_of_week=dow,
                    is_today=cell_date == today,
                    type=cell_type,
                    workout=workout,
                )
            )

        if is_current_week:
            week_label = THIS_WEEK_LABEL
        elif is_deload_week:
            week_label = DELOAD_WEEK_LABEL
        else:
            week_label = format_week_range(monday_str)

        weeks.append(
            CalendarWeekRow(
                week_label=week_label,
                week_start_date=monday_str,
                is_current_week=is_current_week,
                is_deload_week=is_deload_week,
                cells=cells,
            )
        )
        week_monday = add_days(week_monday, 7)

    next_workout = None
    if next_day is not None:
        next_workout = NextWorkout(
            day_number=next_slot.day_number,
            day_name=next_day.name,
            cycle=next_slot.cycle,
        )

    return CalendarProjection(frequency=frequency, weeks=weeks, next_workout=next_workout)
