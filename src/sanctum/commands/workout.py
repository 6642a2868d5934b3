"""Active workout commands."""

from datetime import datetime
from pathlib import Path

import click

from ..db import ActiveWorkoutRepository, ProgressRepository, SettingsRepository
from ..models.program import SANCTUM_PROGRAM, get_badge_color
from ..models.progress import ActiveWorkout
from ..services.calendar_projection import get_next_workout_day
from ..services.pr_detector import find_previous_workout, is_set_pr
from ..services.volume import format_volume
from ..services.workout_session import (
    WorkoutIncompleteError,
    create_active_workout,
    finish_workout,
    replace_exercise,
    rest_timer_remaining,
    skip_exercise,
    start_rest_timer,
    update_set,
    validate_active_workout,
)
from ..utils.timers import format_countdown, format_elapsed, session_elapsed_seconds
from ..utils.units import format_weight, to_pounds
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
)


async def _load_active(ctx: click.Context, db_path: Path, day_number: int) -> ActiveWorkout:
    workout = await ActiveWorkoutRepository(db_path).get(day_number)
    if workout is None:
        echo_error(f"No workout in progress for day {day_number}.")
        click.echo(f"Run 'sanctum workout start {day_number}' to begin one.")
        ctx.exit(1)
    return workout


@click.group()
def workout():
    """Log a workout session.

    Start a program day, record weight and reps for each set, then finish
    the session to add it to your history.
    """
    pass


@workout.command("start")
@click.argument("day_number", type=int, required=False)
@click.option("--restart", is_flag=True, help="Discard an existing session for this day")
@click.pass_context
@async_command
async def start(ctx: click.Context, day_number: int | None, restart: bool):
    """Start a workout (defaults to the next day in the cycle)."""
    db_path = ensure_initialized(ctx)

    progress = await ProgressRepository(db_path).load()
    if day_number is None:
        day_number = get_next_workout_day(progress).day_number

    if SANCTUM_PROGRAM.get_workout_day(day_number) is None:
        echo_error(f"Unknown day {day_number}. Days run 1-{SANCTUM_PROGRAM.days_per_cycle}.")
        ctx.exit(1)

    active_repo = ActiveWorkoutRepository(db_path)
    if await active_repo.has(day_number) and not restart:
        echo_warning(f"Day {day_number} already has a workout in progress.")
        if not click.confirm("Discard it and start over?"):
            return

    active = create_active_workout(day_number, progress.current_cycle)
    await active_repo.save(active)

    echo_success(
        f"Started Day {day_number}: {SANCTUM_PROGRAM.get_day_name(day_number)} "
        f"(cycle {progress.current_cycle})"
    )
    if progress.is_deload_week:
        echo_info("Deload week: keep the weights light.")
    click.echo(f"Run 'sanctum workout show {day_number}' to see your sets.")


@workout.command("show")
@click.argument("day_number", type=int)
@click.pass_context
@async_command
async def show(ctx: click.Context, day_number: int):
    """Show an in-progress workout with last session's numbers."""
    db_path = ensure_initialized(ctx)

    active = await _load_active(ctx, db_path, day_number)
    progress = await ProgressRepository(db_path).load()
    unit = await SettingsRepository(db_path).get_unit()
    previous = find_previous_workout(day_number, "", progress.workout_logs)
    definitions = SANCTUM_PROGRAM.get_exercises_for_day(day_number)

    click.echo()
    click.echo(
        click.style(f"Day {day_number}: {SANCTUM_PROGRAM.get_day_name(day_number)}", bold=True)
        + f"  (cycle {active.cycle})"
    )
    click.echo(f"Elapsed: {format_elapsed(session_elapsed_seconds(active.start_time))}")

    remaining = rest_timer_remaining(active)
    if remaining > 0:
        click.echo(click.style(f"Rest: {format_countdown(remaining)}", fg="yellow"))

    for i, exercise in enumerate(active.exercises):
        click.echo()
        header = f"{i + 1}. {exercise.exercise_name}"
        if i < len(definitions):
            category = definitions[i].category
            header += " " + click.style(f"[{category.value}]", fg=get_badge_color(category))
        if exercise.replaced_with:
            header += f" -> {exercise.replaced_with}"
        if exercise.skipped:
            header += click.style(" (skipped)", fg="bright_black")
        click.echo(header)

        prev_sets = []
        if previous is not None:
            prev_ex = next(
                (ex for ex in previous.exercises if ex.exercise_name == exercise.exercise_name),
                None,
            )
            if prev_ex is not None:
                prev_sets = prev_ex.sets

        for j, set_log in enumerate(exercise.sets):
            weight = format_weight(set_log.weight, unit) if set_log.weight is not None else "-"
            reps = str(set_log.reps) if set_log.reps is not None else "-"
            done = "[x]" if set_log.completed else "[ ]"
            line = f"   {done} Set {set_log.set_number}: {weight} x {reps}"

            if j < len(prev_sets) and prev_sets[j].weight is not None and prev_sets[j].reps is not None:
                line += click.style(
                    f"   last: {format_weight(prev_sets[j].weight, unit)} x {prev_sets[j].reps}",
                    fg="bright_black",
                )
            if is_set_pr(set_log, exercise.exercise_name, previous):
                line += click.style("  PR", fg="green", bold=True)
            click.echo(line)

    result = validate_active_workout(active)
    click.echo()
    if result.is_valid:
        echo_success(f"All sets logged. Run 'sanctum workout finish {day_number}' when done.")
    else:
        echo_info(f"{len(result.incomplete_sets)} set(s) still open.")


@workout.command("set")
@click.argument("day_number", type=int)
@click.argument("exercise", type=int)
@click.argument("set_number", type=int)
@click.option("--weight", "-w", type=click.FloatRange(min=0), help="Weight in your display unit")
@click.option("--reps", "-r", type=click.IntRange(min=0), help="Reps performed")
@click.option("--done/--undone", default=None, help="Mark the set complete (or not)")
@click.pass_context
@async_command
async def set_cmd(
    ctx: click.Context,
    day_number: int,
    exercise: int,
    set_number: int,
    weight: float | None,
    reps: int | None,
    done: bool | None,
):
    """Record weight and reps for a set.

    EXERCISE and SET_NUMBER are 1-based, as shown by 'workout show'.
    Completing a set starts the rest timer.

    \b
    Example:
        sanctum workout set 1 2 1 --weight 135 --reps 10 --done
    """
    db_path = ensure_initialized(ctx)

    active_repo = ActiveWorkoutRepository(db_path)
    active = await _load_active(ctx, db_path, day_number)
    unit = await SettingsRepository(db_path).get_unit()

    lbs = to_pounds(weight, unit) if weight is not None else None
    try:
        set_log = update_set(active, exercise - 1, set_number - 1, lbs, reps, done)
        if done:
            start_rest_timer(active, exercise - 1, set_number - 1)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    await active_repo.save(active)

    exercise_log = active.exercises[exercise - 1]
    weight_text = format_weight(set_log.weight, unit) if set_log.weight is not None else "-"
    reps_text = set_log.reps if set_log.reps is not None else "-"
    echo_success(
        f"{exercise_log.exercise_name}, set {set_log.set_number}: {weight_text} x {reps_text}"
        + (" (done)" if set_log.completed else "")
    )

    if done:
        progress = await ProgressRepository(db_path).load()
        previous = find_previous_workout(day_number, "", progress.workout_logs)
        if is_set_pr(set_log, exercise_log.exercise_name, previous):
            click.echo(click.style("New PR!", fg="green", bold=True))
        click.echo(f"Rest {format_countdown(active.rest_timer.duration)}")


@workout.command("skip")
@click.argument("day_number", type=int)
@click.argument("exercise", type=int)
@click.option("--undo", is_flag=True, help="Un-skip the exercise")
@click.pass_context
@async_command
async def skip(ctx: click.Context, day_number: int, exercise: int, undo: bool):
    """Skip an exercise (its sets no longer need logging)."""
    db_path = ensure_initialized(ctx)

    active = await _load_active(ctx, db_path, day_number)
    try:
        skip_exercise(active, exercise - 1, not undo)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    await ActiveWorkoutRepository(db_path).save(active)
    name = active.exercises[exercise - 1].exercise_name
    echo_success(f"{'Restored' if undo else 'Skipped'}: {name}")


@workout.command("replace")
@click.argument("day_number", type=int)
@click.argument("exercise", type=int)
@click.argument("substitute", required=False)
@click.pass_context
@async_command
async def replace(ctx: click.Context, day_number: int, exercise: int, substitute: str | None):
    """Note a substitute exercise (omit SUBSTITUTE to clear it)."""
    db_path = ensure_initialized(ctx)

    active = await _load_active(ctx, db_path, day_number)
    try:
        replace_exercise(active, exercise - 1, substitute)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    await ActiveWorkoutRepository(db_path).save(active)
    name = active.exercises[exercise - 1].exercise_name
    if substitute:
        echo_success(f"{name} -> {substitute}")
    else:
        echo_success(f"Cleared substitute for {name}")


@workout.command("finish")
@click.argument("day_number", type=int)
@click.option("--notes", "-n", help="Session notes")
@click.option("--force", is_flag=True, help="Finish even with incomplete sets")
@click.pass_context
@async_command
async def finish(ctx: click.Context, day_number: int, notes: str | None, force: bool):
    """Finish a workout and add it to your history."""
    db_path = ensure_initialized(ctx)

    progress_repo = ProgressRepository(db_path)
    active_repo = ActiveWorkoutRepository(db_path)
    active = await _load_active(ctx, db_path, day_number)
    progress = await progress_repo.load()
    unit = await SettingsRepository(db_path).get_unit()

    previous = find_previous_workout(day_number, "", progress.workout_logs)
    cycle_before = progress.current_cycle
    now = datetime.now()

    try:
        log = finish_workout(progress, active, now=now, session_notes=notes, force=force)
    except WorkoutIncompleteError as e:
        echo_error("Workout has incomplete sets:")
        for message in e.result.errors:
            click.echo(f"  {message}")
        click.echo("Fill them in, skip the exercise, or use --force.")
        ctx.exit(1)

    await progress_repo.save(progress)
    await active_repo.clear(day_number)

    pr_count = sum(
        1
        for ex in log.exercises
        for s in ex.sets
        if is_set_pr(s, ex.exercise_name, previous)
    )

    echo_success(f"Logged Day {log.day_number}: {log.day_name}")
    click.echo(f"  Volume:   {format_volume(log.total_volume or 0, unit)}")
    click.echo(f"  Duration: {format_elapsed(log.duration or 0)}")
    if pr_count:
        click.echo(click.style(f"  PRs:      {pr_count}", fg="green"))

    if progress.current_cycle > cycle_before:
        click.echo()
        echo_success(f"Cycle {cycle_before} complete! Starting cycle {progress.current_cycle}.")

    slot = get_next_workout_day(progress)
    click.echo(f"Next: Day {slot.day_number} - {SANCTUM_PROGRAM.get_day_name(slot.day_number)}")

    if not progress.is_deload_week and progress.should_suggest_deload(now):
        echo_warning("A deload is due. Run 'sanctum deload start' to begin one.")


@workout.command("discard")
@click.argument("day_number", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def discard(ctx: click.Context, day_number: int, yes: bool):
    """Throw away an in-progress workout."""
    db_path = ensure_initialized(ctx)

    active_repo = ActiveWorkoutRepository(db_path)
    if not await active_repo.has(day_number):
        echo_info(f"No workout in progress for day {day_number}.")
        return

    if not yes and not click.confirm(f"Discard the day {day_number} workout?"):
        return

    await active_repo.clear(day_number)
    echo_success(f"Discarded day {day_number} workout.")
