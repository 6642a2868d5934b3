"""Tests for the sanctum command line."""

import json

import pytest
from click.testing import CliRunner

from sanctum.cli import main
from sanctum.models.program import SANCTUM_PROGRAM


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def cli(runner, tmp_path):
    """Invoke sanctum against a temporary data directory."""

    def _invoke(*args, input=None):
        return runner.invoke(main, ["--data-dir", str(tmp_path), *args], input=input)

    return _invoke


@pytest.fixture
def initialized(cli):
    """A data directory after 'sanctum init'."""
    result = cli("init")
    assert result.exit_code == 0, result.output
    return cli


def _backup(tmp_path, **overrides) -> str:
    data = {
        "currentCycle": 1,
        "cycleStartDate": "2026-02-01",
        "deloadIntervalWeeks": 5,
        "isDeloadWeek": False,
        "workoutLogs": [],
        "restDays": [],
    }
    data.update(overrides)
    path = tmp_path / "backup.json"
    path.write_text(json.dumps(data))
    return str(path)


class TestInit:
    """Tests for init and the initialized check."""

    def test_requires_init(self, cli):
        """Test commands refuse to run before init."""
        result = cli("status")
        assert result.exit_code == 1
        assert "Sanctum not initialized" in result.output

    def test_init_creates_database(self, cli, tmp_path):
        """Test init creates the database and starts cycle 1."""
        result = cli("init")
        assert result.exit_code == 0
        assert (tmp_path / "sanctum.db").exists()
        assert "Progress started: cycle 1" in result.output

    def test_init_keeps_existing_progress(self, initialized):
        """Test re-running init doesn't reset progress."""
        initialized("cycle", "set", "4")
        result = initialized("init")
        assert result.exit_code == 0
        assert "Existing progress kept (cycle 4)" in result.output

    def test_version(self, runner):
        """Test the version flag."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "sanctum" in result.output


class TestProgramCommand:
    """Tests for the program command."""

    def test_summary(self, cli):
        """Test the full program listing works without init."""
        result = cli("program")
        assert result.exit_code == 0
        assert "Program: Sanctum" in result.output
        assert "Day 6: Legs (B)" in result.output

    def test_single_day(self, cli):
        """Test a day's exercise table."""
        result = cli("program", "5")
        assert result.exit_code == 0
        assert "Day 5: Shoulders/Arms" in result.output
        assert "Tricep Pushdown" in result.output
        assert "7 bottom half + 7 top half + 7 full ROM" in result.output

    def test_unknown_day(self, cli):
        """Test unknown days exit with an error."""
        result = cli("program", "9")
        assert result.exit_code == 1
        assert "Unknown day 9" in result.output


class TestRestCommands:
    """Tests for rest day commands."""

    def test_add_list_remove(self, initialized):
        """Test the rest day lifecycle."""
        result = initialized("rest", "add", "2026-03-01")
        assert result.exit_code == 0
        assert "Rest day added: 2026-03-01" in result.output

        result = initialized("rest", "add", "2026-03-01")
        assert "already a rest day" in result.output

        result = initialized("rest", "list")
        assert "2026-03-01" in result.output

        result = initialized("rest", "remove", "2026-03-01")
        assert "Rest day removed" in result.output
        assert "No rest days marked" in initialized("rest", "list").output

    def test_bad_date(self, initialized):
        """Test malformed dates are rejected by click."""
        result = initialized("rest", "add", "03/01/2026")
        assert result.exit_code == 2


class TestWorkoutCommands:
    """Tests for the workout session flow."""

    def test_start_defaults_to_next_day(self, initialized):
        """Test start picks day 1 on a fresh cycle."""
        result = initialized("workout", "start")
        assert result.exit_code == 0
        assert "Started Day 1: Pull (cycle 1)" in result.output

    def test_start_unknown_day(self, initialized):
        """Test starting a day outside the program."""
        result = initialized("workout", "start", "8")
        assert result.exit_code == 1
        assert "Unknown day 8" in result.output

    def test_existing_session_kept_without_confirmation(self, initialized):
        """Test declining the prompt keeps the session."""
        initialized("workout", "start", "2")
        initialized("workout", "set", "2", "1", "1", "-w", "100")

        result = initialized("workout", "start", "2", input="n\n")
        assert "already has a workout in progress" in result.output

        show = initialized("workout", "show", "2")
        assert "Set 1: 100 lb x -" in show.output

    def test_set_and_show(self, initialized):
        """Test logging a set and seeing it."""
        initialized("workout", "start", "1")
        result = initialized("workout", "set", "1", "1", "1", "--weight", "135", "--reps", "10", "--done")
        assert result.exit_code == 0
        assert "ISO High Row, set 1: 135 lb x 10 (done)" in result.output
        assert "Rest 3:00" in result.output

        show = initialized("workout", "show", "1")
        assert show.exit_code == 0
        assert "[x] Set 1: 135 lb x 10" in show.output
        assert "[back]" in show.output

    def test_set_bad_index(self, initialized):
        """Test out-of-range exercise numbers fail."""
        initialized("workout", "start", "1")
        result = initialized("workout", "set", "1", "20", "1", "-w", "100")
        assert result.exit_code == 1
        assert "Invalid exercise index" in result.output

    def test_set_in_kilograms(self, initialized):
        """Test weights entered in kg are shown back in kg."""
        initialized("units", "kg")
        initialized("workout", "start", "1")
        result = initialized("workout", "set", "1", "1", "1", "-w", "100", "-r", "8")
        assert "set 1: 100 kg x 8" in result.output

    def test_show_without_session(self, initialized):
        """Test showing a day that wasn't started."""
        result = initialized("workout", "show", "3")
        assert result.exit_code == 1
        assert "No workout in progress for day 3" in result.output

    def test_finish_incomplete(self, initialized):
        """Test finishing with open sets lists them."""
        initialized("workout", "start", "1")
        initialized("workout", "set", "1", "1", "1", "-w", "135", "-r", "10", "--done")

        result = initialized("workout", "finish", "1")
        assert result.exit_code == 1
        assert "ISO High Row: set 2 incomplete" in result.output
        assert "Bayesian Curls: sets 1, 2 incomplete" in result.output

    def test_finish_force(self, initialized):
        """Test a forced finish logs the workout and clears the session."""
        initialized("workout", "start", "1")
        initialized("workout", "set", "1", "1", "1", "-w", "135", "-r", "10", "--done")

        result = initialized("workout", "finish", "1", "--force", "--notes", "Short on time")
        assert result.exit_code == 0
        assert "Logged Day 1: Pull" in result.output
        assert "Volume:   1,350 lb" in result.output
        assert "Next: Day 2 - Push" in result.output

        assert initialized("workout", "show", "1").exit_code == 1
        status = initialized("status")
        assert "Next workout: Day 2 - Push (cycle 1)" in status.output
        assert "Cycle volume: 1,350 lb (1 sets, 8 exercises)" in status.output

    def test_skip_and_replace(self, initialized):
        """Test skipping and substituting exercises."""
        initialized("workout", "start", "2")

        result = initialized("workout", "skip", "2", "3")
        assert "Skipped: Decline Bench Press" in result.output

        result = initialized("workout", "replace", "2", "1", "Cable Fly")
        assert "Pec Deck -> Cable Fly" in result.output

        show = initialized("workout", "show", "2")
        assert "(skipped)" in show.output
        assert "-> Cable Fly" in show.output

        result = initialized("workout", "skip", "2", "3", "--undo")
        assert "Restored: Decline Bench Press" in result.output

    def test_show_complete_names_day_to_finish(self, initialized):
        """Test the finish hint names the day once nothing is left open."""
        initialized("workout", "start", "3")
        for number in range(1, len(SANCTUM_PROGRAM.get_exercises_for_day(3)) + 1):
            assert initialized("workout", "skip", "3", str(number)).exit_code == 0

        show = initialized("workout", "show", "3")
        assert show.exit_code == 0
        assert "Run 'sanctum workout finish 3' when done." in show.output

    def test_discard(self, initialized):
        """Test discarding a session."""
        initialized("workout", "start", "4")
        result = initialized("workout", "discard", "4", "--yes")
        assert "Discarded day 4 workout" in result.output
        assert "No workout in progress" in initialized("workout", "discard", "4", "--yes").output


class TestCalendarCommand:
    """Tests for the calendar command."""

    def test_json_projection(self, initialized, tmp_path):
        """Test the JSON projection for a fixed date."""
        initialized("import", _backup(tmp_path), "--yes")

        result = initialized("calendar", "--date", "2026-02-10", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)

        assert data["weeks"][0]["weekStartDate"] == "2026-01-19"
        assert data["nextWorkout"] == {"dayNumber": 1, "dayName": "Pull", "cycle": 1}
        today = [c for w in data["weeks"] for c in w["cells"] if c["isToday"]]
        assert [c["date"] for c in today] == ["2026-02-10"]

    def test_grid(self, initialized, tmp_path):
        """Test the text grid shows headers and today."""
        initialized("import", _backup(tmp_path), "--yes")

        result = initialized("calendar", "--date", "2026-02-10")
        assert result.exit_code == 0
        assert "Mon" in result.output
        assert "This Week" in result.output
        assert "[Pull]" in result.output
        assert "Next: Day 1 - Pull (cycle 1)" in result.output


class TestProgressCommands:
    """Tests for deload, cycle, volume, and units commands."""

    def test_deload_lifecycle(self, initialized):
        """Test starting and ending a deload."""
        assert "Deload started" in initialized("deload", "start").output
        assert "Already deloading" in initialized("deload", "start").output
        assert "Deload in progress" in initialized("status").output

        result = initialized("deload", "end")
        assert "Deload finished" in result.output
        assert "Next deload: week of" in result.output
        assert "No deload in progress" in initialized("deload", "end").output

    def test_deload_record_and_interval(self, initialized):
        """Test recording a deload and changing the interval."""
        assert "Deload recorded on" in initialized("deload", "record").output
        assert "Deload every 6 weeks" in initialized("deload", "interval", "6").output
        assert "(every 6 weeks)" in initialized("status").output
        assert initialized("deload", "interval", "0").exit_code == 2

    def test_cycle_set(self, initialized):
        """Test jumping cycles."""
        result = initialized("cycle", "set", "3")
        assert "Current cycle set to 3" in result.output
        assert "Cycle 3" in initialized("status").output

    def test_volume_empty(self, initialized):
        """Test volume for a cycle with no workouts."""
        result = initialized("volume")
        assert result.exit_code == 0
        assert "Total volume: 0 lb" in result.output
        assert "No workouts logged in this cycle" in result.output

    def test_volume_all(self, initialized):
        """Test the per-cycle summary table."""
        result = initialized("volume", "--all")
        assert "Cycle" in result.output
        assert "0 lb" in result.output

    def test_units(self, initialized):
        """Test showing and changing the unit."""
        assert "Display unit: lb" in initialized("units").output
        assert "Display unit set to kg" in initialized("units", "kg").output
        assert "Display unit: kg" in initialized("units").output
        assert initialized("units", "stone").exit_code == 2


class TestBackupCommands:
    """Tests for export, import, and reset."""

    def test_export_stdout(self, initialized):
        """Test export prints the progress JSON."""
        result = initialized("export")
        assert result.exit_code == 0
        assert json.loads(result.output)["currentCycle"] == 1

    def test_export_to_file(self, initialized, tmp_path):
        """Test export to a named file."""
        out = tmp_path / "out.json"
        result = initialized("export", "-o", str(out))
        assert result.exit_code == 0
        assert json.loads(out.read_text())["deloadIntervalWeeks"] == 5

    def test_import_valid(self, initialized, tmp_path):
        """Test importing a backup."""
        result = initialized("import", _backup(tmp_path, currentCycle=6), "--yes")
        assert result.exit_code == 0
        assert "Imported 0 workouts (cycle 6)" in result.output

    def test_import_invalid_leaves_progress(self, initialized, tmp_path):
        """Test invalid backups are rejected."""
        initialized("cycle", "set", "2")
        bad = tmp_path / "bad.json"
        bad.write_text('{"currentCycle": 9}')

        result = initialized("import", str(bad), "--yes")
        assert result.exit_code == 1
        assert "Invalid backup file" in result.output
        assert "Cycle 2" in initialized("status").output

    def test_import_declined(self, initialized, tmp_path):
        """Test declining the prompt imports nothing."""
        initialized("import", _backup(tmp_path, currentCycle=6), input="n\n")
        assert "Cycle 1" in initialized("status").output

    def test_reset(self, initialized):
        """Test reset restores cycle 1 and drops sessions."""
        initialized("cycle", "set", "5")
        initialized("workout", "start", "1")

        result = initialized("reset", "--yes")
        assert "Progress reset" in result.output
        assert "Cycle 1" in initialized("status").output
        assert initialized("workout", "show", "1").exit_code == 1
