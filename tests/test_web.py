"""Tests for the JSON API."""

import pytest
from fastapi.testclient import TestClient

from sanctum.web import create_app


@pytest.fixture
def client(temp_db_path):
    """API client against a temporary database."""
    with TestClient(create_app(temp_db_path)) as client:
        yield client


def _backup(**overrides) -> dict:
    data = {
        "currentCycle": 1,
        "cycleStartDate": "2026-02-01",
        "deloadIntervalWeeks": 5,
        "isDeloadWeek": False,
        "workoutLogs": [],
        "restDays": [],
    }
    data.update(overrides)
    return data


def _log(day_number: int, date: str, cycle: int = 1) -> dict:
    return {
        "id": f"log-{cycle}-{day_number}",
        "date": date,
        "cycle": cycle,
        "dayNumber": day_number,
        "dayName": f"Day {day_number}",
        "exercises": [],
        "completed": True,
    }


@pytest.fixture
def imported(client):
    """Client with progress starting 2026-02-01 imported."""
    response = client.post("/progress/import", json=_backup())
    assert response.status_code == 200
    return client


class TestHealthAndProgram:
    """Tests for health and program routes."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_program(self, client):
        """Test the program table."""
        data = client.get("/program").json()
        assert data["programName"] == "Sanctum"
        assert len(data["workoutDays"]) == 6

    def test_program_day(self, client):
        """Test one day with derived fields."""
        data = client.get("/program/days/4").json()
        assert data["name"] == "Chest/Back"
        assert data["abbreviation"] == "C/B"
        assert data["exercises"][0]["restSeconds"] == 180
        assert data["exercises"][4]["perSide"] is True

    def test_unknown_program_day(self, client):
        """Test unknown days are 404."""
        assert client.get("/program/days/9").status_code == 404


class TestCalendarRoutes:
    """Tests for calendar routes."""

    def test_calendar_as_of(self, imported):
        """Test the projection for a fixed date."""
        data = imported.get("/calendar", params={"date": "2026-02-10"}).json()

        assert data["weeks"][0]["weekStartDate"] == "2026-01-19"
        assert data["nextWorkout"] == {"dayNumber": 1, "dayName": "Pull", "cycle": 1}
        assert data["frequency"]["confidence"] == "default"
        deload_weeks = [w["weekStartDate"] for w in data["weeks"] if w["isDeloadWeek"]]
        assert deload_weeks == ["2026-03-02", "2026-04-13"]

    def test_bad_date_format(self, client):
        """Test malformed dates fail validation."""
        assert client.get("/calendar", params={"date": "02/10/2026"}).status_code == 422

    def test_impossible_date(self, client):
        """Test well-formed but impossible dates are rejected."""
        assert client.get("/calendar", params={"date": "2026-02-30"}).status_code == 400

    def test_frequency_default(self, client):
        """Test the default pace without history."""
        data = client.get("/calendar/frequency").json()
        assert data == {
            "workoutsPerWeek": 5,
            "avgDaysBetweenWorkouts": 1.4,
            "confidence": "default",
        }

    def test_deloads(self, imported):
        """Test upcoming deload weeks."""
        data = imported.get("/calendar/deloads", params={"count": 1, "date": "2026-02-10"}).json()
        assert data == {
            "isDeloadWeek": False,
            "deloadWeeks": [{"startDate": "2026-03-02", "endDate": "2026-03-08"}],
        }


class TestProgressRoutes:
    """Tests for progress routes."""

    def test_get_progress(self, imported):
        """Test progress with the next workout and deload suggestion."""
        data = imported.get("/progress", params={"date": "2026-02-10"}).json()
        assert data["progress"]["currentCycle"] == 1
        assert data["nextWorkout"] == {"dayNumber": 1, "cycle": 1}
        assert data["shouldSuggestDeload"] is False

    def test_deload_suggested_after_interval(self, imported):
        """Test the suggestion once the interval has passed."""
        data = imported.get("/progress", params={"date": "2026-03-09"}).json()
        assert data["shouldSuggestDeload"] is True

    def test_rest_days(self, client):
        """Test adding and removing rest days."""
        response = client.post("/progress/rest-days", json={"date": "2026-02-12"})
        assert response.json() == {"added": True, "restDays": ["2026-02-12"]}

        response = client.post("/progress/rest-days", json={"date": "2026-02-12"})
        assert response.json()["added"] is False

        response = client.delete("/progress/rest-days/2026-02-12")
        assert response.json() == {"removed": True, "restDays": []}

        response = client.delete("/progress/rest-days/2026-02-12")
        assert response.json()["removed"] is False

    def test_rest_day_validation(self, client):
        """Test rest dates must be ISO dates."""
        assert client.post("/progress/rest-days", json={"date": "tomorrow"}).status_code == 422

    def test_rest_day_must_exist(self, client):
        """Test well-formed but impossible rest dates are refused."""
        response = client.post("/progress/rest-days", json={"date": "2026-02-30"})
        assert response.status_code == 422
        assert client.delete("/progress/rest-days/2026-02-30").status_code == 422
        assert client.get("/progress").json()["progress"]["restDays"] == []
        assert client.get("/calendar").status_code == 200

    def test_deload_routes(self, client):
        """Test starting, ending, and recording deloads."""
        assert client.post("/progress/deload/start").json()["isDeloadWeek"] is True
        data = client.post("/progress/deload/end").json()
        assert data["isDeloadWeek"] is False
        assert data["lastDeloadDate"] is not None

        assert client.post("/progress/deload/record").json()["isDeloadWeek"] is False

        response = client.put("/progress/deload/interval", json={"weeks": 4})
        assert response.json() == {"deloadIntervalWeeks": 4}
        assert client.put("/progress/deload/interval", json={"weeks": 0}).status_code == 422

    def test_end_deload_requires_active_deload(self, imported):
        """Test ending a deload that never started leaves the schedule alone."""
        response = imported.post("/progress/deload/end")
        assert response.status_code == 409

        progress = imported.get("/progress").json()["progress"]
        assert "lastDeloadDate" not in progress
        data = imported.get("/calendar/deloads", params={"count": 1, "date": "2026-02-10"}).json()
        assert data["deloadWeeks"] == [{"startDate": "2026-03-02", "endDate": "2026-03-08"}]

    def test_cycle(self, client):
        """Test jumping cycles and listing cycles."""
        assert client.put("/progress/cycle", json={"cycle": 3}).json() == {"currentCycle": 3}
        assert client.get("/progress/cycles").json() == {"cycles": [3]}
        assert client.put("/progress/cycle", json={"cycle": 0}).status_code == 422

    def test_volume(self, client):
        """Test cycle volume with formatted value."""
        exercises = [
            {
                "exerciseName": "Pec Deck",
                "sets": [{"setNumber": 1, "weight": 100, "reps": 10, "completed": True}],
                "notes": "",
            }
        ]
        log = {**_log(2, "2026-02-05"), "exercises": exercises}
        client.post("/progress/import", json=_backup(workoutLogs=[log]))

        data = client.get("/progress/volume/1").json()
        assert data["totalVolume"] == 1000
        assert data["sets"] == 1
        assert data["exercises"] == 1
        assert data["formatted"] == "1,000 lb"
        assert len(data["workouts"]) == 1

    def test_units(self, client):
        """Test unit preference routes."""
        assert client.get("/progress/units").json() == {"unit": "lb"}
        assert client.put("/progress/units/kg").json() == {"unit": "kg"}
        assert client.get("/progress/units").json() == {"unit": "kg"}
        assert client.put("/progress/units/stone").status_code == 422

    def test_export(self, imported):
        """Test the backup download."""
        response = imported.get("/progress/export")
        assert response.status_code == 200
        assert "sanctum-backup-" in response.headers["content-disposition"]
        assert response.json()["cycleStartDate"] == "2026-02-01"

    def test_import_rejected(self, imported):
        """Test invalid backups leave progress unchanged."""
        response = imported.post("/progress/import", json={"currentCycle": 8})
        assert response.status_code == 400
        assert imported.get("/progress").json()["progress"]["currentCycle"] == 1

    def test_import_rejects_unparseable_dates(self, imported):
        """Test a backup whose dates do not parse is refused."""
        response = imported.post("/progress/import", json=_backup(currentCycle=8, cycleStartDate="soon"))
        assert response.status_code == 400

        response = imported.post(
            "/progress/import", json=_backup(currentCycle=8, workoutLogs=[_log(1, "2026-02-30")])
        )
        assert response.status_code == 400
        assert imported.get("/progress").json()["progress"]["currentCycle"] == 1
        assert imported.get("/calendar").status_code == 200

    def test_import_counts_logs(self, client):
        """Test the import summary."""
        backup = _backup(workoutLogs=[_log(1, "2026-02-02"), _log(2, "2026-02-03")])
        assert client.post("/progress/import", json=backup).json() == {
            "imported": True,
            "workoutLogs": 2,
        }

    def test_reset(self, client):
        """Test reset clears progress and sessions."""
        client.put("/progress/cycle", json={"cycle": 5})
        client.post("/workouts/1")

        data = client.post("/progress/reset").json()
        assert data["currentCycle"] == 1
        assert client.get("/workouts").json() == {"days": []}


class TestWorkoutRoutes:
    """Tests for active workout routes."""

    def test_start_and_get(self, client):
        """Test starting a workout."""
        response = client.post("/workouts/2")
        assert response.status_code == 201
        data = response.json()
        assert data["workout"]["dayNumber"] == 2
        assert data["workout"]["exercises"][0]["exerciseName"] == "Pec Deck"
        assert data["validation"]["isValid"] is False
        assert data["restRemaining"] == 0

        assert client.get("/workouts/2").status_code == 200
        assert client.get("/workouts").json() == {"days": [2]}

    def test_start_conflict_and_restart(self, client):
        """Test a second start needs restart."""
        client.post("/workouts/1")
        assert client.post("/workouts/1").status_code == 409
        assert client.post("/workouts/1", params={"restart": True}).status_code == 201

    def test_start_unknown_day(self, client):
        """Test unknown days are 404."""
        assert client.post("/workouts/7").status_code == 404

    def test_get_missing(self, client):
        """Test reading a day with no session."""
        assert client.get("/workouts/3").status_code == 404

    def test_update_set(self, client):
        """Test completing a set starts the rest timer."""
        client.post("/workouts/1")
        response = client.patch(
            "/workouts/1/exercises/6/sets/0",
            json={"weight": 30, "reps": 12, "completed": True},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["set"]["weight"] == 30
        assert data["set"]["completed"] is True
        assert data["isPr"] is False
        assert data["restTimer"]["duration"] == 90
        assert data["restTimer"]["exerciseIndex"] == 6

        assert client.get("/workouts/1").json()["restRemaining"] > 0
        cleared = client.delete("/workouts/1/rest-timer").json()
        assert cleared["workout"]["restTimer"] is None

    def test_update_set_bad_index(self, client):
        """Test out-of-range sets are 400."""
        client.post("/workouts/1")
        response = client.patch("/workouts/1/exercises/0/sets/5", json={"reps": 10})
        assert response.status_code == 400

    def test_pr_against_previous(self, client):
        """Test beating last session's best set is a PR."""
        previous = {
            **_log(1, "2026-02-01"),
            "exercises": [
                {
                    "exerciseName": "ISO High Row",
                    "sets": [{"setNumber": 1, "weight": 100, "reps": 10, "completed": True}],
                    "notes": "",
                }
            ],
        }
        client.post("/progress/import", json=_backup(workoutLogs=[previous]))
        client.post("/workouts/1")

        response = client.patch(
            "/workouts/1/exercises/0/sets/0",
            json={"weight": 110, "reps": 10, "completed": True},
        )
        assert response.json()["isPr"] is True

    def test_skip_and_replace(self, client):
        """Test skip and substitute routes."""
        client.post("/workouts/2")
        data = client.post("/workouts/2/exercises/2/skip", json={"skipped": True}).json()
        assert data["workout"]["exercises"][2]["skipped"] is True

        data = client.post("/workouts/2/exercises/0/replace", json={"substitute": "Cable Fly"}).json()
        assert data["workout"]["exercises"][0]["replacedWith"] == "Cable Fly"

        assert client.post("/workouts/2/exercises/30/skip", json={}).status_code == 400

    def test_finish_incomplete(self, client):
        """Test finishing with open sets is refused with details."""
        client.post("/workouts/1")
        response = client.post("/workouts/1/finish")
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["isValid"] is False
        assert "ISO High Row: sets 1, 2 incomplete" in detail["errors"]
        assert client.get("/workouts/1").status_code == 200

    def test_finish_forced(self, client):
        """Test a forced finish logs the workout and clears the session."""
        client.post("/workouts/1")
        client.patch(
            "/workouts/1/exercises/0/sets/0",
            json={"weight": 100, "reps": 10, "completed": True},
        )

        response = client.post(
            "/workouts/1/finish", json={"force": True, "sessionNotes": "Cut short"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["log"]["dayNumber"] == 1
        assert data["log"]["totalVolume"] == 1000
        assert data["log"]["sessionNotes"] == "Cut short"
        assert data["cycleAdvanced"] is False
        assert data["nextWorkout"] == {"dayNumber": 2, "dayName": "Push", "cycle": 1}

        assert client.get("/workouts/1").status_code == 404
        assert len(client.get("/progress").json()["progress"]["workoutLogs"]) == 1

    def test_finishing_last_day_advances_cycle(self, client):
        """Test the cycle moves on after day 6."""
        logs = [_log(day, f"2026-02-0{day}") for day in range(1, 6)]
        client.post("/progress/import", json=_backup(workoutLogs=logs))
        client.post("/workouts/6")

        data = client.post("/workouts/6/finish", json={"force": True}).json()
        assert data["cycleAdvanced"] is True
        assert data["nextWorkout"] == {"dayNumber": 1, "dayName": "Pull", "cycle": 2}
        assert client.get("/progress").json()["progress"]["currentCycle"] == 2

    def test_discard(self, client):
        """Test discarding a session."""
        client.post("/workouts/3")
        assert client.delete("/workouts/3").json() == {"discarded": True}
        assert client.delete("/workouts/3").json() == {"discarded": False}
