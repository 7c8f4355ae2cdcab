"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from fitloop.cli import main
from fitloop.generators.meta_prompt import LANGUAGE_INSTRUCTIONS, METADATA_END, METADATA_START


@pytest.fixture
def runner(tmp_path):
    return CliRunner(env={"FITLOOP_DATA_DIR": str(tmp_path / "data"), "FITLOOP_USER_ID": "cli-user"})


@pytest.fixture
def initialized(runner):
    result = runner.invoke(main, ["init"])
    assert result.exit_code == 0, result.output
    return runner


@pytest.fixture
def with_profile(initialized):
    result = initialized.invoke(
        main,
        [
            "profile",
            "setup",
            "--name",
            "Alice",
            "--goals",
            "Get stronger",
            "--environment",
            "Home dumbbells",
        ],
    )
    assert result.exit_code == 0, result.output
    return initialized


class TestInitAndProfile:
    """Tests for project setup commands."""

    def test_init(self, runner):
        """Test that init creates the database."""
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "Database initialized" in result.output

    def test_requires_init(self, runner):
        """Test that commands refuse to run before init."""
        result = runner.invoke(main, ["session", "status"])

        assert result.exit_code == 1
        assert "fitloop init" in result.output

    def test_profile_setup_and_show(self, with_profile):
        """Test non-interactive profile creation."""
        result = with_profile.invoke(main, ["profile", "show"])

        assert result.exit_code == 0
        assert "User: Alice" in result.output
        assert "Goals: Get stronger" in result.output

    def test_profile_setup_updates(self, with_profile):
        """Test that a second setup updates the existing profile."""
        result = with_profile.invoke(
            main,
            ["profile", "setup", "--name", "Alice", "--goals", "Run", "--environment", "Park"],
        )

        assert "Profile updated for Alice" in result.output

    def test_profile_setup_rejects_long_name(self, initialized):
        """Test validation on non-interactive setup."""
        result = initialized.invoke(
            main,
            ["profile", "setup", "--name", "x" * 101, "--goals", "g", "--environment", "e"],
        )

        assert result.exit_code == 1
        assert "Name must be between 1 and 100 characters" in result.output

    def test_show_without_profile(self, initialized):
        """Test the missing-profile error."""
        result = initialized.invoke(main, ["profile", "show"])

        assert result.exit_code == 1
        assert "fitloop profile setup" in result.output


class TestLogAndProgress:
    """Tests for workout logging and analysis commands."""

    def test_log_prints_recommendation(self, initialized):
        """Test that logging shows the next recommendation."""
        result = initialized.invoke(
            main, ["log", "Dumbbell Bench Press", "30", "10", "3", "--difficulty", "easy"]
        )

        assert result.exit_code == 0, result.output
        assert "Logged Dumbbell Bench Press: 30 x 10 x 3 (easy)" in result.output
        assert "Next time: 32" in result.output

    def test_log_rejects_zero_reps(self, initialized):
        """Test record validation."""
        result = initialized.invoke(main, ["log", "Dumbbell Curl", "25", "0", "3"])

        assert result.exit_code == 1
        assert "reps must be >= 1" in result.output

    def test_progress_exercise(self, initialized):
        """Test the per-exercise report."""
        initialized.invoke(main, ["log", "Dumbbell Curl", "25", "10", "3"])

        result = initialized.invoke(main, ["progress", "exercise", "dumbbell curl"])

        assert result.exit_code == 0
        assert "Personal record: 25 x 10" in result.output
        assert "Trend: maintaining" in result.output

    def test_progress_exercise_without_history(self, initialized):
        """Test the empty per-exercise report."""
        result = initialized.invoke(main, ["progress", "exercise", "Dumbbell Curl"])

        assert "No workouts logged" in result.output

    def test_progress_recommend_first_time(self, initialized):
        """Test the starting recommendation."""
        result = initialized.invoke(main, ["progress", "recommend", "Dumbbell Curl"])

        assert result.exit_code == 0
        assert "Dumbbell Curl: 20" in result.output
        assert "18 (conservative), 22 (aggressive)" in result.output

    def test_progress_insights_empty(self, initialized):
        """Test insights with no history."""
        result = initialized.invoke(main, ["progress", "insights"])

        assert result.exit_code == 0
        assert "Overall: needs_attention" in result.output
        assert "Start training regularly" in result.output


class TestSessionCommands:
    """Tests for session cycle commands."""

    def test_status_starts_at_first_session(self, initialized):
        """Test the initial position."""
        result = initialized.invoke(main, ["session", "status"])

        assert result.exit_code == 0
        assert "Cycle 1, Session 1/8" in result.output
        assert "Chest & Triceps" in result.output

    def test_advance_through_cycle(self, initialized):
        """Test that eight advances start a new cycle."""
        for _ in range(7):
            initialized.invoke(main, ["session", "advance"])

        result = initialized.invoke(main, ["session", "advance"])

        assert "Cycle 1 complete! Starting cycle 2." in result.output
        assert "Cycle 2, Session 1/8" in result.output

    def test_reset(self, initialized):
        """Test that reset asks for confirmation and goes back to the start."""
        initialized.invoke(main, ["session", "advance"])

        result = initialized.invoke(main, ["session", "reset"], input="y\n")
        status = initialized.invoke(main, ["session", "status"])

        assert result.exit_code == 0
        assert "Cycle 1, Session 1/8" in status.output


class TestPromptCommands:
    """Tests for prompt commands."""

    def test_generate_english(self, with_profile):
        """Test prompt generation to stdout."""
        result = with_profile.invoke(main, ["prompt", "generate", "--language", "en"])

        assert result.exit_code == 0, result.output
        assert LANGUAGE_INSTRUCTIONS["en"] in result.output
        assert METADATA_START in result.output
        assert "- Name: Alice" in result.output

    def test_generate_requires_profile(self, initialized):
        """Test the missing-profile error."""
        result = initialized.invoke(main, ["prompt", "generate"])

        assert result.exit_code == 1

    def test_generate_enriched(self, with_profile):
        """Test that --enrich appends the analysis section."""
        with_profile.invoke(main, ["log", "Dumbbell Squat", "45", "10", "3"])

        result = with_profile.invoke(main, ["prompt", "generate", "--enrich"])

        assert "Analysis from your training history" in result.output

    def test_generate_to_file_then_extract_and_apply(self, with_profile, tmp_path):
        """Test writing a prompt and reading its metadata back."""
        output = tmp_path / "prompt.md"
        result = with_profile.invoke(main, ["prompt", "generate", "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert output.exists()

        result = with_profile.invoke(main, ["prompt", "extract", str(output), "--apply"])

        assert result.exit_code == 0, result.output
        assert "Session 1: Chest & Triceps" in result.output
        assert "Next session: 2" in result.output
        status = with_profile.invoke(main, ["session", "status"])
        assert "Cycle 1, Session 2/8" in status.output

    def test_extract_without_metadata(self, initialized, tmp_path):
        """Test that plain text is rejected."""
        source = tmp_path / "plain.txt"
        source.write_text("no metadata here", encoding="utf-8")

        result = initialized.invoke(main, ["prompt", "extract", str(source)])

        assert result.exit_code == 1
        assert "No metadata block found" in result.output

    def test_extract_rejects_text_weight(self, initialized, tmp_path):
        """Test that a non-numeric target weight is reported, not raised."""
        payload = (
            '{"sessionNumber": 1, "sessionName": "Chest & Triceps", "date": "2024-06-15",'
            ' "exercises": [{"name": "Dumbbell Bench Press", "targetWeight": "heavy",'
            ' "targetReps": "8-10", "targetSets": 3, "lastPerformance": null}],'
            ' "muscleBalance": {"pushUpperBody": "normal", "pullUpperBody": "normal",'
            ' "lowerBodyFront": "normal", "lowerBodyBack": "normal", "core": "normal"},'
            ' "recommendations": [], "nextSession": 2, "cycleProgress": "1/8"}'
        )
        source = tmp_path / "edited.md"
        source.write_text(f"{METADATA_START}\n{payload}\n{METADATA_END}\n", encoding="utf-8")

        result = initialized.invoke(main, ["prompt", "extract", str(source)])

        assert result.exit_code == 1
        assert "No metadata block found" in result.output

    def test_training_prompt(self, with_profile):
        """Test the compact training prompt."""
        result = with_profile.invoke(main, ["prompt", "training"])

        assert result.exit_code == 0
        assert "Alice's Training Program - Session 1" in result.output

    def test_import_prompt_from_stdin(self, runner):
        """Test the import prompt reading from stdin."""
        result = runner.invoke(main, ["prompt", "import", "training", "-"], input="Squat 45 lb 10x3")

        assert result.exit_code == 0
        assert "Squat 45 lb 10x3" in result.output
