"""Tests for the session cycle and session context."""

from datetime import datetime, timedelta

import pytest

from fitloop.models.session import (
    ExercisePerformance,
    PerformedSet,
    SessionContext,
    add_performance,
    create_initial_context,
    update_context,
)
from fitloop.services.session_cycle import (
    SESSION_TITLES,
    advance,
    advance_context,
    cycle_progress,
    get_session_exercises,
    get_session_title,
    next_session_number,
    normalize_session_number,
    previous_session,
    should_start_new_cycle,
)


class TestSessionContent:
    """Tests for session titles and exercises."""

    def test_eight_sessions_defined(self):
        """Test that every slot has a title and three exercises."""
        assert sorted(SESSION_TITLES) == list(range(1, 9))
        for number in range(1, 9):
            assert len(get_session_exercises(number)) == 3

    def test_title_lookup(self):
        """Test known titles."""
        assert get_session_title(1) == "Chest & Triceps"
        assert get_session_title(8) == "Arms & Abs (Finisher)"

    def test_wraps_above_eight(self):
        """Test that 9 maps to slot 1 and 16 to slot 8."""
        assert get_session_title(9) == get_session_title(1)
        assert get_session_title(16) == get_session_title(8)

    @pytest.mark.parametrize("value", [0, -3, None, "2", 2.0, True])
    def test_invalid_numbers_fall_back_to_first(self, value):
        """Test that invalid session numbers resolve to session 1."""
        assert normalize_session_number(value) == 1

    def test_bodyweight_exercise(self):
        """Test that the push-up in session 6 has no external load."""
        push_up = get_session_exercises(6)[2]

        assert push_up.weight == 0
        assert push_up.unit == ""

    def test_exercise_list_is_a_copy(self):
        """Test that callers cannot mutate the built-in table."""
        exercises = get_session_exercises(1)
        exercises.clear()

        assert len(get_session_exercises(1)) == 3


class TestAdvance:
    """Tests for cycle transitions."""

    def test_within_cycle(self):
        """Test that sessions 1-7 advance by one."""
        for n in range(1, 8):
            position = advance(1, n)
            assert position.cycle_number == 1
            assert position.session_number == n + 1

    def test_wraps_to_next_cycle(self):
        """Test that session 8 starts the next cycle."""
        position = advance(3, 8)

        assert position.cycle_number == 4
        assert position.session_number == 1

    @pytest.mark.parametrize("cycle", [1, 2, 7])
    def test_eight_advances_complete_one_cycle(self, cycle):
        """Test that eight steps from slot 1 land on slot 1 of the next cycle."""
        position = advance(cycle, 1)
        for _ in range(7):
            position = advance(position.cycle_number, position.session_number)

        assert (position.cycle_number, position.session_number) == (cycle + 1, 1)

    def test_should_start_new_cycle(self):
        """Test the new-cycle threshold."""
        assert not should_start_new_cycle(7)
        assert should_start_new_cycle(8)
        assert should_start_new_cycle(9)

    def test_previous_and_next(self):
        """Test neighbouring slots."""
        assert previous_session(1) == 8
        assert previous_session(5) == 4
        assert next_session_number(8) == 1
        assert next_session_number(3) == 4

    def test_cycle_progress(self):
        """Test the n/8 progress label."""
        assert cycle_progress(3) == "3/8"
        assert cycle_progress(8) == "8/8"

    def test_advance_context_refreshes_activity(self):
        """Test that advancing a context updates position and last_activity."""
        old = datetime(2020, 1, 1)
        context = SessionContext(user_id="u", cycle_number=2, session_number=8, last_activity=old)

        advanced = advance_context(context)

        assert advanced.cycle_number == 3
        assert advanced.session_number == 1
        assert advanced.last_activity > old
        # Original is untouched
        assert context.session_number == 8


class TestSessionContext:
    """Tests for the context model."""

    def test_initial_context(self):
        """Test that a new context starts at cycle 1, session 1."""
        context = create_initial_context("user-1")

        assert context.user_id == "user-1"
        assert context.cycle_number == 1
        assert context.session_number == 1
        assert context.performance == []

    def test_update_keeps_unnamed_fields(self):
        """Test that a partial update keeps other fields."""
        context = create_initial_context("user-1")
        updated = update_context(context, session_number=4)

        assert updated.session_number == 4
        assert updated.cycle_number == 1
        assert updated.user_id == "user-1"

    def test_update_protected_field(self):
        """Test that identity fields cannot be updated."""
        context = create_initial_context("user-1")

        with pytest.raises(TypeError):
            update_context(context, user_id="someone-else")

    def test_update_unknown_field(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(TypeError):
            update_context(create_initial_context("u"), favourite_colour="red")

    def test_add_performance(self):
        """Test that performance entries are appended."""
        context = create_initial_context("user-1")
        entry = ExercisePerformance(
            exercise_name="Dumbbell Curl",
            date=datetime.now() - timedelta(days=1),
            sets=[PerformedSet(weight=25, reps=10, rpe=8)],
        )

        updated = add_performance(context, entry)

        assert len(updated.performance) == 1
        assert context.performance == []

    def test_round_trip(self):
        """Test context serialization."""
        context = add_performance(
            create_initial_context("user-1"),
            ExercisePerformance(
                exercise_name="Dumbbell Curl",
                date=datetime(2024, 6, 1, 8, 30),
                sets=[PerformedSet(weight=25, reps=10)],
            ),
        )

        restored = SessionContext.from_dict(context.to_dict())

        assert restored.user_id == "user-1"
        assert restored.performance[0].sets[0].weight == 25
        assert restored.performance[0].date == datetime(2024, 6, 1, 8, 30)

    def test_position_display(self):
        """Test the human-readable position."""
        context = SessionContext(user_id="u", cycle_number=2, session_number=5)

        assert context.get_position_display() == "Cycle 2, Session 5/8"
