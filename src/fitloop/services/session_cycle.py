"""Eight-session training cycle: content lookup and state transitions."""

from dataclasses import dataclass

from ..models.session import SESSIONS_PER_CYCLE, SessionContext, update_context


@dataclass(frozen=True)
class SessionExercise:
    """Default prescription for an exercise in a session slot."""

    name: str
    sets: int
    weight: float
    unit: str
    target_reps: str
    rest_seconds: int


@dataclass(frozen=True)
class SessionPosition:
    """A (cycle, session) pair."""

    cycle_number: int
    session_number: int


SESSION_TITLES: dict[int, str] = {
    1: "Chest & Triceps",
    2: "Back & Biceps",
    3: "Legs & Abs",
    4: "Shoulders & Forearms",
    5: "Full-Body Circuit",
    6: "Chest & Shoulders (Compound)",
    7: "Back & Legs (Compound)",
    8: "Arms & Abs (Finisher)",
}

SESSION_EXERCISES: dict[int, list[SessionExercise]] = {
    1: [
        SessionExercise("Dumbbell Bench Press", 3, 30, "lb", "8-10", 60),
        SessionExercise("Incline Dumbbell Fly", 3, 20, "lb", "10-12", 60),
        SessionExercise("Dumbbell Triceps Extension", 3, 20, "lb", "10-12", 45),
    ],
    2: [
        SessionExercise("One-Arm Dumbbell Row", 3, 35, "lb", "8-10 (each arm)", 60),
        SessionExercise("Dumbbell Pullover", 3, 30, "lb", "10-12", 60),
        SessionExercise("Dumbbell Curl", 3, 25, "lb", "10-12", 45),
    ],
    3: [
        SessionExercise("Dumbbell Squat", 3, 45, "lb", "10-12", 90),
        SessionExercise("Dumbbell Romanian Deadlift", 3, 45, "lb", "10-12", 90),
        SessionExercise("Weighted Crunch", 3, 35, "lb", "15-20", 45),
    ],
    4: [
        SessionExercise("Dumbbell Shoulder Press", 3, 30, "lb", "8-10", 60),
        SessionExercise("Dumbbell Lateral Raise", 3, 25, "lb", "10-12", 60),
        SessionExercise("Dumbbell Wrist Curl", 3, 15, "lb", "12-15", 45),
    ],
    5: [
        SessionExercise("Dumbbell Thruster", 3, 25, "lb", "12-15", 60),
        SessionExercise("Two-Arm Dumbbell Row", 3, 35, "lb", "12-15", 60),
        SessionExercise("Dumbbell Russian Twist", 3, 30, "lb", "15 per side", 45),
    ],
    6: [
        SessionExercise("Incline Dumbbell Press", 3, 35, "lb", "8-10", 60),
        SessionExercise("Dumbbell Arnold Press", 3, 30, "lb", "10-12", 60),
        SessionExercise("Dumbbell Push-up (gripping dumbbells)", 3, 0, "", "12-15", 45),
    ],
    7: [
        SessionExercise("Dumbbell Deadlift", 3, 50, "lb", "8-10", 90),
        SessionExercise("Bulgarian Split Squat", 3, 30, "lb", "10-12 (each leg)", 60),
        SessionExercise("Dumbbell Shrug", 3, 40, "lb", "12-15", 45),
    ],
    8: [
        SessionExercise("Dumbbell 21s Curl", 3, 20, "lb", "21 (7 bottom, 7 top, 7 full)", 60),
        SessionExercise("Dumbbell Overhead Triceps Extension", 3, 25, "lb", "10-12", 60),
        SessionExercise("Weighted Plank", 3, 25, "lb (on the back)", "30-45 sec", 60),
    ],
}


def normalize_session_number(session_number) -> int:
    """Map any session number onto a slot in 1..8.

    Positive integers wrap (9 -> 1, 16 -> 8). None, zero, negatives and
    non-integers fall back to slot 1.
    """
    if isinstance(session_number, bool) or not isinstance(session_number, int):
        return 1
    if session_number < 1:
        return 1
    return ((session_number - 1) % SESSIONS_PER_CYCLE) + 1


def get_session_title(session_number) -> str:
    """Title of the session slot for ``session_number``."""
    return SESSION_TITLES[normalize_session_number(session_number)]


def get_session_exercises(session_number) -> list[SessionExercise]:
    """Default exercises for the session slot of ``session_number``."""
    return list(SESSION_EXERCISES[normalize_session_number(session_number)])


def should_start_new_cycle(session_number: int) -> bool:
    """True once the last session of the cycle has been reached."""
    return session_number >= SESSIONS_PER_CYCLE


def advance(cycle_number: int, session_number: int) -> SessionPosition:
    """Compute the position after completing ``session_number``.

    The cycle never terminates: session 8 (or anything above it) wraps to
    session 1 of the next cycle.
    """
    if should_start_new_cycle(session_number):
        return SessionPosition(cycle_number=cycle_number + 1, session_number=1)
    return SessionPosition(cycle_number=cycle_number, session_number=session_number + 1)


def advance_context(context: SessionContext) -> SessionContext:
    """Apply advance() to a context, refreshing last_activity."""
    position = advance(context.cycle_number, context.session_number)
    return update_context(
        context,
        cycle_number=position.cycle_number,
        session_number=position.session_number,
    )


def previous_session(session_number) -> int:
    """Slot completed before ``session_number`` (1 follows 8)."""
    slot = normalize_session_number(session_number)
    return slot - 1 if slot > 1 else SESSIONS_PER_CYCLE


def next_session_number(session_number) -> int:
    """Slot that follows ``session_number``."""
    return normalize_session_number(session_number) % SESSIONS_PER_CYCLE + 1


def cycle_progress(session_number) -> str:
    """Position within the cycle formatted as "n/8"."""
    return f"{normalize_session_number(session_number)}/{SESSIONS_PER_CYCLE}"
