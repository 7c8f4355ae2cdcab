"""Session context model: where a user stands in the training cycle."""

from dataclasses import dataclass, field, replace
from datetime import datetime

SESSIONS_PER_CYCLE = 8

# Fields an update may not touch
_PROTECTED_FIELDS = {"id", "user_id", "last_activity"}


@dataclass
class PerformedSet:
    """One set as actually performed."""

    weight: float
    reps: int
    rpe: float | None = None  # Rate of perceived exertion (1-10)


@dataclass
class ExercisePerformance:
    """Performance of a single exercise on a given day."""

    exercise_name: str
    date: datetime
    sets: list[PerformedSet] = field(default_factory=list)
    muscle_groups: list[str] = field(default_factory=list)
    notes: str | None = None

    def to_dict(self) -> dict:
        return {
            "exercise_name": self.exercise_name,
            "date": self.date.isoformat(),
            "sets": [
                {"weight": s.weight, "reps": s.reps, "rpe": s.rpe} for s in self.sets
            ],
            "muscle_groups": list(self.muscle_groups),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExercisePerformance":
        return cls(
            exercise_name=data["exercise_name"],
            date=datetime.fromisoformat(data["date"]),
            sets=[
                PerformedSet(weight=s["weight"], reps=s["reps"], rpe=s.get("rpe"))
                for s in data.get("sets", [])
            ],
            muscle_groups=data.get("muscle_groups", []),
            notes=data.get("notes"),
        )


@dataclass
class Measurements:
    """Latest body composition snapshot."""

    weight: float | None = None  # kg
    body_fat_percentage: float | None = None
    muscle_mass: float | None = None  # kg
    extra: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "weight": self.weight,
            "body_fat_percentage": self.body_fat_percentage,
            "muscle_mass": self.muscle_mass,
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Measurements":
        return cls(
            weight=data.get("weight"),
            body_fat_percentage=data.get("body_fat_percentage"),
            muscle_mass=data.get("muscle_mass"),
            extra=data.get("extra", {}),
        )


@dataclass
class SessionContext:
    """Per-user position in the 8-session cycle.

    Created at cycle 1, session 1. Mutated only through update_context(),
    which always refreshes last_activity.
    """

    user_id: str
    cycle_number: int = 1
    session_number: int = 1
    last_activity: datetime = field(default_factory=datetime.now)
    measurements: Measurements | None = None
    performance: list[ExercisePerformance] = field(default_factory=list)
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "cycle_number": self.cycle_number,
            "session_number": self.session_number,
            "last_activity": self.last_activity.isoformat(),
            "measurements": self.measurements.to_dict() if self.measurements else None,
            "performance": [p.to_dict() for p in self.performance],
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "SessionContext":
        """Create from dictionary."""
        measurements = None
        if data.get("measurements"):
            measurements = Measurements.from_dict(data["measurements"])

        return cls(
            id=id,
            user_id=data["user_id"],
            cycle_number=data.get("cycle_number", 1),
            session_number=data.get("session_number", 1),
            last_activity=datetime.fromisoformat(data["last_activity"]),
            measurements=measurements,
            performance=[
                ExercisePerformance.from_dict(p) for p in data.get("performance", [])
            ],
        )

    def get_position_display(self) -> str:
        """Get a human-readable position string."""
        return (
            f"Cycle {self.cycle_number}, "
            f"Session {self.session_number}/{SESSIONS_PER_CYCLE}"
        )


def create_initial_context(user_id: str) -> SessionContext:
    """Create a fresh context at cycle 1, session 1."""
    return SessionContext(user_id=user_id, cycle_number=1, session_number=1)


def update_context(current: SessionContext, **updates) -> SessionContext:
    """Return a copy of ``current`` with ``updates`` applied.

    Fields not named keep their prior values; last_activity is always
    refreshed. Raises TypeError for protected or unknown field names.
    """
    protected = _PROTECTED_FIELDS.intersection(updates)
    if protected:
        raise TypeError(f"Cannot update protected fields: {', '.join(sorted(protected))}")

    return replace(current, last_activity=datetime.now(), **updates)


def add_performance(
    context: SessionContext, performance: ExercisePerformance
) -> SessionContext:
    """Append a performance entry to the context."""
    return update_context(context, performance=[*context.performance, performance])
