"""Machine-readable metadata embedded in generated meta-prompts.

The wire format uses camelCase keys; the Python side uses snake_case.
Unknown keys in an incoming payload are ignored.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

_CYCLE_PROGRESS_PATTERN = re.compile(r"\d+/8")


def _mapping(value, label: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be an object")
    return value


def _integer(value, label: str) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an integer")
    return value


def _number(value, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number")
    return value


def _text(value, label: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    return value


class BalanceStatus(str, Enum):
    """Relative development of a muscle region."""

    WEAK = "weak"
    NORMAL = "normal"
    STRONG = "strong"


@dataclass
class LastPerformance:
    """Most recent recorded performance of an exercise."""

    weight: float
    reps: int
    sets: int

    def to_dict(self) -> dict:
        return {"weight": self.weight, "reps": self.reps, "sets": self.sets}

    @classmethod
    def from_dict(cls, data: dict) -> "LastPerformance":
        data = _mapping(data, "lastPerformance")
        return cls(
            weight=_number(data["weight"], "lastPerformance.weight"),
            reps=_integer(data["reps"], "lastPerformance.reps"),
            sets=_integer(data["sets"], "lastPerformance.sets"),
        )


@dataclass
class ExerciseTarget:
    """Planned exercise for the upcoming session."""

    name: str
    target_weight: float
    target_reps: str
    target_sets: int
    last_performance: LastPerformance | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "targetWeight": self.target_weight,
            "targetReps": self.target_reps,
            "targetSets": self.target_sets,
            "lastPerformance": (
                self.last_performance.to_dict() if self.last_performance else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseTarget":
        data = _mapping(data, "exercise")
        last = data.get("lastPerformance")
        return cls(
            name=_text(data["name"], "exercise.name"),
            target_weight=_number(data["targetWeight"], "exercise.targetWeight"),
            target_reps=_text(data["targetReps"], "exercise.targetReps"),
            target_sets=_integer(data["targetSets"], "exercise.targetSets"),
            last_performance=LastPerformance.from_dict(last) if last is not None else None,
        )


@dataclass
class MuscleBalanceStatus:
    """Five-region muscle balance assessment."""

    push_upper_body: BalanceStatus = BalanceStatus.NORMAL
    pull_upper_body: BalanceStatus = BalanceStatus.NORMAL
    lower_body_front: BalanceStatus = BalanceStatus.NORMAL
    lower_body_back: BalanceStatus = BalanceStatus.NORMAL
    core: BalanceStatus = BalanceStatus.NORMAL

    def to_dict(self) -> dict:
        return {
            "pushUpperBody": self.push_upper_body.value,
            "pullUpperBody": self.pull_upper_body.value,
            "lowerBodyFront": self.lower_body_front.value,
            "lowerBodyBack": self.lower_body_back.value,
            "core": self.core.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MuscleBalanceStatus":
        data = _mapping(data, "muscleBalance")
        return cls(
            push_upper_body=BalanceStatus(data["pushUpperBody"]),
            pull_upper_body=BalanceStatus(data["pullUpperBody"]),
            lower_body_front=BalanceStatus(data["lowerBodyFront"]),
            lower_body_back=BalanceStatus(data["lowerBodyBack"]),
            core=BalanceStatus(data["core"]),
        )


@dataclass
class PromptMetadata:
    """Structured payload carried between the metadata markers."""

    session_number: int
    session_name: str
    date: str  # ISO 8601 date
    exercises: list[ExerciseTarget]
    muscle_balance: MuscleBalanceStatus
    next_session: int
    cycle_progress: str  # "<n>/8"
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the wire representation."""
        return {
            "sessionNumber": self.session_number,
            "sessionName": self.session_name,
            "date": self.date,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "muscleBalance": self.muscle_balance.to_dict(),
            "recommendations": list(self.recommendations),
            "nextSession": self.next_session,
            "cycleProgress": self.cycle_progress,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PromptMetadata":
        """Create from the wire representation.

        Raises:
            KeyError: If a required key is missing
            ValueError: If a value has the wrong type, a balance status is not
                weak/normal/strong, or cycleProgress is not "<n>/8"
        """
        data = _mapping(data, "metadata")

        exercises = data["exercises"]
        if not isinstance(exercises, list):
            raise ValueError("exercises must be a list")

        recommendations = data.get("recommendations", [])
        if not isinstance(recommendations, list):
            raise ValueError("recommendations must be a list")

        cycle_progress = _text(data["cycleProgress"], "cycleProgress")
        if not _CYCLE_PROGRESS_PATTERN.fullmatch(cycle_progress):
            raise ValueError(f"cycleProgress must read \"<n>/8\", got {cycle_progress!r}")

        return cls(
            session_number=_integer(data["sessionNumber"], "sessionNumber"),
            session_name=_text(data["sessionName"], "sessionName"),
            date=_text(data["date"], "date"),
            exercises=[ExerciseTarget.from_dict(ex) for ex in exercises],
            muscle_balance=MuscleBalanceStatus.from_dict(data["muscleBalance"]),
            recommendations=[_text(r, "recommendations[]") for r in recommendations],
            next_session=_integer(data["nextSession"], "nextSession"),
            cycle_progress=cycle_progress,
        )
