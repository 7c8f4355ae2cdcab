"""Workout history and derived progress models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Difficulty(str, Enum):
    """How hard the user reported a set-group to be."""

    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


class Trend(str, Enum):
    """Recent vs. older training volume classification."""

    IMPROVING = "improving"
    MAINTAINING = "maintaining"
    DECLINING = "declining"


class OverallProgress(str, Enum):
    """User-level progress rating."""

    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    NEEDS_ATTENTION = "needs_attention"


@dataclass(frozen=True)
class WorkoutRecord:
    """One completed set-group for one exercise.

    Records are immutable once created. Weight is unit-agnostic.
    """

    exercise_name: str
    weight: float
    reps: int
    sets: int
    difficulty: Difficulty
    timestamp: datetime
    user_id: str
    notes: str | None = None
    id: int | None = None

    def __post_init__(self):
        if self.reps < 1:
            raise ValueError(f"reps must be >= 1, got {self.reps}")
        if self.sets < 1:
            raise ValueError(f"sets must be >= 1, got {self.sets}")

    @property
    def volume(self) -> float:
        """Session volume (weight x reps x sets)."""
        return self.weight * self.reps * self.sets

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "exercise_name": self.exercise_name,
            "weight": self.weight,
            "reps": self.reps,
            "sets": self.sets,
            "difficulty": self.difficulty.value,
            "timestamp": self.timestamp.isoformat(),
            "user_id": self.user_id,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WorkoutRecord":
        """Create from dictionary."""
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)

        return cls(
            id=id,
            exercise_name=data["exercise_name"],
            weight=data["weight"],
            reps=data["reps"],
            sets=data["sets"],
            difficulty=Difficulty(data.get("difficulty", "moderate")),
            timestamp=timestamp,
            user_id=data["user_id"],
            notes=data.get("notes"),
        )


@dataclass
class PersonalRecord:
    """Best weight x reps observed for an exercise."""

    weight: float
    reps: int
    date: datetime

    @property
    def volume(self) -> float:
        return self.weight * self.reps

    def to_dict(self) -> dict:
        return {
            "weight": self.weight,
            "reps": self.reps,
            "date": self.date.isoformat(),
        }


@dataclass
class ExerciseProgress:
    """Derived progress for a single exercise.

    Recomputed on every query; history is ordered most-recent-first.
    """

    exercise: str
    history: list[WorkoutRecord]
    personal_record: PersonalRecord
    trend: Trend = Trend.MAINTAINING
    last_workout: WorkoutRecord | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "exercise": self.exercise,
            "history": [record.to_dict() for record in self.history],
            "personal_record": self.personal_record.to_dict(),
            "last_workout": self.last_workout.to_dict() if self.last_workout else None,
            "trend": self.trend.value,
        }


@dataclass
class WeightAlternatives:
    """Conservative and aggressive options around a recommendation."""

    conservative: int
    aggressive: int


@dataclass
class WeightRecommendation:
    """Next-session weight suggestion for an exercise."""

    exercise: str
    recommended_weight: int
    reasoning: str
    confidence: float
    alternatives: WeightAlternatives

    def to_dict(self) -> dict:
        return {
            "exercise": self.exercise,
            "recommended_weight": self.recommended_weight,
            "reasoning": self.reasoning,
            "confidence": self.confidence,
            "alternatives": {
                "conservative": self.alternatives.conservative,
                "aggressive": self.alternatives.aggressive,
            },
        }


@dataclass
class BodyRegionBalance:
    """Share of workouts per body region, as percentages."""

    upper_body: float = 0.0
    lower_body: float = 0.0
    core: float = 0.0


@dataclass
class Consistency:
    """Training frequency summary."""

    workouts_per_week: float
    streak: int
    last_workout: datetime


@dataclass
class ProgressInsights:
    """User-scoped aggregate analysis of workout history."""

    overall_progress: OverallProgress
    consistency: Consistency
    muscle_balance: BodyRegionBalance = field(default_factory=BodyRegionBalance)
    strengths: list[str] = field(default_factory=list)
    areas_for_improvement: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "overall_progress": self.overall_progress.value,
            "strengths": list(self.strengths),
            "areas_for_improvement": list(self.areas_for_improvement),
            "recommendations": list(self.recommendations),
            "muscle_balance": {
                "upper_body": self.muscle_balance.upper_body,
                "lower_body": self.muscle_balance.lower_body,
                "core": self.muscle_balance.core,
            },
            "consistency": {
                "workouts_per_week": self.consistency.workouts_per_week,
                "streak": self.consistency.streak,
                "last_workout": self.consistency.last_workout.isoformat(),
            },
        }
