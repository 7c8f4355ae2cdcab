"""Data models for fitloop."""

from .metadata import BalanceStatus, ExerciseTarget, MuscleBalanceStatus, PromptMetadata
from .session import SessionContext, create_initial_context, update_context
from .user_profile import ExperienceLevel, UserProfile
from .workout import (
    Difficulty,
    ExerciseProgress,
    OverallProgress,
    ProgressInsights,
    Trend,
    WeightRecommendation,
    WorkoutRecord,
)

__all__ = [
    "BalanceStatus",
    "create_initial_context",
    "Difficulty",
    "ExerciseProgress",
    "ExerciseTarget",
    "ExperienceLevel",
    "MuscleBalanceStatus",
    "OverallProgress",
    "ProgressInsights",
    "PromptMetadata",
    "SessionContext",
    "Trend",
    "update_context",
    "UserProfile",
    "WeightRecommendation",
    "WorkoutRecord",
]
