"""Workout history analysis: personal records, trends and weight advice.

All methods are pure functions of their arguments (plus the injected clock
used to date "no data" defaults). Whenever there is nothing to analyze the
analyzer returns a documented default rather than raising.
"""

import logging
import math
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from ..models.metadata import BalanceStatus, MuscleBalanceStatus
from ..models.workout import (
    BodyRegionBalance,
    Consistency,
    Difficulty,
    ExerciseProgress,
    OverallProgress,
    PersonalRecord,
    ProgressInsights,
    Trend,
    WeightAlternatives,
    WeightRecommendation,
    WorkoutRecord,
)

logger = logging.getLogger(__name__)

# Tunable thresholds. Changing any of these changes observable advice.
TREND_WINDOW = 3
TREND_IMPROVING_RATIO = 1.05
TREND_DECLINING_RATIO = 0.95
STREAK_MAX_GAP_DAYS = 2
DEFAULT_STARTING_WEIGHT = 20
ALTERNATIVE_SPREAD = 0.1
FREQUENCY_STRENGTH_THRESHOLD = 3
IMBALANCE_THRESHOLD = 0.3

# Weight multipliers applied to the last workout
EASY_INCREASE = 1.05
IMPROVING_INCREASE = 1.025
DECLINING_DECREASE = 0.95

# Case-insensitive substring keywords per body region
BODY_REGION_KEYWORDS: dict[str, list[str]] = {
    "upper_body": ["bench press", "shoulder press", "pull up", "row"],
    "lower_body": ["squat", "deadlift", "leg press", "lunge"],
    "core": ["plank", "crunch", "leg raise"],
}

# Finer split used for the prompt's five-region balance assessment
MUSCLE_REGION_KEYWORDS: dict[str, list[str]] = {
    "push_upper_body": [
        "bench press", "shoulder press", "arnold press", "incline", "fly",
        "triceps", "push-up", "push up", "dip", "lateral raise",
    ],
    "pull_upper_body": [
        "row", "pull up", "pull-up", "pulldown", "pullover", "chin",
        "biceps", "curl", "shrug",
    ],
    "lower_body_front": ["squat", "lunge", "leg press", "leg extension", "thruster"],
    "lower_body_back": ["deadlift", "hip thrust", "leg curl", "good morning", "glute"],
    "core": ["plank", "crunch", "leg raise", "russian twist", "sit-up", "sit up"],
}

# Region share relative to an even split
WEAK_SHARE_RATIO = 0.5
STRONG_SHARE_RATIO = 1.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def _matches(name: str, keywords: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in keywords)


def _alternatives(recommended: float) -> WeightAlternatives:
    return WeightAlternatives(
        conservative=round_half_up(recommended * (1 - ALTERNATIVE_SPREAD)),
        aggressive=round_half_up(recommended * (1 + ALTERNATIVE_SPREAD)),
    )


class ProgressAnalyzer:
    """Stateless analysis over a single user's workout records.

    Keyword tables and the clock are injectable so they can be tested and
    extended without touching the analysis logic.
    """

    def __init__(
        self,
        region_keywords: dict[str, list[str]] | None = None,
        muscle_region_keywords: dict[str, list[str]] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.region_keywords = region_keywords or BODY_REGION_KEYWORDS
        self.muscle_region_keywords = muscle_region_keywords or MUSCLE_REGION_KEYWORDS
        self.now = now

    # Per-exercise analysis

    def exercise_progress(
        self, history: Iterable[WorkoutRecord], exercise_name: str
    ) -> ExerciseProgress:
        """Compute personal record and trend for one exercise.

        Args:
            history: Workout records (any order; other exercises are ignored)
            exercise_name: Exercise to analyze (case-insensitive)

        Returns:
            ExerciseProgress with history ordered most-recent-first
        """
        target = exercise_name.strip().lower()
        records = sorted(
            (r for r in history if r.exercise_name.strip().lower() == target),
            key=lambda r: r.timestamp,
            reverse=True,
        )

        if not records:
            return self._no_data_exercise_progress(exercise_name)

        # Strict comparison: the first record reaching a volume keeps the PR
        best = PersonalRecord(weight=0, reps=0, date=self.now())
        for record in records:
            if record.weight * record.reps > best.volume:
                best = PersonalRecord(
                    weight=record.weight, reps=record.reps, date=record.timestamp
                )

        return ExerciseProgress(
            exercise=exercise_name,
            history=records,
            personal_record=best,
            last_workout=records[0],
            trend=self.analyze_trend(records),
        )

    def analyze_trend(self, history: list[WorkoutRecord]) -> Trend:
        """Classify recent vs. older volume.

        ``history`` must be ordered most-recent-first. The average volume of
        the latest TREND_WINDOW records is compared to the next window.
        """
        if len(history) < TREND_WINDOW:
            return Trend.MAINTAINING

        recent = history[:TREND_WINDOW]
        older = history[TREND_WINDOW : TREND_WINDOW * 2]
        if not older:
            return Trend.MAINTAINING

        avg_recent = sum(r.volume for r in recent) / len(recent)
        avg_older = sum(r.volume for r in older) / len(older)

        if avg_recent > avg_older * TREND_IMPROVING_RATIO:
            return Trend.IMPROVING
        if avg_recent < avg_older * TREND_DECLINING_RATIO:
            return Trend.DECLINING
        return Trend.MAINTAINING

    def recommend_weight(
        self, exercise: str, history: Iterable[WorkoutRecord]
    ) -> WeightRecommendation:
        """Suggest the next working weight for ``exercise``."""
        progress = self.exercise_progress(history, exercise)

        if progress.last_workout is None:
            return WeightRecommendation(
                exercise=exercise,
                recommended_weight=DEFAULT_STARTING_WEIGHT,
                reasoning="First time doing this exercise. Start with a light weight.",
                confidence=0.5,
                alternatives=_alternatives(DEFAULT_STARTING_WEIGHT),
            )

        last = progress.last_workout
        if last.difficulty == Difficulty.EASY:
            recommended = round_half_up(last.weight * EASY_INCREASE)
            reasoning = "Last session felt easy, so increase the weight by 5%."
            confidence = 0.8
        elif last.difficulty == Difficulty.HARD:
            recommended = round_half_up(last.weight)
            reasoning = "Last session felt hard, so stay at the same weight."
            confidence = 0.9
        elif progress.trend == Trend.IMPROVING:
            recommended = round_half_up(last.weight * IMPROVING_INCREASE)
            reasoning = "Volume is trending up, so increase the weight by 2.5%."
            confidence = 0.85
        elif progress.trend == Trend.DECLINING:
            recommended = round_half_up(last.weight * DECLINING_DECREASE)
            reasoning = "Volume is trending down, so reduce the weight by 5%."
            confidence = 0.7
        else:
            recommended = round_half_up(last.weight)
            reasoning = "Keep the current weight."
            confidence = 0.8

        return WeightRecommendation(
            exercise=exercise,
            recommended_weight=recommended,
            reasoning=reasoning,
            confidence=confidence,
            alternatives=_alternatives(recommended),
        )

    # User-level analysis

    def analyze_progress(
        self,
        all_workouts: Iterable[WorkoutRecord],
        time_range: tuple[datetime, datetime] | None = None,
    ) -> ProgressInsights:
        """Aggregate insights over a user's workouts.

        Args:
            all_workouts: Every record for the user
            time_range: Optional inclusive (start, end) filter

        Returns:
            ProgressInsights; a fixed "no data" insight when nothing matches
        """
        workouts = list(all_workouts)
        if time_range is not None:
            start, end = time_range
            workouts = [w for w in workouts if start <= w.timestamp <= end]

        if not workouts:
            logger.debug("No workouts to analyze, returning default insights")
            return self._no_data_insights()

        counts = {
            region: sum(1 for w in workouts if _matches(w.exercise_name, keywords))
            for region, keywords in self.region_keywords.items()
        }
        upper = counts.get("upper_body", 0)
        lower = counts.get("lower_body", 0)
        core = counts.get("core", 0)
        total = (upper + lower + core) or 1

        ordered = sorted(workouts, key=lambda w: w.timestamp, reverse=True)
        workouts_per_week = self.workouts_per_week(ordered)
        streak = self.streak(ordered)

        strengths: list[str] = []
        areas: list[str] = []
        recommendations: list[str] = []

        if workouts_per_week >= FREQUENCY_STRENGTH_THRESHOLD:
            strengths.append("Excellent training frequency")
        else:
            areas.append("Training frequency")
            recommendations.append("Aim for at least 3 workouts per week")

        if abs(upper - lower) > total * IMBALANCE_THRESHOLD:
            areas.append("Muscle balance")
            if upper > lower:
                recommendations.append("Add more lower-body training")
            else:
                recommendations.append("Add more upper-body training")
        else:
            strengths.append("Well-balanced training")

        return ProgressInsights(
            overall_progress=self._overall_progress(len(strengths), workouts_per_week),
            strengths=strengths,
            areas_for_improvement=areas,
            recommendations=recommendations,
            muscle_balance=BodyRegionBalance(
                upper_body=upper / total * 100,
                lower_body=lower / total * 100,
                core=core / total * 100,
            ),
            consistency=Consistency(
                workouts_per_week=workouts_per_week,
                streak=streak,
                last_workout=ordered[0].timestamp,
            ),
        )

    def workouts_per_week(self, workouts: list[WorkoutRecord]) -> float:
        """Average weekly frequency, rounded to one decimal."""
        if not workouts:
            return 0.0

        timestamps = [w.timestamp for w in workouts]
        span = max(timestamps) - min(timestamps)
        weeks = max(1.0, span / timedelta(weeks=1))
        return round_half_up(len(workouts) / weeks * 10) / 10

    def streak(self, workouts: list[WorkoutRecord]) -> int:
        """Length of the latest run of workouts with small gaps.

        Walks most-recent-first and stops at the first gap larger than
        STREAK_MAX_GAP_DAYS whole days.
        """
        if not workouts:
            return 0

        ordered = sorted(workouts, key=lambda w: w.timestamp, reverse=True)
        streak = 1
        for newer, older in zip(ordered, ordered[1:]):
            gap_days = (newer.timestamp - older.timestamp) // timedelta(days=1)
            if gap_days > STREAK_MAX_GAP_DAYS:
                break
            streak += 1
        return streak

    def list_exercises(self, all_workouts: Iterable[WorkoutRecord]) -> list[str]:
        """Distinct exercise names, sorted."""
        return sorted({w.exercise_name for w in all_workouts})

    def muscle_balance_status(
        self, all_workouts: Iterable[WorkoutRecord]
    ) -> MuscleBalanceStatus:
        """Five-region weak/normal/strong assessment.

        A region is weak below half of an even share of matched workouts and
        strong above one and a half times it. No matches means all normal.
        """
        workouts = list(all_workouts)
        counts = {
            region: sum(1 for w in workouts if _matches(w.exercise_name, keywords))
            for region, keywords in self.muscle_region_keywords.items()
        }
        total = sum(counts.values())
        if total == 0:
            return MuscleBalanceStatus()

        even_share = total / len(counts)

        def status(region: str) -> BalanceStatus:
            count = counts.get(region, 0)
            if count < even_share * WEAK_SHARE_RATIO:
                return BalanceStatus.WEAK
            if count > even_share * STRONG_SHARE_RATIO:
                return BalanceStatus.STRONG
            return BalanceStatus.NORMAL

        return MuscleBalanceStatus(
            push_upper_body=status("push_upper_body"),
            pull_upper_body=status("pull_upper_body"),
            lower_body_front=status("lower_body_front"),
            lower_body_back=status("lower_body_back"),
            core=status("core"),
        )

    # Defaults

    @staticmethod
    def _overall_progress(strength_count: int, workouts_per_week: float) -> OverallProgress:
        if strength_count >= 2 and workouts_per_week >= 3:
            return OverallProgress.EXCELLENT
        if strength_count >= 1 and workouts_per_week >= 2:
            return OverallProgress.GOOD
        if workouts_per_week < 1:
            return OverallProgress.NEEDS_ATTENTION
        return OverallProgress.MODERATE

    def _no_data_exercise_progress(self, exercise: str) -> ExerciseProgress:
        return ExerciseProgress(
            exercise=exercise,
            history=[],
            personal_record=PersonalRecord(weight=0, reps=0, date=self.now()),
            trend=Trend.MAINTAINING,
        )

    def _no_data_insights(self) -> ProgressInsights:
        return ProgressInsights(
            overall_progress=OverallProgress.NEEDS_ATTENTION,
            strengths=[],
            areas_for_improvement=["No workout history yet"],
            recommendations=["Start training regularly"],
            muscle_balance=BodyRegionBalance(),
            consistency=Consistency(workouts_per_week=0.0, streak=0, last_workout=self.now()),
        )
