"""Meta-prompt composition and metadata extraction."""

import json
import logging
from collections.abc import Callable, Iterable
from datetime import date

from ..generators.meta_prompt import (
    BALANCE_STATUS_LABELS,
    CYCLE_SESSION_TEMPLATE,
    DEFAULT_LANGUAGE_INSTRUCTION,
    DEFAULT_RECOMMENDATIONS,
    EXERCISE_ENTRY_TEMPLATE,
    FIRST_SESSION_ADVICE,
    IMPORT_PROMPT_TEMPLATES,
    LANGUAGE_INSTRUCTIONS,
    LEARNING_DATA_TEMPLATE,
    META_PROMPT_TEMPLATE,
    METADATA_END,
    METADATA_START,
    NO_HISTORY_NOTE,
    RETURNING_ADVICE,
    TRAINING_PROMPT_TEMPLATE,
    USER_INFO_ANCHOR,
    USER_INFO_TEMPLATE,
)
from ..generators.template import format_value, render
from ..models.metadata import (
    ExerciseTarget,
    LastPerformance,
    MuscleBalanceStatus,
    PromptMetadata,
)
from ..models.session import SESSIONS_PER_CYCLE, SessionContext
from ..models.user_profile import UserProfile
from ..models.workout import WorkoutRecord
from .progress_analysis import ProgressAnalyzer
from .session_cycle import (
    SESSION_EXERCISES,
    SESSION_TITLES,
    SessionExercise,
    cycle_progress,
    get_session_exercises,
    get_session_title,
    next_session_number,
    normalize_session_number,
    previous_session,
)

logger = logging.getLogger(__name__)

# Exercises summarized in the learning-data section
MAX_LEARNING_EXERCISES = 5


def _weight_label(exercise: SessionExercise, weight: float | None = None) -> str:
    weight = exercise.weight if weight is None else weight
    if not weight:
        return "bodyweight only"
    return f"{format_value(weight)} {exercise.unit}".strip()


def _json_block(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _json_string_body(value: str) -> str:
    """Escape ``value`` for use between JSON double quotes."""
    return json.dumps(value, ensure_ascii=False)[1:-1]


class PromptComposer:
    """Builds meta-prompts from profile, session state and workout history.

    The analyzer and the date source are injected; the composer keeps no
    state between calls.
    """

    def __init__(
        self,
        analyzer: ProgressAnalyzer | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.analyzer = analyzer or ProgressAnalyzer()
        self.today = today

    def generate_full_prompt(
        self,
        profile: UserProfile,
        context: SessionContext,
        language: str = "ja",
        history: Iterable[WorkoutRecord] | None = None,
    ) -> str:
        """Render the complete meta-prompt for the context's current session.

        Args:
            profile: User the prompt is for
            context: Current cycle position
            language: "en" for English responses, anything else for Japanese
            history: Optional workout records used to personalize targets

        Returns:
            Prompt text with an embedded metadata block
        """
        session_number = normalize_session_number(context.session_number)
        metadata = self.build_metadata(context, history)
        last_session = previous_session(session_number)
        today = self.today()

        exercises_text = "\n\n".join(
            render(
                EXERCISE_ENTRY_TEMPLATE,
                {
                    "index": i,
                    "name": ex.name,
                    "sets": ex.sets,
                    "targetReps": ex.target_reps,
                    "weightLabel": _weight_label(ex, target.target_weight),
                    "rest": ex.rest_seconds,
                },
            )
            for i, (ex, target) in enumerate(
                zip(get_session_exercises(session_number), metadata.exercises), start=1
            )
        )

        balance = metadata.muscle_balance.to_dict()
        data = {
            "languageInstruction": self.get_language_instruction(language),
            "lastSession": (
                f"Session {last_session} ({SESSION_TITLES[last_session]})"
                f" - completed {today.isoformat()}"
            ),
            "nextSession": f"Session {session_number} ({metadata.session_name})",
            "currentSession": f"Session {session_number}: {metadata.session_name}",
            "exercises": exercises_text,
            "cycleOverview": self.format_cycle_overview(),
            "sessionNumber": metadata.session_number,
            "sessionName": _json_string_body(metadata.session_name),
            "date": metadata.date,
            "exercisesJSON": _json_block([ex.to_dict() for ex in metadata.exercises]),
            "muscleBalanceJSON": _json_block(balance),
            "recommendationsJSON": _json_block(metadata.recommendations),
            "nextSessionNumber": metadata.next_session,
            "cycleProgress": metadata.cycle_progress,
            "pushUpperBodyStatus": BALANCE_STATUS_LABELS[balance["pushUpperBody"]],
            "pullUpperBodyStatus": BALANCE_STATUS_LABELS[balance["pullUpperBody"]],
            "lowerBodyFrontStatus": BALANCE_STATUS_LABELS[balance["lowerBodyFront"]],
            "lowerBodyBackStatus": BALANCE_STATUS_LABELS[balance["lowerBodyBack"]],
            "coreStatus": BALANCE_STATUS_LABELS[balance["core"]],
        }

        prompt = render(META_PROMPT_TEMPLATE, data)
        return self.insert_user_info(prompt, profile)

    def build_metadata(
        self,
        context: SessionContext,
        history: Iterable[WorkoutRecord] | None = None,
    ) -> PromptMetadata:
        """Assemble the metadata payload for the context's session."""
        session_number = normalize_session_number(context.session_number)
        records = list(history or [])

        targets = []
        for ex in get_session_exercises(session_number):
            target = ExerciseTarget(
                name=ex.name,
                target_weight=ex.weight,
                target_reps=ex.target_reps,
                target_sets=ex.sets,
            )
            progress = self.analyzer.exercise_progress(records, ex.name)
            if progress.last_workout is not None:
                last = progress.last_workout
                target.target_weight = self.analyzer.recommend_weight(
                    ex.name, progress.history
                ).recommended_weight
                target.last_performance = LastPerformance(
                    weight=last.weight, reps=last.reps, sets=last.sets
                )
            targets.append(target)

        if records:
            muscle_balance = self.analyzer.muscle_balance_status(records)
            recommendations = (
                self.analyzer.analyze_progress(records).recommendations
                or list(DEFAULT_RECOMMENDATIONS)
            )
        else:
            muscle_balance = MuscleBalanceStatus()
            recommendations = list(DEFAULT_RECOMMENDATIONS)

        return PromptMetadata(
            session_number=session_number,
            session_name=get_session_title(session_number),
            date=self.today().isoformat(),
            exercises=targets,
            muscle_balance=muscle_balance,
            recommendations=recommendations,
            next_session=next_session_number(session_number),
            cycle_progress=cycle_progress(session_number),
        )

    def insert_user_info(self, prompt: str, profile: UserProfile) -> str:
        """Splice the user-info section in front of the anchor heading.

        The prompt is returned unchanged when the anchor is missing.
        """
        anchor = prompt.find(USER_INFO_ANCHOR)
        if anchor == -1:
            logger.debug("User info anchor not found, skipping splice")
            return prompt

        # Insert after the blank line that ends the title
        split_at = anchor + 2
        user_info = render(
            USER_INFO_TEMPLATE,
            {
                "name": profile.name,
                "goals": profile.goals,
                "environment": profile.environment,
            },
        )
        return prompt[:split_at] + user_info + prompt[split_at:]

    @staticmethod
    def get_language_instruction(language: str) -> str:
        """Instruction line telling the assistant which language to answer in."""
        if language == "en":
            return LANGUAGE_INSTRUCTIONS["en"]
        return DEFAULT_LANGUAGE_INSTRUCTION

    @staticmethod
    def format_cycle_overview() -> str:
        """List every session of the cycle with its default prescription."""
        sections = []
        for number in range(1, SESSIONS_PER_CYCLE + 1):
            sections.append(
                render(
                    CYCLE_SESSION_TEMPLATE,
                    {
                        "sessionNumber": number,
                        "title": SESSION_TITLES[number],
                        "exercises": [
                            {
                                "index": i,
                                "name": ex.name,
                                "sets": ex.sets,
                                "targetReps": ex.target_reps,
                                "weightLabel": _weight_label(ex),
                            }
                            for i, ex in enumerate(SESSION_EXERCISES[number], start=1)
                        ],
                    },
                )
            )
        return "\n".join(sections).rstrip()

    def extract_metadata(self, text: str) -> PromptMetadata | None:
        """Recover the metadata block from previously generated text.

        Returns None when either marker is missing or the payload does not
        parse into a complete PromptMetadata. Extra keys are ignored.
        """
        return extract_metadata(text)

    def generate_training_prompt(
        self, profile: UserProfile, context: SessionContext
    ) -> str:
        """Render the compact per-session training prompt."""
        last_performance = context.performance[-1] if context.performance else None
        last_training_date = (
            last_performance.date.date().isoformat() if last_performance else "First session"
        )
        advice = RETURNING_ADVICE if len(context.performance) >= 2 else FIRST_SESSION_ADVICE

        return render(
            TRAINING_PROMPT_TEMPLATE,
            {
                "userName": profile.name,
                "sessionNumber": context.session_number,
                "cycleNumber": context.cycle_number,
                "lastTrainingDate": last_training_date,
                "goals": profile.goals,
                "sessionTitle": get_session_title(context.session_number),
                "exercises": [
                    {
                        "name": ex.name,
                        "sets": ex.sets,
                        "weight": ex.weight,
                        "unit": ex.unit,
                        "targetReps": ex.target_reps,
                    }
                    for ex in get_session_exercises(context.session_number)
                ],
                "advice": advice,
            },
        )

    @staticmethod
    def generate_import_prompt(kind: str, raw_data: str) -> str:
        """Prompt asking the assistant to structure raw logs as JSON.

        Args:
            kind: "training" or "measurement"
            raw_data: Free text pasted by the user

        Raises:
            ValueError: If kind is not a known import type
        """
        template = IMPORT_PROMPT_TEMPLATES.get(kind)
        if template is None:
            raise ValueError(
                f"Unknown import type '{kind}'. "
                f"Expected one of: {', '.join(sorted(IMPORT_PROMPT_TEMPLATES))}"
            )
        return render(template, {"rawData": raw_data})

    def enrich_with_learning_data(
        self, prompt: str, history: Iterable[WorkoutRecord]
    ) -> str:
        """Append a history-based analysis section to ``prompt``."""
        records = list(history)
        exercises = self.analyzer.list_exercises(records)
        if not exercises:
            return prompt + NO_HISTORY_NOTE

        progress_items = []
        for exercise in exercises[:MAX_LEARNING_EXERCISES]:
            progress = self.analyzer.exercise_progress(records, exercise)
            recommendation = self.analyzer.recommend_weight(exercise, progress.history)
            progress_items.append(
                {
                    "exercise": exercise,
                    "lastWeight": progress.last_workout.weight if progress.last_workout else 0,
                    "recommendedWeight": recommendation.recommended_weight,
                    "trend": progress.trend.value,
                }
            )

        insights = self.analyzer.analyze_progress(records)
        section = render(
            LEARNING_DATA_TEMPLATE,
            {
                "progress": progress_items,
                "overallProgress": insights.overall_progress.value,
                "workoutsPerWeek": insights.consistency.workouts_per_week,
                "streak": insights.consistency.streak,
                "strengths": [{"text": s} for s in insights.strengths],
                "areas": [{"text": a} for a in insights.areas_for_improvement],
                "upperBody": round(insights.muscle_balance.upper_body),
                "lowerBody": round(insights.muscle_balance.lower_body),
                "core": round(insights.muscle_balance.core),
            },
        )
        return prompt + section


def extract_metadata(text: str) -> PromptMetadata | None:
    """Parse the payload between the metadata markers, or return None.

    The metadata block always closes a generated prompt, so the last start
    marker wins over any copy of it quoted in user-supplied text.
    """
    start = text.rfind(METADATA_START)
    if start == -1:
        return None
    payload_start = start + len(METADATA_START)
    end = text.find(METADATA_END, payload_start)
    if end == -1:
        return None

    payload = text[payload_start:end].strip()
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.debug("Metadata payload is not valid JSON: %s", e)
        return None

    if not isinstance(data, dict):
        return None

    try:
        return PromptMetadata.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.debug("Metadata payload is incomplete: %r", e)
        return None
