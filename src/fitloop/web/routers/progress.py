"""Workout logging and progress analysis routes."""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...db.repositories import WorkoutRepository
from ...models.workout import Difficulty, WorkoutRecord
from ...services.progress_analysis import ProgressAnalyzer
from .deps import get_db_path

router = APIRouter(tags=["progress"])


class WorkoutIn(BaseModel):
    user_id: str
    exercise_name: str
    weight: float
    reps: int = Field(ge=1)
    sets: int = Field(ge=1)
    difficulty: Difficulty = Difficulty.MODERATE
    timestamp: datetime | None = None
    notes: str | None = None


@router.post("/workouts", status_code=201)
async def add_workout(body: WorkoutIn, db_path=Depends(get_db_path)):
    """Append a workout record."""
    record = WorkoutRecord(
        exercise_name=body.exercise_name,
        weight=body.weight,
        reps=body.reps,
        sets=body.sets,
        difficulty=body.difficulty,
        timestamp=body.timestamp or datetime.now(),
        user_id=body.user_id,
        notes=body.notes,
    )
    record_id = await WorkoutRepository(db_path).add(record)
    return {"id": record_id, **record.to_dict()}


@router.get("/progress/{user_id}/exercises/{name}")
async def exercise_progress(user_id: str, name: str, db_path=Depends(get_db_path)):
    """Personal record and trend for one exercise."""
    history = await WorkoutRepository(db_path).list_for_exercise(user_id, name)
    if not history:
        return JSONResponse(status_code=404, content={"error": "No workouts for exercise"})
    return ProgressAnalyzer().exercise_progress(history, name).to_dict()


@router.get("/progress/{user_id}/recommendation/{name}")
async def weight_recommendation(user_id: str, name: str, db_path=Depends(get_db_path)):
    """Next working weight for one exercise."""
    history = await WorkoutRepository(db_path).list_for_exercise(user_id, name)
    return ProgressAnalyzer().recommend_weight(name, history).to_dict()


@router.get("/progress/{user_id}/insights")
async def progress_insights(
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    db_path=Depends(get_db_path),
):
    """User-level insights, optionally limited to [start, end]."""
    workouts = await WorkoutRepository(db_path).list_for_user(user_id)
    time_range = None
    if start or end:
        time_range = (start or datetime.min, end or datetime.max)
    return ProgressAnalyzer().analyze_progress(workouts, time_range).to_dict()
