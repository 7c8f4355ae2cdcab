"""Data access layer for fitloop."""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.session import (
    ExercisePerformance,
    Measurements,
    SessionContext,
    create_initial_context,
    update_context,
)
from ..models.user_profile import UserProfile
from ..models.workout import Difficulty, WorkoutRecord
from .engine import get_db_path


class UserProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: UserProfile) -> int:
        """Create a new user profile."""
        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO user_profiles
                (name, goals, environment, experience_level, age, body_weight, height, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["name"],
                    data["goals"],
                    data["environment"],
                    data["experience_level"],
                    data["age"],
                    data["body_weight"],
                    data["height"],
                    data["notes"],
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, profile_id: int) -> UserProfile | None:
        """Get a user profile by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_profiles WHERE id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def get_latest(self) -> UserProfile | None:
        """Get the most recently created/updated profile."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_profiles ORDER BY updated_at DESC, id DESC LIMIT 1"
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def update(self, profile: UserProfile) -> None:
        """Update an existing profile."""
        if profile.id is None:
            raise ValueError("Profile must have an ID to update")

        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE user_profiles SET
                    name = ?, goals = ?, environment = ?, experience_level = ?,
                    age = ?, body_weight = ?, height = ?, notes = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["name"],
                    data["goals"],
                    data["environment"],
                    data["experience_level"],
                    data["age"],
                    data["body_weight"],
                    data["height"],
                    data["notes"],
                    profile.id,
                ),
            )
            await db.commit()

    def _row_to_profile(self, row: aiosqlite.Row) -> UserProfile:
        """Convert a database row to a UserProfile."""
        data = {
            "name": row["name"],
            "goals": row["goals"],
            "environment": row["environment"],
            "experience_level": row["experience_level"],
            "age": row["age"],
            "body_weight": row["body_weight"],
            "height": row["height"],
            "notes": row["notes"],
        }
        return UserProfile.from_dict(
            data,
            id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]) if row["created_at"] else None,
            updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
        )


class WorkoutRepository:
    """Append-only repository for workout records."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, record: WorkoutRecord) -> int:
        """Append a workout record."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_records
                (user_id, exercise_name, weight, reps, sets, difficulty, notes, timestamp)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.user_id,
                    record.exercise_name,
                    record.weight,
                    record.reps,
                    record.sets,
                    record.difficulty.value,
                    record.notes,
                    record.timestamp.isoformat(),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_for_user(
        self,
        user_id: str,
        time_range: tuple[datetime, datetime] | None = None,
    ) -> list[WorkoutRecord]:
        """All records for a user, most recent first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if time_range:
                start, end = time_range
                cursor = await db.execute(
                    """
                    SELECT * FROM workout_records
                    WHERE user_id = ? AND timestamp >= ? AND timestamp <= ?
                    ORDER BY timestamp DESC, id DESC
                    """,
                    (user_id, start.isoformat(), end.isoformat()),
                )
            else:
                cursor = await db.execute(
                    """
                    SELECT * FROM workout_records
                    WHERE user_id = ?
                    ORDER BY timestamp DESC, id DESC
                    """,
                    (user_id,),
                )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_for_exercise(self, user_id: str, exercise: str) -> list[WorkoutRecord]:
        """Records for one exercise (case-insensitive), most recent first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workout_records
                WHERE user_id = ? AND lower(exercise_name) = lower(?)
                ORDER BY timestamp DESC, id DESC
                """,
                (user_id, exercise),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_exercises(self, user_id: str) -> list[str]:
        """Distinct exercise names a user has logged, sorted."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT DISTINCT exercise_name FROM workout_records
                WHERE user_id = ?
                ORDER BY exercise_name
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [row[0] for row in rows]

    def _row_to_record(self, row: aiosqlite.Row) -> WorkoutRecord:
        """Convert a database row to a WorkoutRecord."""
        return WorkoutRecord(
            id=row["id"],
            user_id=row["user_id"],
            exercise_name=row["exercise_name"],
            weight=row["weight"],
            reps=row["reps"],
            sets=row["sets"],
            difficulty=Difficulty(row["difficulty"]),
            notes=row["notes"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
        )


class SessionContextRepository:
    """Repository for the per-user session context."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> SessionContext | None:
        """Get the context for a user."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM session_contexts WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_context(row)

    async def get_or_create(self, user_id: str) -> SessionContext:
        """Get the context for a user, creating it at cycle 1, session 1."""
        existing = await self.get(user_id)
        if existing:
            return existing

        context = create_initial_context(user_id)
        context.id = await self._insert(context)
        return context

    async def update(self, user_id: str, **updates) -> SessionContext:
        """Apply a partial update and store the result.

        Fields not named keep their stored values; last_activity is always
        refreshed.

        Raises:
            ValueError: If the user has no stored context
            TypeError: If an update names a protected or unknown field
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM session_contexts WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise ValueError(f"No session context for user '{user_id}'")

            context = update_context(self._row_to_context(row), **updates)
            await db.execute(
                """
                UPDATE session_contexts SET
                    cycle_number = ?, session_number = ?, last_activity = ?,
                    measurements = ?, performance = ?
                WHERE id = ?
                """,
                (*self._context_values(context)[1:], context.id),
            )
            await db.commit()
            return context

    async def reset(self, user_id: str) -> SessionContext:
        """Put a user back at cycle 1, session 1 keeping measurements and history."""
        await self.get_or_create(user_id)
        return await self.update(user_id, cycle_number=1, session_number=1)

    async def _insert(self, context: SessionContext) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO session_contexts
                (user_id, cycle_number, session_number, last_activity, measurements, performance)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                self._context_values(context),
            )
            await db.commit()
            return cursor.lastrowid

    @staticmethod
    def _context_values(context: SessionContext) -> tuple:
        return (
            context.user_id,
            context.cycle_number,
            context.session_number,
            context.last_activity.isoformat(),
            json.dumps(context.measurements.to_dict()) if context.measurements else None,
            json.dumps([p.to_dict() for p in context.performance]),
        )

    def _row_to_context(self, row: aiosqlite.Row) -> SessionContext:
        """Convert a database row to a SessionContext."""
        measurements = None
        if row["measurements"]:
            measurements = Measurements.from_dict(json.loads(row["measurements"]))

        return SessionContext(
            id=row["id"],
            user_id=row["user_id"],
            cycle_number=row["cycle_number"],
            session_number=row["session_number"],
            last_activity=datetime.fromisoformat(row["last_activity"]),
            measurements=measurements,
            performance=[
                ExercisePerformance.from_dict(p)
                for p in json.loads(row["performance"] or "[]")
            ],
        )
