"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fitloop.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # User profiles table
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_profiles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                goals TEXT NOT NULL,
                environment TEXT NOT NULL,
                experience_level TEXT,
                age INTEGER,
                body_weight REAL,
                height REAL,
                notes TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Append-only workout history
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                exercise_name TEXT NOT NULL,
                weight REAL NOT NULL,
                reps INTEGER NOT NULL CHECK (reps >= 1),
                sets INTEGER NOT NULL CHECK (sets >= 1),
                difficulty TEXT NOT NULL,
                notes TEXT,
                timestamp TIMESTAMP NOT NULL
            )
        """)

        # One session context per user
        await db.execute("""
            CREATE TABLE IF NOT EXISTS session_contexts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL UNIQUE,
                cycle_number INTEGER DEFAULT 1,
                session_number INTEGER DEFAULT 1,
                last_activity TIMESTAMP NOT NULL,
                measurements TEXT,
                performance TEXT DEFAULT '[]'
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_records_user
            ON workout_records(user_id, timestamp)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_records_exercise
            ON workout_records(user_id, exercise_name)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_session_contexts_user
            ON session_contexts(user_id)
        """)

        await db.commit()
