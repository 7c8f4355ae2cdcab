"""Session cycle routes."""

from fastapi import APIRouter, Depends

from ...db.repositories import SessionContextRepository
from ...services.session_cycle import advance, get_session_exercises, get_session_title
from .deps import get_db_path

router = APIRouter(prefix="/session", tags=["session"])


def _session_payload(context) -> dict:
    return {
        **context.to_dict(),
        "session_title": get_session_title(context.session_number),
        "exercises": [ex.name for ex in get_session_exercises(context.session_number)],
    }


@router.get("/{user_id}")
async def get_session(user_id: str, db_path=Depends(get_db_path)):
    """Current cycle position for a user."""
    context = await SessionContextRepository(db_path).get_or_create(user_id)
    return _session_payload(context)


@router.post("/{user_id}/advance")
async def advance_session(user_id: str, db_path=Depends(get_db_path)):
    """Mark the current session complete and advance."""
    repo = SessionContextRepository(db_path)
    context = await repo.get_or_create(user_id)

    position = advance(context.cycle_number, context.session_number)
    updated = await repo.update(
        user_id,
        cycle_number=position.cycle_number,
        session_number=position.session_number,
    )

    return {
        **_session_payload(updated),
        "new_cycle": updated.cycle_number > context.cycle_number,
    }
