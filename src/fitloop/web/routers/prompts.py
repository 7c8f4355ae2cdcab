"""Prompt generation routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...db.repositories import (
    SessionContextRepository,
    UserProfileRepository,
    WorkoutRepository,
)
from ...models.user_profile import UserProfile
from ...services.prompt_composer import PromptComposer, extract_metadata
from .deps import get_db_path

router = APIRouter(prefix="/prompts", tags=["prompts"])


class ProfileIn(BaseModel):
    name: str
    goals: str
    environment: str


class GenerateRequest(BaseModel):
    user_id: str = "default"
    language: str = "ja"
    enrich: bool = False
    profile: ProfileIn | None = None


class ExtractRequest(BaseModel):
    text: str


@router.post("/generate")
async def generate_prompt(body: GenerateRequest, db_path=Depends(get_db_path)):
    """Generate the meta-prompt for a user's current session."""
    if body.profile is not None:
        profile = UserProfile(
            name=body.profile.name,
            goals=body.profile.goals,
            environment=body.profile.environment,
        )
        try:
            profile.validate()
        except ValueError as e:
            return JSONResponse(status_code=422, content={"error": str(e)})
    else:
        profile = await UserProfileRepository(db_path).get_latest()
        if profile is None:
            return JSONResponse(status_code=404, content={"error": "Profile not found"})

    context = await SessionContextRepository(db_path).get_or_create(body.user_id)
    history = await WorkoutRepository(db_path).list_for_user(body.user_id)

    composer = PromptComposer()
    text = composer.generate_full_prompt(profile, context, body.language, history=history)
    if body.enrich:
        text = composer.enrich_with_learning_data(text, history)

    return {
        "prompt": text,
        "session_number": context.session_number,
        "cycle_number": context.cycle_number,
    }


@router.post("/extract")
async def extract_prompt_metadata(body: ExtractRequest):
    """Extract the metadata block from previously generated text."""
    metadata = extract_metadata(body.text)
    if metadata is None:
        return JSONResponse(status_code=404, content={"error": "No metadata found"})
    return metadata.to_dict()
