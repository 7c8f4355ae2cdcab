"""User profile data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ExperienceLevel(str, Enum):
    """Training experience level."""

    BEGINNER = "beginner"  # < 1 year consistent training
    INTERMEDIATE = "intermediate"  # 1-3 years
    ADVANCED = "advanced"  # 3+ years


@dataclass
class UserProfile:
    """User profile used to personalize generated prompts."""

    name: str
    goals: str  # What the user actually wants out of training
    environment: str  # Where and with what they train
    experience_level: ExperienceLevel | None = None
    age: int | None = None
    body_weight: float | None = None  # in kg
    height: float | None = None  # in cm
    notes: str = ""
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def validate(self) -> None:
        """Check required free-text fields.

        Raises:
            ValueError: If name, goals or environment is blank or too long
        """
        if not self.name or not self.name.strip():
            raise ValueError("Name is required")
        if len(self.name) > 100:
            raise ValueError("Name must be between 1 and 100 characters")

        for label, value in (("Goals", self.goals), ("Environment", self.environment)):
            if not value or not value.strip():
                raise ValueError(f"{label} is required")
            if len(value) > 500:
                raise ValueError(f"{label} must be between 1 and 500 characters")

    @property
    def user_id(self) -> str:
        """Identifier used to key workout history and session context."""
        return str(self.id) if self.id is not None else self.name

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "goals": self.goals,
            "environment": self.environment,
            "experience_level": (
                self.experience_level.value if self.experience_level else None
            ),
            "age": self.age,
            "body_weight": self.body_weight,
            "height": self.height,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "UserProfile":
        """Create from dictionary."""
        experience = data.get("experience_level")
        return cls(
            id=id,
            name=data["name"],
            goals=data["goals"],
            environment=data["environment"],
            experience_level=ExperienceLevel(experience) if experience else None,
            age=data.get("age"),
            body_weight=data.get("body_weight"),
            height=data.get("height"),
            notes=data.get("notes", ""),
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_summary(self) -> str:
        """Generate a summary for display."""
        summary = f"User: {self.name}\n"
        summary += f"Goals: {self.goals}\n"
        summary += f"Environment: {self.environment}\n"

        if self.experience_level:
            summary += f"Experience: {self.experience_level.value}\n"
        if self.age:
            summary += f"Age: {self.age}\n"
        if self.body_weight:
            summary += f"Body weight: {self.body_weight}kg\n"
        if self.height:
            summary += f"Height: {self.height}cm\n"
        if self.notes:
            summary += f"Notes: {self.notes}\n"

        return summary
