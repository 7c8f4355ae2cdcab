"""Manual user profile input via interactive questionnaire."""

import questionary
from questionary import Style

from ...models.user_profile import ExperienceLevel, UserProfile

# Custom style for questionnaire
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _required(text: str) -> bool | str:
    return bool(text and text.strip()) or "This field is required"


def _optional_number(text: str) -> bool | str:
    if not text:
        return True
    try:
        float(text)
    except ValueError:
        return "Please enter a number"
    return True


class ManualInputClient:
    """Interactive questionnaire for collecting a user profile."""

    async def collect_profile(self, existing: UserProfile | None = None) -> UserProfile:
        """Run interactive questionnaire to collect a user profile.

        Args:
            existing: Profile whose values are offered as defaults

        Returns:
            A validated UserProfile (without an ID)
        """
        print("\n=== Fitness Profile Questionnaire ===\n")

        name = await questionary.text(
            "What's your name?",
            default=existing.name if existing else "",
            validate=_required,
            style=custom_style,
        ).ask_async()

        goals = await questionary.text(
            "What do you really want from training? (e.g. look good, get healthier)",
            default=existing.goals if existing else "",
            validate=_required,
            style=custom_style,
        ).ask_async()

        environment = await questionary.text(
            "Where and with what do you train? (e.g. home with adjustable dumbbells)",
            default=existing.environment if existing else "",
            validate=_required,
            style=custom_style,
        ).ask_async()

        experience = await questionary.select(
            "What's your training experience level?",
            choices=[
                questionary.Choice("Beginner (less than 1 year)", ExperienceLevel.BEGINNER),
                questionary.Choice("Intermediate (1-3 years)", ExperienceLevel.INTERMEDIATE),
                questionary.Choice("Advanced (3+ years)", ExperienceLevel.ADVANCED),
            ],
            style=custom_style,
        ).ask_async()

        age = None
        body_weight = None
        height = None

        collect_optional = await questionary.confirm(
            "Would you like to provide age, body weight and height? (optional)",
            default=False,
            style=custom_style,
        ).ask_async()

        if collect_optional:
            age_str = await questionary.text(
                "Age:", validate=_optional_number, style=custom_style
            ).ask_async()
            age = int(float(age_str)) if age_str else None

            weight_str = await questionary.text(
                "Body weight (kg):", validate=_optional_number, style=custom_style
            ).ask_async()
            body_weight = float(weight_str) if weight_str else None

            height_str = await questionary.text(
                "Height (cm):", validate=_optional_number, style=custom_style
            ).ask_async()
            height = float(height_str) if height_str else None

        notes = await questionary.text(
            "Anything else the coach should know? (optional)",
            default=existing.notes if existing else "",
            style=custom_style,
        ).ask_async()

        profile = UserProfile(
            name=name.strip(),
            goals=goals.strip(),
            environment=environment.strip(),
            experience_level=experience,
            age=age,
            body_weight=body_weight,
            height=height,
            notes=notes or "",
        )
        profile.validate()
        return profile
