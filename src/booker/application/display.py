"""Small formatting helpers shared by the CLI and the HTTP surface."""

from booker.domain.constants import FINAL_STAGE
from booker.domain.models import LANGUAGE_CODES, Language, parse_language


def format_minutes(total_minutes: int) -> str:
    """Format minutes as "1h 5m", or "45m" under an hour (zero is "0m")."""
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def stage_label(stage: int) -> str:
    if stage == 0:
        return "New"
    label = f"Review {stage}"
    if stage == FINAL_STAGE:
        label += " (final)"
    return label


def language_code(language: Language | str) -> str:
    """Two-letter code used in compact listings (EN, ES, ...)."""
    return LANGUAGE_CODES[parse_language(language)]
