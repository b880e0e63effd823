"""
Title validation for mutating task requests.

The only rule is that a title must contain something other than
whitespace; length and character set are unrestricted.
"""

from dataclasses import dataclass

from taskboard.core.telemetry.models import Outcome

TITLE_REQUIRED = "required"


@dataclass(frozen=True)
class TitleValidation:
    """Result of validating a submitted title."""

    ok: bool
    title: str | None = None
    error_code: str | None = None

    @property
    def outcome(self) -> Outcome:
        return Outcome.SUCCESS if self.ok else Outcome.ERROR


def validate_title(raw: str | None) -> TitleValidation:
    """
    Normalize and validate a submitted title.

    Args:
        raw: Form value as received (None when the field was missing)

    Returns:
        TitleValidation with the trimmed title on success, or
        error_code "required" when nothing but whitespace was submitted

    Example:
        >>> validate_title("  Buy milk ").title
        'Buy milk'
        >>> validate_title("   ").ok
        False
    """
    title = (raw or "").strip()
    if not title:
        return TitleValidation(ok=False, error_code=TITLE_REQUIRED)
    return TitleValidation(ok=True, title=title)
