"""
EcoSense AI - Input Completeness Tracker
Counts how many of a feature's inputs were actually provided.
Advisory only: an incomplete submission is still processed.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ecosense.utils import round_half_up

COMPLETE_THRESHOLD = 80

WARNING_TEMPLATE = (
    "⚠️ You provided {filled} out of {total} inputs ({percentage}%). "
    "This analysis is generated based on the available data. "
    "For more accurate and personalized results, consider providing additional inputs."
)


@dataclass(frozen=True)
class CompletenessResult:
    filled_count: int
    total_count: int
    percentage: int
    is_complete: bool
    warning_message: Optional[str]


def is_file_reference(value) -> bool:
    return isinstance(value, Mapping) and 'filename' in value and 'base64' in value


def is_filled(value) -> bool:
    """A field counts when it is a non-blank string or an uploaded file"""
    if isinstance(value, str):
        return bool(value.strip())
    return is_file_reference(value)


def assess(form_fields: Mapping, input_keys: Sequence[str]) -> CompletenessResult:
    """Only the declared input keys count; anything else in the form is ignored"""
    keys = list(input_keys)
    total_inputs = len(keys)
    filled = sum(1 for key in keys if is_filled(form_fields.get(key)))

    if total_inputs <= 0:
        percentage = 100
    else:
        percentage = round_half_up(filled / total_inputs * 100)

    is_complete = percentage >= COMPLETE_THRESHOLD
    warning = None
    if not is_complete:
        warning = WARNING_TEMPLATE.format(filled=filled, total=total_inputs, percentage=percentage)

    return CompletenessResult(
        filled_count=filled,
        total_count=total_inputs,
        percentage=percentage,
        is_complete=is_complete,
        warning_message=warning,
    )
