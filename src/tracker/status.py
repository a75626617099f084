"""
Status classifier
Maps a free-text status cell from the tracking sheet to a Status.

The vocabularies below are the single place to teach the portal new
spellings; classify() never needs to change for that.
"""
from typing import Any

from tracker.models import Status


# Exact raw cell values that mean "nothing has happened yet". Matched
# before any trimming, so "   " or "#n/a" is ordinary text.
ABSENT_STATUS_VALUES = frozenset({
    '',
    '#N/A',
})

# Explicit negatives. Checked before the positive set.
NEGATIVE_STATUS_VALUES = frozenset({
    'NO',
    'FALSE',
    'NO ENVIADO',
    '#N/D',
    'PENDIENTE',
})

POSITIVE_STATUS_VALUES = frozenset({
    'OK',
    'LISTO',
    'FINALIZADO',
    'COMPLETADO',
    'SI',
    'TRUE',
})

# Any cell containing one of these (e.g. "Facturada 12/03") is completed
COMPLETED_SUBSTRINGS = (
    'FACTURADA',
)


def normalize_status_text(text: Any) -> str:
    """Trim and upper-case a cell value for vocabulary matching."""
    return str(text).strip().upper()


def classify(text: Any) -> Status:
    """
    Classify a status cell.

    Args:
        text: Raw cell value (any type; None and '#N/A' are allowed)

    Returns:
        Status.PENDING for absent or negative values, Status.COMPLETED for
        positive values, Status.IN_PROGRESS for any other text
    """
    if text is None or (isinstance(text, str) and text in ABSENT_STATUS_VALUES):
        return Status.PENDING

    upper_text = normalize_status_text(text)

    if upper_text in NEGATIVE_STATUS_VALUES:
        return Status.PENDING

    if upper_text in POSITIVE_STATUS_VALUES:
        return Status.COMPLETED
    if any(marker in upper_text for marker in COMPLETED_SUBSTRINGS):
        return Status.COMPLETED

    # Free text such as "En tramite" is an in-progress update
    return Status.IN_PROGRESS
