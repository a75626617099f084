"""
Tracker Data Models
Dataclasses for customer records and the derived status values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Status(str, Enum):
    """Progress of one tracker stage, derived from a free-text sheet cell."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        """Position in the pending -> in-progress -> completed ordering."""
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = [Status.PENDING, Status.IN_PROGRESS, Status.COMPLETED]


# ---------------------------------------------------------------------------
# Customer record
# ---------------------------------------------------------------------------

@dataclass
class Customer:
    """One customer's row from the delivery tracking sheet."""
    dni: str = ""
    salesperson: str = ""
    customer_name: str = ""
    sale_date: str = ""
    billed: str = ""
    registration: str = ""
    registration_procedure: str = ""
    patent_date: str = ""
    patented: str = ""
    pre_deliveries: str = ""
    pre_delivery: str = ""

    # Columns the portal does not know about, keyed by sheet header
    extra: Dict[str, str] = field(default_factory=dict)
    row_number: int = 0  # 1-based row in the sheet

    @classmethod
    def from_row(cls, row: Mapping[str, Any], columns: Mapping[str, str],
                 row_number: int = 0) -> "Customer":
        """
        Build a Customer from a header -> value mapping.

        Args:
            row: Sheet row keyed by header
            columns: Attribute -> header mapping (config.CUSTOMER_COLUMNS)
            row_number: 1-based sheet row, for diagnostics

        Returns:
            Customer with recognised headers mapped to fields and the
            remaining non-empty headers kept in ``extra``
        """
        header_to_attr = {header: attr for attr, header in columns.items()
                          if attr in RECOGNIZED_FIELDS and header}
        values: Dict[str, str] = {}
        extra: Dict[str, str] = {}

        for header, raw in row.items():
            if not header:
                continue
            value = _clean(raw)
            attr = header_to_attr.get(header)
            if attr:
                values[attr] = value
            else:
                extra[header] = value

        return cls(extra=extra, row_number=row_number, **values)

    def get(self, attr: str, default: Optional[str] = "") -> Optional[str]:
        """Read a recognised field by attribute name or an extra column by header."""
        if attr in RECOGNIZED_FIELDS:
            return getattr(self, attr)
        return self.extra.get(attr, default)

    def to_dict(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in RECOGNIZED_FIELDS}
        data["extra"] = dict(self.extra)
        return data


def _clean(value: Any) -> str:
    # Cell text is kept exactly as typed; only missing cells become ""
    if value is None:
        return ""
    return str(value)


RECOGNIZED_FIELDS = tuple(
    f.name for f in fields(Customer) if f.name not in ("extra", "row_number")
)
