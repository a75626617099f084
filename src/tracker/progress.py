"""
Progress Tracker
Builds the billing -> registration -> pre-delivery step sequence for a customer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import config
from tracker.models import Customer, Status
from tracker.status import classify


# (key, label, Customer attribute), left to right
TRACKER_STAGES = [
    ('billing', 'Facturado', 'billed'),
    ('registration', 'Registro', 'registration_procedure'),
    ('pre_delivery', 'Pre-Entrega', 'pre_delivery'),
]

# Visual treatment per status: bar/fill color, detail text color, icon ring, icon
STATUS_STYLES: Dict[Status, Dict[str, str]] = {
    Status.COMPLETED: {
        'color': '#22c55e',
        'text': '#86efac',
        'ring': 'rgba(34, 197, 94, 0.5)',
        'icon': 'check',
    },
    Status.IN_PROGRESS: {
        'color': '#3b82f6',
        'text': '#93c5fd',
        'ring': 'rgba(59, 130, 246, 0.5)',
        'icon': 'spinner',
    },
    Status.PENDING: {
        'color': '#475569',
        'text': '#94a3b8',
        'ring': 'rgba(71, 85, 105, 0.5)',
        'icon': 'clock',
    },
}


@dataclass
class TrackerStep:
    key: str
    label: str
    status: Status
    detail: str

    @property
    def icon(self) -> str:
        return STATUS_STYLES[self.status]['icon']

    @property
    def color(self) -> str:
        return STATUS_STYLES[self.status]['color']


@dataclass
class TrackerConnector:
    """Bar between two steps, colored by the step it leads into."""
    status: Status

    @property
    def color(self) -> str:
        return STATUS_STYLES[self.status]['color']


@dataclass
class ProgressTracker:
    steps: List[TrackerStep] = field(default_factory=list)
    connectors: List[TrackerConnector] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'steps': [
                {
                    'key': s.key,
                    'label': s.label,
                    'status': s.status.value,
                    'detail': s.detail,
                    'icon': s.icon,
                    'color': s.color,
                }
                for s in self.steps
            ],
            'connectors': [
                {'status': c.status.value, 'color': c.color}
                for c in self.connectors
            ],
        }


def build_tracker(customer: Customer) -> ProgressTracker:
    """
    Classify each stage of a customer independently and lay out the tracker.

    Args:
        customer: Customer record

    Returns:
        ProgressTracker with one step per stage and a connector between
        each pair; connector i reflects step i+1
    """
    steps = []
    for key, label, attr in TRACKER_STAGES:
        raw = customer.get(attr) or ''
        steps.append(TrackerStep(
            key=key,
            label=label,
            status=classify(raw),
            detail=raw or config.MSG_PENDING_PLACEHOLDER,
        ))

    connectors = [TrackerConnector(status=step.status) for step in steps[1:]]
    return ProgressTracker(steps=steps, connectors=connectors)


def overall_status(tracker: ProgressTracker) -> Status:
    """Least advanced status across all steps."""
    if not tracker.steps:
        return Status.PENDING
    return min((step.status for step in tracker.steps), key=lambda s: s.rank)
