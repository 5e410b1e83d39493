"""Booking statuses, their timeline copy, and the transition policy hook.

The default ``allow_any_transition`` lets any status follow any other but
refuses the timeline-only markers ``assigned`` and ``cost_updated``.
Callers that want a stricter workflow pass their own ``TransitionPolicy``
to the lifecycle manager.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    SERVICING = "servicing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Timeline-only markers, never stored on the booking itself
ASSIGNED = "assigned"
COST_UPDATED = "cost_updated"
TIMELINE_MARKERS = frozenset({ASSIGNED, COST_UPDATED})

STATUS_TITLES: dict[str, str] = {
    BookingStatus.PENDING.value: "Booking Diterima",
    BookingStatus.CONFIRMED.value: "Booking Dikonfirmasi",
    BookingStatus.IN_PROGRESS.value: "Teknisi Dalam Perjalanan",
    BookingStatus.SERVICING.value: "Sedang Diperbaiki",
    BookingStatus.COMPLETED.value: "Service Selesai",
    BookingStatus.CANCELLED.value: "Booking Dibatalkan",
}

STATUS_DESCRIPTIONS: dict[str, str] = {
    BookingStatus.PENDING.value: "Booking Anda telah diterima dan sedang diproses",
    BookingStatus.CONFIRMED.value: "Teknisi telah ditugaskan dan akan datang sesuai jadwal",
    BookingStatus.IN_PROGRESS.value: "Teknisi sedang dalam perjalanan ke lokasi Anda",
    BookingStatus.SERVICING.value: "Printer sedang dalam proses perbaikan",
    BookingStatus.COMPLETED.value: "Printer telah berhasil diperbaiki dan berfungsi normal",
    BookingStatus.CANCELLED.value: "Booking telah dibatalkan",
}

TransitionPolicy = Callable[[str, str], bool]


def status_value(status: BookingStatus | str) -> str:
    return status.value if isinstance(status, BookingStatus) else str(status)


def timeline_copy(status: str) -> tuple[str, str]:
    """Return (title, description) for a status timeline entry."""
    title = STATUS_TITLES.get(status, f"Status diubah ke {status}")
    description = STATUS_DESCRIPTIONS.get(status, f"Pemesanan diubah statusnya menjadi {status}")
    return title, description


def allow_any_transition(current: str, requested: str) -> bool:
    """Any status may follow any other; only the timeline markers are refused."""
    return requested not in TIMELINE_MARKERS


def known_statuses_only(current: str, requested: str) -> bool:
    """Reject labels outside BookingStatus, including the synthetic markers."""
    return requested in {s.value for s in BookingStatus}
