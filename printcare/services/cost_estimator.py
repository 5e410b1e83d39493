"""Cost-range lookup used when a booking is created."""

from __future__ import annotations

DEFAULT_COST_RANGE = "Rp 50.000 - 150.000"

COST_RANGES: dict[str, str] = {
    "Masalah Pencetakan": "Rp 50.000 - 150.000",
    "Masalah Cartridge / Head": "Rp 75.000 - 200.000",
    "Masalah Kertas": "Rp 30.000 - 120.000",
    "Masalah Internal": "Rp 100.000 - 500.000",
    "Masalah Jaringan / Wireless": "Rp 50.000 - 120.000",
    "Masalah Software / Reset": "Rp 75.000 - 200.000",
    "Masalah Fisik / Casing": "Rp 50.000 - 350.000",
    "Masalah Scanner": "Rp 70.000 - 250.000",
    "Masalah Fax": "Rp 50.000 - 120.000",
    "Masalah Maintenance": "Rp 40.000 - 300.000",
}


def estimate_cost(category_name: str) -> str:
    """Return the cost range for a problem category name (exact match)."""
    return COST_RANGES.get(category_name, DEFAULT_COST_RANGE)
