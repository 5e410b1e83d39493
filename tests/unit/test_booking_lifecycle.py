import pytest
from sqlalchemy.exc import OperationalError

from printcare.db.store import CatalogStore
from printcare.models import PrinterBrand, Technician
from printcare.schemas import BookingCreate
from printcare.services.booking_lifecycle import BookingLifecycleManager
from printcare.services.booking_status import BookingStatus, known_statuses_only
from printcare.services.errors import NotFoundError, TransitionNotAllowedError


def _form(**overrides) -> BookingCreate:
    data = {
        "customer_name": "Sari Wulandari",
        "phone": "081311112222",
        "email": "sari@example.com",
        "address": "Jl. Merdeka 10",
        "printer_brand": "Epson",
        "printer_model": "L3110",
        "problem_category": "Masalah Kertas",
        "problem_description": "Kertas sering nyangkut",
        "appointment_date": "2026-03-02",
        "appointment_time": "10:00",
        "notes": "Bawa kabel USB",
    }
    data.update(overrides)
    return BookingCreate(**data)


def _down(*args, **kwargs):
    raise OperationalError("statement", {}, Exception("database is unavailable"))


class FlakyTimelineStore(CatalogStore):
    """Store whose timeline writes always fail."""

    async def record_status_timeline(self, *args, **kwargs):
        _down()

    async def insert_timeline_entry(self, *args, **kwargs):
        _down()

    async def delete_timeline_entries(self, *args, **kwargs):
        _down()


class BrokenLookupStore(CatalogStore):
    async def find_active_by_name(self, model, name):
        _down()

    async def find_one_available_technician(self):
        _down()


async def _entries(store, booking_id, status=None):
    entries = await store.list_timeline(booking_id)
    if status is None:
        return entries
    return [e for e in entries if e.status == status]


# ── Creation ─────────────────────────────────────────────

async def test_create_resolves_references_and_estimates_cost(lifecycle, store, catalog):
    result = await lifecycle.create_booking(_form())
    assert result.warnings == []
    assert result.status == "pending"

    booking = await store.get_booking_with_joins(result.booking_id)
    assert booking.printer_brand_id == catalog["brand"].id
    assert booking.printer_model_id == catalog["model"].id
    assert booking.problem_category_id == catalog["paper"].id
    assert booking.technician_id == catalog["technician"].id
    assert booking.service_type == "Antar ke Toko"
    assert booking.estimated_cost == "Rp 30.000 - 120.000"
    assert booking.status == "pending"
    assert booking.notes == "Bawa kabel USB"


async def test_new_phone_inserts_customer_and_known_phone_updates_it(lifecycle, store, catalog):
    await lifecycle.create_booking(_form())
    await lifecycle.create_booking(_form(customer_name="Sari W", email="", address="Jl. Baru 1"))
    await lifecycle.create_booking(_form(customer_name="Dewi", phone="089900001111"))

    customers = {c.phone: c for c in await store.list_customers()}
    assert len(customers) == 2
    sari = customers["081311112222"]
    assert sari.name == "Sari W"
    assert sari.email == ""
    assert sari.address == "Jl. Baru 1"


async def test_missing_references_degrade_to_none(lifecycle, store):
    result = await lifecycle.create_booking(_form(
        printer_brand="Xerox", printer_model="Phaser", problem_category="Printer bunyi aneh",
    ))

    booking = await store.get_booking_with_joins(result.booking_id)
    assert booking.printer_brand_id is None
    assert booking.printer_model_id is None
    assert booking.problem_category_id is None
    assert booking.technician_id is None
    assert booking.estimated_cost == "Rp 50.000 - 150.000"
    assert result.degraded
    assert "No available technician" in result.warnings


async def test_inactive_or_busy_technicians_are_not_picked(lifecycle, store, catalog):
    await store.update_row(Technician, catalog["technician"].id, is_available=False)
    result = await lifecycle.create_booking(_form())
    booking = await store.get_booking_with_joins(result.booking_id)
    assert booking.technician_id is None


async def test_lookup_failures_do_not_abort_creation(session_factory, clock):
    store = BrokenLookupStore(session_factory)
    lifecycle = BookingLifecycleManager(store, clock=clock)

    result = await lifecycle.create_booking(_form())

    booking = await store.get_booking_with_joins(result.booking_id)
    assert booking is not None
    assert booking.printer_brand_id is None
    assert booking.technician_id is None
    assert len(result.warnings) == 4


async def test_customer_upsert_failure_aborts(session_factory, clock, monkeypatch):
    store = CatalogStore(session_factory)
    monkeypatch.setattr(store, "upsert_customer_by_phone", _async_down)
    lifecycle = BookingLifecycleManager(store, clock=clock)

    with pytest.raises(OperationalError):
        await lifecycle.create_booking(_form())
    assert await store.list_bookings_with_joins() == []


async def _async_down(*args, **kwargs):
    _down()


# ── Status transitions ───────────────────────────────────

async def test_setting_current_status_is_a_noop(lifecycle, store, notifier, catalog):
    created = await lifecycle.create_booking(_form())
    before = await store.get_booking_with_joins(created.booking_id)
    sub = notifier.subscribe("service_bookings")

    for _ in range(3):
        result = await lifecycle.set_status(created.booking_id, "pending")
        assert result.changed is False

    after = await store.get_booking_with_joins(created.booking_id)
    assert after.updated_at == before.updated_at
    assert await _entries(store, created.booking_id) == []
    assert sub.pending() == 0


async def test_new_status_inserts_one_entry_and_updates_booking(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())

    result = await lifecycle.set_status(created.booking_id, BookingStatus.SERVICING)

    assert result.changed is True
    assert result.warnings == []
    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.status == "servicing"
    entries = await _entries(store, created.booking_id)
    assert len(entries) == 1
    assert entries[0].status == "servicing"
    assert entries[0].title == "Sedang Diperbaiki"
    assert entries[0].completed is True


async def test_revisited_status_reuses_existing_entry(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())
    booking_id = created.booking_id

    await lifecycle.set_status(booking_id, "confirmed")
    first = (await _entries(store, booking_id, "confirmed"))[0]
    await lifecycle.set_status(booking_id, "servicing")
    await lifecycle.set_status(booking_id, "confirmed")

    confirmed = await _entries(store, booking_id, "confirmed")
    assert len(confirmed) == 1
    assert confirmed[0].id == first.id
    assert confirmed[0].completed is True
    assert confirmed[0].completed_at > first.completed_at
    booking = await store.get_booking_with_joins(booking_id)
    assert booking.status == "confirmed"


async def test_unknown_status_gets_generic_copy(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())
    await lifecycle.set_status(created.booking_id, "on-hold")

    entry = (await _entries(store, created.booking_id, "on-hold"))[0]
    assert entry.title == "Status diubah ke on-hold"


async def test_status_lookup_is_case_insensitive(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())
    result = await lifecycle.set_status(created.booking_id.lower(), "confirmed")
    assert result.booking_id == created.booking_id


async def test_status_of_missing_booking_raises(lifecycle):
    with pytest.raises(NotFoundError):
        await lifecycle.set_status("01NOTABOOKING0000000000000", "confirmed")


async def test_transition_policy_can_veto(store, clock, catalog):
    lifecycle = BookingLifecycleManager(store, clock=clock, transition_policy=known_statuses_only)
    created = await lifecycle.create_booking(_form())

    with pytest.raises(TransitionNotAllowedError):
        await lifecycle.set_status(created.booking_id, "on-hold")

    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.status == "pending"


@pytest.mark.parametrize("marker", ["assigned", "cost_updated"])
async def test_timeline_markers_are_not_statuses(lifecycle, store, catalog, marker):
    created = await lifecycle.create_booking(_form())
    await lifecycle.assign_technician(created.booking_id, catalog["technician"].id)
    await lifecycle.update_actual_cost(created.booking_id, "Rp 60.000")

    with pytest.raises(TransitionNotAllowedError):
        await lifecycle.set_status(created.booking_id, marker)

    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.status == "pending"
    assert len(await _entries(store, created.booking_id, marker)) == 1


async def test_timeline_failure_is_a_warning_not_an_error(session_factory, clock):
    store = FlakyTimelineStore(session_factory)
    lifecycle = BookingLifecycleManager(store, clock=clock)
    created = await lifecycle.create_booking(_form())

    result = await lifecycle.set_status(created.booking_id, "confirmed")

    assert result.changed
    assert result.warnings == ["Timeline entry for 'confirmed' was not recorded"]
    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.status == "confirmed"


# ── Assignment & cost ────────────────────────────────────

async def test_assigning_twice_appends_two_entries(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())
    other = await store.add_technician(name="Andi Wijaya", phone="0812")

    await lifecycle.assign_technician(created.booking_id, other.id)
    await lifecycle.assign_technician(created.booking_id, other.id)

    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.technician_id == other.id
    assigned = await _entries(store, created.booking_id, "assigned")
    assert len(assigned) == 2
    assert assigned[0].title == "Teknisi ditugaskan"
    assert assigned[0].description == "Teknisi Andi Wijaya ditugaskan untuk pemesanan ini"


async def test_unresolvable_technician_uses_placeholder(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())

    result = await lifecycle.assign_technician(created.booking_id, "01GHOSTTECHNICIAN000000000")

    entry = (await _entries(store, created.booking_id, "assigned"))[0]
    assert entry.description == "Teknisi Unknown ditugaskan untuk pemesanan ini"
    assert result.degraded


async def test_assigning_to_missing_booking_raises(lifecycle, catalog):
    with pytest.raises(NotFoundError):
        await lifecycle.assign_technician("MISSING", catalog["technician"].id)


async def test_actual_cost_is_opaque_text_and_never_deduplicated(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())

    await lifecycle.update_actual_cost(created.booking_id, "Rp 85.000")
    await lifecycle.update_actual_cost(created.booking_id, "gratis (garansi)")

    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.actual_cost == "gratis (garansi)"
    entries = await _entries(store, created.booking_id, "cost_updated")
    assert [e.description for e in entries] == [
        "Biaya aktual diperbarui menjadi Rp 85.000",
        "Biaya aktual diperbarui menjadi gratis (garansi)",
    ]


async def test_assignment_timeline_failure_is_swallowed(session_factory, clock):
    store = FlakyTimelineStore(session_factory)
    lifecycle = BookingLifecycleManager(store, clock=clock)
    created = await lifecycle.create_booking(_form())
    tech = await store.add_technician(name="Citra", phone="0813")

    result = await lifecycle.assign_technician(created.booking_id, tech.id)

    assert result.warnings == ["Timeline entry for 'assigned' was not recorded"]
    booking = await store.get_booking_with_joins(created.booking_id)
    assert booking.technician_id == tech.id


# ── Deletion ─────────────────────────────────────────────

async def test_delete_removes_timeline_and_booking(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form())
    await lifecycle.set_status(created.booking_id, "confirmed")
    await lifecycle.update_actual_cost(created.booking_id, "Rp 50.000")

    result = await lifecycle.delete_booking(created.booking_id)

    assert result.warnings == []
    assert await store.list_timeline(created.booking_id) == []
    assert await lifecycle.get_booking(created.booking_id) is None
    with pytest.raises(NotFoundError):
        await lifecycle.delete_booking(created.booking_id)


async def test_delete_continues_when_timeline_delete_fails(session_factory, clock):
    store = FlakyTimelineStore(session_factory)
    lifecycle = BookingLifecycleManager(store, clock=clock)
    created = await lifecycle.create_booking(_form())

    result = await lifecycle.delete_booking(created.booking_id)

    assert result.warnings == ["Timeline entries could not be deleted"]
    assert await store.get_booking_with_joins(created.booking_id) is None


# ── Reads ────────────────────────────────────────────────

async def test_get_booking_read_shape(lifecycle, catalog):
    created = await lifecycle.create_booking(_form())
    await lifecycle.set_status(created.booking_id, "confirmed")

    booking = await lifecycle.get_booking(created.booking_id.lower())

    assert booking.id == created.booking_id
    assert booking.customer.name == "Sari Wulandari"
    assert booking.printer.brand == "Epson"
    assert booking.printer.model == "L3110"
    assert booking.problem.category == "Masalah Kertas"
    assert booking.service.type == "Antar ke Toko"
    assert booking.technician == "Budi Santoso"
    assert [t.title for t in booking.timeline] == ["Booking Dikonfirmasi"]


async def test_unassigned_booking_shows_label(lifecycle, store, catalog):
    await store.update_row(Technician, catalog["technician"].id, is_available=False)
    created = await lifecycle.create_booking(_form())

    booking = await lifecycle.get_booking(created.booking_id)
    assert booking.technician == "Belum ditugaskan"


async def test_list_is_newest_first(lifecycle, catalog):
    first = await lifecycle.create_booking(_form())
    second = await lifecycle.create_booking(_form(phone="089900001111"))

    ids = [b.id for b in await lifecycle.list_bookings()]
    assert ids == [second.booking_id, first.booking_id]


async def test_soft_deleted_brand_hides_booking_from_list_only(lifecycle, store, clock, catalog):
    created = await lifecycle.create_booking(_form())
    await store.soft_delete(PrinterBrand, catalog["brand"].id)

    assert await lifecycle.list_bookings() == []
    detail = await lifecycle.get_booking(created.booking_id)
    assert detail.id == created.booking_id
    assert detail.printer.brand == ""
    assert detail.printer.model == "L3110"

    await lifecycle.set_status(created.booking_id, "confirmed")
    assert (await lifecycle.get_booking(created.booking_id)).status == "confirmed"

    keep_history = BookingLifecycleManager(store, clock=clock, hide_inactive_references=False)
    listed = await keep_history.list_bookings()
    assert [b.id for b in listed] == [created.booking_id]
    assert listed[0].printer.brand == "Epson"


# ── End to end ───────────────────────────────────────────

async def test_booking_lifecycle_end_to_end(lifecycle, store, catalog):
    created = await lifecycle.create_booking(_form(problem_category="Masalah Kertas"))
    booking_id = created.booking_id
    booking = await lifecycle.get_booking(booking_id)
    assert booking.estimated_cost == "Rp 30.000 - 120.000"

    await lifecycle.set_status(booking_id, "confirmed")
    confirmed = await _entries(store, booking_id, "confirmed")
    assert [e.title for e in confirmed] == ["Booking Dikonfirmasi"]

    again = await lifecycle.set_status(booking_id, "confirmed")
    assert again.changed is False
    confirmed = await _entries(store, booking_id, "confirmed")
    assert len(confirmed) == 1
    assert confirmed[0].completed is True

    tech = catalog["technician"]
    await lifecycle.assign_technician(booking_id, tech.id)
    await lifecycle.assign_technician(booking_id, tech.id)
    assert len(await _entries(store, booking_id, "assigned")) == 2

    await lifecycle.delete_booking(booking_id)
    assert await store.list_timeline(booking_id) == []
    assert await store.get_booking_with_joins(booking_id) is None
