"""
Tests for the entry service.

Covers:
- Ordered create validation and normalization
- Amount parsing
- List filtering and ordering
- Partial updates and updated_at refresh
- NotFound on missing entries
"""

import pytest

from conftest import valid_payload
from dedications.errors import InvalidArgument, NotFound
from dedications.model.entry import DedicationType, Status
from dedications.schemas import CreateEntryInput, UpdateEntryInput
from dedications.service import parse_amount, validate_new_entry


def _create(service, **overrides):
    return service.create_entry(CreateEntryInput(**valid_payload(**overrides)))


class TestCreate:
    """Create validation and normalization."""

    def test_defaults(self, service):
        entry = _create(service)
        assert entry.id > 0
        assert entry.status is Status.PENDING
        assert entry.dedication_type is DedicationType.IN_HONOR_OF
        assert entry.amount == 1800
        assert entry.assigned_date is None

    def test_returns_stored_timestamps(self, service, clock):
        entry = _create(service)
        assert clock.calls == 1
        assert entry.created_at == entry.updated_at == "2026-01-01T00:00:01.000000Z"

    def test_ids_increase(self, service):
        ids = [_create(service).id for _ in range(3)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 3

    def test_normalizes_fields(self, service):
        entry = _create(
            service,
            sponsor_name="  Ada Lovelace ",
            email=" A@B.COM ",
            phone=" 555-0100 ",
            dedication_type="In Memory Of",
            dedication_name=" Charles Babbage\n",
            occasion="   ",
            message=" Forever remembered ",
            preferred_date="next spring",
            amount="2500",
        )
        assert entry.sponsor_name == "Ada Lovelace"
        assert entry.email == "a@b.com"
        assert entry.phone == "555-0100"
        assert entry.dedication_type is DedicationType.IN_MEMORY_OF
        assert entry.dedication_name == "Charles Babbage"
        assert entry.occasion is None
        assert entry.message == "Forever remembered"
        assert entry.preferred_date == "next spring"
        assert entry.amount == 2500

    def test_empty_optional_fields_become_null(self, service):
        entry = _create(service, phone="", occasion="", message="", preferred_date="", dedication_type="")
        assert entry.phone is None
        assert entry.occasion is None
        assert entry.message is None
        assert entry.preferred_date is None
        assert entry.dedication_type is DedicationType.IN_HONOR_OF

    @pytest.mark.parametrize("falsy", [False, 0, None, ""])
    def test_falsy_dedication_type_uses_default(self, service, falsy):
        entry = _create(service, dedication_type=falsy)
        assert entry.dedication_type is DedicationType.IN_HONOR_OF

    @pytest.mark.parametrize("amount", ["99999999999999999999", 10**20])
    def test_rejects_amount_beyond_integer_range(self, service, amount):
        with pytest.raises(InvalidArgument, match="amount must be a number >= 1800"):
            _create(service, amount=amount)
        assert service.list_entries() == []

    def test_rejects_non_ascii_digits(self, service):
        with pytest.raises(InvalidArgument, match="amount"):
            _create(service, amount="١٨٠٠")

    def test_round_trip(self, service):
        created = _create(service, email=" Ada@Example.ORG ", occasion=" Birthday ")
        fetched = service.get_entry(created.id)
        assert fetched == created
        assert fetched.email == "ada@example.org"
        assert fetched.occasion == "Birthday"

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"sponsor_name": None}, "sponsor_name is required"),
            ({"sponsor_name": "   "}, "sponsor_name is required"),
            ({"sponsor_name": 42}, "sponsor_name is required"),
            ({"email": ""}, "email is required"),
            ({"email": "not-an-email"}, "Invalid email address"),
            ({"email": "a b@c.com"}, "Invalid email address"),
            ({"dedication_name": None}, "dedication_name is required"),
            ({"dedication_type": "In Spirit Of"}, "Invalid dedication_type"),
            ({"amount": None}, "amount is required"),
            ({"amount": 1799}, "amount must be a number >= 1800"),
            ({"amount": "abc"}, "amount must be a number >= 1800"),
            ({"phone": 5550100}, "phone must be a string"),
        ],
    )
    def test_rejects_invalid_input(self, service, overrides, message):
        with pytest.raises(InvalidArgument) as exc_info:
            _create(service, **overrides)
        assert message in exc_info.value.message
        assert service.list_entries() == []

    def test_first_failure_wins(self):
        payload = CreateEntryInput(sponsor_name="", email="bad", amount=5)
        with pytest.raises(InvalidArgument, match="sponsor_name is required"):
            validate_new_entry(payload)

        payload = CreateEntryInput(sponsor_name="Ada", email="bad", amount=5)
        with pytest.raises(InvalidArgument, match="Invalid email address"):
            validate_new_entry(payload)


class TestParseAmount:
    """Leading-integer amount parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (1800, 1800),
            ("1800", 1800),
            (" 2000abc", 2000),
            (1800.9, 1800),
            ("+1900", 1900),
            (2**63 - 1, 2**63 - 1),
        ],
    )
    def test_accepts(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            1799,
            "1799",
            True,
            "",
            "abc",
            "$18.00",
            float("nan"),
            [1800],
            "\u0661\u0668\u0660\u0660",
            "99999999999999999999",
            10**20,
            2**63,
            1e30,
        ],
    )
    def test_rejects(self, raw):
        with pytest.raises(InvalidArgument):
            parse_amount(raw)


class TestList:
    """Listing with and without a status filter."""

    def test_newest_first(self, service):
        ids = [_create(service).id for _ in range(3)]
        assert [e.id for e in service.list_entries()] == list(reversed(ids))

    def test_status_filter(self, service):
        first = _create(service)
        _create(service)
        third = _create(service)
        for entry in (first, third):
            service.update_entry(entry.id, UpdateEntryInput(status="approved"))

        approved = service.list_entries("approved")
        assert [e.id for e in approved] == [third.id, first.id]
        assert all(e.status is Status.APPROVED for e in approved)

    def test_empty_filter_lists_everything(self, service):
        _create(service)
        assert len(service.list_entries("")) == 1

    def test_invalid_status(self, service):
        with pytest.raises(InvalidArgument, match="Invalid status"):
            service.list_entries("bogus")


class TestUpdate:
    """Partial updates."""

    def test_status_only(self, service):
        entry = _create(service)
        updated = service.update_entry(entry.id, UpdateEntryInput(status="scheduled"))
        assert updated.status is Status.SCHEDULED
        assert updated.assigned_date is None
        assert updated.updated_at > entry.updated_at
        assert updated.created_at == entry.created_at

    def test_assigned_date_only_refreshes_updated_at(self, service):
        entry = _create(service)
        updated = service.update_entry(entry.id, UpdateEntryInput(assigned_date="2026-05-01"))
        assert updated.assigned_date == "2026-05-01"
        assert updated.status is Status.PENDING
        assert updated.updated_at != entry.updated_at

    def test_explicit_null_clears_assigned_date(self, service):
        entry = _create(service)
        service.update_entry(entry.id, UpdateEntryInput(assigned_date="2026-05-01"))
        updated = service.update_entry(entry.id, UpdateEntryInput(assigned_date=None))
        assert updated.assigned_date is None

    def test_no_fields(self, service):
        entry = _create(service)
        with pytest.raises(InvalidArgument, match="No valid fields to update"):
            service.update_entry(entry.id, UpdateEntryInput())

    @pytest.mark.parametrize("status", ["bogus", None, "APPROVED"])
    def test_invalid_status(self, service, status):
        entry = _create(service)
        with pytest.raises(InvalidArgument, match="Invalid status"):
            service.update_entry(entry.id, UpdateEntryInput(status=status, assigned_date="2026-05-01"))
        # Nothing was written.
        assert service.get_entry(entry.id) == entry

    @pytest.mark.parametrize(
        "payload",
        [UpdateEntryInput(status="approved"), UpdateEntryInput(assigned_date="2026-05-01")],
    )
    def test_missing_entry(self, service, payload):
        with pytest.raises(NotFound):
            service.update_entry(999, payload)

    def test_missing_entry_checked_before_fields(self, service):
        with pytest.raises(NotFound):
            service.update_entry(999, UpdateEntryInput())


class TestDelete:
    """Deletion."""

    def test_delete_then_get(self, service):
        entry = _create(service)
        service.delete_entry(entry.id)
        with pytest.raises(NotFound):
            service.get_entry(entry.id)

    def test_delete_missing(self, service):
        with pytest.raises(NotFound, match="Entry not found"):
            service.delete_entry(12345)

    @pytest.mark.parametrize("entry_id", [0, -1, 2**63, 10**20])
    def test_out_of_range_ids_are_not_found(self, service, entry_id):
        with pytest.raises(NotFound, match="Entry not found"):
            service.get_entry(entry_id)
        with pytest.raises(NotFound):
            service.update_entry(entry_id, UpdateEntryInput(status="approved"))
        with pytest.raises(NotFound):
            service.delete_entry(entry_id)
