import logging
from datetime import datetime, timedelta, timezone

import pytest

from database import Transaction, TransactionType
from errors import InvalidAmount, InvalidPayload, InvalidType
from serialization import TransactionOut, coerce_type, format_timestamp, serialize, to_record


def stored(**overrides):
    fields = dict(id=1, amount=100.0, category="Food", note=None, type="EXPENSE", date=datetime(2024, 1, 1))
    fields.update(overrides)
    return Transaction(**fields)


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_naive_is_treated_as_utc(self):
        """Test the millisecond ISO format with a Z suffix."""
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"

    def test_milliseconds_truncated(self):
        """Test that microseconds are cut down to milliseconds."""
        assert format_timestamp(datetime(2024, 5, 6, 7, 8, 9, 123456)) == "2024-05-06T07:08:09.123Z"

    def test_aware_converted_to_utc(self):
        """Test that offset timestamps are shifted to UTC."""
        value = datetime(2024, 1, 1, 8, 0, tzinfo=timezone(timedelta(hours=8)))

        assert format_timestamp(value) == "2024-01-01T00:00:00.000Z"


class TestSerialize:
    """Tests for serialize."""

    def test_wire_shape(self):
        """Test that a stored row maps to the wire model."""
        out = serialize(stored(note="lunch"), strict=False)

        assert out.model_dump(mode="json") == {
            "id": 1,
            "amount": 100.0,
            "category": "Food",
            "note": "lunch",
            "type": "EXPENSE",
            "date": "2024-01-01T00:00:00.000Z",
        }

    def test_null_note_becomes_empty(self):
        """Test that a null note is served as an empty string."""
        assert serialize(stored(note=None), strict=False).note == ""

    def test_unknown_type_coerced_to_expense(self, caplog):
        """Test that legacy type values are read as EXPENSE and logged."""
        with caplog.at_level(logging.WARNING, logger="money_tracker"):
            out = serialize(stored(type="TRANSFER"), strict=False)

        assert out.type is TransactionType.EXPENSE
        assert "TRANSFER" in caplog.text

    def test_unknown_type_fails_in_strict_mode(self):
        """Test that strict mode refuses unknown stored types."""
        with pytest.raises(InvalidType):
            serialize(stored(type="TRANSFER"), strict=True)

    def test_strict_defaults_to_setting(self, monkeypatch):
        """Test that strictness follows STRICT_TRANSACTION_TYPES when not given."""
        monkeypatch.setenv("STRICT_TRANSACTION_TYPES", "true")
        with pytest.raises(InvalidType):
            serialize(stored(type="legacy"))

        monkeypatch.setenv("STRICT_TRANSACTION_TYPES", "false")
        assert serialize(stored(type="legacy")).type is TransactionType.EXPENSE

    def test_known_types_unchanged_in_strict_mode(self):
        """Test that valid types pass through strict mode."""
        assert serialize(stored(type="INCOME"), strict=True).type is TransactionType.INCOME


class TestCoerceType:
    """Tests for coerce_type."""

    @pytest.mark.parametrize("value", [None, "", "income", 3])
    def test_lenient(self, value):
        """Test that anything unrecognized becomes EXPENSE."""
        assert coerce_type(value) is TransactionType.EXPENSE


class TestToRecord:
    """Tests for to_record."""

    def test_stored_shape(self):
        """Test that a valid request maps to the stored fields."""
        record = to_record({"amount": "100", "category": " Food ", "type": "EXPENSE", "date": "2024-01-01"})

        assert record == {
            "amount": 100.0,
            "category": "Food",
            "note": "",
            "type": "EXPENSE",
            "date": datetime(2024, 1, 1),
        }

    def test_date_stored_naive_utc(self):
        """Test that offsets are removed after converting to UTC."""
        record = to_record({"amount": 1, "category": "X", "type": "INCOME", "date": "2024-01-01T02:00:00+02:00"})

        assert record["date"] == datetime(2024, 1, 1)
        assert record["date"].tzinfo is None

    def test_validation_runs_first(self):
        """Test that invalid requests are rejected."""
        with pytest.raises(InvalidAmount):
            to_record({"amount": 0, "category": "Food", "type": "EXPENSE"})

    @pytest.mark.parametrize("value", [[1, 2], "text", 5, None])
    def test_non_mapping_rejected(self, value):
        """Test that anything but a mapping is rejected before validation."""
        with pytest.raises(InvalidPayload):
            to_record(value)


class TestRoundTrip:
    """Tests that validated wire values survive a store-and-serve cycle."""

    @pytest.mark.parametrize(
        "value",
        [
            {"id": 3, "amount": 100.0, "category": "Food", "note": "", "type": "EXPENSE", "date": "2024-01-01T00:00:00.000Z"},
            {"id": 9, "amount": 0.5, "category": "Pay", "note": "bonus", "type": "INCOME", "date": "2023-12-31T23:59:59.999Z"},
        ],
    )
    def test_round_trip(self, value):
        """Test serialize(to_record(x)) reproduces x."""
        row = Transaction(id=value["id"], **to_record(value))

        assert serialize(row, strict=True) == TransactionOut(**value)
