import pytest
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from app.core.db_errors import StorageError, translate_storage_error
from app.core.errors import (
    ErrorKind,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
)


class FakeDriverError(Exception):
    """Stands in for a Postgres driver exception carrying SQLSTATE diagnostics."""

    def __init__(self, message, sqlstate=None, constraint_name=None, column_name=None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name
        self.column_name = column_name


def _storage_error(exc_class, message, **driver_fields):
    orig = FakeDriverError(message, **driver_fields)
    return StorageError.from_exception(exc_class("INSERT INTO itinerary_items ...", {}, orig))


def test_captures_raw_driver_detail():
    error = _storage_error(
        IntegrityError,
        "insert or update violates foreign key constraint",
        sqlstate="23503",
        constraint_name="itinerary_items_trip_id_fkey",
    )

    assert error.code == "23503"
    assert error.constraint == "itinerary_items_trip_id_fkey"
    assert error.category == "IntegrityError"
    assert "foreign key" in error.message


def test_not_null_violation_names_the_field():
    error = _storage_error(
        IntegrityError, "null value in column", sqlstate="23502", column_name="activity_type"
    )

    translated = translate_storage_error(error)

    assert isinstance(translated, InvalidArgumentError)
    assert translated.message == "activityType is required"


def test_foreign_key_violation_is_not_found():
    error = _storage_error(IntegrityError, "violates foreign key constraint", sqlstate="23503")

    translated = translate_storage_error(error, entity="trip")

    assert isinstance(translated, NotFoundError)
    assert translated.kind is ErrorKind.not_found
    assert translated.message == "trip not found"


def test_check_violation_uses_domain_message():
    error = _storage_error(
        IntegrityError,
        "new row violates check constraint",
        sqlstate="23514",
        constraint_name="ck_itinerary_items_activity_type",
    )

    translated = translate_storage_error(error)

    assert isinstance(translated, InvalidArgumentError)
    assert "ck_" not in translated.message
    assert "flight" in translated.message and "attraction" in translated.message


def test_unknown_check_constraint_hides_identifier():
    error = _storage_error(
        IntegrityError, "violates check constraint", sqlstate="23514", constraint_name="ck_something_new"
    )

    translated = translate_storage_error(error)

    assert isinstance(translated, InvalidArgumentError)
    assert "ck_something_new" not in translated.message


@pytest.mark.parametrize("sqlstate", ["22P02", "22003", "22007"])
def test_malformed_typed_values_are_invalid_argument(sqlstate):
    error = _storage_error(DataError, "invalid input syntax for type integer", sqlstate=sqlstate)

    assert isinstance(translate_storage_error(error), InvalidArgumentError)


def test_connectivity_loss_is_internal_without_raw_detail():
    error = _storage_error(
        OperationalError, "connection to server at 10.0.0.5 port 5432 failed", sqlstate="08006"
    )

    translated = translate_storage_error(error, action="creating itinerary item")

    assert isinstance(translated, InternalError)
    assert translated.status_code == 500
    assert "10.0.0.5" not in translated.message
    assert translated.message == "database error while creating itinerary item"


def test_unique_violation_is_internal():
    error = _storage_error(IntegrityError, "duplicate key value", sqlstate="23505")

    assert isinstance(translate_storage_error(error), InternalError)


def test_already_classified_errors_pass_through():
    original = NotFoundError("trip not found")

    assert translate_storage_error(original) is original


@pytest.mark.parametrize(
    "message, expected_type, expected_message",
    [
        ("NOT NULL constraint failed: itinerary_items.title", InvalidArgumentError, "title is required"),
        ("FOREIGN KEY constraint failed", NotFoundError, "trip not found"),
        (
            "CHECK constraint failed: ck_itinerary_items_day_number_positive",
            InvalidArgumentError,
            "dayNumber must be a positive integer",
        ),
        (
            "CHECK constraint failed: ck_itinerary_items_cost_non_negative",
            InvalidArgumentError,
            "cost must be a non-negative number",
        ),
    ],
)
def test_sqlite_messages_without_sqlstate(message, expected_type, expected_message):
    error = _storage_error(IntegrityError, message)

    translated = translate_storage_error(error)

    assert isinstance(translated, expected_type)
    assert translated.message == expected_message
