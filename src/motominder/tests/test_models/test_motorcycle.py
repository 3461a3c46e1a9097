from datetime import datetime, timezone

import pytest

from motominder.core import constants
from motominder.models.motorcycle import Motorcycle
from motominder.validators.entity_validators import (
    invalid_ids,
    invalid_make,
    invalid_model,
    invalid_vin,
    invalid_year,
    validate_non_id_fields,
)

VALID_VIN = "01234567890123456"


class TestNewMotorcycle:

    def test_valid_fields_build_an_unsaved_motorcycle(self):
        motorcycle, error = Motorcycle.new_motorcycle("Honda", "Shadow", 2006, VALID_VIN)

        assert error is None
        assert motorcycle.id == constants.INVALID_ENTITY_ID
        assert motorcycle.tenant_id == constants.INVALID_TENANT_ID
        assert motorcycle.is_deleted is False
        assert motorcycle.created_utc is None
        assert motorcycle.modified_utc is None
        assert motorcycle.validate() is None

    @pytest.mark.parametrize(
        "make, model, year, vin",
        [
            ("Ford", "Falcon", 2006, VALID_VIN),
            ("Honda", "Shadow", 1998, VALID_VIN),
            ("Honda", "Shadow", 2021, VALID_VIN),
            ("Honda", "Shadow", 2006, VALID_VIN[:-1]),
            ("Honda", "Shadow", 2006, VALID_VIN + "7"),
            ("", "Shadow", 2006, VALID_VIN),
            ("Honda", "", 2006, VALID_VIN),
        ],
    )
    def test_any_invalid_field_rejects_the_motorcycle(self, make, model, year, vin):
        motorcycle, error = Motorcycle.new_motorcycle(make, model, year, vin)

        assert motorcycle is None
        assert error

    def test_every_violation_is_reported_at_once(self):
        _, error = Motorcycle.new_motorcycle("Ford", "", 1998, "123")

        # denylisted make, empty model, low year, VIN mismatch and too short
        assert len(error) == 5


class TestFieldRules:

    def test_denylisted_make_is_case_insensitive(self):
        assert "Make 'fORD' is not a valid motorcycle manufacturer." in invalid_make("fORD")

    def test_make_and_model_length_limits(self):
        assert invalid_make("H" * constants.MAX_MAKE_LENGTH) is None
        assert invalid_make("H" * (constants.MAX_MAKE_LENGTH + 1))
        assert invalid_model("M" * constants.MAX_MODEL_LENGTH) is None
        assert invalid_model("M" * (constants.MAX_MODEL_LENGTH + 1))

    @pytest.mark.parametrize("year", [constants.MIN_YEAR, constants.MAX_YEAR])
    def test_year_bounds_are_inclusive(self, year):
        assert invalid_year(year) is None

    def test_missing_year(self):
        assert invalid_year(None).messages == ["A year cannot be empty."]

    def test_short_vin_fires_mismatch_and_too_short(self):
        error = invalid_vin("1" * 16)

        assert error.messages == [
            "A VIN requires 17 characters, but the provided value had 16 characters.",
            "A VIN cannot be less than 17 characters.",
        ]

    def test_long_vin_fires_mismatch_and_too_long(self):
        error = invalid_vin("1" * 18)

        assert len(error) == 2
        assert "A VIN cannot be more than 17 characters." in error

    def test_none_vin_counts_as_empty(self):
        assert "A VIN requires 17 characters, but the provided value had 0 characters." in invalid_vin(None)

    def test_negative_ids_are_rejected(self):
        error = invalid_ids(-1, -1)

        assert error.messages == [
            "The Id cannot be a negative value.",
            "The TenantId cannot be a negative value.",
        ]
        assert invalid_ids(0, 0) is None

    def test_non_id_fields_merge_in_rule_order(self):
        error = validate_non_id_fields("", "Shadow", 2006, VALID_VIN)

        assert error.messages == ["A make cannot be empty."]


class TestMotorcycleState:

    def test_same_state_as_compares_fields_not_identity(self, make_random_motorcycle):
        first = make_random_motorcycle(vin=VALID_VIN)
        second = Motorcycle(**first.snapshot())

        assert first is not second
        assert first != second
        assert first.same_state_as(second)
        assert first.same_state_as(second.snapshot())

    def test_same_state_as_detects_a_changed_field(self, make_random_motorcycle):
        first = make_random_motorcycle()
        snapshot = first.snapshot()
        first.modified_utc = datetime.now(timezone.utc)

        assert not first.same_state_as(snapshot)
        assert not first.same_state_as(None)

    def test_update_fields_copies_only_editable_fields(self, make_random_motorcycle):
        target = make_random_motorcycle()
        target.id, target.tenant_id = 7, 3
        source = make_random_motorcycle()

        target.update_fields(source)

        assert (target.make, target.model, target.year, target.vin) == (
            source.make, source.model, source.year, source.vin
        )
        assert (target.id, target.tenant_id) == (7, 3)

    def test_to_dict_renders_datetimes_as_iso_strings(self, make_random_motorcycle):
        motorcycle = make_random_motorcycle()
        motorcycle.created_utc = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        data = motorcycle.to_dict()

        assert data["created_utc"] == "2020-01-02T03:04:05+00:00"
        assert data["modified_utc"] is None
