"""
Field-level validation rules for the Motorcycle entity.

Every function here is pure: it looks only at the values passed in and returns
an `Error` listing each violated rule, or None when the value is acceptable.
No rule short-circuits another, so a caller sees every problem at once, e.g.
a make of "" that is also on the denylist would report both.

The composite helpers (`validate_non_id_fields`, `validate_motorcycle_fields`)
merge the individual rules; they are what the entity factory, the entity's own
`validate()` and the request DTOs call.
"""

from motominder.core import constants
from motominder.core.error import Error


def invalid_make(make: str | None) -> Error | None:
    error = Error()
    if not make:
        error.add("A make cannot be empty.")
    if make is not None and len(make) > constants.MAX_MAKE_LENGTH:
        error.add(f"A make cannot contain more than {constants.MAX_MAKE_LENGTH} characters.")
    if make is not None and make.casefold() in {m.casefold() for m in constants.INVALID_MAKES}:
        error.add(f"Make '{make}' is not a valid motorcycle manufacturer.")
    return Error.or_none(error)


def invalid_model(model: str | None) -> Error | None:
    error = Error()
    if not model:
        error.add("A model cannot be empty.")
    if model is not None and len(model) > constants.MAX_MODEL_LENGTH:
        error.add(f"A model's name cannot be more than {constants.MAX_MODEL_LENGTH} characters.")
    return Error.or_none(error)


def invalid_year(year: int | None) -> Error | None:
    error = Error()
    if year is None:
        error.add("A year cannot be empty.")
        return error
    if year < constants.MIN_YEAR:
        error.add(f"A year cannot be less than {constants.MIN_YEAR}.")
    if year > constants.MAX_YEAR:
        error.add(f"A year cannot be more than {constants.MAX_YEAR}.")
    return Error.or_none(error)


def invalid_vin(vin: str | None) -> Error | None:
    """
    A VIN must be exactly 17 characters.

    The length is checked by three rules that fire together whenever it is off:
    the overall mismatch, plus "too long" or "too short". A None VIN counts as
    length zero.
    """
    length = len(vin) if vin is not None else 0
    error = Error()
    if length != constants.VIN_LENGTH:
        error.add(
            f"A VIN requires {constants.VIN_LENGTH} characters, "
            f"but the provided value had {length} characters."
        )
    if length > constants.VIN_LENGTH:
        error.add(f"A VIN cannot be more than {constants.VIN_LENGTH} characters.")
    if length < constants.VIN_LENGTH:
        error.add(f"A VIN cannot be less than {constants.VIN_LENGTH} characters.")
    return Error.or_none(error)


def invalid_ids(entity_id: int | None, tenant_id: int | None) -> Error | None:
    error = Error()
    if entity_id is not None and entity_id < 0:
        error.add("The Id cannot be a negative value.")
    if tenant_id is not None and tenant_id < 0:
        error.add("The TenantId cannot be a negative value.")
    return Error.or_none(error)


def validate_non_id_fields(make: str | None, model: str | None, year: int | None, vin: str | None) -> Error | None:
    """Run the make, model, year and VIN rules and merge their messages."""
    error = Error()
    error += invalid_make(make)
    error += invalid_model(model)
    error += invalid_year(year)
    error += invalid_vin(vin)
    return Error.or_none(error)


def validate_motorcycle_fields(
    entity_id: int | None,
    tenant_id: int | None,
    make: str | None,
    model: str | None,
    year: int | None,
    vin: str | None,
) -> Error | None:
    """Every field rule, including the id/tenant sign checks."""
    error = Error()
    error += validate_non_id_fields(make, model, year, vin)
    error += invalid_ids(entity_id, tenant_id)
    return Error.or_none(error)


__all__ = [
    "invalid_make",
    "invalid_model",
    "invalid_year",
    "invalid_vin",
    "invalid_ids",
    "validate_non_id_fields",
    "validate_motorcycle_fields",
]
