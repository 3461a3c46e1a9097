from .entity_validators import (
    invalid_make,
    invalid_model,
    invalid_year,
    invalid_vin,
    invalid_ids,
    validate_non_id_fields,
    validate_motorcycle_fields,
)

__all__ = [
    "invalid_make",
    "invalid_model",
    "invalid_year",
    "invalid_vin",
    "invalid_ids",
    "validate_non_id_fields",
    "validate_motorcycle_fields",
]
