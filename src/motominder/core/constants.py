# Domain constants shared by the entity, its validation rules and the DTOs.

INVALID_ENTITY_ID = 0       # Unassigned primary key; the store assigns a positive id on insert.
INVALID_TENANT_ID = 0
MIN_ENTITY_ID = 1

MIN_MAKE_LENGTH = 1
MAX_MAKE_LENGTH = 20
MIN_MODEL_LENGTH = 1
MAX_MODEL_LENGTH = 20

MIN_YEAR = 1999
MAX_YEAR = 2020

VIN_LENGTH = 17

# Makes that are never accepted as motorcycle manufacturers (compared case-insensitively).
INVALID_MAKES: frozenset[str] = frozenset({"Ford"})
