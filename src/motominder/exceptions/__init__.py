# motominder/exceptions/
# ├── base.py                    # app-level errors (RepositoryError, DuplicateError, InvalidFieldError)
# ├── integrity_classifier.py    # IntegrityError -> constraint-violation kind
# └── mapper.py                  # db_error_handler: rollback + map to app-level errors

from .base import RepositoryError, DuplicateError, InvalidFieldError
from .mapper import db_error_handler

__all__ = [
    "RepositoryError",
    "DuplicateError",
    "InvalidFieldError",
    "db_error_handler",
]
