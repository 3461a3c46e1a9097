r"""
Central import point for the ORM models.

Importing this package registers every mapped class on Base.metadata, which is
what database.session.init_models() relies on:

    from motominder.models import Motorcycle
"""

from .motorcycle import Motorcycle
from .types import UTCDateTime

__all__ = [
    "Motorcycle",
    "UTCDateTime",
]
