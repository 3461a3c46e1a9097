"""
Response DTOs returned by the interactors.

Every response carries a payload, an OperationStatus and an optional error,
and is built through `new()`, which validates the response's own shape and
decides what the caller gets back:

| shape valid | business error | returns                                   |
| ----------- | -------------- | ----------------------------------------- |
| no          | yes            | (None, validation error + business error) |
| no          | no             | (None, validation error)                  |
| yes         | yes            | (response, business error)                |
| yes         | no             | (response, None)                          |

So a malformed response is never handed out, and a well-formed failure is
handed out together with its error so the caller can read the status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motominder.core import constants
from motominder.core.error import Error
from motominder.core.status import OperationStatus
from motominder.models.motorcycle import Motorcycle


@dataclass(slots=True, kw_only=True)
class ResponseBase:
    status: OperationStatus
    error: Error | None = None

    def validate(self) -> Error | None:
        if not OperationStatus.is_defined(self.status):
            return Error(f"The status value '{self.status}' does not exist in the enumeration.")
        return None

    @classmethod
    def new(cls, *, status: OperationStatus, error: Error | None = None, **payload: Any):
        response = cls(status=status, error=Error.or_none(error), **payload)
        validation = response.validate()

        if validation and response.error:
            return None, Error.merge(validation, response.error)
        if validation:
            return None, validation
        if response.error:
            return response, response.error
        return response, None

    def _payload_dict(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Plain-data rendering for a presentation layer."""
        return {
            **self._payload_dict(),
            "status": int(self.status),
            "error": self.error.messages if self.error else None,
        }


@dataclass(slots=True, kw_only=True)
class IdResponse(ResponseBase):
    """A response whose payload is the id of the motorcycle that was acted on."""

    id: int = constants.INVALID_ENTITY_ID

    def validate(self) -> Error | None:
        error = Error()
        error += ResponseBase.validate(self)
        # A failed attempt may not have an id to report (e.g. a rejected insert).
        if self.status == OperationStatus.OK and (self.id is None or self.id < constants.MIN_ENTITY_ID):
            error.add("The id cannot be zero or a negative number.")
        return Error.or_none(error)

    def _payload_dict(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass(slots=True, kw_only=True)
class PostMotorcycleResponse(IdResponse):
    pass


@dataclass(slots=True, kw_only=True)
class PutMotorcycleResponse(IdResponse):
    pass


@dataclass(slots=True, kw_only=True)
class DeleteMotorcycleResponse(IdResponse):
    pass


@dataclass(slots=True, kw_only=True)
class GetMotorcycleResponse(ResponseBase):
    motorcycle: Motorcycle | None = None

    def validate(self) -> Error | None:
        error = Error()
        error += ResponseBase.validate(self)
        if self.motorcycle is not None:
            error += self.motorcycle.validate()
        return Error.or_none(error)

    def _payload_dict(self) -> dict[str, Any]:
        return {"motorcycle": self.motorcycle.to_dict() if self.motorcycle is not None else None}


@dataclass(slots=True, kw_only=True)
class ListMotorcyclesResponse(ResponseBase):
    motorcycles: tuple[Motorcycle, ...] = ()

    def validate(self) -> Error | None:
        error = Error()
        error += ResponseBase.validate(self)
        for motorcycle in self.motorcycles or ():
            error += motorcycle.validate()
        return Error.or_none(error)

    def _payload_dict(self) -> dict[str, Any]:
        return {"motorcycles": [m.to_dict() for m in self.motorcycles or ()]}
