"""
Request DTOs handed to the interactors.

Each request validates its own shape in its factory, so an interactor never
sees a malformed request from a well-behaved caller:

    request, error = new_get_motorcycle_request(7)
    request, error = new_post_motorcycle_request("Honda", "Shadow", 2006, "01234567890123456")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar

from motominder.core import constants
from motominder.core.error import Error
from motominder.models.motorcycle import Motorcycle
from motominder.validators.entity_validators import validate_non_id_fields

RequestT = TypeVar("RequestT")


def _invalid_request_id(entity_id: int | None) -> Error | None:
    if entity_id is None or entity_id < constants.MIN_ENTITY_ID:
        return Error("The id cannot be zero or a negative number.")
    return None


def _build(factory: Callable[[], RequestT]) -> tuple[RequestT | None, Error | None]:
    request = factory()
    error = request.validate()
    if error:
        return None, error
    return request, None


@dataclass(frozen=True, slots=True)
class GetMotorcycleRequest:
    id: int

    def validate(self) -> Error | None:
        return _invalid_request_id(self.id)


@dataclass(frozen=True, slots=True)
class DeleteMotorcycleRequest:
    id: int

    def validate(self) -> Error | None:
        return _invalid_request_id(self.id)


@dataclass(frozen=True, slots=True)
class ListMotorcyclesRequest:
    def validate(self) -> Error | None:
        return None


@dataclass(frozen=True, slots=True)
class PostMotorcycleRequest:
    make: str
    model: str
    year: int
    vin: str

    def validate(self) -> Error | None:
        return validate_non_id_fields(self.make, self.model, self.year, self.vin)


@dataclass(frozen=True, slots=True)
class PutMotorcycleRequest:
    """
    Replace the editable fields of motorcycle `id` with those of `motorcycle`.

    `motorcycle` is typically built with `Motorcycle.new_motorcycle()` and is
    never added to a session; only its make, model, year and VIN are read.
    """

    id: int
    motorcycle: Motorcycle | None

    def validate(self) -> Error | None:
        error = Error()
        error += _invalid_request_id(self.id)
        if self.motorcycle is None:
            error.add("The motorcycle cannot be None.")
        else:
            error += self.motorcycle.validate()
        return Error.or_none(error)


def new_get_motorcycle_request(entity_id: int) -> tuple[GetMotorcycleRequest | None, Error | None]:
    return _build(lambda: GetMotorcycleRequest(entity_id))


def new_delete_motorcycle_request(entity_id: int) -> tuple[DeleteMotorcycleRequest | None, Error | None]:
    return _build(lambda: DeleteMotorcycleRequest(entity_id))


def new_list_motorcycles_request() -> tuple[ListMotorcyclesRequest | None, Error | None]:
    return _build(ListMotorcyclesRequest)


def new_post_motorcycle_request(
    make: str, model: str, year: int, vin: str
) -> tuple[PostMotorcycleRequest | None, Error | None]:
    return _build(lambda: PostMotorcycleRequest(make, model, year, vin))


def new_put_motorcycle_request(
    entity_id: int, motorcycle: Motorcycle | None
) -> tuple[PutMotorcycleRequest | None, Error | None]:
    return _build(lambda: PutMotorcycleRequest(entity_id, motorcycle))
