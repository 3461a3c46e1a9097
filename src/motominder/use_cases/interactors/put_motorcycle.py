from motominder.core.error import Error
from motominder.core.status import OperationStatus
from motominder.use_cases.requests import PutMotorcycleRequest
from motominder.use_cases.responses import PutMotorcycleResponse
from .base import Interactor


class PutMotorcycleInteractor(Interactor[PutMotorcycleRequest, PutMotorcycleResponse]):
    """
    Replace the make, model, year and VIN of an existing motorcycle.

    The stored row is loaded, the request's fields are copied onto it, and the
    repository verifies the VIN stays unique (ignoring the row itself) before
    writing.
    """

    OPERATION = "Put"
    RESPONSE = PutMotorcycleResponse

    def _failure_payload(self, request):
        return {"id": getattr(request, "id", 0)}

    async def _execute(self, request: PutMotorcycleRequest):
        current, _, _ = await self.repository.fetch_by_id(request.id)
        if current is None:
            return self._fail(
                request,
                OperationStatus.NOT_FOUND,
                f"The entity with Id '{request.id}' could not be found, so it was not updated.",
            )

        current.update_fields(request.motorcycle)

        updated, status, error = await self.repository.update(
            request.id, current, self.repository.is_motorcycle_unique
        )
        if error:
            return self._respond(request, status, error)

        _, status, error = await self.repository.save()
        if error:
            return self._respond(request, status, error)

        return PutMotorcycleResponse.new(id=updated.id, status=OperationStatus.OK)


def new_put_motorcycle_interactor(repository, auth_service) -> tuple[PutMotorcycleInteractor | None, Error | None]:
    return PutMotorcycleInteractor.new(repository, auth_service)
