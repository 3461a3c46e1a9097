from motominder.core.error import Error
from motominder.core.status import OperationStatus
from motominder.use_cases.requests import GetMotorcycleRequest
from motominder.use_cases.responses import GetMotorcycleResponse
from .base import Interactor


class GetMotorcycleInteractor(Interactor[GetMotorcycleRequest, GetMotorcycleResponse]):
    """Read one motorcycle. Nothing is written, so the unit of work is not committed."""

    OPERATION = "Get"
    RESPONSE = GetMotorcycleResponse

    async def _execute(self, request: GetMotorcycleRequest):
        motorcycle, status, error = await self.repository.fetch_by_id(request.id)
        if error:
            return self._respond(request, status, error)
        if motorcycle is None:
            return self._fail(
                request,
                OperationStatus.NOT_FOUND,
                f"The motorcycle with Id '{request.id}' could not be found.",
            )

        return GetMotorcycleResponse.new(motorcycle=motorcycle, status=OperationStatus.OK)


def new_get_motorcycle_interactor(repository, auth_service) -> tuple[GetMotorcycleInteractor | None, Error | None]:
    return GetMotorcycleInteractor.new(repository, auth_service)
