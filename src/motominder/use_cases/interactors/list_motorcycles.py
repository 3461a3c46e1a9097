from motominder.core.error import Error
from motominder.core.status import OperationStatus
from motominder.use_cases.requests import ListMotorcyclesRequest
from motominder.use_cases.responses import ListMotorcyclesResponse
from .base import Interactor


class ListMotorcyclesInteractor(Interactor[ListMotorcyclesRequest, ListMotorcyclesResponse]):
    OPERATION = "List"
    RESPONSE = ListMotorcyclesResponse

    async def _execute(self, request: ListMotorcyclesRequest):
        motorcycles, status, error = await self.repository.list()
        if error:
            return self._respond(request, status, error)

        return ListMotorcyclesResponse.new(motorcycles=motorcycles, status=OperationStatus.OK)


def new_list_motorcycles_interactor(repository, auth_service) -> tuple[ListMotorcyclesInteractor | None, Error | None]:
    return ListMotorcyclesInteractor.new(repository, auth_service)
