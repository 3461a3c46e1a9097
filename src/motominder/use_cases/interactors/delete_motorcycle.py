from motominder.core.error import Error
from motominder.core.status import OperationStatus
from motominder.use_cases.requests import DeleteMotorcycleRequest
from motominder.use_cases.responses import DeleteMotorcycleResponse
from .base import Interactor


class DeleteMotorcycleInteractor(Interactor[DeleteMotorcycleRequest, DeleteMotorcycleResponse]):
    OPERATION = "Delete"
    RESPONSE = DeleteMotorcycleResponse

    def _failure_payload(self, request):
        return {"id": getattr(request, "id", 0)}

    async def _execute(self, request: DeleteMotorcycleRequest):
        _, status, error = await self.repository.delete(request.id)
        if error:
            return self._respond(request, status, error)

        _, status, error = await self.repository.save()
        if error:
            return self._respond(request, status, error)

        return DeleteMotorcycleResponse.new(id=request.id, status=OperationStatus.OK)


def new_delete_motorcycle_interactor(repository, auth_service) -> tuple[DeleteMotorcycleInteractor | None, Error | None]:
    return DeleteMotorcycleInteractor.new(repository, auth_service)
