from motominder.core.error import Error
from motominder.core.status import OperationStatus
from motominder.models.motorcycle import Motorcycle
from motominder.use_cases.requests import PostMotorcycleRequest
from motominder.use_cases.responses import PostMotorcycleResponse
from .base import Interactor


class PostMotorcycleInteractor(Interactor[PostMotorcycleRequest, PostMotorcycleResponse]):
    """Create a motorcycle; the response carries its new id."""

    OPERATION = "Post"
    RESPONSE = PostMotorcycleResponse

    def _check_request(self, request):
        # Field rules run in the entity factory; a rejection there is an INTERNAL_ERROR.
        return None

    async def _execute(self, request: PostMotorcycleRequest):
        motorcycle, error = Motorcycle.new_motorcycle(request.make, request.model, request.year, request.vin)
        if error:
            return self._respond(request, OperationStatus.INTERNAL_ERROR, error)

        created, status, error = await self.repository.insert(motorcycle, self.repository.does_motorcycle_exist)
        if error:
            return self._respond(request, status, error)

        _, status, error = await self.repository.save()
        if error:
            return self._respond(request, status, error)

        return PostMotorcycleResponse.new(id=created.id, status=OperationStatus.OK)


def new_post_motorcycle_interactor(repository, auth_service) -> tuple[PostMotorcycleInteractor | None, Error | None]:
    return PostMotorcycleInteractor.new(repository, auth_service)
