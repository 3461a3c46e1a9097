"""
Common orchestration for every use case.

`handle(request)` runs the same gate for every operation:

    1. the caller must be authenticated          -> NOT_AUTHENTICATED
    2. the caller must hold REQUIRED_ROLE         -> NOT_AUTHORIZED
    3. the request must be well formed            -> BAD_REQUEST
       (Post leaves its field rules to the entity factory -> INTERNAL_ERROR)
    4. the operation itself (`_execute`), which talks to the repository and,
       for mutations, commits the unit of work once with `repository.save()`

A request that fails steps 1-3 never reaches the repository. The outcome is a
`(response, error)` pair built by the response class's `new()` factory.

A fresh request id is bound to the logging context for the duration of the
call, so every log line emitted while serving it (interactor and repository
alike) carries the same `request_id`.
"""

import logging
import uuid
from typing import Any, ClassVar, Generic, TypeVar

from motominder.auth.roles import AuthorizationRole
from motominder.auth.service import AuthService
from motominder.core.error import Error
from motominder.core.logging.filters import reset_request_id, set_request_id
from motominder.core.status import OperationStatus
from motominder.repositories.motorcycle_repository import MotorcycleRepository
from motominder.use_cases.responses import ResponseBase

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT", bound=ResponseBase)
InteractorT = TypeVar("InteractorT", bound="Interactor")

logger = logging.getLogger(__name__)


class Interactor(Generic[RequestT, ResponseT]):
    """
    Base class for the motorcycle use cases.

    Subclasses set OPERATION (the name used in messages and log events) and
    RESPONSE, and implement `_execute()` plus `_failure_payload()`.
    """

    OPERATION: ClassVar[str] = ""
    RESPONSE: ClassVar[type[ResponseBase]] = ResponseBase
    REQUIRED_ROLE: ClassVar[AuthorizationRole] = AuthorizationRole.ADMIN

    def __init__(self, repository: MotorcycleRepository | None, auth_service: AuthService | None):
        self.repository = repository
        self.auth_service = auth_service

    @classmethod
    def new(cls: type[InteractorT], repository, auth_service) -> tuple[InteractorT | None, Error | None]:
        interactor = cls(repository, auth_service)
        error = interactor.validate()
        if error:
            return None, error
        return interactor, None

    def validate(self) -> Error | None:
        error = Error()
        if self.repository is None:
            error.add("The motorcycle repository cannot be None.")
        if self.auth_service is None:
            error.add("The authorization service cannot be None.")
        return Error.or_none(error)

    @property
    def _event(self) -> str:
        return f"interactor.{self.OPERATION.lower()}"

    async def handle(self, request: RequestT) -> tuple[ResponseT | None, Error | None]:
        token = set_request_id(uuid.uuid4().hex)
        try:
            return await self._handle(request)
        finally:
            reset_request_id(token)

    async def _handle(self, request: RequestT) -> tuple[ResponseT | None, Error | None]:
        logger.debug(f"{self._event}.start")

        if not self.auth_service.is_authenticated():
            logger.info(f"{self._event}.not_authenticated")
            return self._fail(
                request,
                OperationStatus.NOT_AUTHENTICATED,
                f"{self.OPERATION} operation failed due to not being authenticated.",
            )

        if not self.auth_service.is_authorized(self.REQUIRED_ROLE):
            logger.info(f"{self._event}.not_authorized", extra={"required_role": self.REQUIRED_ROLE.name})
            return self._fail(
                request,
                OperationStatus.NOT_AUTHORIZED,
                f"{self.OPERATION} operation failed due to not being authorized, "
                "so please contact your system administrator.",
            )

        if request is None:
            return self._fail(request, OperationStatus.BAD_REQUEST, "The request cannot be None.")
        error = self._check_request(request)
        if error:
            logger.info(f"{self._event}.invalid_request", extra={"errors": error.messages})
            return self._respond(request, OperationStatus.BAD_REQUEST, error)

        response, error = await self._execute(request)
        if error:
            logger.info(f"{self._event}.failed", extra={"errors": error.messages})
        else:
            logger.info(f"{self._event}.success")
        return response, error

    def _check_request(self, request: RequestT) -> Error | None:
        return request.validate()

    async def _execute(self, request: RequestT) -> tuple[ResponseT | None, Error | None]:
        raise NotImplementedError

    def _failure_payload(self, request: RequestT | None) -> dict[str, Any]:
        """Payload fields for a response to a request that did not succeed."""
        return {}

    def _respond(
        self, request: RequestT | None, status: OperationStatus, error: Error | None
    ) -> tuple[ResponseT | None, Error | None]:
        return self.RESPONSE.new(status=status, error=error, **self._failure_payload(request))

    def _fail(self, request: RequestT | None, status: OperationStatus, message: str):
        return self._respond(request, status, Error(message))
