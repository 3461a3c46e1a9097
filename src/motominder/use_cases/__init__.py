from .requests import (
    GetMotorcycleRequest,
    DeleteMotorcycleRequest,
    ListMotorcyclesRequest,
    PostMotorcycleRequest,
    PutMotorcycleRequest,
    new_get_motorcycle_request,
    new_delete_motorcycle_request,
    new_list_motorcycles_request,
    new_post_motorcycle_request,
    new_put_motorcycle_request,
)
from .responses import (
    ResponseBase,
    PostMotorcycleResponse,
    PutMotorcycleResponse,
    DeleteMotorcycleResponse,
    GetMotorcycleResponse,
    ListMotorcyclesResponse,
)

__all__ = [
    "GetMotorcycleRequest",
    "DeleteMotorcycleRequest",
    "ListMotorcyclesRequest",
    "PostMotorcycleRequest",
    "PutMotorcycleRequest",
    "new_get_motorcycle_request",
    "new_delete_motorcycle_request",
    "new_list_motorcycles_request",
    "new_post_motorcycle_request",
    "new_put_motorcycle_request",
    "ResponseBase",
    "PostMotorcycleResponse",
    "PutMotorcycleResponse",
    "DeleteMotorcycleResponse",
    "GetMotorcycleResponse",
    "ListMotorcyclesResponse",
]
