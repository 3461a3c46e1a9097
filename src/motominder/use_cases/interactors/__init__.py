from .base import Interactor
from .post_motorcycle import PostMotorcycleInteractor, new_post_motorcycle_interactor
from .put_motorcycle import PutMotorcycleInteractor, new_put_motorcycle_interactor
from .delete_motorcycle import DeleteMotorcycleInteractor, new_delete_motorcycle_interactor
from .get_motorcycle import GetMotorcycleInteractor, new_get_motorcycle_interactor
from .list_motorcycles import ListMotorcyclesInteractor, new_list_motorcycles_interactor

__all__ = [
    "Interactor",
    "PostMotorcycleInteractor",
    "PutMotorcycleInteractor",
    "DeleteMotorcycleInteractor",
    "GetMotorcycleInteractor",
    "ListMotorcyclesInteractor",
    "new_post_motorcycle_interactor",
    "new_put_motorcycle_interactor",
    "new_delete_motorcycle_interactor",
    "new_get_motorcycle_interactor",
    "new_list_motorcycles_interactor",
]
