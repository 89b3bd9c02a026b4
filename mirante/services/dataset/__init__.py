"""Historical dataset service dependency container."""

from .container import DatasetContainer, build_dataset_container

__all__ = ["DatasetContainer", "build_dataset_container"]
