"""Editorial curation service dependency container."""

from .container import CurationContainer, build_curation_container

__all__ = ["CurationContainer", "build_curation_container"]
