"""Live news feed service dependency container."""

from .container import FeedContainer, build_feed_container

__all__ = ["FeedContainer", "build_feed_container"]
