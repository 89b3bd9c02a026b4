"""Clientes HTTP utilizados pelo serviço de feed."""

from .newsapi_client import NewsApiClient

__all__ = ["NewsApiClient"]
