"""Portas de comunicação com serviços externos."""

from .news_gateway import NewsGateway

__all__ = ["NewsGateway"]
