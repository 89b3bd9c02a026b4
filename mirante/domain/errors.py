"""Hierarquia de erros compartilhada entre serviços, jobs e a API HTTP.

Cada erro carrega duas mensagens: a mensagem interna, usada nos logs, e a
mensagem pública (``public_message``) que pode atravessar a fronteira de
confiança e ser devolvida ao cliente. O ``status_code`` é consumido pelo
handler de exceções registrado em :mod:`mirante.api`.
"""
from __future__ import annotations


class MiranteError(Exception):
    """Erro base da aplicação com status HTTP e mensagem pública associados."""

    status_code: int = 500
    default_public_message: str = "Internal server error."

    def __init__(
        self,
        message: str | None = None,
        *,
        public_message: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.public_message = public_message or self.default_public_message
        super().__init__(message or self.public_message)
        if status_code is not None:
            self.status_code = status_code


class ConfigError(MiranteError):
    """Credencial ou configuração obrigatória ausente no servidor."""

    status_code = 500
    default_public_message = "News service is not configured."


class ValidationError(MiranteError):
    """Entrada inválida; a mensagem descreve a restrição violada."""

    status_code = 400
    default_public_message = "Invalid request."

    def __init__(self, message: str, **kwargs) -> None:
        kwargs.setdefault("public_message", message)
        super().__init__(message, **kwargs)


class AuthError(MiranteError):
    """Credencial de editor ausente ou incorreta."""

    status_code = 401
    default_public_message = "Unauthorized"


class UpstreamError(MiranteError):
    """A API de notícias respondeu, mas informou falha."""

    status_code = 502
    default_public_message = "Unable to fetch news at this time. Please try again."


class UpstreamTimeoutError(MiranteError):
    """A API de notícias não respondeu dentro do tempo limite."""

    status_code = 504
    default_public_message = "News service request timed out. Please try again."


class NetworkError(MiranteError):
    """Falha de transporte (DNS, conexão recusada ou reiniciada)."""

    status_code = 500
    default_public_message = "Failed to fetch news. Please try again."


class StoreError(MiranteError):
    """Falha ao ler ou gravar no armazenamento durável."""

    status_code = 500
    default_public_message = "Storage is temporarily unavailable. Please try again."


__all__ = [
    "AuthError",
    "ConfigError",
    "MiranteError",
    "NetworkError",
    "StoreError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "ValidationError",
]
