"""Autenticação das operações editoriais por token compartilhado."""
from __future__ import annotations

import hmac

from mirante.domain import AuthError, ConfigError

EDITOR_TOKEN_HEADER = "X-Editor-Token"


class EditorAuthenticator:
    """Compara o token enviado com o segredo configurado em tempo constante."""

    def __init__(self, secret: str | None) -> None:
        self._secret = secret or None

    def verify(self, token: str | None) -> None:
        """Levanta erro quando o modo editor está desligado ou o token não confere."""

        if self._secret is None:
            raise ConfigError(
                "EDITOR_TOKEN não configurado",
                public_message="Editor mode is not configured. Set EDITOR_TOKEN in .env.",
                status_code=503,
            )
        if not token or not hmac.compare_digest(
            token.encode("utf-8"), self._secret.encode("utf-8")
        ):
            raise AuthError("Token de editor inválido")


__all__ = ["EDITOR_TOKEN_HEADER", "EditorAuthenticator"]
