"""Caller-owned credential and connection handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Credentials:
    token: str | None = None


@dataclass(frozen=True)
class CredentialManager:
    creds: Credentials | None = None


@dataclass(frozen=True)
class ConnectionManager:
    """Wraps a pooled ``httpx.Client`` or ``httpx.AsyncClient``.

    The pool's lifecycle belongs to whoever built it; clients only borrow it.
    """

    pool: Any = None


@dataclass(frozen=True)
class ClientContext:
    cred_mgr: CredentialManager | None = None
    conn_mgr: ConnectionManager | None = None

    @property
    def token(self) -> str | None:
        if self.cred_mgr is None or self.cred_mgr.creds is None:
            return None
        return self.cred_mgr.creds.token

    @property
    def pool(self) -> Any:
        if self.conn_mgr is None:
            return None
        return self.conn_mgr.pool
