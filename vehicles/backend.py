# vehicles/backend.py
"""
Acesso ao backend hospedado (Supabase).

O gateway é uma casca fina sobre o client oficial: não guarda estado além do
próprio client, não faz retry e repassa as mensagens de erro como vieram,
apenas embrulhadas em `BackendError` / `AuthenticationError`.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from supabase import (
    AuthError,
    Client,
    ClientOptions,
    PostgrestAPIError,
    StorageException,
    create_client,
)

from .entities import BackendSession, BackendUser

logger = logging.getLogger(__name__)

SessionCallback = Callable[[str, Optional[BackendSession]], None]


class BackendError(Exception):
    """Falha de rede ou erro devolvido pelo Supabase (tabelas/storage)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(BackendError):
    """Erro devolvido pelo serviço de autenticação."""


def _error_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc)


def _to_user(user: Any) -> BackendUser:
    if user is None:
        return BackendUser(id=None)
    return BackendUser(id=str(user.id), email=getattr(user, "email", "") or "")


def _to_session(session: Any) -> Optional[BackendSession]:
    if session is None:
        return None
    return BackendSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=_to_user(getattr(session, "user", None)),
    )


class SupabaseGateway:
    def __init__(self, client: Client):
        self.client = client

    # -----------------------------
    # Tabelas
    # -----------------------------
    def select(
        self,
        table: str,
        *,
        order_by: Optional[str] = None,
        ascending: bool = True,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self.client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=not ascending)
        if limit is not None:
            query = query.limit(limit)
        try:
            response = query.execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        return list(response.data or [])

    def select_one(self, table: str, pk: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.table(table).select("*").eq("id", pk).maybe_single().execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        # maybe_single() devolve None (ou data=None) quando não há linha
        if response is None:
            return None
        return response.data or None

    def insert(self, table: str, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.table(table).insert(row).execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        logger.info("insert em %s", table)
        data = response.data or []
        return data[0] if data else None

    def update(self, table: str, pk: str, row: Dict[str, Any]) -> None:
        try:
            self.client.table(table).update(row).eq("id", pk).execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        logger.info("update em %s id=%s campos=%s", table, pk, sorted(row))

    def delete(self, table: str, pk: str) -> None:
        try:
            self.client.table(table).delete().eq("id", pk).execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        logger.info("delete em %s id=%s", table, pk)

    # -----------------------------
    # Storage
    # -----------------------------
    def upload(self, bucket: str, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        file_options = {"content-type": content_type} if content_type else None
        try:
            self.client.storage.from_(bucket).upload(path=filename, file=content, file_options=file_options)
        except (StorageException, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        logger.info("upload %s/%s (%d bytes)", bucket, filename, len(content))
        return filename

    def public_url(self, bucket: str, path: str) -> str:
        return self.client.storage.from_(bucket).get_public_url(path)

    def remove(self, bucket: str, paths: Iterable[str]) -> None:
        paths = list(paths)
        if not paths:
            return
        try:
            self.client.storage.from_(bucket).remove(paths)
        except (StorageException, httpx.HTTPError) as exc:
            raise BackendError(_error_message(exc)) from exc
        logger.info("removidos %d arquivo(s) de %s", len(paths), bucket)

    # -----------------------------
    # Autenticação
    # -----------------------------
    def sign_in(self, email: str, password: str) -> BackendSession:
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationError(_error_message(exc)) from exc
        session = _to_session(response.session)
        if session is None:
            raise AuthenticationError("Sessão não emitida pelo serviço de autenticação")
        return session

    def sign_up(self, email: str, password: str, redirect_to: str) -> None:
        try:
            self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"email_redirect_to": redirect_to},
                }
            )
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationError(_error_message(exc)) from exc

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationError(_error_message(exc)) from exc

    def restore_session(self, access_token: str, refresh_token: str) -> BackendUser:
        """
        Reativa a sessão guardada no cookie. Se o token expirou o client faz o
        refresh e avisa os inscritos em `on_session_change`.
        """
        try:
            response = self.client.auth.set_session(access_token, refresh_token)
        except (AuthError, httpx.HTTPError) as exc:
            raise AuthenticationError(_error_message(exc)) from exc
        return _to_user(response.user)

    def on_session_change(self, callback: SessionCallback) -> None:
        def _listener(event, session):
            callback(str(getattr(event, "value", event)), _to_session(session))

        self.client.auth.on_auth_state_change(_listener)


def build_gateway() -> SupabaseGateway:
    """Cria um client novo por requisição (sessão do usuário não vaza entre requests)."""
    url = settings.SUPABASE_URL
    key = settings.SUPABASE_ANON_KEY
    if not url or not key:
        raise ImproperlyConfigured("SUPABASE_URL e SUPABASE_ANON_KEY precisam estar configurados.")
    client = create_client(url, key, options=ClientOptions(persist_session=False, auto_refresh_token=False))
    return SupabaseGateway(client)
