# vehicles/auth.py
"""
Portão do painel administrativo.

Os tokens do Supabase ficam na sessão do Django. A cada requisição o
middleware reativa essa sessão (preguiçosamente) e se inscreve nas mudanças:
token renovado é regravado, sessão encerrada (logout em outra aba, token
revogado) limpa o cookie, e as rotas protegidas passam a redirecionar.
"""
import functools
import logging

from django.shortcuts import redirect

from .backend import AuthenticationError
from .entities import ANONYMOUS, BackendSession, BackendUser

logger = logging.getLogger(__name__)

SESSION_KEY = "backend_session"


def store_session(request, session: BackendSession) -> None:
    request.session.cycle_key()
    _write_tokens(request, session)
    request._cached_backend_user = session.user


def _write_tokens(request, session: BackendSession) -> None:
    request.session[SESSION_KEY] = {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
    }


def clear_session(request) -> None:
    request.session.pop(SESSION_KEY, None)
    request._cached_backend_user = ANONYMOUS


def _on_session_change(request, event: str, session) -> None:
    if session is None:
        logger.info("sessão encerrada no backend (%s)", event)
        clear_session(request)
    else:
        _write_tokens(request, session)


def _restore_user(request) -> BackendUser:
    tokens = request.session.get(SESSION_KEY)
    if not tokens:
        return ANONYMOUS

    gateway = request.backend
    gateway.on_session_change(lambda event, session: _on_session_change(request, event, session))
    try:
        user = gateway.restore_session(tokens["access_token"], tokens["refresh_token"])
    except AuthenticationError as exc:
        logger.info("sessão salva não é mais válida: %s", exc.message)
        clear_session(request)
        return ANONYMOUS

    # refresh sem sessão de volta: os tokens guardados estão mortos
    if not user.is_authenticated:
        logger.info("backend não devolveu usuário para a sessão salva")
        clear_session(request)
        return ANONYMOUS
    return user


def get_user(request) -> BackendUser:
    if not hasattr(request, "_cached_backend_user"):
        request._cached_backend_user = _restore_user(request)
    return request._cached_backend_user


def admin_required(view_func):
    """Sem sessão ativa no backend, manda para a tela de login."""

    @functools.wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.backend_user.is_authenticated:
            return redirect("auth")
        return view_func(request, *args, **kwargs)

    return _wrapped
