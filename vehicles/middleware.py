# vehicles/middleware.py
from django.utils.functional import SimpleLazyObject

from .auth import get_user
from .backend import build_gateway


class BackendSessionMiddleware:
    """
    Anexa `request.backend` (gateway do Supabase) e `request.backend_user`.
    Os dois são preguiçosos: páginas públicas de visitantes anônimos que
    não leem nada do backend não criam client algum.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.backend = SimpleLazyObject(build_gateway)
        request.backend_user = SimpleLazyObject(lambda: get_user(request))
        return self.get_response(request)
