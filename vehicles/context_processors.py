from .entities import ANONYMOUS


def backend_user(request):
    return {"backend_user": getattr(request, "backend_user", ANONYMOUS)}
