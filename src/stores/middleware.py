"""Middleware resolving the business (tenant) of the signed-in user."""
from django.utils.functional import SimpleLazyObject

from stores.services import get_user_store


class CurrentBusinessMiddleware:
    """Set ``request.current_store`` and ``request.current_business``.

    The store comes from the ``store_id`` session key when the user still
    belongs to it, else from the user's default or first store. Both are
    lazy so anonymous and API-token requests pay nothing until read; DRF
    views resolve token users again in ``api.v1.permissions``.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        def _store():
            store_id = request.session.get("store_id") if hasattr(request, "session") else None
            store = get_user_store(request.user, store_id=store_id)
            if store is None and store_id:
                del request.session["store_id"]
            return store

        request.current_store = SimpleLazyObject(_store)
        request.current_business = SimpleLazyObject(
            lambda: request.current_store.business if request.current_store else None
        )
        return self.get_response(request)
