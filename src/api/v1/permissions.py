"""Custom DRF permissions and tenant resolution for the back office API."""
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import SAFE_METHODS, BasePermission


def _requested_store_id(request, view):
    """Store id passed explicitly by the client, if any."""
    query_params = getattr(request, "query_params", {}) or {}
    data = getattr(request, "data", {}) or {}
    kwargs = getattr(view, "kwargs", None) or {}
    store_id = query_params.get("store")
    if not store_id and hasattr(data, "get"):
        store_id = data.get("store")
    return store_id or kwargs.get("store_id")


def resolve_business(request, view=None):
    """Return the business (tenant) the request acts on.

    Resolution order: an explicit ``store`` parameter the user belongs to,
    the store selected in the session, then the user's default store.
    Raises ``PermissionDenied`` when the user belongs to no active business.
    """
    from stores.services import get_user_business

    store_id = _requested_store_id(request, view)
    business = get_user_business(request.user, store_id=store_id)
    if business is None:
        current = getattr(request, "current_business", None)
        if current:
            business = current
    if business is None:
        raise PermissionDenied("Aucune entreprise active associee a cet utilisateur.")
    return business


def _object_business_id(obj):
    business_id = getattr(obj, "business_id", None)
    if business_id:
        return business_id
    rule = getattr(obj, "rule", None)
    if rule is not None:
        return rule.business_id
    return None


class IsAdminOrManager(BasePermission):
    """Allow access to users with the ADMIN or MANAGER role."""

    message = "Reserve aux managers et administrateurs."

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.can_manage


class IsManagerOrReadOnly(BasePermission):
    """Everyone reads; only managers and administrators write."""

    message = "Modification reservee aux managers et administrateurs."

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.can_manage


class IsBusinessMember(BasePermission):
    """Object-level check that the object belongs to the user's business."""

    message = "Cet objet n'appartient pas a votre entreprise."

    def has_object_permission(self, request, view, obj):
        if getattr(request.user, "is_superuser", False):
            return True
        business_id = _object_business_id(obj)
        if business_id is None:
            return False
        return request.user.store_users.filter(
            store__business_id=business_id,
            store__is_active=True,
        ).exists()
