from rest_framework.permissions import BasePermission

from user_auth_app.roles import has_capability


class HasCapability(BasePermission):
    """
    Grants access when the requesting user's role holds the capability the view requires.

    Views declare their requirements in a `required_capabilities` mapping keyed by the DRF
    action name (for ViewSets) or the lower-cased HTTP method (for APIViews). An action that is
    not listed in the mapping is denied.

    Example:
        required_capabilities = {
            'list': Capability.VIEW_ORDERS,
            'assign': Capability.ASSIGN_ORDER,
        }
    """
    message = "Your role does not allow this action."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        required = getattr(view, 'required_capabilities', {})
        key = getattr(view, 'action', None) or request.method.lower()
        capability = required.get(key)
        if capability is None:
            return False
        return has_capability(request.user, capability)
