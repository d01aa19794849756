"""
Role resolution and the capability table.

Every role-gated operation in the project is expressed as a capability. Views declare which
capability each action needs and the `HasCapability` permission consults the table below, so the
question "may this role do X" is answered in exactly one place.
"""
from .models import UserProfile

Role = UserProfile.Role


class Capability:
    """Names of the operations that are gated by role."""
    ASSIGN_ORDER = 'assign_order'
    ACCEPT_ORDER = 'accept_order'
    UPDATE_ORDER_STATUS = 'update_order_status'
    DELETE_ORDER = 'delete_order'
    SUBMIT_REQUIREMENTS = 'submit_requirements'
    PREVIEW_COMMISSION = 'preview_commission'
    VIEW_ORDERS = 'view_orders'
    VIEW_PENDING_ORDERS = 'view_pending_orders'
    VIEW_AGENT_DASHBOARD = 'view_agent_dashboard'
    VIEW_ANALYTICS = 'view_analytics'
    MANAGE_SETTINGS = 'manage_settings'
    MANAGE_SERVICES = 'manage_services'
    MANAGE_USERS = 'manage_users'
    MANAGE_INVITATIONS = 'manage_invitations'
    MANAGE_SHOWCASES = 'manage_showcases'


CAPABILITIES = {
    Role.SUPER_ADMIN: frozenset({
        Capability.ASSIGN_ORDER,
        Capability.UPDATE_ORDER_STATUS,
        Capability.DELETE_ORDER,
        Capability.PREVIEW_COMMISSION,
        Capability.VIEW_ORDERS,
        Capability.VIEW_ANALYTICS,
        Capability.MANAGE_SETTINGS,
        Capability.MANAGE_SERVICES,
        Capability.MANAGE_USERS,
        Capability.MANAGE_INVITATIONS,
        Capability.MANAGE_SHOWCASES,
    }),
    Role.AGENT: frozenset({
        Capability.ACCEPT_ORDER,
        Capability.UPDATE_ORDER_STATUS,
        Capability.VIEW_ORDERS,
        Capability.VIEW_PENDING_ORDERS,
        Capability.VIEW_AGENT_DASHBOARD,
    }),
    Role.USER: frozenset({
        Capability.SUBMIT_REQUIREMENTS,
        Capability.VIEW_ORDERS,
    }),
}

# Roles that may be chosen as the seller of an order.
ASSIGNABLE_ROLES = (Role.AGENT, Role.SUPER_ADMIN)


def role_of(user):
    """
    Returns the role of `user`, or None for anonymous users and users without a profile.

    A banned account keeps its stored role, but `capabilities_for` grants it nothing.
    """
    if user is None or not user.is_authenticated:
        return None
    try:
        return user.profile.role
    except UserProfile.DoesNotExist:
        return None


def capabilities_for(user):
    role = role_of(user)
    if role is None or user.profile.banned:
        return frozenset()
    return CAPABILITIES.get(role, frozenset())


def has_capability(user, capability):
    return capability in capabilities_for(user)


def is_super_admin(user):
    return role_of(user) == Role.SUPER_ADMIN and not user.profile.banned
