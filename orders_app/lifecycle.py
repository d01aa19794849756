"""
State machine of an order after checkout.

Every mutating function locks the order row, applies the change and appends exactly one
`OrderStatusHistory` row inside the same transaction. Orders are always looked up through the
live manager, so a soft-deleted order behaves exactly like a missing one (`OrderNotFound`).

Role gating (who may call what) is done by the API layer through the capability table; the
functions here only enforce the rules that depend on the order itself: ownership, the transition
table and the eligibility of the assignee.
"""
import logging
from decimal import ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from settings_app.provider import get_default_commission_rate
from user_auth_app.roles import ASSIGNABLE_ROLES, Role, is_super_admin, role_of
from .commission import CENT, compute_split, parse_commission_rate
from .exceptions import (
    IllegalTransition,
    InvalidAssignee,
    InvalidStatus,
    NotOrderOwner,
    OrderAlreadyAssigned,
    OrderNotFound,
)
from .models import Order, OrderStatusHistory

logger = logging.getLogger(__name__)

Status = Order.Status

# Targets reachable through `update_status`. `assigned` is entered only by `assign` and
# `accept_pending`, never by a plain status update.
TRANSITIONS = {
    Status.PENDING: frozenset({Status.CANCELLED, Status.DISPUTED}),
    Status.ASSIGNED: frozenset({Status.IN_PROGRESS, Status.CANCELLED, Status.DISPUTED}),
    Status.IN_PROGRESS: frozenset({Status.DELIVERED, Status.CANCELLED, Status.DISPUTED}),
    Status.DELIVERED: frozenset({
        Status.COMPLETED,
        Status.REVISION_REQUESTED,
        Status.CANCELLED,
        Status.DISPUTED,
    }),
    Status.REVISION_REQUESTED: frozenset({Status.DELIVERED, Status.CANCELLED, Status.DISPUTED}),
    Status.COMPLETED: frozenset(),
    Status.CANCELLED: frozenset(),
    Status.DISPUTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)

DELETED_SNAPSHOT = 'deleted'


def can_transition(current, target):
    return target in TRANSITIONS.get(current, frozenset())


def visible_orders(user):
    """
    Returns the live orders `user` may read.

    Super admins see every order, agents the orders they sell and everyone else the orders
    they bought.
    """
    queryset = Order.objects.with_parties()
    if is_super_admin(user):
        return queryset
    if role_of(user) == Role.AGENT:
        return queryset.for_seller(user)
    return queryset.for_buyer(user)


def _lock_order(order_id, queryset=None):
    queryset = Order.objects.all() if queryset is None else queryset
    try:
        return queryset.select_for_update().get(pk=order_id)
    except (Order.DoesNotExist, ValidationError, ValueError):
        raise OrderNotFound()


def _record(order, status, user, note=None):
    return OrderStatusHistory.objects.create(
        order=order,
        status=status,
        changed_by=user,
        note=note,
    )


def _check_assignee(agent):
    if agent is None or role_of(agent) not in ASSIGNABLE_ROLES or agent.profile.banned:
        raise InvalidAssignee()


def get_order(order_id, actor):
    """
    Fetches one order on behalf of `actor`.

    Raises:
        OrderNotFound: the order does not exist, is soft-deleted or is not visible to `actor`.
    """
    try:
        return visible_orders(actor).get(pk=order_id)
    except (Order.DoesNotExist, ValidationError, ValueError):
        raise OrderNotFound()


def assign(order_id, agent, acting_user, custom_rate=None):
    """
    Assigns an order to an agent and fixes the commission split.

    Args:
        order_id: Primary key of the order.
        agent: The user who will fulfil the order (an active agent or super admin).
        acting_user: The administrator performing the assignment.
        custom_rate: Optional commission percentage overriding the platform default.

    Returns:
        Order: the updated order.

    Raises:
        OrderNotFound: the order does not exist or is soft-deleted.
        InvalidAssignee: `agent` is not an active agent or super admin.
        InvalidCommissionRate: `custom_rate` lies outside [0, 100].
        IllegalTransition: the order is already completed, cancelled or disputed.
    """
    _check_assignee(agent)
    if custom_rate is not None:
        rate = parse_commission_rate(custom_rate)
    else:
        rate = get_default_commission_rate()

    with transaction.atomic():
        order = _lock_order(order_id)
        if order.status in TERMINAL_STATUSES:
            raise IllegalTransition(f"A {order.status} order cannot be reassigned.")

        split = compute_split(order.amount, rate)
        order.seller = agent
        order.status = Status.ASSIGNED
        # The split uses the rate as given; only the stored rate is cut to two decimals.
        order.platform_commission_rate = rate.quantize(CENT, rounding=ROUND_HALF_UP)
        order.platform_commission = split.platform_commission
        order.agent_earnings = split.agent_earnings
        order.save()

        _record(
            order,
            Status.ASSIGNED,
            acting_user,
            f"Assigned to agent {agent.username} (Commission: {rate}%, "
            f"Platform: ${split.platform_commission:.2f}, Agent: ${split.agent_earnings:.2f})",
        )

    logger.info("Order %s assigned to user %s by user %s at %s%%",
                order.order_number, agent.pk, acting_user.pk, rate)
    return order


def accept_pending(order_id, agent):
    """
    Lets an agent claim an unassigned pending order at the default commission rate.

    The claim is a single conditional UPDATE on `seller IS NULL AND status = 'pending'`, so of
    two agents accepting the same order at the same time exactly one gets it.

    Raises:
        OrderNotFound: the order does not exist or is soft-deleted.
        OrderAlreadyAssigned: another agent claimed it first, or it is no longer pending.
        InvalidAssignee: `agent` is banned or does not hold an assignable role.
    """
    _check_assignee(agent)
    rate = get_default_commission_rate()
    try:
        amount = Order.objects.values_list('amount', flat=True).get(pk=order_id)
    except (Order.DoesNotExist, ValidationError, ValueError):
        raise OrderNotFound()

    # Nothing is locked between the read above and the UPDATE below; the UPDATE's own
    # condition decides which of several concurrent claims wins.
    split = compute_split(amount, rate)
    with transaction.atomic():
        claimed = Order.objects.filter(
            pk=order_id,
            seller__isnull=True,
            status=Status.PENDING,
        ).update(
            seller=agent,
            status=Status.ASSIGNED,
            platform_commission_rate=rate,
            platform_commission=split.platform_commission,
            agent_earnings=split.agent_earnings,
            updated_at=timezone.now(),
        )
        if not claimed:
            if Order.objects.filter(pk=order_id).exists():
                raise OrderAlreadyAssigned()
            raise OrderNotFound()

        order = Order.objects.get(pk=order_id)
        _record(
            order,
            Status.ASSIGNED,
            agent,
            f"Order accepted by agent (Commission: {rate}%, Agent Earnings: ${split.agent_earnings:.2f})",
        )

    logger.info("Order %s accepted by agent %s", order.order_number, agent.pk)
    return order


def update_status(order_id, new_status, acting_user, note=None, delivery_message=None):
    """
    Moves an order to `new_status` following the transition table.

    Agents may only change orders they sell; super admins may change any order.

    Args:
        order_id: Primary key of the order.
        new_status: The target status value.
        acting_user: The agent or administrator making the change.
        note: Optional history note. Defaults to "Status updated to <status>".
        delivery_message: Stored on the order when moving to `delivered`.

    Returns:
        Order: the updated order.

    Raises:
        InvalidStatus: `new_status` is not a known status.
        OrderNotFound: the order does not exist or is soft-deleted.
        NotOrderOwner: an agent tried to change somebody else's order.
        IllegalTransition: the table does not allow the move.
    """
    if new_status not in Status.values:
        raise InvalidStatus(f"Unknown order status: {new_status}.")

    with transaction.atomic():
        order = _lock_order(order_id)
        if not is_super_admin(acting_user) and order.seller_id != acting_user.pk:
            raise NotOrderOwner()
        if not can_transition(order.status, new_status):
            raise IllegalTransition(
                f"Cannot change an order from {order.status} to {new_status}."
            )

        previous = order.status
        order.status = new_status
        if new_status == Status.COMPLETED:
            order.completed_at = timezone.now()
        if new_status == Status.DELIVERED and delivery_message is not None:
            order.delivery_message = delivery_message
        order.save()

        _record(order, new_status, acting_user, note or f"Status updated to {new_status}")

    logger.info("Order %s moved from %s to %s by user %s",
                order.order_number, previous, new_status, acting_user.pk)
    return order


def submit_requirements(order_id, buyer, requirements):
    """
    Stores the buyer's brief on one of their open orders.

    Raises:
        OrderNotFound: no live order with this id was bought by `buyer`.
        IllegalTransition: the order is already completed, cancelled or disputed.
    """
    with transaction.atomic():
        order = _lock_order(order_id, Order.objects.for_buyer(buyer))
        if order.status in TERMINAL_STATUSES:
            raise IllegalTransition(f"Requirements cannot be changed on a {order.status} order.")

        order.requirements = requirements
        order.save()
        _record(order, order.status, buyer, 'Requirements updated by buyer')

    logger.info("Requirements updated on order %s", order.order_number)
    return order


def soft_delete(order_id, acting_user):
    """
    Hides an order from every read path by setting `deleted_at`.

    Raises:
        OrderNotFound: the order does not exist or is already deleted.
    """
    with transaction.atomic():
        order = _lock_order(order_id)
        order.deleted_at = timezone.now()
        order.save()
        _record(order, DELETED_SNAPSHOT, acting_user, 'Order deleted')

    logger.info("Order %s soft-deleted by user %s", order.order_number, acting_user.pk)
    return order
