"""
Read-only aggregates for the admin and agent dashboards.

All queries go through the live order manager, so soft-deleted orders never count.
"""
import calendar
from decimal import Decimal

from django.conf import settings
from django.contrib.auth.models import User
from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from orders_app.managers import REVENUE_BEARING_STATUSES
from orders_app.models import Order
from user_auth_app.models import UserProfile

# Orders an agent is currently working on.
AGENT_ACTIVE_STATUSES = (
    Order.Status.ASSIGNED,
    Order.Status.IN_PROGRESS,
    Order.Status.DELIVERED,
    Order.Status.REVISION_REQUESTED,
)

ZERO = Decimal('0.00')


def months_before(moment, months):
    """Returns `moment` moved back by whole calendar months, clamping the day to the month length."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def revenue_totals():
    """Sums amount, platform commission and agent earnings over revenue-bearing orders."""
    totals = Order.objects.revenue_bearing().aggregate(
        revenue=Sum('amount'),
        platform_commission=Sum('platform_commission'),
        agent_earnings=Sum('agent_earnings'),
    )
    return {key: value if value is not None else ZERO for key, value in totals.items()}


def revenue_by_month(now=None, months=None):
    """
    Revenue of the trailing window grouped by the month the orders were created in.

    Returns:
        list: `{'month': 'YYYY-MM', 'total': Decimal, 'count': int}` for every month that has
        revenue-bearing orders, oldest first.
    """
    now = now or timezone.now()
    months = months or settings.MARKETPLACE_REVENUE_WINDOW_MONTHS
    rows = (
        Order.objects.revenue_bearing()
        .filter(created_at__gte=months_before(now, months))
        .annotate(month=TruncMonth('created_at'))
        .values('month')
        .annotate(total=Sum('amount'), count=Count('id'))
        .order_by('month')
    )
    return [
        {'month': row['month'].strftime('%Y-%m'), 'total': row['total'], 'count': row['count']}
        for row in rows
    ]


def admin_analytics(now=None):
    """
    Builds the figures shown on the admin dashboard.

    Returns:
        dict: revenue totals, order counts, the number of active agents, the newest orders and
        the monthly revenue of the trailing window.
    """
    live_orders = Order.objects.all()
    data = revenue_totals()
    data.update({
        'total_orders': live_orders.count(),
        'pending_orders': live_orders.with_status(Order.Status.PENDING).count(),
        'active_agents': User.objects.filter(
            profile__role=UserProfile.Role.AGENT,
            profile__banned=False,
        ).count(),
        'recent_orders': list(
            live_orders.with_parties().order_by('-created_at')[:settings.MARKETPLACE_RECENT_ORDERS_LIMIT]
        ),
        'revenue_by_month': revenue_by_month(now),
    })
    return data


def agent_stats(agent):
    """
    Earnings and workload of one agent.

    `total_earnings` is the gross amount of the agent's completed orders; `agent_share` is the
    part of that amount left after platform commission.
    """
    own_orders = Order.objects.for_seller(agent)
    completed = own_orders.with_status(Order.Status.COMPLETED)
    sums = completed.aggregate(total=Sum('amount'), share=Sum('agent_earnings'))
    return {
        'total_earnings': sums['total'] if sums['total'] is not None else ZERO,
        'agent_share': sums['share'] if sums['share'] is not None else ZERO,
        'completed_orders': completed.count(),
        'in_progress_orders': own_orders.with_status(*AGENT_ACTIVE_STATUSES).count(),
    }


def pending_orders():
    """Unassigned pending orders that agents can accept, newest first."""
    return Order.objects.pending_unassigned().with_parties().order_by('-created_at')


def agent_order_history(agent):
    return Order.objects.for_seller(agent).with_parties().order_by('-created_at')


def user_counts():
    """Number of accounts in total and per role."""
    return User.objects.aggregate(
        total_users=Count('id'),
        super_admins=Count('id', filter=Q(profile__role=UserProfile.Role.SUPER_ADMIN)),
        agents=Count('id', filter=Q(profile__role=UserProfile.Role.AGENT)),
        regular_users=Count('id', filter=Q(profile__role=UserProfile.Role.USER)),
    )
