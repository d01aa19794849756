from django.contrib import admin

from .models import Order, OrderStatusHistory


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    can_delete = False
    fields = ('created_at', 'status', 'changed_by', 'note')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders are inspected here, not edited: amounts, parties and status only change through
    checkout and the lifecycle functions, which also write the history.
    """
    list_display = ('order_number', 'service', 'buyer', 'seller', 'amount', 'status', 'created_at', 'deleted_at')
    list_filter = ('status',)
    search_fields = ('order_number', 'buyer__username', 'seller__username', 'payment_session_id')
    readonly_fields = [field.name for field in Order._meta.fields]
    inlines = [OrderStatusHistoryInline]

    def get_queryset(self, request):
        # Soft-deleted orders stay reachable for recovery.
        return Order.all_objects.select_related('buyer', 'seller', 'service')

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
