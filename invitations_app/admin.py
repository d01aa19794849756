from django.contrib import admin

from .models import Invitation


@admin.register(Invitation)
class InvitationAdmin(admin.ModelAdmin):
    list_display = ('email', 'role', 'invited_by', 'accepted', 'expires_at', 'created_at')
    list_filter = ('role', 'accepted')
    search_fields = ('email',)
    readonly_fields = ('token', 'invited_by', 'accepted', 'accepted_at', 'created_at')
