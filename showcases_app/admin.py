from django.contrib import admin

from .models import Showcase


@admin.register(Showcase)
class ShowcaseAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'order', 'is_active', 'created_at')
    list_filter = ('category', 'is_active')
    list_editable = ('order', 'is_active')
    search_fields = ('title', 'description')
