from django.contrib import admin

from .models import PlatformSetting


@admin.register(PlatformSetting)
class PlatformSettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'value', 'updated_by', 'updated_at')
    search_fields = ('key', 'description')
    # Values are changed through the API, which validates them and records the editor.
    readonly_fields = ('key', 'value', 'updated_by', 'created_at', 'updated_at')
