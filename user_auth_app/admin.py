from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User

from .models import UserProfile


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    verbose_name_plural = 'Profile'
    fk_name = 'user'


class CustomUserAdmin(BaseUserAdmin):
    inlines = (UserProfileInline,)

    @admin.display(description='Role')
    def get_role(self, instance):
        return instance.profile.role

    @admin.display(description='Banned', boolean=True)
    def get_banned(self, instance):
        return instance.profile.banned

    list_display = ('username', 'email', 'first_name', 'last_name', 'is_staff', 'get_role', 'get_banned')
    list_filter = BaseUserAdmin.list_filter + ('profile__role', 'profile__banned')


admin.site.unregister(User)
admin.site.register(User, CustomUserAdmin)
