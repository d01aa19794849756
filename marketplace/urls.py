"""
Root URL configuration for the marketplace project.

Every app contributes its API routes under the common `/api/` prefix.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('user_auth_app.api.urls')),
    path('api/', include('services_app.api.urls')),
    path('api/', include('orders_app.api.urls')),
    path('api/', include('settings_app.api.urls')),
    path('api/', include('platform_stats_app.api.urls')),
    path('api/', include('invitations_app.api.urls')),
    path('api/', include('showcases_app.api.urls')),
]
