from django.urls import path

from .views import CommissionRateView, PlatformSettingListView

urlpatterns = [
    path('settings/', PlatformSettingListView.as_view(), name='setting-list'),
    path('settings/commission-rate/', CommissionRateView.as_view(), name='commission-rate'),
]
