from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ShowcaseViewSet

router = DefaultRouter()
router.register(r'showcases', ShowcaseViewSet, basename='showcase')

urlpatterns = [
    path('', include(router.urls)),
]
