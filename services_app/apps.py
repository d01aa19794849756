from django.apps import AppConfig


class ServicesAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'services_app'
