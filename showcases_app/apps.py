from django.apps import AppConfig


class ShowcasesAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'showcases_app'
