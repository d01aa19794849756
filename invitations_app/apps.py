from django.apps import AppConfig


class InvitationsAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'invitations_app'
