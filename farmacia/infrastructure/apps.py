from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'farmacia.infrastructure'
    label = 'infrastructure' # Label corto para AUTH_USER_MODEL
    verbose_name = 'Usuarios y Newsletter'
