# farmacia/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # Ruta completa de la aplicación
    name = 'farmacia.core'
    label = 'core'
    verbose_name = 'Entidades y Lógica (Core)'

    # Esta capa no tiene modelos de base de datos; Infrastructure se encarga de eso.
    default_auto_field = 'django.db.models.BigAutoField'
