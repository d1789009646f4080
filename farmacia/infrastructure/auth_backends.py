# farmacia/infrastructure/auth_backends.py
"""
Backend de autenticación para los usuarios de demo.

Las credenciales se comparan contra el conjunto fijo configurado en
FARMACIA_USUARIOS_DEMO; el usuario de Django se crea (o sincroniza su rol)
la primera vez que inicia sesión.
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

logger = logging.getLogger(__name__)


class UsuarioDemoBackend(BaseBackend):

    def authenticate(self, request, email=None, password=None, username=None, **kwargs):
        # Importación diferida: el módulo DI crea los repositorios al importarse
        from farmacia.core.dependency_injection import get_autenticar_usuario_use_case

        usuario = get_autenticar_usuario_use_case().ejecutar(email or username, password)
        if usuario is None:
            return None

        UserModel = get_user_model()
        es_admin = usuario.es_admin
        user, creado = UserModel.objects.get_or_create(
            email=usuario.email,
            defaults={'rol': usuario.rol.value, 'is_staff': es_admin, 'is_superuser': es_admin},
        )
        if creado:
            user.set_unusable_password()
            user.save(update_fields=['password'])
            logger.info("Usuario de demo %s creado con rol %s", user.email, user.rol)
        elif user.rol != usuario.rol.value:
            user.rol = usuario.rol.value
            user.is_staff = user.is_superuser = es_admin
            user.save(update_fields=['rol', 'is_staff', 'is_superuser'])

        return user if user.is_active else None

    def get_user(self, user_id):
        UserModel = get_user_model()
        try:
            user = UserModel.objects.get(pk=user_id)
        except UserModel.DoesNotExist:
            return None
        return user if user.is_active else None
