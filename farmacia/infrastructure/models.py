# Define los modelos de la capa de infraestructura (autenticación y newsletter).

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager

# ====================================================================
# GESTOR DE USUARIOS PERSONALIZADO (email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gestor de usuarios donde el email es el identificador único
    para autenticación, en lugar del nombre de usuario.
    """
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('El email debe estar definido')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Crea y guarda un superusuario con el email y la contraseña entregados.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('rol', Usuario.ROL_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


# ====================================================================
# MODELO DE USUARIO
# ====================================================================

class Usuario(AbstractUser):
    """
    Usuario que inicia sesión con el email. Los usuarios de demo se crean
    al primer login a partir del conjunto fijo configurado en settings.
    """
    ROL_ADMIN = 'ADMIN'
    ROL_USUARIO = 'USUARIO'
    ROL_CHOICES = [
        (ROL_ADMIN, 'Administrador'),
        (ROL_USUARIO, 'Usuario'),
    ]

    # Quita el campo username por defecto
    username = None

    email = models.EmailField('Email', unique=True)
    rol = models.CharField(max_length=10, choices=ROL_CHOICES, default=ROL_USUARIO)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuario'
        verbose_name_plural = 'Usuarios'
        db_table = 'usuarios'

    def __str__(self):
        return self.email

    @property
    def es_admin(self) -> bool:
        return self.rol == self.ROL_ADMIN


class Suscripcion(models.Model):
    """Suscripción al newsletter. Solo se agregan registros."""
    nombre = models.CharField(max_length=150, blank=True, default='Sin nombre')
    email = models.CharField(max_length=254)
    fecha = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Suscripción'
        verbose_name_plural = 'Suscripciones'
        db_table = 'suscripciones'
        ordering = ['fecha', 'id']

    def __str__(self):
        return f"{self.nombre} <{self.email}>"
