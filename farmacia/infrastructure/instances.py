"""
Módulo de inicialización de los repositorios.
Debe importarse solo después de que Django esté configurado.
"""
from django.conf import settings

from .estado import crear_almacen
from .identificadores import GeneradorIdReloj
from .repositories import (
    ProductoRepositoryDjango as ProductoRepository,
    CarritoRepositoryEstado as CarritoRepository,
    DireccionRepositoryEstado as DireccionRepository,
    ReservaRepositoryEstado as ReservaRepository,
    SuscripcionRepositoryDjango as SuscripcionRepository,
    UsuarioRepositoryDemo as UsuarioRepository,
)

# Instancias globales: el estado por usuario vive lo que vive el proceso
producto_repo = ProductoRepository()
carrito_repo = CarritoRepository(crear_almacen('carritos'))
direccion_repo = DireccionRepository(crear_almacen('direcciones'))
reserva_repo = ReservaRepository(crear_almacen('reservas'))
suscripcion_repo = SuscripcionRepository()
usuario_repo = UsuarioRepository(settings.FARMACIA_USUARIOS_DEMO)
generador_id = GeneradorIdReloj()


def limpiar_estado():
    """Vacía carritos, direcciones y reservas (usado por las pruebas)."""
    for repo in (carrito_repo, direccion_repo, reserva_repo):
        repo.almacen.limpiar()
