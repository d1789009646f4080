# farmacia/core/dependency_injection.py
"""
Módulo de Inyección de Dependencias (DI).
Responsable de instanciar los Use Cases con sus dependencias de Repositorios
concretos de la capa de Infraestructura.
"""
from django.utils import timezone

from farmacia.infrastructure.instances import (
    producto_repo,
    carrito_repo,
    direccion_repo,
    reserva_repo,
    suscripcion_repo,
    usuario_repo,
    generador_id,
)
from .use_cases import (
    ListarCatalogoUseCase,
    GestionarCatalogoAdminUseCase,
    GestionarCarritoUseCase,
    LibretaDireccionesUseCase,
    LibroReservasUseCase,
    ConfirmarReservaUseCase,
    SuscribirNewsletterUseCase,
    AutenticarUsuarioUseCase,
)

# ====================================================================
# Use Cases de Catálogo/Administración
# ====================================================================

def get_listar_catalogo_use_case() -> ListarCatalogoUseCase:
    return ListarCatalogoUseCase(producto_repo)

def get_gestionar_catalogo_admin_use_case() -> GestionarCatalogoAdminUseCase:
    return GestionarCatalogoAdminUseCase(producto_repo)


# ====================================================================
# Use Cases de Carrito/Reservas
# ====================================================================

def get_gestionar_carrito_use_case() -> GestionarCarritoUseCase:
    return GestionarCarritoUseCase(carrito_repo, producto_repo)

def get_libreta_direcciones_use_case() -> LibretaDireccionesUseCase:
    return LibretaDireccionesUseCase(direccion_repo, generador_id)

def get_libro_reservas_use_case() -> LibroReservasUseCase:
    return LibroReservasUseCase(reserva_repo)

def get_confirmar_reserva_use_case() -> ConfirmarReservaUseCase:
    return ConfirmarReservaUseCase(
        carrito_uc=get_gestionar_carrito_use_case(),
        direcciones_uc=get_libreta_direcciones_use_case(),
        reservas_uc=get_libro_reservas_use_case(),
        generador_id=generador_id,
        reloj=timezone.now,
    )


# ====================================================================
# Use Cases de Newsletter/Autenticación
# ====================================================================

def get_suscribir_newsletter_use_case() -> SuscribirNewsletterUseCase:
    return SuscribirNewsletterUseCase(suscripcion_repo)

def get_autenticar_usuario_use_case() -> AutenticarUsuarioUseCase:
    return AutenticarUsuarioUseCase(usuario_repo)
