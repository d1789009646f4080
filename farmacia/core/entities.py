from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

# ====================================================================
# ENTIDADES CORE
# Representan los objetos de negocio puros.
# ====================================================================

ESTADO_PENDIENTE = "Pendiente"
METODO_PAGO_DEFAULT = "Efectivo"
NOMBRE_SUSCRIPTOR_DEFAULT = "Sin nombre"

ESTADOS_RESERVA = [
    ESTADO_PENDIENTE,
    "Preparando",
    "Lista para retiro",
    "En despacho",
    "Entregada",
    "Cancelada",
]


def redondear(valor) -> int:
    """Redondea al entero más cercano (mitad hacia arriba)."""
    return int(Decimal(valor).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class Rol(str, Enum):
    ADMIN = "ADMIN"
    USUARIO = "USUARIO"

    def __str__(self):
        return self.value


class TipoEntrega(str, Enum):
    RETIRO = "retiro"
    DESPACHO = "despacho"

    def __str__(self):
        return self.value

    @classmethod
    def desde_texto(cls, valor) -> "TipoEntrega":
        """Cualquier valor distinto de despacho se interpreta como retiro en local."""
        if isinstance(valor, cls):
            return valor
        texto = str(valor or '').strip().lower()
        return cls.DESPACHO if texto == cls.DESPACHO.value else cls.RETIRO


@dataclass
class Usuario:
    """Identidad de demo: email, contraseña en texto plano y rol."""
    email: str
    password: str
    rol: Rol = Rol.USUARIO

    @property
    def es_admin(self) -> bool:
        return self.rol == Rol.ADMIN


@dataclass
class Producto:
    """Entidad del Producto del catálogo de la farmacia."""
    id: int
    nombre: str
    precio: int
    stock: int
    descuento: int = 0
    img: Optional[str] = None

    @property
    def precio_con_descuento(self) -> int:
        return redondear(Decimal(self.precio) * (100 - self.descuento) / 100)


@dataclass
class ItemCarrito:
    """Línea del carrito. Nombre, precio y descuento son una copia del producto al agregarlo."""
    producto_id: int
    nombre: str
    precio: int
    cantidad: int
    descuento: int = 0

    @property
    def precio_con_descuento(self) -> int:
        """Precio unitario con el descuento aplicado, redondeado por línea."""
        return redondear(Decimal(self.precio) * (100 - self.descuento) / 100)

    @property
    def subtotal(self) -> int:
        return self.precio_con_descuento * self.cantidad


@dataclass(frozen=True)
class Direccion:
    """Dirección de despacho de un usuario."""
    id: int
    calle: str
    comuna: str
    ref: str = ''


@dataclass(frozen=True)
class ItemReserva:
    """Snapshot de un item al momento de confirmar (precio sin descuento)."""
    nombre: str
    cantidad: int
    precio: int
    descuento: int = 0


@dataclass(frozen=True)
class Reserva:
    """
    Pedido creado en el checkout. Total y puntos quedan fijos al crearse;
    solo el estado cambia después, a través del libro de reservas.
    """
    id: int
    fecha: datetime
    items: Tuple[ItemReserva, ...]
    total: int
    tipo_entrega: TipoEntrega
    direccion: Optional[Direccion]
    metodo_pago: str = METODO_PAGO_DEFAULT
    estado: str = ESTADO_PENDIENTE
    puntos: int = 0


@dataclass(frozen=True)
class ReservaDeUsuario:
    """Reserva etiquetada con el email de su dueño (vistas de administración)."""
    email: str
    reserva: Reserva


@dataclass
class Suscripcion:
    """Suscripción al newsletter."""
    email: str
    nombre: str = NOMBRE_SUSCRIPTOR_DEFAULT
    fecha: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None


def calcular_total(items: List[ItemCarrito]) -> int:
    """Suma de los subtotales; el descuento se redondea en cada línea antes de sumar."""
    return sum(item.subtotal for item in items)


def calcular_puntos(total: int) -> int:
    return max(0, redondear(Decimal(total) / 1000))
