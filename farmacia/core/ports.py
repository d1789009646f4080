# farmacia/core/ports.py
"""
Definición de los Puertos (Interfaces/Protocolos) de la Arquitectura Limpia.

Estos protocolos definen el contrato que la capa de Infraestructura (Repositorios,
almacenes de estado) DEBE seguir para conectarse a la capa Core (Casos de Uso).
"""

from typing import Protocol, List, Optional, Iterable, Any
from abc import abstractmethod

from farmacia.core.entities import (
    Producto, ItemCarrito, Direccion, Reserva, Suscripcion, Usuario
)


# ====================================================================
# 1. ALMACÉN DE ESTADO POR IDENTIDAD
# ====================================================================

class IAlmacenEstado(Protocol):
    """
    Tabla clave -> valor con la vida del proceso (o del backend inyectado).
    Las claves se enumeran en orden de inserción.
    """

    @abstractmethod
    def obtener(self, clave: str, default: Any = None) -> Any: ...

    @abstractmethod
    def guardar(self, clave: str, valor: Any) -> None: ...

    @abstractmethod
    def eliminar(self, clave: str) -> None: ...

    @abstractmethod
    def claves(self) -> List[str]: ...

    @abstractmethod
    def limpiar(self) -> None: ...


class IGeneradorId(Protocol):
    """Identificadores derivados del reloj, únicos durante la vida del proceso."""

    @abstractmethod
    def siguiente(self) -> int: ...


# ====================================================================
# 2. REPOSITORIOS (Puertos de Persistencia)
# ====================================================================

class IProductoRepository(Protocol):
    """Catálogo: lectura para el carrito y mutaciones del administrador."""

    @abstractmethod
    def buscar_por_id(self, producto_id: int) -> Optional[Producto]: ...

    @abstractmethod
    def listar_todos(self) -> List[Producto]: ...

    @abstractmethod
    def crear(self, nombre: str, precio: int, stock: int, descuento: int = 0, img: Optional[str] = None) -> Producto: ...

    @abstractmethod
    def actualizar_stock(self, producto_id: int, stock: int) -> Optional[Producto]: ...

    @abstractmethod
    def actualizar_descuento(self, producto_id: int, descuento: int) -> Optional[Producto]: ...

    @abstractmethod
    def eliminar(self, producto_id: int) -> None: ...


class ICarritoRepository(Protocol):

    @abstractmethod
    def obtener(self, email: str) -> List[ItemCarrito]: ...

    @abstractmethod
    def guardar(self, email: str, items: List[ItemCarrito]) -> None: ...


class IDireccionRepository(Protocol):

    @abstractmethod
    def obtener(self, email: str) -> List[Direccion]: ...

    @abstractmethod
    def guardar(self, email: str, direcciones: List[Direccion]) -> None: ...


class IReservaRepository(Protocol):

    @abstractmethod
    def obtener(self, email: str) -> List[Reserva]: ...

    @abstractmethod
    def guardar(self, email: str, reservas: List[Reserva]) -> None: ...

    @abstractmethod
    def emails(self) -> Iterable[str]: ...


class ISuscripcionRepository(Protocol):

    @abstractmethod
    def crear(self, suscripcion: Suscripcion) -> Suscripcion: ...

    @abstractmethod
    def listar_todas(self) -> List[Suscripcion]: ...


class IUsuarioRepository(Protocol):
    """Usuarios de demo (conjunto fijo, sin alta ni baja)."""

    @abstractmethod
    def buscar_por_credenciales(self, email: str, password: str) -> Optional[Usuario]: ...

    @abstractmethod
    def buscar_por_email(self, email: str) -> Optional[Usuario]: ...
