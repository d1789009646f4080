"""
Capa de Infraestructura: Implementación de Repositorios.

Esta capa traduce las operaciones abstractas definidas en los Puertos del Core
en llamadas concretas al framework (Django ORM, almacenes de estado en memoria).
"""
import logging
from typing import Dict, Iterable, List, Optional

from django.apps import apps
from django.db import DatabaseError, transaction

# Importaciones de la capa CORE (ENTIDADES y PUERTOS)
from farmacia.core.entities import (
    Producto, ItemCarrito, Direccion, Reserva, Suscripcion, Usuario, Rol
)
from farmacia.core.ports import (
    IAlmacenEstado,
    IProductoRepository,
    ICarritoRepository,
    IDireccionRepository,
    IReservaRepository,
    ISuscripcionRepository,
    IUsuarioRepository,
)

from .mappers import ProductoMapper, SuscripcionMapper

logger = logging.getLogger(__name__)


# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca el modelo de Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


def recortar(model, campo: str, valor: Optional[str]) -> Optional[str]:
    """Ajusta un texto al largo máximo de la columna del modelo."""
    max_length = model._meta.get_field(campo).max_length
    if valor is None or max_length is None:
        return valor
    return valor[:max_length]


# ====================================================================
# 1. CATÁLOGO
# ====================================================================

class ProductoRepositoryDjango(IProductoRepository):
    """
    Catálogo persistido con el Django ORM. Un fallo de la base de datos se
    registra en el log y el catálogo se comporta como vacío.
    """

    @property
    def ProductoModel(self):
        return get_model('catalog', 'Producto')

    def _activos(self):
        return self.ProductoModel.objects.filter(activo=True)

    def buscar_por_id(self, producto_id: int) -> Optional[Producto]:
        try:
            return ProductoMapper.to_entity(self._activos().get(pk=producto_id))
        except self.ProductoModel.DoesNotExist:
            return None
        except DatabaseError:
            logger.exception("Error al buscar el producto %s", producto_id)
            return None

    def listar_todos(self) -> List[Producto]:
        try:
            return [ProductoMapper.to_entity(model) for model in self._activos().order_by('id')]
        except DatabaseError:
            logger.exception("Error al listar el catálogo; se trata como vacío")
            return []

    @transaction.atomic
    def crear(self, nombre: str, precio: int, stock: int, descuento: int = 0, img: Optional[str] = None) -> Producto:
        model = self.ProductoModel.objects.create(
            nombre=recortar(self.ProductoModel, 'nombre', nombre),
            precio=precio,
            stock=stock,
            descuento=descuento,
            img=recortar(self.ProductoModel, 'img', img),
        )
        return ProductoMapper.to_entity(model)

    def _actualizar(self, producto_id: int, **campos) -> Optional[Producto]:
        actualizados = self._activos().filter(pk=producto_id).update(**campos)
        if not actualizados:
            return None
        return self.buscar_por_id(producto_id)

    def actualizar_stock(self, producto_id: int, stock: int) -> Optional[Producto]:
        return self._actualizar(producto_id, stock=stock)

    def actualizar_descuento(self, producto_id: int, descuento: int) -> Optional[Producto]:
        return self._actualizar(producto_id, descuento=descuento)

    def eliminar(self, producto_id: int) -> None:
        # Borrado lógico: la fila se conserva en la base
        self.ProductoModel.objects.filter(pk=producto_id).update(activo=False)


class ProductoRepositoryMemoria(IProductoRepository):
    """Copia en memoria del catálogo (demo y pruebas). Aquí eliminar sí borra."""

    def __init__(self, productos: Optional[Iterable[Producto]] = None):
        self._productos: Dict[int, Producto] = {p.id: p for p in (productos or [])}

    def buscar_por_id(self, producto_id: int) -> Optional[Producto]:
        return self._productos.get(producto_id)

    def listar_todos(self) -> List[Producto]:
        return list(self._productos.values())

    def crear(self, nombre: str, precio: int, stock: int, descuento: int = 0, img: Optional[str] = None) -> Producto:
        nuevo_id = max(self._productos, default=0) + 1
        producto = Producto(id=nuevo_id, nombre=nombre, precio=precio, stock=stock, descuento=descuento, img=img)
        self._productos[nuevo_id] = producto
        return producto

    def actualizar_stock(self, producto_id: int, stock: int) -> Optional[Producto]:
        producto = self._productos.get(producto_id)
        if producto:
            producto.stock = stock
        return producto

    def actualizar_descuento(self, producto_id: int, descuento: int) -> Optional[Producto]:
        producto = self._productos.get(producto_id)
        if producto:
            producto.descuento = descuento
        return producto

    def eliminar(self, producto_id: int) -> None:
        self._productos.pop(producto_id, None)


# ====================================================================
# 2. ESTADO POR USUARIO (carrito, direcciones, reservas)
# ====================================================================

class CarritoRepositoryEstado(ICarritoRepository):

    def __init__(self, almacen: IAlmacenEstado):
        self.almacen = almacen

    def obtener(self, email: str) -> List[ItemCarrito]:
        return list(self.almacen.obtener(email, []))

    def guardar(self, email: str, items: List[ItemCarrito]) -> None:
        self.almacen.guardar(email, list(items))


class DireccionRepositoryEstado(IDireccionRepository):

    def __init__(self, almacen: IAlmacenEstado):
        self.almacen = almacen

    def obtener(self, email: str) -> List[Direccion]:
        return list(self.almacen.obtener(email, []))

    def guardar(self, email: str, direcciones: List[Direccion]) -> None:
        self.almacen.guardar(email, list(direcciones))


class ReservaRepositoryEstado(IReservaRepository):

    def __init__(self, almacen: IAlmacenEstado):
        self.almacen = almacen

    def obtener(self, email: str) -> List[Reserva]:
        return list(self.almacen.obtener(email, []))

    def guardar(self, email: str, reservas: List[Reserva]) -> None:
        self.almacen.guardar(email, list(reservas))

    def emails(self) -> List[str]:
        return self.almacen.claves()


# ====================================================================
# 3. NEWSLETTER Y USUARIOS
# ====================================================================

class SuscripcionRepositoryDjango(ISuscripcionRepository):

    @property
    def SuscripcionModel(self):
        return get_model('infrastructure', 'Suscripcion')

    def crear(self, suscripcion: Suscripcion) -> Suscripcion:
        model = self.SuscripcionModel.objects.create(
            nombre=recortar(self.SuscripcionModel, 'nombre', suscripcion.nombre),
            email=recortar(self.SuscripcionModel, 'email', suscripcion.email),
        )
        logger.info("Nueva suscripción al newsletter: %s", model.email)
        return SuscripcionMapper.to_entity(model)

    def listar_todas(self) -> List[Suscripcion]:
        return [SuscripcionMapper.to_entity(model) for model in self.SuscripcionModel.objects.all()]


class UsuarioRepositoryDemo(IUsuarioRepository):
    """Usuarios fijos de demo, definidos como diccionarios {email, password, rol}."""

    def __init__(self, usuarios: Iterable[dict]):
        self._usuarios = [
            Usuario(email=u['email'], password=u['password'], rol=Rol(u.get('rol', Rol.USUARIO)))
            for u in usuarios
        ]

    def buscar_por_email(self, email: str) -> Optional[Usuario]:
        return next((u for u in self._usuarios if u.email == email), None)

    def buscar_por_credenciales(self, email: str, password: str) -> Optional[Usuario]:
        usuario = self.buscar_por_email(email)
        if usuario and usuario.password == password:
            return usuario
        return None
