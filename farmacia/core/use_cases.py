# farmacia/core/use_cases.py
"""
Implementación de los Casos de Uso (Lógica de Negocio) de la aplicación.
Esta capa depende solo de las Entidades y Puertos (Interfaces) del Core,
garantizando el aislamiento de la lógica de negocio.
"""
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

# Entidades y Excepciones
from farmacia.core.entities import (
    Producto, ItemCarrito, Direccion, ItemReserva, Reserva, ReservaDeUsuario,
    Suscripcion, Usuario, TipoEntrega, ESTADO_PENDIENTE, METODO_PAGO_DEFAULT,
    NOMBRE_SUSCRIPTOR_DEFAULT, calcular_total, calcular_puntos,
)
from farmacia.core.exceptions import ProductoNoEncontradoError, DatosInvalidosError
from farmacia.core.coercion import (
    a_cantidad, a_entero, a_no_negativo, a_porcentaje, a_posicion, a_texto
)

# Puertos (Interfaces) - Importados de farmacia/core/ports.py
from farmacia.core.ports import (
    IProductoRepository,
    ICarritoRepository,
    IDireccionRepository,
    IReservaRepository,
    ISuscripcionRepository,
    IUsuarioRepository,
    IGeneradorId,
)

logger = logging.getLogger(__name__)


# ====================================================================
# 1. CASOS DE USO DEL CATÁLOGO
# ====================================================================

class ListarCatalogoUseCase:
    """Caso de Uso responsable de listar los productos del catálogo."""
    def __init__(self, producto_repo: IProductoRepository):
        self.producto_repo = producto_repo

    def ejecutar(self) -> List[Producto]:
        return self.producto_repo.listar_todos()


class GestionarCatalogoAdminUseCase:
    """
    Mutaciones del catálogo hechas por el administrador. Los campos numéricos
    se convierten sin validar: lo que no es número queda en 0.
    """
    def __init__(self, producto_repo: IProductoRepository):
        self.producto_repo = producto_repo

    def listar(self) -> List[Producto]:
        return self.producto_repo.listar_todos()

    def crear(self, nombre, precio, stock, descuento=None, img=None) -> Producto:
        producto = self.producto_repo.crear(
            nombre=a_texto(nombre),
            precio=a_no_negativo(precio),
            stock=a_no_negativo(stock),
            descuento=a_porcentaje(descuento),
            img=a_texto(img) or None,
        )
        logger.info("Producto %s creado (%s)", producto.id, producto.nombre)
        return producto

    def actualizar_stock(self, producto_id, stock) -> Optional[Producto]:
        return self.producto_repo.actualizar_stock(a_entero(producto_id), a_no_negativo(stock))

    def actualizar_descuento(self, producto_id, descuento) -> Optional[Producto]:
        return self.producto_repo.actualizar_descuento(a_entero(producto_id), a_porcentaje(descuento))

    def eliminar(self, producto_id) -> None:
        self.producto_repo.eliminar(a_entero(producto_id))
        logger.info("Producto %s eliminado del catálogo", producto_id)


# ====================================================================
# 2. CASOS DE USO DEL CARRITO
# ====================================================================

class GestionarCarritoUseCase:
    """
    Caso de Uso que centraliza la lógica del carrito (agregar, quitar, ver, vaciar).
    Los carritos se indexan por el email del usuario.
    """
    def __init__(self, carrito_repo: ICarritoRepository, producto_repo: IProductoRepository):
        self.carrito_repo = carrito_repo
        self.producto_repo = producto_repo

    def ver(self, email: str) -> List[ItemCarrito]:
        return list(self.carrito_repo.obtener(email))

    def agregar(self, email: str, producto_id, cantidad=None) -> List[ItemCarrito]:
        """Agrega o incrementa un item. Si ya existe la línea, suma la cantidad."""
        producto = self.producto_repo.buscar_por_id(a_entero(producto_id))
        if not producto:
            raise ProductoNoEncontradoError(producto_id)

        cantidad = a_cantidad(cantidad)
        items = self.ver(email)
        existente = next((item for item in items if item.producto_id == producto.id), None)

        if existente:
            existente.cantidad += cantidad
        else:
            items.append(ItemCarrito(
                producto_id=producto.id,
                nombre=producto.nombre,
                precio=producto.precio,
                cantidad=cantidad,
                descuento=producto.descuento,
            ))

        self.carrito_repo.guardar(email, items)
        return items

    def quitar_en(self, email: str, posicion) -> List[ItemCarrito]:
        """Quita la línea en la posición indicada; posiciones inválidas se ignoran."""
        items = self.ver(email)
        indice = a_posicion(posicion)
        if indice is None or not 0 <= indice < len(items):
            return items
        del items[indice]
        self.carrito_repo.guardar(email, items)
        return items

    def vaciar(self, email: str) -> None:
        self.carrito_repo.guardar(email, [])


# ====================================================================
# 3. LIBRETA DE DIRECCIONES
# ====================================================================

class LibretaDireccionesUseCase:
    """Direcciones de despacho de cada usuario, referenciadas por posición."""
    def __init__(self, direccion_repo: IDireccionRepository, generador_id: IGeneradorId):
        self.direccion_repo = direccion_repo
        self.generador_id = generador_id

    def listar(self, email: str) -> List[Direccion]:
        return list(self.direccion_repo.obtener(email))

    def agregar(self, email: str, calle, comuna, ref=None) -> Direccion:
        direccion = Direccion(
            id=self.generador_id.siguiente(),
            calle=a_texto(calle),
            comuna=a_texto(comuna),
            ref=a_texto(ref),
        )
        direcciones = self.listar(email)
        direcciones.append(direccion)
        self.direccion_repo.guardar(email, direcciones)
        return direccion

    def quitar_en(self, email: str, posicion) -> List[Direccion]:
        direcciones = self.listar(email)
        indice = a_posicion(posicion)
        if indice is None or not 0 <= indice < len(direcciones):
            return direcciones
        del direcciones[indice]
        self.direccion_repo.guardar(email, direcciones)
        return direcciones

    def obtener_en(self, email: str, posicion) -> Optional[Direccion]:
        direcciones = self.listar(email)
        indice = a_posicion(posicion)
        if indice is None or not 0 <= indice < len(direcciones):
            return None
        return direcciones[indice]


# ====================================================================
# 4. LIBRO DE RESERVAS
# ====================================================================

class LibroReservasUseCase:
    """Reservas por usuario. No existe un índice global: se buscan dentro de cada usuario."""
    def __init__(self, reserva_repo: IReservaRepository):
        self.reserva_repo = reserva_repo

    def listar(self, email: str) -> List[Reserva]:
        return list(self.reserva_repo.obtener(email))

    def agregar(self, email: str, reserva: Reserva) -> None:
        reservas = self.listar(email)
        reservas.append(reserva)
        self.reserva_repo.guardar(email, reservas)

    def actualizar_estado(self, email: str, reserva_id, nuevo_estado=None) -> Optional[Reserva]:
        """Reemplaza el estado de la reserva; si no existe para ese usuario no hace nada."""
        reserva_id = a_entero(reserva_id)
        estado = a_texto(nuevo_estado) or ESTADO_PENDIENTE
        reservas = self.listar(email)
        for indice, reserva in enumerate(reservas):
            if reserva.id == reserva_id:
                reservas[indice] = replace(reserva, estado=estado)
                self.reserva_repo.guardar(email, reservas)
                logger.info("Reserva %s de %s pasa a estado %s", reserva_id, email, estado)
                return reservas[indice]
        return None

    def listar_todas(self) -> List[ReservaDeUsuario]:
        return [
            ReservaDeUsuario(email=email, reserva=reserva)
            for email in self.reserva_repo.emails()
            for reserva in self.reserva_repo.obtener(email)
        ]


# ====================================================================
# 5. CHECKOUT
# ====================================================================

class ConfirmarReservaUseCase:
    """
    Convierte el carrito del usuario en una Reserva:
    resuelve la dirección, calcula total con descuento por línea y puntos,
    registra la reserva y vacía el carrito.
    """
    def __init__(self,
                 carrito_uc: GestionarCarritoUseCase,
                 direcciones_uc: LibretaDireccionesUseCase,
                 reservas_uc: LibroReservasUseCase,
                 generador_id: IGeneradorId,
                 reloj: Callable[[], datetime] = datetime.now):
        self.carrito_uc = carrito_uc
        self.direcciones_uc = direcciones_uc
        self.reservas_uc = reservas_uc
        self.generador_id = generador_id
        self.reloj = reloj

    def ejecutar(self, email: str, tipo_entrega=None, posicion_direccion=None,
                 metodo_pago=None) -> Optional[Reserva]:
        """Devuelve la reserva creada, o None si el carrito está vacío."""
        items = self.carrito_uc.ver(email)
        if not items:
            return None

        tipo = TipoEntrega.desde_texto(tipo_entrega)
        direccion = None
        if tipo == TipoEntrega.DESPACHO:
            direccion = self.direcciones_uc.obtener_en(email, posicion_direccion)

        total = calcular_total(items)
        reserva = Reserva(
            id=self.generador_id.siguiente(),
            fecha=self.reloj(),
            items=tuple(
                ItemReserva(
                    nombre=item.nombre,
                    cantidad=item.cantidad,
                    precio=item.precio,
                    descuento=item.descuento,
                )
                for item in items
            ),
            total=total,
            tipo_entrega=tipo,
            direccion=direccion,
            metodo_pago=a_texto(metodo_pago) or METODO_PAGO_DEFAULT,
            estado=ESTADO_PENDIENTE,
            puntos=calcular_puntos(total),
        )

        self.reservas_uc.agregar(email, reserva)
        self.carrito_uc.vaciar(email)
        logger.info("Reserva %s confirmada para %s (total %s, %s puntos)",
                    reserva.id, email, reserva.total, reserva.puntos)
        return reserva


# ====================================================================
# 6. NEWSLETTER Y AUTENTICACIÓN
# ====================================================================

class SuscribirNewsletterUseCase:
    def __init__(self, suscripcion_repo: ISuscripcionRepository):
        self.suscripcion_repo = suscripcion_repo

    def ejecutar(self, nombre, email) -> Suscripcion:
        email = a_texto(email)
        if not email:
            raise DatosInvalidosError("El email es obligatorio para suscribirse.")
        suscripcion = Suscripcion(email=email, nombre=a_texto(nombre) or NOMBRE_SUSCRIPTOR_DEFAULT)
        return self.suscripcion_repo.crear(suscripcion)


class AutenticarUsuarioUseCase:
    """Compara las credenciales contra el conjunto fijo de usuarios de demo."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def ejecutar(self, email, password) -> Optional[Usuario]:
        usuario = self.usuario_repo.buscar_por_credenciales(a_texto(email), password or '')
        if usuario is None:
            logger.warning("Intento de login fallido para %s", email)
        return usuario
