# farmacia/core/tests.py

import unittest
from datetime import datetime
from unittest.mock import Mock

from farmacia.core.coercion import a_cantidad, a_entero, a_porcentaje, a_posicion, a_no_negativo
from farmacia.core.entities import (
    Producto, ItemCarrito, Direccion, Reserva, TipoEntrega,
    ESTADO_PENDIENTE, calcular_total, calcular_puntos,
)
from farmacia.core.exceptions import ProductoNoEncontradoError, DatosInvalidosError
from farmacia.core.use_cases import (
    GestionarCarritoUseCase,
    GestionarCatalogoAdminUseCase,
    LibretaDireccionesUseCase,
    LibroReservasUseCase,
    ConfirmarReservaUseCase,
    SuscribirNewsletterUseCase,
    AutenticarUsuarioUseCase,
)
from farmacia.infrastructure.estado import AlmacenEstadoMemoria
from farmacia.infrastructure.identificadores import GeneradorIdReloj
from farmacia.infrastructure.repositories import (
    ProductoRepositoryMemoria,
    CarritoRepositoryEstado,
    DireccionRepositoryEstado,
    ReservaRepositoryEstado,
    UsuarioRepositoryDemo,
)

EMAIL = 'user@demo.cl'


def crear_casos_de_uso(productos):
    """Arma los casos de uso sobre repositorios en memoria."""
    generador = GeneradorIdReloj()
    producto_repo = ProductoRepositoryMemoria(productos)
    carrito_uc = GestionarCarritoUseCase(CarritoRepositoryEstado(AlmacenEstadoMemoria()), producto_repo)
    direcciones_uc = LibretaDireccionesUseCase(DireccionRepositoryEstado(AlmacenEstadoMemoria()), generador)
    reservas_uc = LibroReservasUseCase(ReservaRepositoryEstado(AlmacenEstadoMemoria()))
    confirmar_uc = ConfirmarReservaUseCase(carrito_uc, direcciones_uc, reservas_uc, generador)
    return carrito_uc, direcciones_uc, reservas_uc, confirmar_uc


class TestGestionarCarrito(unittest.TestCase):

    def setUp(self):
        self.carrito_uc, _, _, _ = crear_casos_de_uso([
            Producto(id=1, nombre='Paracetamol 500mg', precio=1990, stock=35, descuento=10),
            Producto(id=2, nombre='Ibuprofeno 400mg', precio=2990, stock=22),
        ])

    def test_agregar_mismo_producto_suma_cantidades(self):
        self.carrito_uc.agregar(EMAIL, 1, 2)
        items = self.carrito_uc.agregar(EMAIL, '1', '3')

        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].cantidad, 5)

    def test_agregar_guarda_copia_de_nombre_precio_y_descuento(self):
        item = self.carrito_uc.agregar(EMAIL, 1)[0]

        self.assertEqual(item.nombre, 'Paracetamol 500mg')
        self.assertEqual(item.precio, 1990)
        self.assertEqual(item.descuento, 10)

    def test_cantidad_invalida_se_toma_como_uno(self):
        for cantidad in (None, '', 'abc', '0', '-4'):
            self.carrito_uc.vaciar(EMAIL)
            items = self.carrito_uc.agregar(EMAIL, 2, cantidad)
            self.assertEqual(items[0].cantidad, 1, cantidad)

    def test_agregar_producto_inexistente_falla(self):
        with self.assertRaises(ProductoNoEncontradoError) as ctx:
            self.carrito_uc.agregar(EMAIL, 99, 1)

        self.assertEqual(ctx.exception.message, 'Producto no encontrado')
        self.assertEqual(self.carrito_uc.ver(EMAIL), [])

    def test_quitar_posicion_invalida_no_cambia_el_carrito(self):
        self.carrito_uc.agregar(EMAIL, 1)
        self.carrito_uc.agregar(EMAIL, 2)

        for posicion in (-1, 2, '5', 'x', None, '1.5'):
            items = self.carrito_uc.quitar_en(EMAIL, posicion)
            self.assertEqual([i.producto_id for i in items], [1, 2])

    def test_quitar_posicion_valida(self):
        self.carrito_uc.agregar(EMAIL, 1)
        self.carrito_uc.agregar(EMAIL, 2)

        items = self.carrito_uc.quitar_en(EMAIL, '0')

        self.assertEqual([i.producto_id for i in items], [2])
        self.assertEqual(len(self.carrito_uc.ver(EMAIL)), 1)

    def test_carritos_separados_por_usuario(self):
        self.carrito_uc.agregar(EMAIL, 1)

        self.assertEqual(self.carrito_uc.ver('admin@demo.cl'), [])


class TestConfirmarReserva(unittest.TestCase):

    def setUp(self):
        self.carrito_uc, self.direcciones_uc, self.reservas_uc, self.confirmar_uc = crear_casos_de_uso([
            Producto(id=1, nombre='Paracetamol 500mg', precio=1990, stock=35, descuento=10),
            Producto(id=2, nombre='Ibuprofeno 400mg', precio=2990, stock=22),
            Producto(id=3, nombre='Jarabe', precio=1000, stock=5),
        ])

    def test_carrito_vacio_no_crea_reserva(self):
        reserva = self.confirmar_uc.ejecutar(EMAIL, 'retiro')

        self.assertIsNone(reserva)
        self.assertEqual(self.reservas_uc.listar(EMAIL), [])

    def test_total_con_descuento_por_linea_y_puntos(self):
        self.carrito_uc.agregar(EMAIL, 1, 2)
        self.carrito_uc.agregar(EMAIL, 2, 1)

        reserva = self.confirmar_uc.ejecutar(EMAIL, 'retiro')

        # 1990 * 0.9 = 1791 por unidad
        self.assertEqual(reserva.total, 6572)
        self.assertEqual(reserva.puntos, 7)

    def test_confirmar_vacia_el_carrito_y_registra_la_reserva(self):
        self.carrito_uc.agregar(EMAIL, 3, 3)

        reserva = self.confirmar_uc.ejecutar(EMAIL, 'retiro')

        self.assertEqual(self.carrito_uc.ver(EMAIL), [])
        self.assertEqual(self.reservas_uc.listar(EMAIL), [reserva])
        self.assertEqual(len(reserva.items), 1)
        item = reserva.items[0]
        self.assertEqual((item.nombre, item.cantidad, item.precio, item.descuento), ('Jarabe', 3, 1000, 0))
        self.assertEqual(reserva.total, 3000)
        self.assertEqual(reserva.puntos, 3)
        self.assertEqual(reserva.estado, ESTADO_PENDIENTE)
        self.assertEqual(reserva.metodo_pago, 'Efectivo')
        self.assertEqual(reserva.tipo_entrega, TipoEntrega.RETIRO)
        self.assertIsNone(reserva.direccion)

    def test_despacho_adjunta_la_direccion_elegida(self):
        direccion = self.direcciones_uc.agregar(EMAIL, ' Av. Siempre Viva 742 ', 'Providencia')
        self.carrito_uc.agregar(EMAIL, 3)

        reserva = self.confirmar_uc.ejecutar(EMAIL, 'despacho', '0', 'Débito')

        self.assertEqual(reserva.tipo_entrega, TipoEntrega.DESPACHO)
        self.assertEqual(reserva.direccion, direccion)
        self.assertEqual(reserva.direccion.calle, 'Av. Siempre Viva 742')
        self.assertEqual(reserva.metodo_pago, 'Débito')

    def test_despacho_con_posicion_invalida_queda_sin_direccion(self):
        self.direcciones_uc.agregar(EMAIL, 'Calle 1', 'Ñuñoa')
        self.carrito_uc.agregar(EMAIL, 3)

        reserva = self.confirmar_uc.ejecutar(EMAIL, 'despacho', '3')

        self.assertIsNone(reserva.direccion)

    def test_retiro_nunca_adjunta_direccion(self):
        self.direcciones_uc.agregar(EMAIL, 'Calle 1', 'Ñuñoa')
        self.carrito_uc.agregar(EMAIL, 3)

        reserva = self.confirmar_uc.ejecutar(EMAIL, 'retiro', '0')

        self.assertIsNone(reserva.direccion)

    def test_tipo_de_entrega_desconocido_es_retiro(self):
        self.carrito_uc.agregar(EMAIL, 3)

        reserva = self.confirmar_uc.ejecutar(EMAIL, 'drone')

        self.assertEqual(reserva.tipo_entrega, TipoEntrega.RETIRO)

    def test_ids_de_reservas_unicos(self):
        ids = set()
        for _ in range(5):
            self.carrito_uc.agregar(EMAIL, 3)
            ids.add(self.confirmar_uc.ejecutar(EMAIL).id)

        self.assertEqual(len(ids), 5)

    def test_descuento_queda_fijo_al_agregar(self):
        producto_repo = self.carrito_uc.producto_repo
        self.carrito_uc.agregar(EMAIL, 1)
        producto_repo.actualizar_descuento(1, 50)

        reserva = self.confirmar_uc.ejecutar(EMAIL)

        self.assertEqual(reserva.items[0].descuento, 10)
        self.assertEqual(reserva.total, 1791)


class TestLibroReservas(unittest.TestCase):

    def setUp(self):
        self.reservas_uc = LibroReservasUseCase(ReservaRepositoryEstado(AlmacenEstadoMemoria()))
        self.reserva = Reserva(
            id=10, fecha=datetime(2024, 1, 1), items=(), total=1000,
            tipo_entrega=TipoEntrega.RETIRO, direccion=None, puntos=1,
        )
        self.reservas_uc.agregar(EMAIL, self.reserva)

    def test_actualizar_estado(self):
        actualizada = self.reservas_uc.actualizar_estado(EMAIL, '10', 'Preparando')

        self.assertEqual(actualizada.estado, 'Preparando')
        self.assertEqual(self.reservas_uc.listar(EMAIL)[0].estado, 'Preparando')
        # El registro original no se modifica
        self.assertEqual(self.reserva.estado, ESTADO_PENDIENTE)

    def test_estado_vacio_vuelve_a_pendiente(self):
        self.reservas_uc.actualizar_estado(EMAIL, 10, 'Entregada')

        actualizada = self.reservas_uc.actualizar_estado(EMAIL, 10, '  ')

        self.assertEqual(actualizada.estado, ESTADO_PENDIENTE)

    def test_id_desconocido_no_cambia_nada(self):
        resultado = self.reservas_uc.actualizar_estado(EMAIL, 999, 'Cancelada')

        self.assertIsNone(resultado)
        self.assertEqual(self.reservas_uc.listar(EMAIL), [self.reserva])

    def test_reserva_de_otro_usuario_no_se_modifica(self):
        resultado = self.reservas_uc.actualizar_estado('admin@demo.cl', 10, 'Cancelada')

        self.assertIsNone(resultado)
        self.assertEqual(self.reservas_uc.listar(EMAIL)[0].estado, ESTADO_PENDIENTE)

    def test_listar_todas_respeta_orden_de_usuarios_y_reservas(self):
        otra = Reserva(id=11, fecha=datetime(2024, 1, 2), items=(), total=0,
                       tipo_entrega=TipoEntrega.RETIRO, direccion=None)
        tercera = Reserva(id=12, fecha=datetime(2024, 1, 3), items=(), total=0,
                          tipo_entrega=TipoEntrega.RETIRO, direccion=None)
        self.reservas_uc.agregar('admin@demo.cl', otra)
        self.reservas_uc.agregar(EMAIL, tercera)

        filas = [(f.email, f.reserva.id) for f in self.reservas_uc.listar_todas()]

        self.assertEqual(filas, [(EMAIL, 10), (EMAIL, 12), ('admin@demo.cl', 11)])


class TestLibretaDirecciones(unittest.TestCase):

    def setUp(self):
        self.repo_mock = Mock()
        self.repo_mock.obtener.return_value = [Direccion(id=1, calle='A', comuna='B')]
        self.generador_mock = Mock()
        self.generador_mock.siguiente.return_value = 1700000000000
        self.use_case = LibretaDireccionesUseCase(self.repo_mock, self.generador_mock)

    def test_agregar_recorta_textos_y_guarda(self):
        direccion = self.use_case.agregar(EMAIL, '  Los Leones 100 ', ' Providencia', None)

        self.assertEqual(direccion, Direccion(id=1700000000000, calle='Los Leones 100', comuna='Providencia', ref=''))
        self.repo_mock.guardar.assert_called_once_with(
            EMAIL, [Direccion(id=1, calle='A', comuna='B'), direccion]
        )

    def test_quitar_posicion_invalida_no_guarda(self):
        self.use_case.quitar_en(EMAIL, 'abc')
        self.use_case.quitar_en(EMAIL, 1)

        self.repo_mock.guardar.assert_not_called()

    def test_quitar_posicion_valida(self):
        restantes = self.use_case.quitar_en(EMAIL, 0)

        self.assertEqual(restantes, [])
        self.repo_mock.guardar.assert_called_once_with(EMAIL, [])


class TestGestionarCatalogoAdmin(unittest.TestCase):

    def setUp(self):
        self.repo = ProductoRepositoryMemoria([Producto(id=1, nombre='Paracetamol 500mg', precio=1990, stock=35)])
        self.use_case = GestionarCatalogoAdminUseCase(self.repo)

    def test_crear_convierte_campos_no_numericos_a_cero(self):
        producto = self.use_case.crear('  Jarabe  ', 'abc', '', 'x')

        self.assertEqual(producto.id, 2)
        self.assertEqual(producto.nombre, 'Jarabe')
        self.assertEqual((producto.precio, producto.stock, producto.descuento), (0, 0, 0))

    def test_descuento_se_acota(self):
        self.assertEqual(self.use_case.actualizar_descuento(1, '150').descuento, 100)
        self.assertEqual(self.use_case.actualizar_descuento(1, '-5').descuento, 0)

    def test_actualizar_stock(self):
        self.assertEqual(self.use_case.actualizar_stock('1', '12').stock, 12)
        self.assertIsNone(self.use_case.actualizar_stock(99, 5))

    def test_eliminar(self):
        self.use_case.eliminar(1)

        self.assertEqual(self.use_case.listar(), [])


class TestNewsletterYAutenticacion(unittest.TestCase):

    def test_suscripcion_sin_nombre(self):
        repo_mock = Mock()
        repo_mock.crear.side_effect = lambda s: s

        suscripcion = SuscribirNewsletterUseCase(repo_mock).ejecutar('', ' ana@demo.cl ')

        self.assertEqual(suscripcion.nombre, 'Sin nombre')
        self.assertEqual(suscripcion.email, 'ana@demo.cl')

    def test_suscripcion_sin_email_falla(self):
        repo_mock = Mock()

        with self.assertRaises(DatosInvalidosError):
            SuscribirNewsletterUseCase(repo_mock).ejecutar('Ana', '  ')
        repo_mock.crear.assert_not_called()

    def test_autenticar(self):
        repo = UsuarioRepositoryDemo([
            {'email': 'admin@demo.cl', 'password': '123456', 'rol': 'ADMIN'},
            {'email': 'user@demo.cl', 'password': '123456', 'rol': 'USUARIO'},
        ])
        use_case = AutenticarUsuarioUseCase(repo)

        self.assertTrue(use_case.ejecutar('admin@demo.cl', '123456').es_admin)
        self.assertFalse(use_case.ejecutar('user@demo.cl', '123456').es_admin)
        self.assertIsNone(use_case.ejecutar('user@demo.cl', 'otra'))
        self.assertIsNone(use_case.ejecutar('nadie@demo.cl', '123456'))


class TestCalculos(unittest.TestCase):

    def test_total_y_puntos(self):
        items = [
            ItemCarrito(producto_id=1, nombre='A', precio=1990, cantidad=2, descuento=10),
            ItemCarrito(producto_id=2, nombre='B', precio=2990, cantidad=1),
        ]
        self.assertEqual(calcular_total(items), 6572)
        self.assertEqual(calcular_puntos(6572), 7)
        self.assertEqual(calcular_puntos(499), 0)
        self.assertEqual(calcular_puntos(500), 1)
        self.assertEqual(calcular_puntos(0), 0)

    def test_redondeo_mitad_hacia_arriba_por_linea(self):
        # 15 * 0.9 = 13.5 -> 14
        item = ItemCarrito(producto_id=1, nombre='A', precio=15, cantidad=2, descuento=10)
        self.assertEqual(item.precio_con_descuento, 14)
        self.assertEqual(item.subtotal, 28)

    def test_tipo_entrega_desde_texto(self):
        self.assertEqual(TipoEntrega.desde_texto('despacho'), TipoEntrega.DESPACHO)
        self.assertEqual(TipoEntrega.desde_texto(' DESPACHO '), TipoEntrega.DESPACHO)
        self.assertEqual(TipoEntrega.desde_texto(None), TipoEntrega.RETIRO)
        self.assertEqual(str(TipoEntrega.RETIRO), 'retiro')


class TestConversion(unittest.TestCase):

    def test_a_entero(self):
        self.assertEqual(a_entero('12abc'), 12)
        self.assertEqual(a_entero('abc'), 0)
        self.assertEqual(a_entero(None, 7), 7)
        self.assertEqual(a_entero('0', 3), 3)

    def test_limites(self):
        self.assertEqual(a_cantidad('-2'), 1)
        self.assertEqual(a_no_negativo('-2'), 0)
        self.assertEqual(a_porcentaje('250'), 100)

    def test_a_posicion(self):
        self.assertEqual(a_posicion('2'), 2)
        self.assertEqual(a_posicion(0), 0)
        self.assertIsNone(a_posicion('2a'))
        self.assertIsNone(a_posicion(''))
        self.assertIsNone(a_posicion(True))


class TestGeneradorId(unittest.TestCase):

    def test_mismo_milisegundo_desempata(self):
        generador = GeneradorIdReloj(reloj_ms=lambda: 1000)

        self.assertEqual([generador.siguiente() for _ in range(3)], [1000, 1001, 1002])

    def test_reloj_que_retrocede_sigue_creciendo(self):
        tiempos = iter([2000, 1500, 2500])
        generador = GeneradorIdReloj(reloj_ms=lambda: next(tiempos))

        self.assertEqual([generador.siguiente() for _ in range(3)], [2000, 2001, 2500])


if __name__ == '__main__':
    unittest.main()
