# farmacia/infrastructure/tests.py
from io import StringIO
from unittest.mock import patch

from django.contrib.auth import authenticate, get_user_model
from django.core.cache import cache
from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase, SimpleTestCase, override_settings

from farmacia.catalog.models import Producto as ProductoModel
from farmacia.core.entities import Suscripcion
from farmacia.infrastructure.estado import (
    AlmacenEstadoMemoria, AlmacenEstadoCache, crear_almacen
)
from farmacia.infrastructure.models import Suscripcion as SuscripcionModel
from farmacia.infrastructure.repositories import (
    ProductoRepositoryDjango, SuscripcionRepositoryDjango
)


class ProductoRepositoryDjangoTest(TestCase):

    def setUp(self):
        self.repo = ProductoRepositoryDjango()
        self.paracetamol = ProductoModel.objects.create(nombre='Paracetamol 500mg', precio=1990, stock=35)
        self.ibuprofeno = ProductoModel.objects.create(nombre='Ibuprofeno 400mg', precio=2990, stock=22, descuento=15)

    def test_buscar_por_id(self):
        producto = self.repo.buscar_por_id(self.ibuprofeno.pk)

        self.assertEqual(producto.nombre, 'Ibuprofeno 400mg')
        self.assertEqual(producto.descuento, 15)
        self.assertEqual(producto.precio_con_descuento, 2542)
        self.assertIsNone(self.repo.buscar_por_id(9999))

    def test_listar_todos_ordenado_por_id(self):
        nombres = [p.nombre for p in self.repo.listar_todos()]

        self.assertEqual(nombres, ['Paracetamol 500mg', 'Ibuprofeno 400mg'])

    def test_crear(self):
        producto = self.repo.crear(nombre='Amoxicilina 500mg', precio=4990, stock=5)

        self.assertIsNotNone(producto.id)
        self.assertTrue(ProductoModel.objects.filter(pk=producto.id, activo=True).exists())

    def test_actualizar_stock_y_descuento(self):
        self.assertEqual(self.repo.actualizar_stock(self.paracetamol.pk, 3).stock, 3)
        self.assertEqual(self.repo.actualizar_descuento(self.paracetamol.pk, 20).descuento, 20)
        self.assertIsNone(self.repo.actualizar_stock(9999, 3))

    def test_eliminar_es_borrado_logico(self):
        self.repo.eliminar(self.paracetamol.pk)

        self.assertIsNone(self.repo.buscar_por_id(self.paracetamol.pk))
        self.assertEqual(len(self.repo.listar_todos()), 1)
        self.paracetamol.refresh_from_db()
        self.assertFalse(self.paracetamol.activo)

    def test_error_de_base_de_datos_se_trata_como_catalogo_vacio(self):
        with patch.object(ProductoRepositoryDjango, '_activos', side_effect=DatabaseError('caída')):
            with self.assertLogs('farmacia.infrastructure.repositories', level='ERROR'):
                self.assertEqual(self.repo.listar_todos(), [])
            with self.assertLogs('farmacia.infrastructure.repositories', level='ERROR'):
                self.assertIsNone(self.repo.buscar_por_id(self.paracetamol.pk))


class SuscripcionRepositoryDjangoTest(TestCase):

    def test_crear_y_listar(self):
        repo = SuscripcionRepositoryDjango()

        creada = repo.crear(Suscripcion(email='ana@demo.cl', nombre='Ana'))
        repo.crear(Suscripcion(email='beto@demo.cl'))

        self.assertIsNotNone(creada.id)
        self.assertIsNotNone(creada.fecha)
        self.assertEqual([s.email for s in repo.listar_todas()], ['ana@demo.cl', 'beto@demo.cl'])
        self.assertEqual(SuscripcionModel.objects.get(email='beto@demo.cl').nombre, 'Sin nombre')


class AlmacenEstadoTest(SimpleTestCase):

    def verificar_almacen(self, almacen):
        almacen.guardar('b@demo.cl', [1])
        almacen.guardar('a@demo.cl', [2])
        almacen.guardar('b@demo.cl', [1, 3])

        self.assertEqual(almacen.obtener('b@demo.cl'), [1, 3])
        self.assertEqual(almacen.obtener('c@demo.cl', []), [])
        self.assertEqual(almacen.claves(), ['b@demo.cl', 'a@demo.cl'])

        almacen.eliminar('b@demo.cl')
        self.assertEqual(almacen.claves(), ['a@demo.cl'])
        self.assertIsNone(almacen.obtener('b@demo.cl'))

        almacen.limpiar()
        self.assertEqual(almacen.claves(), [])

    def test_memoria(self):
        self.verificar_almacen(AlmacenEstadoMemoria('prueba'))

    def test_cache(self):
        cache.clear()
        self.verificar_almacen(AlmacenEstadoCache('prueba'))

    def test_almacenes_de_cache_con_nombres_distintos_no_se_mezclan(self):
        cache.clear()
        carritos = AlmacenEstadoCache('carritos')
        reservas = AlmacenEstadoCache('reservas')

        carritos.guardar('user@demo.cl', ['item'])

        self.assertIsNone(reservas.obtener('user@demo.cl'))
        self.assertEqual(reservas.claves(), [])

    @override_settings(FARMACIA_ESTADO_BACKEND='cache')
    def test_crear_almacen_cache(self):
        self.assertIsInstance(crear_almacen('carritos'), AlmacenEstadoCache)

    @override_settings(FARMACIA_ESTADO_BACKEND='redis-inexistente')
    def test_crear_almacen_desconocido_usa_memoria(self):
        with self.assertLogs('farmacia.infrastructure.estado', level='WARNING'):
            self.assertIsInstance(crear_almacen('carritos'), AlmacenEstadoMemoria)


class UsuarioDemoBackendTest(TestCase):

    def test_login_de_admin_crea_usuario_con_rol(self):
        user = authenticate(None, email='admin@demo.cl', password='123456')

        self.assertIsNotNone(user)
        self.assertEqual(user.rol, 'ADMIN')
        self.assertTrue(user.is_staff)
        self.assertTrue(user.es_admin)
        self.assertFalse(user.has_usable_password())

    def test_login_repetido_no_duplica_usuarios(self):
        authenticate(None, email='user@demo.cl', password='123456')
        user = authenticate(None, email='user@demo.cl', password='123456')

        self.assertEqual(user.rol, 'USUARIO')
        self.assertFalse(user.es_admin)
        self.assertEqual(get_user_model().objects.filter(email='user@demo.cl').count(), 1)

    def test_credenciales_invalidas(self):
        self.assertIsNone(authenticate(None, email='user@demo.cl', password='mala'))
        self.assertIsNone(authenticate(None, email='otro@demo.cl', password='123456'))
        self.assertFalse(get_user_model().objects.exists())


class CargarDatosInicialesTest(TestCase):

    def test_carga_los_productos_de_demo_una_sola_vez(self):
        call_command('cargar_datos_iniciales', stdout=StringIO())
        call_command('cargar_datos_iniciales', stdout=StringIO())

        productos = list(ProductoModel.objects.values_list('nombre', 'precio', 'stock'))
        self.assertEqual(productos, [
            ('Paracetamol 500mg', 1990, 35),
            ('Ibuprofeno 400mg', 2990, 22),
            ('Amoxicilina 500mg', 4990, 5),
        ])

    def test_descuento_inicial(self):
        call_command('cargar_datos_iniciales', '--descuento', '10', stdout=StringIO())

        self.assertTrue(all(p.descuento == 10 for p in ProductoModel.objects.all()))
