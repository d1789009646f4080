# farmacia/presentation/tests.py
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from farmacia.catalog.models import Producto as ProductoModel
from farmacia.core.dependency_injection import (
    get_gestionar_carrito_use_case,
    get_libreta_direcciones_use_case,
    get_libro_reservas_use_case,
    get_confirmar_reserva_use_case,
)
from farmacia.infrastructure import instances
from farmacia.infrastructure.models import Suscripcion

USER = {'email': 'user@demo.cl', 'password': '123456'}
ADMIN = {'email': 'admin@demo.cl', 'password': '123456'}


class FarmaciaTestCase(TestCase):
    """Base: catálogo de prueba y estado por usuario limpio en cada test."""

    def setUp(self):
        instances.limpiar_estado()
        self.addCleanup(instances.limpiar_estado)
        self.paracetamol = ProductoModel.objects.create(nombre='Paracetamol 500mg', precio=1990, stock=35, descuento=10)
        self.jarabe = ProductoModel.objects.create(nombre='Jarabe', precio=1000, stock=5)


# ====================================================================
# AUTENTICACIÓN
# ====================================================================

class AutenticacionViewsTest(FarmaciaTestCase):

    def test_pagina_de_login(self):
        response = self.client.get(reverse('login'))
        self.assertEqual(response.status_code, 200)

    def test_login_invalido_responde_401(self):
        response = self.client.post(reverse('login'), {'email': 'user@demo.cl', 'password': 'mala'})

        self.assertContains(response, 'Credenciales inválidas. Intente nuevamente.', status_code=401)

    def test_login_valido_redirige_al_inicio(self):
        response = self.client.post(reverse('login'), USER)

        self.assertRedirects(response, reverse('home'))

    def test_whoami(self):
        response = self.client.get(reverse('whoami'))
        self.assertEqual(response.content.decode(), 'No logueado')

        self.client.login(**ADMIN)
        response = self.client.get(reverse('whoami'))
        self.assertEqual(response.content.decode(), 'Dentro: admin@demo.cl (ADMIN)')

    def test_logout_solo_por_post(self):
        self.client.login(**USER)

        self.assertEqual(self.client.get(reverse('logout')).status_code, 405)
        response = self.client.post(reverse('logout'))

        self.assertRedirects(response, reverse('home'))
        self.assertEqual(self.client.get(reverse('whoami')).content.decode(), 'No logueado')


# ====================================================================
# CATÁLOGO, CARRITO Y RESERVAS
# ====================================================================

class TiendaViewsTest(FarmaciaTestCase):

    def setUp(self):
        super().setUp()
        self.client.login(**USER)

    def test_home_y_catalogo(self):
        self.assertEqual(self.client.get(reverse('home')).status_code, 200)

        response = self.client.get(reverse('catalogo'))

        self.assertContains(response, 'Paracetamol 500mg')
        self.assertContains(response, '$1.791')

    def test_carrito_requiere_sesion(self):
        self.client.logout()

        response = self.client.get(reverse('carrito'))

        self.assertRedirects(response, f"{reverse('login')}?next={reverse('carrito')}", fetch_redirect_response=False)

    def test_agregar_producto_inexistente_responde_400(self):
        response = self.client.post(reverse('carrito_agregar'), {'id': '9999'})

        self.assertContains(response, 'Producto no encontrado', status_code=400)

    def test_agregar_dos_veces_suma_cantidades(self):
        self.client.post(reverse('carrito_agregar'), {'id': self.jarabe.pk, 'cantidad': '2'})
        response = self.client.post(reverse('carrito_agregar'), {'id': self.jarabe.pk})

        self.assertRedirects(response, reverse('carrito'))
        items = get_gestionar_carrito_use_case().ver(USER['email'])
        self.assertEqual([(i.producto_id, i.cantidad) for i in items], [(self.jarabe.pk, 3)])
        self.assertContains(self.client.get(reverse('carrito')), 'Jarabe')

    def test_quitar_posicion_invalida_no_cambia_el_carrito(self):
        self.client.post(reverse('carrito_agregar'), {'id': self.jarabe.pk})

        self.client.post(reverse('carrito_quitar'), {'posicion': '7'})
        self.assertEqual(len(get_gestionar_carrito_use_case().ver(USER['email'])), 1)

        self.client.post(reverse('carrito_quitar'), {'posicion': '0'})
        self.assertEqual(get_gestionar_carrito_use_case().ver(USER['email']), [])

    def test_confirmar_carrito_vacio_vuelve_al_carrito(self):
        response = self.client.post(reverse('carrito_confirmar'), {'tipo_entrega': 'retiro'})

        self.assertRedirects(response, reverse('carrito'))
        self.assertEqual(get_libro_reservas_use_case().listar(USER['email']), [])

    def test_flujo_completo_de_reserva(self):
        self.client.post(reverse('carrito_agregar'), {'id': self.jarabe.pk, 'cantidad': '3'})

        response = self.client.post(reverse('carrito_confirmar'), {'tipo_entrega': 'retiro'})

        self.assertRedirects(response, reverse('mis_reservas'))
        reservas = get_libro_reservas_use_case().listar(USER['email'])
        self.assertEqual(len(reservas), 1)
        self.assertEqual(reservas[0].total, 3000)
        self.assertEqual(reservas[0].puntos, 3)
        self.assertEqual(reservas[0].estado, 'Pendiente')
        self.assertEqual(get_gestionar_carrito_use_case().ver(USER['email']), [])
        self.assertContains(self.client.get(reverse('mis_reservas')), '$3.000')

    def test_despacho_con_direccion_guardada(self):
        self.client.post(reverse('direccion_nueva'), {'calle': ' Los Leones 100 ', 'comuna': 'Providencia'})
        self.client.post(reverse('carrito_agregar'), {'id': self.jarabe.pk})

        self.client.post(reverse('carrito_confirmar'), {
            'tipo_entrega': 'despacho', 'direccion': '0', 'metodo_pago': 'Débito',
        })

        reserva = get_libro_reservas_use_case().listar(USER['email'])[0]
        self.assertEqual(reserva.direccion.calle, 'Los Leones 100')
        self.assertEqual(reserva.metodo_pago, 'Débito')


class DireccionesViewsTest(FarmaciaTestCase):

    def setUp(self):
        super().setUp()
        self.client.login(**USER)

    def test_agregar_listar_y_eliminar(self):
        self.assertEqual(self.client.get(reverse('direccion_nueva')).status_code, 200)

        response = self.client.post(reverse('direccion_nueva'), {'calle': 'Av. Grecia 10', 'comuna': 'Ñuñoa', 'ref': 'Depto 3'})

        self.assertRedirects(response, reverse('mis_direcciones'))
        self.assertContains(self.client.get(reverse('mis_direcciones')), 'Av. Grecia 10')

        self.client.post(reverse('direccion_eliminar'), {'posicion': 'abc'})
        self.assertEqual(len(get_libreta_direcciones_use_case().listar(USER['email'])), 1)

        self.client.post(reverse('direccion_eliminar'), {'posicion': '0'})
        self.assertEqual(get_libreta_direcciones_use_case().listar(USER['email']), [])

    def test_campos_largos_se_guardan_sin_rechazo(self):
        datos = {'calle': 'c' * 300, 'comuna': 'm' * 150, 'ref': 'r' * 300}

        response = self.client.post(reverse('direccion_nueva'), datos)

        self.assertRedirects(response, reverse('mis_direcciones'))
        direccion = get_libreta_direcciones_use_case().listar(USER['email'])[0]
        self.assertEqual((direccion.calle, direccion.comuna, direccion.ref), ('c' * 300, 'm' * 150, 'r' * 300))


class NewsletterViewsTest(FarmaciaTestCase):

    def test_suscribirse(self):
        response = self.client.post(reverse('suscribirse'), {'nombre': '', 'email': 'ana@demo.cl'})

        self.assertRedirects(response, reverse('home'))
        suscripcion = Suscripcion.objects.get()
        self.assertEqual(suscripcion.nombre, 'Sin nombre')
        self.assertEqual(suscripcion.email, 'ana@demo.cl')

    def test_suscribirse_sin_email_no_guarda(self):
        self.client.post(reverse('suscribirse'), {'nombre': 'Ana', 'email': ''})

        self.assertFalse(Suscripcion.objects.exists())

    def test_nombre_largo_se_recorta(self):
        response = self.client.post(reverse('suscribirse'), {'nombre': 'n' * 200, 'email': 'ana@demo.cl'})

        self.assertRedirects(response, reverse('home'))
        self.assertEqual(Suscripcion.objects.get().nombre, 'n' * 150)


# ====================================================================
# ADMINISTRACIÓN
# ====================================================================

class AdminViewsTest(FarmaciaTestCase):

    def test_sin_sesion_redirige_al_login(self):
        response = self.client.get(reverse('panel_admin'))

        self.assertRedirects(response, f"{reverse('login')}?next={reverse('panel_admin')}", fetch_redirect_response=False)

    def test_usuario_sin_rol_admin_recibe_403(self):
        self.client.login(**USER)

        for url in (reverse('panel_admin'), reverse('admin_reservas')):
            response = self.client.get(url)
            self.assertContains(response, 'Acceso restringido: solo ADMIN', status_code=403)

        response = self.client.post(reverse('admin_producto_stock', args=[self.jarabe.pk]), {'stock': '0'})
        self.assertEqual(response.status_code, 403)
        self.jarabe.refresh_from_db()
        self.assertEqual(self.jarabe.stock, 5)

    def test_panel_de_admin(self):
        self.client.login(**ADMIN)

        response = self.client.get(reverse('panel_admin'))

        self.assertContains(response, 'Paracetamol 500mg')

    def test_crear_producto_con_campos_no_numericos(self):
        self.client.login(**ADMIN)

        response = self.client.post(reverse('admin_producto_nuevo'), {'nombre': ' Vitamina C ', 'precio': 'abc', 'stock': '12'})

        self.assertRedirects(response, reverse('catalogo'))
        producto = ProductoModel.objects.get(nombre='Vitamina C')
        self.assertEqual((producto.precio, producto.stock, producto.descuento), (0, 12, 0))

    def test_crear_producto_con_textos_largos(self):
        self.client.login(**ADMIN)

        response = self.client.post(reverse('admin_producto_nuevo'), {
            'nombre': 'x' * 300, 'precio': '1500', 'stock': '3', 'img': 'y' * 300,
        })

        self.assertRedirects(response, reverse('catalogo'))
        producto = ProductoModel.objects.get(precio=1500)
        self.assertEqual(producto.nombre, 'x' * 255)
        self.assertEqual(producto.img, 'y' * 255)

    def test_stock_descuento_y_eliminar(self):
        self.client.login(**ADMIN)

        self.client.post(reverse('admin_producto_stock', args=[self.jarabe.pk]), {'stock': '40'})
        self.client.post(reverse('admin_producto_descuento', args=[self.jarabe.pk]), {'descuento': '120'})
        self.jarabe.refresh_from_db()
        self.assertEqual((self.jarabe.stock, self.jarabe.descuento), (40, 100))

        self.client.post(reverse('admin_producto_eliminar', args=[self.jarabe.pk]))
        self.jarabe.refresh_from_db()
        self.assertFalse(self.jarabe.activo)
        productos = self.client.get(reverse('catalogo')).context['products']
        self.assertEqual([p.nombre for p in productos], ['Paracetamol 500mg'])

    def test_cambiar_estado_de_reserva(self):
        get_gestionar_carrito_use_case().agregar(USER['email'], self.jarabe.pk, 1)
        reserva = get_confirmar_reserva_use_case().ejecutar(USER['email'], 'retiro')
        self.client.login(**ADMIN)

        self.assertContains(self.client.get(reverse('admin_reservas')), USER['email'])
        response = self.client.post(reverse('admin_reserva_estado'), {
            'email': USER['email'], 'reserva_id': str(reserva.id), 'estado': 'Lista para retiro',
        })

        self.assertRedirects(response, reverse('admin_reservas'))
        self.assertEqual(get_libro_reservas_use_case().listar(USER['email'])[0].estado, 'Lista para retiro')

    def test_cambiar_estado_de_reserva_inexistente_no_hace_nada(self):
        get_gestionar_carrito_use_case().agregar(USER['email'], self.jarabe.pk, 1)
        get_confirmar_reserva_use_case().ejecutar(USER['email'], 'retiro')
        self.client.login(**ADMIN)

        self.client.post(reverse('admin_reserva_estado'), {
            'email': USER['email'], 'reserva_id': '1', 'estado': 'Cancelada',
        })

        self.assertEqual(get_libro_reservas_use_case().listar(USER['email'])[0].estado, 'Pendiente')


# ====================================================================
# API REST
# ====================================================================

class ProductoAPITest(FarmaciaTestCase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def test_listado_publico(self):
        response = self.client.get('/api/productos/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['precio_con_descuento'], 1791)

    def test_escritura_solo_admin(self):
        datos = {'nombre': 'Vitamina C', 'precio': 2500, 'stock': 10}

        self.client.login(**USER)
        self.assertEqual(self.client.post('/api/productos/', datos, format='json').status_code, status.HTTP_403_FORBIDDEN)

        self.client.login(**ADMIN)
        response = self.client.post('/api/productos/', datos, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_eliminar_es_borrado_logico(self):
        self.client.login(**ADMIN)

        response = self.client.delete(f'/api/productos/{self.jarabe.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertTrue(ProductoModel.objects.filter(pk=self.jarabe.pk, activo=False).exists())
        self.assertEqual(len(self.client.get('/api/productos/').data), 1)


class CarritoYCheckoutAPITest(FarmaciaTestCase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.client.login(**USER)

    def test_requiere_autenticacion(self):
        self.client.logout()

        response = self.client.get(reverse('api_carrito'))

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_agregar_ver_y_quitar(self):
        response = self.client.post(reverse('api_carrito'), {'id': str(self.paracetamol.pk), 'cantidad': '2'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total'], 3582)
        self.assertEqual(response.data['items'][0]['subtotal'], 3582)

        response = self.client.delete(reverse('api_carrito'), {'posicion': '0'}, format='json')
        self.assertEqual(response.data['items'], [])

    def test_agregar_producto_inexistente(self):
        response = self.client.post(reverse('api_carrito'), {'id': '9999'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['detail'], 'Producto no encontrado')

    def test_quitar_sin_posicion_no_cambia_el_carrito(self):
        self.client.post(reverse('api_carrito'), {'id': str(self.jarabe.pk)}, format='json')

        for datos in ({'posicion': None}, {}, {'posicion': 'abc'}):
            response = self.client.delete(reverse('api_carrito'), datos, format='json')

            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data['total'], 1000)
            self.assertEqual(len(response.data['items']), 1)
        self.assertEqual(len(get_gestionar_carrito_use_case().ver(USER['email'])), 1)

    def test_checkout_carrito_vacio(self):
        response = self.client.post(reverse('api_checkout'), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['reserva'])

    def test_checkout_y_mis_reservas(self):
        self.client.post(reverse('api_direcciones'), {'calle': 'Av. Grecia 10', 'comuna': 'Ñuñoa'}, format='json')
        self.client.post(reverse('api_carrito'), {'id': str(self.paracetamol.pk), 'cantidad': '2'}, format='json')

        response = self.client.post(reverse('api_checkout'), {'tipo_entrega': 'despacho', 'direccion': '0'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        reserva = response.data['reserva']
        self.assertEqual(reserva['total'], 3582)
        self.assertEqual(reserva['puntos'], 4)
        self.assertEqual(reserva['tipo_entrega'], 'despacho')
        self.assertEqual(reserva['direccion']['calle'], 'Av. Grecia 10')
        self.assertEqual(reserva['metodo_pago'], 'Efectivo')

        response = self.client.get(reverse('api_reservas'))
        self.assertEqual([r['id'] for r in response.data], [reserva['id']])

    def test_direcciones(self):
        response = self.client.post(reverse('api_direcciones'), {'calle': ' Los Leones 100 ', 'comuna': 'Providencia'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['calle'], 'Los Leones 100')

        response = self.client.delete(reverse('api_direcciones'), {'posicion': '3'}, format='json')
        self.assertEqual(len(response.data), 1)

        response = self.client.delete(reverse('api_direcciones'), {'posicion': '0'}, format='json')
        self.assertEqual(response.data, [])


class ReservasAdminAPITest(FarmaciaTestCase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        get_gestionar_carrito_use_case().agregar(USER['email'], self.jarabe.pk, 2)
        self.reserva = get_confirmar_reserva_use_case().ejecutar(USER['email'])

    def test_usuario_sin_rol_admin(self):
        self.client.login(**USER)

        response = self.client.get(reverse('api_admin_reservas'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_listar_y_cambiar_estado(self):
        self.client.login(**ADMIN)

        response = self.client.get(reverse('api_admin_reservas'))
        self.assertEqual(response.data[0]['email'], USER['email'])
        self.assertEqual(response.data[0]['reserva']['total'], 2000)

        response = self.client.patch(reverse('api_admin_reservas'), {
            'email': USER['email'], 'reserva_id': str(self.reserva.id), 'estado': 'Preparando',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['estado'], 'Preparando')

        response = self.client.patch(reverse('api_admin_reservas'), {
            'email': USER['email'], 'reserva_id': '1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class TokenJWTTest(FarmaciaTestCase):

    def test_token_con_usuario_de_demo(self):
        client = APIClient()

        response = client.post(reverse('token_obtain_pair'), USER, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        self.assertEqual(client.get(reverse('api_reservas')).status_code, status.HTTP_200_OK)
