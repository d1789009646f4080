"""
Rutas de la tienda: páginas HTML (vistas basadas en clases) y API REST.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from . import views, views_auth, views_admin

# Router para ViewSets (API REST)
router = DefaultRouter()
router.register(r'productos', views.ProductoViewSet)


urlpatterns = [
    # ====================================================================
    # 1. INICIO Y CATÁLOGO
    # ====================================================================
    path('', views.HomeView.as_view(), name='home'),
    path('', include('farmacia.catalog.urls')),

    # ====================================================================
    # 2. CARRITO Y RESERVAS
    # ====================================================================
    path('carrito/', views.CarritoView.as_view(), name='carrito'),
    path('carrito/agregar/', views.AgregarAlCarritoView.as_view(), name='carrito_agregar'),
    path('carrito/quitar/', views.QuitarDelCarritoView.as_view(), name='carrito_quitar'),
    path('carrito/confirmar/', views.ConfirmarReservaView.as_view(), name='carrito_confirmar'),
    path('mis-reservas/', views.MisReservasView.as_view(), name='mis_reservas'),

    # ====================================================================
    # 3. DIRECCIONES Y NEWSLETTER
    # ====================================================================
    path('direcciones/nueva/', views.NuevaDireccionView.as_view(), name='direccion_nueva'),
    path('direcciones/eliminar/', views.EliminarDireccionView.as_view(), name='direccion_eliminar'),
    path('mis-direcciones/', views.MisDireccionesView.as_view(), name='mis_direcciones'),
    path('suscribirse/', views.SuscribirseView.as_view(), name='suscribirse'),

    # ====================================================================
    # 4. AUTENTICACIÓN
    # ====================================================================
    path('login/', views_auth.LoginView.as_view(), name='login'),
    path('logout/', views_auth.logout_usuario, name='logout'),
    path('whoami/', views_auth.whoami, name='whoami'),

    # ====================================================================
    # 5. ADMINISTRACIÓN (antes del admin de Django en urls del proyecto)
    # ====================================================================
    path('admin/panel/', views_admin.PanelAdminView.as_view(), name='panel_admin'),
    path('admin/reservas/', views_admin.GestionarReservasView.as_view(), name='admin_reservas'),
    path('admin/reservas/estado/', views_admin.ActualizarEstadoReservaView.as_view(), name='admin_reserva_estado'),

    # ====================================================================
    # 6. API (Django REST Framework)
    # ====================================================================
    path('api/', include(router.urls)),  # /api/productos/
    path('api/carrito/', views.CarritoAPIView.as_view(), name='api_carrito'),
    path('api/checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),
    path('api/reservas/', views.ReservasAPIView.as_view(), name='api_reservas'),
    path('api/direcciones/', views.DireccionesAPIView.as_view(), name='api_direcciones'),
    path('api/admin/reservas/', views_admin.ReservasAdminAPIView.as_view(), name='api_admin_reservas'),
    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
