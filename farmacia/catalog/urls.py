# farmacia/catalog/urls.py
from django.urls import path
from . import views

urlpatterns = [
    # ====================================================================
    # RUTAS PÚBLICAS DEL CATÁLOGO
    # ====================================================================
    path('catalogo/', views.CatalogoView.as_view(), name='catalogo'),

    # ====================================================================
    # RUTAS DE ADMINISTRACIÓN - PRODUCTOS
    # ====================================================================
    path('admin/producto/nuevo/', views.CrearProductoView.as_view(), name='admin_producto_nuevo'),
    path('admin/producto/<int:pk>/stock/', views.ActualizarStockView.as_view(), name='admin_producto_stock'),
    path('admin/producto/<int:pk>/descuento/', views.ActualizarDescuentoView.as_view(), name='admin_producto_descuento'),
    path('admin/producto/<int:pk>/eliminar/', views.EliminarProductoView.as_view(), name='admin_producto_eliminar'),
]
