# farmacia/urls.py
"""
Configuración principal de URL del proyecto Farmacia.

1. Rutas de la tienda (farmacia.presentation)
2. Admin de Django
3. Documentación de la API (Swagger/Redoc)
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView


urlpatterns = [
    # Las rutas admin/panel/ y admin/reservas/ de la tienda se resuelven antes que el admin de Django
    path('', include('farmacia.presentation.urls')),

    path('admin/', admin.site.urls),

    # ====================================================================
    # DOCUMENTACIÓN DE LA API (DRF SPECTACULAR)
    # ====================================================================
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/swagger/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/docs/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
