# Configuración del admin de Django para los modelos de la farmacia.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from farmacia.catalog.models import Producto
from farmacia.infrastructure.models import Usuario, Suscripcion

# ====================================================================
# 1. USUARIOS (email como login, con rol)
# ====================================================================

@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    list_display = ('email', 'rol', 'is_staff', 'is_active')
    list_filter = ('rol', 'is_staff', 'is_active')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Rol y permisos', {'fields': ('rol', 'is_active', 'is_staff', 'is_superuser')}),
        ('Fechas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'rol', 'password1', 'password2'),
        }),
    )

    # No existe 'username': búsqueda y orden por email
    search_fields = ('email',)
    ordering = ('email',)


# ====================================================================
# 2. PRODUCTOS
# ====================================================================

@admin.register(Producto)
class ProductoAdmin(admin.ModelAdmin):
    list_display = ('id', 'nombre', 'precio', 'stock', 'descuento', 'activo')
    list_filter = ('activo',)
    list_editable = ('stock', 'descuento')
    search_fields = ('nombre',)
    ordering = ('id',)


# ====================================================================
# 3. NEWSLETTER
# ====================================================================

@admin.register(Suscripcion)
class SuscripcionAdmin(admin.ModelAdmin):
    list_display = ('nombre', 'email', 'fecha')
    search_fields = ('nombre', 'email')
    readonly_fields = ('fecha',)

    def has_change_permission(self, request, obj=None):
        return False
