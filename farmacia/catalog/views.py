# farmacia/catalog/views.py
from django.shortcuts import render, redirect
from django.views import View
from django.contrib import messages
from django.contrib.auth.mixins import UserPassesTestMixin

from .forms import ProductoAdminForm, StockForm, DescuentoForm
from farmacia.core.dependency_injection import (
    get_listar_catalogo_use_case,
    get_gestionar_catalogo_admin_use_case,
)
from farmacia.presentation.forms import AgregarItemCarritoForm


# ====================================================================
# Mixin para garantizar que solo administradores accedan
# ====================================================================

class AdminRequiredMixin(UserPassesTestMixin):
    """
    Solo usuarios con rol ADMIN. Sin sesión se redirige al login;
    con sesión de otro rol se responde 403.
    """
    permission_denied_message = "Acceso restringido: solo ADMIN"

    def test_func(self):
        user = self.request.user
        return user.is_authenticated and getattr(user, 'es_admin', False)


# ====================================================================
# VIEWS DEL CATÁLOGO (PÚBLICO)
# ====================================================================

class CatalogoView(View):
    """Muestra el catálogo con el precio final de cada producto."""
    template_name = 'catalog/catalogo.html'

    def get(self, request):
        productos = get_listar_catalogo_use_case().ejecutar()
        context = {
            'products': productos,
            'form_agregar': AgregarItemCarritoForm(),
        }
        return render(request, self.template_name, context)


# ====================================================================
# VIEWS DEL PANEL DE ADMINISTRACIÓN (productos)
# ====================================================================

class CrearProductoView(AdminRequiredMixin, View):
    """Alta de producto; los campos se convierten sin validar."""

    def post(self, request):
        form = ProductoAdminForm(request.POST)
        form.is_valid()
        producto = get_gestionar_catalogo_admin_use_case().crear(
            nombre=form.cleaned_data.get('nombre'),
            precio=form.cleaned_data.get('precio'),
            stock=form.cleaned_data.get('stock'),
            descuento=form.cleaned_data.get('descuento'),
            img=form.cleaned_data.get('img'),
        )
        messages.success(request, f'Producto "{producto.nombre}" creado.')
        return redirect('catalogo')


class ActualizarStockView(AdminRequiredMixin, View):

    def post(self, request, pk):
        form = StockForm(request.POST)
        form.is_valid()
        producto = get_gestionar_catalogo_admin_use_case().actualizar_stock(pk, form.cleaned_data.get('stock'))
        if producto:
            messages.success(request, f'Stock de "{producto.nombre}" actualizado a {producto.stock}.')
        return redirect('panel_admin')


class ActualizarDescuentoView(AdminRequiredMixin, View):

    def post(self, request, pk):
        form = DescuentoForm(request.POST)
        form.is_valid()
        producto = get_gestionar_catalogo_admin_use_case().actualizar_descuento(pk, form.cleaned_data.get('descuento'))
        if producto:
            messages.success(request, f'Descuento de "{producto.nombre}" actualizado a {producto.descuento}%.')
        return redirect('panel_admin')


class EliminarProductoView(AdminRequiredMixin, View):

    def post(self, request, pk):
        get_gestionar_catalogo_admin_use_case().eliminar(pk)
        messages.success(request, 'Producto eliminado del catálogo.')
        return redirect('panel_admin')
