# farmacia/presentation/views_admin.py
from django.views import View
from django.views.generic import TemplateView
from django.shortcuts import redirect
from django.contrib import messages
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, BasePermission
from rest_framework.views import APIView
from rest_framework.response import Response

from farmacia.catalog.forms import ProductoAdminForm, StockForm, DescuentoForm
from farmacia.catalog.views import AdminRequiredMixin
from farmacia.core.dependency_injection import (
    get_gestionar_catalogo_admin_use_case,
    get_libro_reservas_use_case,
)
from farmacia.core.entities import ESTADOS_RESERVA
from .forms import EstadoReservaForm
from .serializers import ReservaDeUsuarioSerializer, ReservaSerializer, EstadoReservaSerializer


# ====================================================================
# PANEL
# ====================================================================

class PanelAdminView(AdminRequiredMixin, TemplateView):
    """
    Panel del administrador: catálogo con formularios de stock, descuento y baja.
    """
    template_name = 'panel/panel.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['products'] = get_gestionar_catalogo_admin_use_case().listar()
        context['form_producto'] = ProductoAdminForm()
        context['form_stock'] = StockForm()
        context['form_descuento'] = DescuentoForm()
        return context


# ====================================================================
# GESTIÓN DE RESERVAS
# ====================================================================

class GestionarReservasView(AdminRequiredMixin, TemplateView):
    """
    Todas las reservas de todos los usuarios, con el formulario de estado.
    """
    template_name = 'panel/reservas.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['reservas'] = get_libro_reservas_use_case().listar_todas()
        context['estados'] = ESTADOS_RESERVA
        return context


class ActualizarEstadoReservaView(AdminRequiredMixin, View):
    """
    Cambia el estado de una reserva. Si la reserva no existe no se modifica nada.
    """
    def post(self, request):
        form = EstadoReservaForm(request.POST)
        form.is_valid()
        reserva = get_libro_reservas_use_case().actualizar_estado(
            form.cleaned_data.get('email'),
            form.cleaned_data.get('reserva_id'),
            form.cleaned_data.get('estado'),
        )
        if reserva:
            messages.success(request, f"Reserva #{reserva.id} actualizada a {reserva.estado}.")
        else:
            messages.warning(request, "La reserva indicada no existe.")
        return redirect('admin_reservas')


# ====================================================================
# API DE ADMINISTRACIÓN
# ====================================================================

class EsAdmin(BasePermission):
    message = "Acceso restringido: solo ADMIN"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and getattr(request.user, 'es_admin', False))


class ReservasAdminAPIView(APIView):
    permission_classes = [IsAuthenticated, EsAdmin]

    def get(self, request):
        reservas = get_libro_reservas_use_case().listar_todas()
        return Response(ReservaDeUsuarioSerializer(reservas, many=True).data)

    def patch(self, request):
        serializer = EstadoReservaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reserva = get_libro_reservas_use_case().actualizar_estado(
            serializer.validated_data['email'],
            serializer.validated_data['reserva_id'],
            serializer.validated_data.get('estado'),
        )
        if reserva is None:
            return Response({'detail': 'Reserva no encontrada'}, status=status.HTTP_404_NOT_FOUND)
        return Response(ReservaSerializer(reserva).data)
