from django.views import View
from django.shortcuts import render, redirect
from django.http import HttpResponseBadRequest
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework.views import APIView
from rest_framework.response import Response

from farmacia.core.dependency_injection import (
    get_gestionar_carrito_use_case,
    get_libreta_direcciones_use_case,
    get_libro_reservas_use_case,
    get_confirmar_reserva_use_case,
    get_suscribir_newsletter_use_case,
    get_gestionar_catalogo_admin_use_case,
)
from farmacia.core.entities import calcular_total
from farmacia.core.exceptions import ProductoNoEncontradoError, DatosInvalidosError
from farmacia.catalog.models import Producto as ProductoModel

from .forms import (
    AgregarItemCarritoForm,
    PosicionForm,
    ConfirmarReservaForm,
    DireccionForm,
    SuscripcionForm,
)
from .serializers import (
    ProductoSerializer,
    ItemCarritoSerializer,
    AgregarItemSerializer,
    DireccionSerializer,
    ReservaSerializer,
    CheckoutSerializer,
    PosicionSerializer,
)


# ====================================================================
# VIEWS: orquestan la petición, la ejecución de los casos de uso y la respuesta.
# Las colecciones de cada usuario se indexan por su email.
# ====================================================================

class HomeView(View):
    """
    Página de inicio de la tienda.
    """
    template_name = 'home.html'

    def get(self, request):
        return render(request, self.template_name, {'suscripcion_form': SuscripcionForm()})


# ====================================================================
# CARRITO Y CHECKOUT
# ====================================================================

class CarritoView(LoginRequiredMixin, View):
    """Muestra el carrito del usuario y el formulario de confirmación."""
    template_name = 'cart/carrito.html'

    def get(self, request):
        email = request.user.email
        items = get_gestionar_carrito_use_case().ver(email)
        context = {
            'carrito': items,
            'total': calcular_total(items),
            'direcciones': get_libreta_direcciones_use_case().listar(email),
            'form_confirmar': ConfirmarReservaForm(),
        }
        return render(request, self.template_name, context)


class AgregarAlCarritoView(LoginRequiredMixin, View):

    def post(self, request):
        form = AgregarItemCarritoForm(request.POST)
        form.is_valid()
        try:
            get_gestionar_carrito_use_case().agregar(
                request.user.email,
                form.cleaned_data.get('id'),
                form.cleaned_data.get('cantidad'),
            )
        except ProductoNoEncontradoError as e:
            return HttpResponseBadRequest(e.message)
        return redirect('carrito')


class QuitarDelCarritoView(LoginRequiredMixin, View):
    """Quita la línea indicada por posición; una posición inválida no cambia nada."""

    def post(self, request):
        form = PosicionForm(request.POST)
        form.is_valid()
        get_gestionar_carrito_use_case().quitar_en(request.user.email, form.cleaned_data.get('posicion'))
        return redirect('carrito')


class ConfirmarReservaView(LoginRequiredMixin, View):

    def post(self, request):
        form = ConfirmarReservaForm(request.POST)
        form.is_valid()
        reserva = get_confirmar_reserva_use_case().ejecutar(
            request.user.email,
            tipo_entrega=form.cleaned_data.get('tipo_entrega'),
            posicion_direccion=form.cleaned_data.get('direccion'),
            metodo_pago=form.cleaned_data.get('metodo_pago'),
        )
        if reserva is None:
            messages.info(request, "Tu carrito está vacío.")
            return redirect('carrito')

        messages.success(request, f"Reserva #{reserva.id} confirmada. Sumaste {reserva.puntos} puntos.")
        return redirect('mis_reservas')


class MisReservasView(LoginRequiredMixin, View):
    template_name = 'reservas/mis_reservas.html'

    def get(self, request):
        reservas = get_libro_reservas_use_case().listar(request.user.email)
        return render(request, self.template_name, {'reservas': reservas})


# ====================================================================
# DIRECCIONES
# ====================================================================

class NuevaDireccionView(LoginRequiredMixin, View):
    template_name = 'direcciones/direccion_nueva.html'

    def get(self, request):
        return render(request, self.template_name, {'form': DireccionForm()})

    def post(self, request):
        form = DireccionForm(request.POST)
        form.is_valid()
        get_libreta_direcciones_use_case().agregar(
            request.user.email,
            form.cleaned_data.get('calle'),
            form.cleaned_data.get('comuna'),
            form.cleaned_data.get('ref'),
        )
        return redirect('mis_direcciones')


class MisDireccionesView(LoginRequiredMixin, View):
    template_name = 'direcciones/mis_direcciones.html'

    def get(self, request):
        direcciones = get_libreta_direcciones_use_case().listar(request.user.email)
        return render(request, self.template_name, {'direcciones': direcciones})


class EliminarDireccionView(LoginRequiredMixin, View):

    def post(self, request):
        form = PosicionForm(request.POST)
        form.is_valid()
        get_libreta_direcciones_use_case().quitar_en(request.user.email, form.cleaned_data.get('posicion'))
        return redirect('mis_direcciones')


# ====================================================================
# NEWSLETTER
# ====================================================================

class SuscribirseView(View):

    def post(self, request):
        form = SuscripcionForm(request.POST)
        form.is_valid()
        try:
            suscripcion = get_suscribir_newsletter_use_case().ejecutar(
                form.cleaned_data.get('nombre'),
                form.cleaned_data.get('email'),
            )
            messages.success(request, f"¡Gracias, {suscripcion.nombre}! Te suscribiste al newsletter.")
        except DatosInvalidosError as e:
            messages.error(request, e.message)
        return redirect('home')


# ====================================================================
# API (Django REST Framework)
# ====================================================================

class ProductoViewSet(viewsets.ModelViewSet):
    """
    API ViewSet del catálogo. Lectura pública; escritura solo para ADMIN.
    """
    queryset = ProductoModel.objects.filter(activo=True)
    serializer_class = ProductoSerializer

    def get_permissions(self):
        """
        Define los permisos para cada acción.
        """
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            self.permission_classes = [IsAdminUser]
        else:
            self.permission_classes = []

        return [permission() for permission in self.permission_classes]

    def perform_destroy(self, instance):
        get_gestionar_catalogo_admin_use_case().eliminar(instance.pk)


class CarritoAPIView(APIView):
    """
    API View para gestionar el carrito del usuario autenticado.
    """
    permission_classes = [IsAuthenticated]

    def _respuesta(self, items, codigo=status.HTTP_200_OK):
        data = {
            'items': ItemCarritoSerializer(items, many=True).data,
            'total': calcular_total(items),
        }
        return Response(data, status=codigo)

    def get(self, request):
        return self._respuesta(get_gestionar_carrito_use_case().ver(request.user.email))

    def post(self, request):
        serializer = AgregarItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            items = get_gestionar_carrito_use_case().agregar(
                request.user.email,
                serializer.validated_data.get('id'),
                serializer.validated_data.get('cantidad'),
            )
        except ProductoNoEncontradoError as e:
            return Response({'detail': e.message}, status=status.HTTP_400_BAD_REQUEST)
        return self._respuesta(items, status.HTTP_201_CREATED)

    def delete(self, request):
        """Quita la línea en 'posicion'; una posición ausente o inválida no cambia nada."""
        serializer = PosicionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        items = get_gestionar_carrito_use_case().quitar_en(
            request.user.email, serializer.validated_data.get('posicion')
        )
        return self._respuesta(items)


class CheckoutAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reserva = get_confirmar_reserva_use_case().ejecutar(
            request.user.email,
            tipo_entrega=serializer.validated_data.get('tipo_entrega'),
            posicion_direccion=serializer.validated_data.get('direccion'),
            metodo_pago=serializer.validated_data.get('metodo_pago'),
        )
        if reserva is None:
            return Response({'reserva': None}, status=status.HTTP_200_OK)
        return Response({'reserva': ReservaSerializer(reserva).data}, status=status.HTTP_201_CREATED)


class ReservasAPIView(APIView):
    """Reservas del usuario autenticado."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        reservas = get_libro_reservas_use_case().listar(request.user.email)
        return Response(ReservaSerializer(reservas, many=True).data)


class DireccionesAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        direcciones = get_libreta_direcciones_use_case().listar(request.user.email)
        return Response(DireccionSerializer(direcciones, many=True).data)

    def post(self, request):
        serializer = DireccionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        direccion = get_libreta_direcciones_use_case().agregar(request.user.email, **serializer.validated_data)
        return Response(DireccionSerializer(direccion).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        serializer = PosicionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        direcciones = get_libreta_direcciones_use_case().quitar_en(
            request.user.email, serializer.validated_data.get('posicion')
        )
        return Response(DireccionSerializer(direcciones, many=True).data)
