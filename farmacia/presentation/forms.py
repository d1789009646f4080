# farmacia/presentation/forms.py
#
# Los formularios de la tienda no rechazan datos: los campos se reciben como
# texto y los casos de uso los convierten (números inválidos -> valor por defecto).

from django import forms

from farmacia.core.entities import ESTADOS_RESERVA, TipoEntrega

# --- 1. AUTENTICACIÓN ---

class LoginForm(forms.Form):
    """
    Formulario simple de login.
    """
    email = forms.CharField(
        label="Email",
        max_length=254,
        widget=forms.EmailInput(attrs={'placeholder': 'usuario@demo.cl'})
    )
    password = forms.CharField(
        label="Contraseña",
        widget=forms.PasswordInput(attrs={'placeholder': 'Su contraseña'})
    )
    # La validación de credenciales ocurre en la View (authenticate)


# --- 2. CARRITO Y CHECKOUT ---

class AgregarItemCarritoForm(forms.Form):
    id = forms.CharField(required=False, widget=forms.HiddenInput())
    cantidad = forms.CharField(
        required=False,
        initial=1,
        widget=forms.NumberInput(attrs={'min': '1', 'step': '1'})
    )


class PosicionForm(forms.Form):
    """Posición (base cero) de un item del carrito o de una dirección."""
    posicion = forms.CharField(required=False, widget=forms.HiddenInput())


class ConfirmarReservaForm(forms.Form):
    TIPO_ENTREGA_CHOICES = [
        (TipoEntrega.RETIRO.value, 'Retiro en farmacia'),
        (TipoEntrega.DESPACHO.value, 'Despacho a domicilio'),
    ]

    tipo_entrega = forms.CharField(
        required=False,
        initial=TipoEntrega.RETIRO.value,
        widget=forms.RadioSelect(choices=TIPO_ENTREGA_CHOICES)
    )
    direccion = forms.CharField(required=False)
    metodo_pago = forms.CharField(required=False, initial='Efectivo')


# --- 3. DIRECCIONES ---

class DireccionForm(forms.Form):
    calle = forms.CharField(label="Calle", required=False)
    comuna = forms.CharField(label="Comuna", required=False)
    ref = forms.CharField(
        label="Referencia",
        required=False,
        widget=forms.TextInput(attrs={'placeholder': 'Depto, block, indicaciones'})
    )


# --- 4. NEWSLETTER ---

class SuscripcionForm(forms.Form):
    nombre = forms.CharField(label="Nombre", required=False)
    email = forms.CharField(label="Email")


# --- 5. ADMINISTRACIÓN DE RESERVAS ---

class EstadoReservaForm(forms.Form):
    email = forms.CharField(widget=forms.HiddenInput())
    reserva_id = forms.CharField(widget=forms.HiddenInput())
    estado = forms.CharField(
        required=False,
        widget=forms.Select(choices=[(estado, estado) for estado in ESTADOS_RESERVA])
    )
