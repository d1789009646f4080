# farmacia/catalog/forms.py
from django import forms


class ProductoAdminForm(forms.Form):
    """
    Alta de productos desde el panel. Los campos numéricos llegan como texto;
    lo que no es número se guarda como 0.
    """
    nombre = forms.CharField(label="Nombre", required=False)
    precio = forms.CharField(label="Precio", required=False)
    stock = forms.CharField(label="Stock", required=False)
    descuento = forms.CharField(label="Descuento (%)", required=False)
    img = forms.CharField(label="Imagen", required=False)


class StockForm(forms.Form):
    stock = forms.CharField(label="Stock", required=False)


class DescuentoForm(forms.Form):
    descuento = forms.CharField(label="Descuento (%)", required=False)
