from rest_framework import serializers

from farmacia.catalog.models import Producto as ProductoModel


class ProductoSerializer(serializers.ModelSerializer):
    precio_con_descuento = serializers.SerializerMethodField()

    class Meta:
        model = ProductoModel
        fields = ['id', 'nombre', 'precio', 'stock', 'descuento', 'img', 'precio_con_descuento']

    def get_precio_con_descuento(self, obj) -> int:
        return obj.precio_con_descuento


# ====================================================================
# SERIALIZERS DEL CARRITO
# Representan entidades del core (dataclasses), no modelos.
# ====================================================================

class ItemCarritoSerializer(serializers.Serializer):
    producto_id = serializers.IntegerField()
    nombre = serializers.CharField()
    precio = serializers.IntegerField()
    cantidad = serializers.IntegerField()
    descuento = serializers.IntegerField()
    precio_con_descuento = serializers.IntegerField()
    subtotal = serializers.IntegerField()


class AgregarItemSerializer(serializers.Serializer):
    """
    Entrada para agregar al carrito. Los valores se reciben como texto;
    la conversión (cantidad inválida -> 1) la hace el caso de uso.
    """
    id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    cantidad = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# ====================================================================
# SERIALIZERS DE DIRECCIONES Y RESERVAS
# ====================================================================

class DireccionSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    calle = serializers.CharField(required=False, allow_blank=True, default='')
    comuna = serializers.CharField(required=False, allow_blank=True, default='')
    ref = serializers.CharField(required=False, allow_blank=True, default='')


class ItemReservaSerializer(serializers.Serializer):
    nombre = serializers.CharField()
    cantidad = serializers.IntegerField()
    precio = serializers.IntegerField()
    descuento = serializers.IntegerField()


class ReservaSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    fecha = serializers.DateTimeField()
    items = ItemReservaSerializer(many=True)
    total = serializers.IntegerField()
    tipo_entrega = serializers.CharField()
    direccion = DireccionSerializer(allow_null=True)
    metodo_pago = serializers.CharField()
    estado = serializers.CharField()
    puntos = serializers.IntegerField()


class ReservaDeUsuarioSerializer(serializers.Serializer):
    email = serializers.CharField()
    reserva = ReservaSerializer()


# SERIALIZER PARA CHECKOUT
# ====================================================================
class CheckoutSerializer(serializers.Serializer):
    """
    Datos de confirmación. Cualquier tipo distinto de 'despacho' es retiro;
    'direccion' es la posición en la libreta del usuario.
    """
    tipo_entrega = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    direccion = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    metodo_pago = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EstadoReservaSerializer(serializers.Serializer):
    email = serializers.CharField()
    reserva_id = serializers.CharField()
    estado = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PosicionSerializer(serializers.Serializer):
    posicion = serializers.CharField(required=False, allow_blank=True, allow_null=True)
