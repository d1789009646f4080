from decimal import Decimal

from django.db import models
from django.core.validators import MaxValueValidator

from farmacia.core.entities import redondear

# ====================================================================
# Producto
# ====================================================================

class Producto(models.Model):
    """Modelo para representar un producto en el catálogo de la farmacia."""

    nombre = models.CharField(max_length=255, verbose_name="Nombre")

    # Precio en pesos (sin decimales), stock y descuento
    precio = models.PositiveIntegerField(default=0, verbose_name="Precio")
    stock = models.PositiveIntegerField(default=0, verbose_name="Stock")
    descuento = models.PositiveIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        help_text='Descuento en porcentaje'
    )
    img = models.CharField(max_length=255, blank=True, null=True, verbose_name="Imagen")

    # Los productos no se borran de la base: se desactivan
    activo = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Producto"
        verbose_name_plural = "Productos"
        ordering = ['id']
        db_table = 'productos'

    def __str__(self):
        return self.nombre

    @property
    def precio_con_descuento(self) -> int:
        return redondear(Decimal(self.precio) * (100 - self.descuento) / 100)
