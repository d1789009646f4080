# farmacia/core/coercion.py
"""
Conversión permisiva de campos de formulario.

Los formularios de la tienda no validan: un valor no numérico o ausente se
transforma en el valor por defecto de su tipo en vez de rechazar la petición.
"""
import re
from typing import Optional

_ENTERO_INICIAL = re.compile(r'^\s*([+-]?\d+)')


def a_entero(valor, default: int = 0) -> int:
    """
    Interpreta los dígitos iniciales del valor ("12abc" -> 12).
    Devuelve ``default`` si no hay un número al comienzo o si el resultado es 0.
    """
    if isinstance(valor, bool):
        return default
    if isinstance(valor, int):
        return valor or default
    if isinstance(valor, float):
        return int(valor) or default
    match = _ENTERO_INICIAL.match(str(valor if valor is not None else ''))
    if not match:
        return default
    return int(match.group(1)) or default


def a_cantidad(valor) -> int:
    """Cantidad de un item del carrito: entero positivo, 1 si no es válida."""
    cantidad = a_entero(valor, 1)
    return cantidad if cantidad >= 1 else 1


def a_no_negativo(valor) -> int:
    """Precio o stock: entero >= 0, 0 si no es válido."""
    return max(0, a_entero(valor, 0))


def a_porcentaje(valor) -> int:
    """Descuento en porcentaje, acotado a 0-100."""
    return min(100, max(0, a_entero(valor, 0)))


def a_texto(valor) -> str:
    return str(valor if valor is not None else '').strip()


def a_posicion(valor) -> Optional[int]:
    """Posición de una lista (base cero). None si el valor no es un entero."""
    if isinstance(valor, bool):
        return None
    if isinstance(valor, int):
        return valor
    texto = a_texto(valor)
    if not re.fullmatch(r'[+-]?\d+', texto):
        return None
    return int(texto)
