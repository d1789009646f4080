"""
Context processors de la aplicación presentation.
"""


def carrito_context(request):
    """
    Agrega la cantidad de unidades del carrito al contexto global de los templates.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return {'cantidad_items_carrito': 0}

    from farmacia.core.dependency_injection import get_gestionar_carrito_use_case

    items = get_gestionar_carrito_use_case().ver(user.email)
    return {'cantidad_items_carrito': sum(item.cantidad for item in items)}
