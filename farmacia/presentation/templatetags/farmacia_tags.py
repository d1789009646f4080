from django import template

register = template.Library()


@register.filter
def pesos(valor):
    """1990 -> $1.990"""
    try:
        return f"${int(valor):,}".replace(",", ".")
    except (TypeError, ValueError):
        return valor
