"""
Mapeadores (Mappers) para convertir entre:
1. Modelos del Django ORM
2. Entidades de Dominio (farmacia.core.entities)
"""
from typing import Any, Optional

from farmacia.core.entities import (
    Producto as ProductoEntity,
    Suscripcion as SuscripcionEntity,
)


class BaseMapper:

    @staticmethod
    def to_entity(model, entity_class):
        """Convierte un Model de Django genérico en una Entidad del Core."""
        if not model:
            return None

        # Copia los campos con el mismo nombre en ambos lados
        entity_data = {
            field.name: getattr(model, field.name)
            for field in entity_class.__dataclass_fields__.values()
            if hasattr(model, field.name)
        }

        return entity_class(**entity_data)


class ProductoMapper(BaseMapper):
    """Mapeador para Producto."""

    @staticmethod
    def to_entity(model: Any) -> Optional[ProductoEntity]:
        if not model: return None
        return ProductoEntity(
            id=model.id,
            nombre=model.nombre,
            precio=model.precio,
            stock=model.stock,
            descuento=model.descuento,
            img=model.img or None,
        )


class SuscripcionMapper(BaseMapper):
    """Mapeador para Suscripcion."""

    @staticmethod
    def to_entity(model: Any) -> Optional[SuscripcionEntity]:
        return BaseMapper.to_entity(model, SuscripcionEntity)
