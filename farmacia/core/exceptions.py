class BaseErrorCore(Exception):
    """Clase base para todas las excepciones de la capa Core."""
    pass

class DatosInvalidosError(BaseErrorCore):
    """Error levantado cuando se entregan datos inválidos."""
    def __init__(self, message="Los datos entregados son inválidos."):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERRORES DE PERSISTENCIA Y ENTIDAD
# ===============================================

class ItemNoEncontradoError(BaseErrorCore):
    """Error levantado cuando un item (genérico) no existe."""
    def __init__(self, message="El item solicitado no fue encontrado."):
        self.message = message
        super().__init__(self.message)

class ProductoNoEncontradoError(ItemNoEncontradoError):
    """El carrito hace referencia a un producto que no está en el catálogo."""
    def __init__(self, producto_id=None, message=None):
        self.producto_id = producto_id
        if message is None:
            message = "Producto no encontrado"
        super().__init__(message)
