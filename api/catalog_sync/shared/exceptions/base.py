"""
Raiz de la jerarquia de errores del servicio de catalogo.

Los errores de sincronizacion (`sync.py`) heredan de aqui; el handler de
`main.py` convierte cualquier AppException que escape de un endpoint en
el cuerpo JSON `{success, error, message, details}`.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Error con codigo estable para clientes y logs.

    `error_code` es el valor que ven el endpoint /sync y el CLI
    (SOURCE_UNAVAILABLE, WRITE_FAILED...); `status_code` solo se usa
    cuando la excepcion llega al handler HTTP.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Cuerpo JSON de error comun a todos los endpoints."""
        return {
            "success": False,
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
