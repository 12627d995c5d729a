"""
Lector de Google Sheets (API REST v4) autenticado con una cuenta de servicio.

- google-auth para el token (scope de solo lectura)
- AuthorizedSession (requests) para las llamadas HTTP
- sin reintentos: un error de red o de la API falla la corrida y
  la siguiente ejecucion programada lo vuelve a intentar

Las llamadas son bloqueantes; el orquestador las ejecuta en un thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account
from loguru import logger

from catalog_sync.shared.exceptions import SourceConfigInvalidError, SourceUnavailableError


SHEETS_READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"
TOKEN_URI = "https://oauth2.googleapis.com/token"
SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"


def a1_sheet_range(sheet_title: str) -> str:
    """
    Rango A1 que cubre toda la hoja.

    El titulo va entre comillas simples (las internas se duplican) para que
    una hoja llamada "A1" o "R1C1" no se interprete como una celda.
    """
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'"


@dataclass(frozen=True)
class SheetSourceConfig:
    spreadsheet_id: str
    client_email: str
    private_key: str
    sheet_index: int = 0

    def missing_fields(self) -> List[str]:
        missing = []
        if not (self.spreadsheet_id or "").strip():
            missing.append("SPREADSHEET_ID")
        if not (self.client_email or "").strip():
            missing.append("GOOGLE_SERVICE_ACCOUNT_EMAIL")
        if not (self.private_key or "").strip():
            missing.append("GOOGLE_PRIVATE_KEY")
        return missing


@dataclass(frozen=True)
class SheetSnapshot:
    """
    Contenido de la hoja leida.

    rows: filas de datos (sin la fila de encabezados), cada una como
    lista de celdas formateadas; las celdas vacias al final de la fila
    no vienen en la respuesta de la API.
    """

    spreadsheet_title: str
    sheet_title: str
    rows: List[List[Any]]


class GoogleSheetsReader:
    """
    Lee todas las filas de una pestaña del spreadsheet.

    Uso:
        reader = GoogleSheetsReader(config)
        reader.ensure_configured()
        snapshot = reader.read_rows()
    """

    def __init__(
        self,
        config: SheetSourceConfig,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = SHEETS_API_URL,
        timeout_s: int = 30,
    ) -> None:
        self._config = config
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s

    @property
    def config(self) -> SheetSourceConfig:
        return self._config

    def ensure_configured(self) -> None:
        """
        Valida que haya credenciales utilizables.

        Raises:
            SourceConfigInvalidError: Si falta algun valor o la clave privada no se puede parsear
        """
        missing = self._config.missing_fields()
        if missing:
            raise SourceConfigInvalidError(
                f"Configuración de Google Sheets incompleta: faltan {', '.join(missing)}",
                missing=missing,
            )
        if self._session is None:
            self._session = self._build_session()

    def read_rows(self) -> SheetSnapshot:
        """
        Lee la pestaña configurada.

        Raises:
            SourceConfigInvalidError: Si la configuracion no es valida
            SourceUnavailableError: Ante errores de red, de token o respuestas no 2xx
        """
        self.ensure_configured()

        metadata = self._get_json(
            f"{self._base_url}/{self._config.spreadsheet_id}",
            params={"fields": "properties.title,sheets.properties(title,index)"},
        )

        sheets = metadata.get("sheets") or []
        index = self._config.sheet_index
        if index < 0 or index >= len(sheets):
            raise SourceUnavailableError(
                f"El spreadsheet tiene {len(sheets)} hojas; no existe la hoja con índice {index}"
            )

        spreadsheet_title = (metadata.get("properties") or {}).get("title", "")
        sheet_title = (sheets[index].get("properties") or {}).get("title", "")

        values = self._get_json(
            f"{self._base_url}/{self._config.spreadsheet_id}/values/{quote(a1_sheet_range(sheet_title), safe='')}",
            params={"valueRenderOption": "FORMATTED_VALUE", "majorDimension": "ROWS"},
        )
        all_rows = values.get("values") or []

        logger.debug(f"Hoja '{sheet_title}' de '{spreadsheet_title}': {len(all_rows)} filas (con encabezado)")
        return SheetSnapshot(
            spreadsheet_title=spreadsheet_title,
            sheet_title=sheet_title,
            rows=all_rows[1:],
        )

    def _build_session(self) -> requests.Session:
        info = {
            "type": "service_account",
            "client_email": self._config.client_email,
            "private_key": self._config.private_key,
            "token_uri": TOKEN_URI,
        }
        try:
            credentials = service_account.Credentials.from_service_account_info(
                info, scopes=[SHEETS_READONLY_SCOPE]
            )
        except (ValueError, GoogleAuthError) as e:
            raise SourceConfigInvalidError(
                f"No se pudo cargar la cuenta de servicio de Google: {e}"
            ) from e
        return AuthorizedSession(credentials)

    def _get_json(self, url: str, *, params: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout_s)
        except (requests.RequestException, GoogleAuthError) as e:
            raise SourceUnavailableError(f"Error de conexión con Google Sheets: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise SourceUnavailableError(
                f"Google Sheets respondió {resp.status_code}: {resp.text[:500]}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise SourceUnavailableError("Respuesta de Google Sheets no es JSON válido") from e
