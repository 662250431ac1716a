"""Taxonomía cerrada de errores del cliente.

Por qué una jerarquía de excepciones:
- Cada fallo es exactamente una variante; el llamador discrimina con
  `except HTTPStatusError` o por `error.kind`, nunca parseando strings.
- Cada variante lleva solo su dato (status code, causa de decodificación).
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminante estable de cada variante de error."""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    HTTP_ERROR = "http_error"
    DECODING_ERROR = "decoding_error"
    NO_DATA = "no_data"
    NETWORK_UNAVAILABLE = "network_unavailable"


class DBLUError(Exception):
    """Base de todos los errores que propaga `DBLUClient`."""

    kind: ErrorKind


class InvalidURLError(DBLUError):
    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class InvalidResponseError(DBLUError):
    kind = ErrorKind.INVALID_RESPONSE

    def __init__(self) -> None:
        super().__init__("Invalid response received")


class HTTPStatusError(DBLUError):
    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP Error: {status_code}")
        self.status_code = status_code


class DecodingError(DBLUError):
    kind = ErrorKind.DECODING_ERROR

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Decoding Error: {cause}")
        self.cause = cause


class NoDataError(DBLUError):
    kind = ErrorKind.NO_DATA

    def __init__(self) -> None:
        super().__init__("No data received")


class NetworkUnavailableError(DBLUError):
    kind = ErrorKind.NETWORK_UNAVAILABLE

    def __init__(self) -> None:
        super().__init__("Network unavailable")
