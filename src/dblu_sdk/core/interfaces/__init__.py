"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: la CLI depende de abstracciones.
"""

from dblu_sdk.core.interfaces.api import PersonaAPI

__all__ = ["PersonaAPI"]
