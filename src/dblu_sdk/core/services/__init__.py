"""Servicios del Core (orquestación sin I/O)."""

from dblu_sdk.core.services.persona_selection import describe_context, select_persona

__all__ = ["describe_context", "select_persona"]
