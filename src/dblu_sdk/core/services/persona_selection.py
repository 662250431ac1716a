"""Persona ("double") selection for prompt execution.

The API never resolves names: the caller lists the vault first and then
passes a `persona_id`. These helpers keep that sequencing out of the CLI so
other entry-points (scripts, tests) can reuse it.
"""

from __future__ import annotations

from collections.abc import Sequence

from dblu_sdk.core.domain.models import PersonaRecord


def select_persona(
    personas: Sequence[PersonaRecord],
    reference: str | None,
) -> PersonaRecord | None:
    """Resolve a user supplied reference against a listed vault.

    `None` (or a blank string) means "all doubles as context" and returns
    `None`. Otherwise an exact `persona_id` match wins over a case-insensitive
    name match. Raises `LookupError` when nothing matches.
    """

    if reference is None or not reference.strip():
        return None

    ref = reference.strip()
    for persona in personas:
        if persona.persona_id == ref:
            return persona

    ref_l = ref.lower()
    for persona in personas:
        if persona.name.strip().lower() == ref_l:
            return persona

    raise LookupError(f"No double matches '{ref}'")


def describe_context(persona: PersonaRecord | None) -> str:
    """Human readable label of the context used by a prompt call."""

    if persona is None:
        return "All doubles"
    return f"Using double '{persona.name}' (ID: {persona.persona_id})"
