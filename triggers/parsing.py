"""
Parsing of setup commands.

Shape: ``add|edit|delete <name> [image_url] [template words...]``.
"""
from __future__ import annotations

from core.errors import ParseError
from core.types import MutationRequest


def parse(raw: str) -> MutationRequest:
    """
    Tokenize a setup command (the text after the command prefix).

    Whitespace runs are collapsed, so template words are rejoined with single
    spaces. The action and name are lowercased; the image URL and template
    keep their case. Raises ParseError for a missing or unknown action.
    """
    tokens = raw.split()
    if not tokens:
        raise ParseError()

    request = MutationRequest(
        action=tokens[0].lower(),
        name=tokens[1].lower() if len(tokens) > 1 else "",
        image_url=tokens[2] if len(tokens) > 2 else "",
        template=" ".join(tokens[3:]),
    )
    if not request.is_known_action:
        raise ParseError()
    return request
