"""Variable substitution for template text.

Only ``{{key}}`` placeholders are touched; everything else, including other
brace sequences, passes through unchanged. The text between the braces is a
single literal key, so ``{{team-name}}`` and ``{{user.name}}`` look up exactly
those names. Unknown placeholders are left exactly as written unless strict
mode is on, in which case they raise :class:`RenderError`.
"""

import re
from typing import Mapping

from lnr.core.exceptions import RenderError

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^{}]*?)\s*\}\}")


class VariableRenderer:
    """Render ``{{key}}`` placeholders from a mapping of strings."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def render(self, text: str, variables: Mapping[str, str]) -> str:
        """Substitute ``variables`` into ``text``.

        Raises:
            RenderError: On an unknown key in strict mode
        """

        def replace(match: re.Match) -> str:
            key = match.group(1)
            if key in variables:
                return str(variables[key])
            if self.strict:
                raise RenderError(f"Unknown variable '{key}'", key=key)
            return match.group(0)

        return PLACEHOLDER_PATTERN.sub(replace, text)

    def render_optional(self, text: str | None, variables: Mapping[str, str]) -> str | None:
        """Render ``text`` when present."""
        if text is None:
            return None
        return self.render(text, variables)


def render(text: str, variables: Mapping[str, str], strict: bool = False) -> str:
    """Convenience function to render a single string."""
    return VariableRenderer(strict=strict).render(text, variables)
