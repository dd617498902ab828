"""Single pass `{{ token|filter }}` substitution for stub texts."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping

from .naming import pluralize, snake_case, studly_case

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
    "placeholders",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")
_MISSING_POLICIES = frozenset({"keep", "empty", "error"})


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot evaluate a placeholder."""


_Filter = Callable[[str], str]

DEFAULT_FILTERS: Mapping[str, _Filter] = {
    "upper": str.upper,
    "lower": str.lower,
    "strip": str.strip,
    "studly": studly_case,
    "snake": snake_case,
    "plural": pluralize,
}


def _parse(expression: str) -> tuple[str, list[str]]:
    key, *filters = (part.strip() for part in expression.split("|"))
    return key, filters


def placeholders(template: str) -> list[str]:
    """Return the placeholder keys referenced by ``template`` in order of use."""

    keys: list[str] = []
    for match in _PLACEHOLDER_PATTERN.finditer(template):
        key, _ = _parse(match.group("expression"))
        if key and key not in keys:
            keys.append(key)
    return keys


@dataclass(slots=True)
class TemplateRenderer:
    """Substitute ``{{ token }}`` and ``{{ token|filter|... }}`` in stub texts.

    Tokens are looked up by name in a flat context. Rendering is a single
    pass: substituted values are never scanned for tokens again, so the same
    template and context always give the same text. Braces that do not form a
    token, such as PHP blocks, are left alone.
    """

    filters: MutableMapping[str, _Filter] = field(default_factory=lambda: dict(DEFAULT_FILTERS))

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str = "keep",
    ) -> str:
        """Render ``template`` with the values in ``context``.

        ``missing`` decides what an unknown token becomes: ``"keep"`` leaves
        the expression as written, ``"empty"`` drops it and ``"error"`` raises
        :class:`TemplateRenderingError`. An unknown filter keeps the expression
        as written unless ``missing`` is ``"error"``.
        """

        if missing not in _MISSING_POLICIES:
            raise ValueError(f"missing must be one of {sorted(_MISSING_POLICIES)}, not {missing!r}")

        def substitute(match: re.Match[str]) -> str:
            original = match.group(0)
            key, filters = _parse(match.group("expression"))

            if key not in context:
                if missing == "error":
                    raise TemplateRenderingError(f"missing value for '{key}'")
                return "" if missing == "empty" else original

            unknown = [name for name in filters if name not in self.filters]
            if unknown:
                if missing == "error":
                    raise TemplateRenderingError(f"unknown filter '{unknown[0]}'")
                return original

            value = str(context[key])
            for name in filters:
                value = self.filters[name](value)
            return value

        return _PLACEHOLDER_PATTERN.sub(substitute, template)
