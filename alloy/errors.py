"""Rendering errors and helpers that turn raw JavaScript errors into hints."""

from __future__ import annotations

_MAX_DETAIL_LENGTH = 200


class RenderError(Exception):
    """A failure at one step of rendering a page."""

    def __init__(self, step: str, message: str, details: str = "") -> None:
        super().__init__(step, message, details)
        self.step = step
        self.message = message
        self.details = details

    def __str__(self) -> str:
        text = f"❌ Rendering failed at {self.step}: {self.message}"
        if self.details:
            text += f"\n   Details: {self.details}"
        return text


_JS_ERROR_HINTS = (
    ("ReferenceError", "Undefined variable or function - check imports and component exports"),
    ("TypeError", "Type error in component - check that props match expected types"),
    ("SyntaxError", "Syntax error in component - check TSX/JSX syntax"),
    ("Cannot read", "Trying to access property on null/undefined - check prop values"),
)


def extract_js_error_context(js_err: str) -> str:
    """Return a short, readable hint for a JavaScript error message."""
    js_err = js_err.strip()
    for marker, hint in _JS_ERROR_HINTS:
        if marker in js_err:
            return hint
    if len(js_err) > _MAX_DETAIL_LENGTH:
        return js_err[:_MAX_DETAIL_LENGTH] + "..."
    return js_err