"""Verbatim SQL fragment."""

from ._bases import Expression


class RawExpression(Expression):
    """SQL text rendered as-is; only ever built from constants, never user input."""

    text: str

    @property
    def sql(self) -> str:
        return self.text
