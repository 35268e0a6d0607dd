"""Named parameter placeholder."""

from ._bases import Expression


class ParameterExpression(Expression):
    """Placeholder for a value bound out-of-band (e.g. ``:condition_0_id``)."""

    key: str

    @property
    def sql(self) -> str:
        return ":" + self.key
