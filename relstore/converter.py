"""Conversion of field values to and from their storage representation."""

import datetime
import decimal
import json
from typing import Any


class Converter:
    """Converts values by logical field type.

    ``store`` is applied once per bound value, ``restore`` once per hydrated
    field. ``None`` passes through both directions unchanged, as does any
    value of an unknown type.
    """

    def store(self, value: Any, type_: str) -> Any:
        """Convert a Python value to a database-ready form."""
        if value is None:
            return None
        if type_ == "boolean":
            return int(bool(value))
        if type_ == "integer":
            return int(value)
        if type_ in ("decimal", "string", "text"):
            return str(value)
        if type_ == "datetime":
            if isinstance(value, (datetime.datetime, datetime.date)):
                return value.isoformat()
            return str(value)
        if type_ in ("serial", "json"):
            return json.dumps(value, ensure_ascii=False)
        return value

    def restore(self, value: Any, type_: str) -> Any:
        """Convert a database value back to the field's Python type."""
        if value is None:
            return None
        if type_ == "boolean":
            return bool(value)
        if type_ == "integer":
            return int(value)
        if type_ == "decimal":
            return decimal.Decimal(str(value))
        if type_ in ("string", "text"):
            return str(value)
        if type_ == "datetime":
            if isinstance(value, datetime.datetime):
                return value
            return datetime.datetime.fromisoformat(str(value))
        if type_ in ("serial", "json"):
            if not isinstance(value, (str, bytes)):
                return value
            return json.loads(value)
        return value


__all__ = ["Converter"]
