"""Typed exceptions for request building and response parsing."""

from __future__ import annotations


class MissingRequiredFieldError(Exception):
    """A builder was finalized without a required field."""

    def __init__(self, field: str, model: str = "EodQuery") -> None:
        self.field = field
        self.model = model
        super().__init__(f"{model}: required field '{field}' was not set")


class MalformedResponseError(Exception):
    """Response payload does not match the expected shape."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        detail = f" ({'; '.join(self.errors)})" if self.errors else ""
        super().__init__(f"Malformed EOD response: {message}{detail}")


class UnsupportedValueError(ValueError):
    """Value outside the closed set of an enum-typed field."""

    def __init__(self, kind: str, value: object) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unsupported {kind}: {value!r}")
