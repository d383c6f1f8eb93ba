"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class CoercionError(DomainError):
    """Raised when an upstream value cannot be normalized."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"cannot coerce {field}={value!r}")
