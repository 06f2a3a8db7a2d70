"""Request bodies that carry only the fields a caller actually supplied."""
from __future__ import annotations

from typing import Any, Callable, Optional

from commerce.errors import ValidationError


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class PayloadBuilder:
    """Collects named fields and serializes only the populated ones.

    ``UNSET`` marks "not provided" so that falsy values such as ``0``,
    ``False`` or ``""`` are still sent. ``None`` is treated as not provided
    unless the builder was created with ``keep_none=True``.

    >>> PayloadBuilder().set("name", "Shoes").set("position", UNSET).build()
    {'name': 'Shoes'}
    """

    def __init__(self, keep_none: bool = False):
        self.keep_none = keep_none
        self._fields: dict[str, Any] = {}

    def _is_provided(self, value: Any) -> bool:
        if value is UNSET:
            return False
        if value is None:
            return self.keep_none
        return True

    def set(self, name: str, value: Any, transform: Optional[Callable[[Any], Any]] = None) -> "PayloadBuilder":
        if self._is_provided(value):
            self._fields[name] = transform(value) if transform is not None and value is not None else value
        return self

    def require(self, name: str, value: Any) -> "PayloadBuilder":
        """Like ``set`` but a missing value is a validation error."""
        if not self._is_provided(value):
            raise ValidationError(f"{name} is required")
        self._fields[name] = value
        return self

    def update(self, **fields: Any) -> "PayloadBuilder":
        for name, value in fields.items():
            self.set(name, value)
        return self

    def provided(self) -> list[str]:
        return list(self._fields)

    def build(self) -> dict[str, Any]:
        return dict(self._fields)

    def __len__(self) -> int:
        return len(self._fields)
