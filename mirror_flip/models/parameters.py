"""Параметры зеркального отражения.

Принципы:
- Неизменяемость: каждое изменение параметра заменяет объект целиком (`dataclasses.replace`).
- Валидация диапазонов выполняется в `SessionState`, модель только хранит значения.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Сторона, с которой к изображению пристраивается отражение."""
    BELOW = "Below"
    ABOVE = "Above"
    LEFT = "Left"
    RIGHT = "Right"

    @property
    def is_vertical(self) -> bool:
        """True, если отражение переворачивает ось Y (верх-низ)."""
        return self in (Direction.BELOW, Direction.ABOVE)

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        """Принимает член перечисления или его подпись ("Below", "left", ...)."""
        if isinstance(value, cls):
            return value
        label = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == label:
                return member
        raise ValueError(f"Неизвестное направление: {value!r}")


@dataclass(frozen=True)
class Parameters:
    """Текущие параметры композиции.

    Fields:
        opacity: Непрозрачность градиента, [0, 1].
        offset: Протяжённость градиента от края отражения, px.
        scale_factor: Множитель масштаба поверх вписывания в холст, [0.5, 3.0].
        direction: Сторона отражения.
    """
    opacity: float = 0.47
    offset: float = 61.0
    scale_factor: float = 1.0
    direction: Direction = Direction.BELOW
