"""Геометрические примитивы композиции: аффинное преобразование, прямоугольник отрисовки, градиент.

Принципы:
- Все координаты вещественные; округление происходит только при выборке пикселей.
- Неизменяемые значения: операции над `Affine` возвращают новый объект.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Affine:
    """Аффинная матрица 2x3: x' = a*x + b*y + c, y' = d*x + e*y + f.

    Порядок коэффициентов совпадает с `Image.transform(..., Image.Transform.AFFINE, data)`.
    `translate`/`scale` домножают справа, как `ctx.translate`/`ctx.scale` у 2D-контекста:
    последнее добавленное преобразование применяется к точке первым.
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 1.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Affine":
        return cls()

    def multiply(self, other: "Affine") -> "Affine":
        """Композиция `self ∘ other`: сначала `other`, затем `self`."""
        return Affine(
            a=self.a * other.a + self.b * other.d,
            b=self.a * other.b + self.b * other.e,
            c=self.a * other.c + self.b * other.f + self.c,
            d=self.d * other.a + self.e * other.d,
            e=self.d * other.b + self.e * other.e,
            f=self.d * other.c + self.e * other.f + self.f,
        )

    def translate(self, tx: float, ty: float) -> "Affine":
        return self.multiply(Affine(c=tx, f=ty))

    def scale(self, sx: float, sy: float) -> "Affine":
        return self.multiply(Affine(a=sx, e=sy))

    def inverse(self) -> "Affine":
        det = self.a * self.e - self.b * self.d
        if det == 0:
            raise ValueError("Вырожденное преобразование не обратимо")
        ia = self.e / det
        ib = -self.b / det
        id_ = -self.d / det
        ie = self.a / det
        return Affine(
            a=ia,
            b=ib,
            c=-(ia * self.c + ib * self.f),
            d=id_,
            e=ie,
            f=-(id_ * self.c + ie * self.f),
        )

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        return self.a * x + self.b * y + self.c, self.d * x + self.e * y + self.f

    def as_pil_data(self) -> Tuple[float, float, float, float, float, float]:
        return self.a, self.b, self.c, self.d, self.e, self.f


@dataclass(frozen=True)
class DrawRect:
    """Прямоугольник изображения на холсте, центрированный в (S/2, S/2).

    Fields:
        scale: Итоговый коэффициент `min(S/w, S/h) * scale_factor`.
        width / height: Размеры отрисовки, px (вещественные).
        canvas_size: Сторона холста S.
    """
    scale: float
    width: float
    height: float
    canvas_size: int

    @property
    def center(self) -> float:
        return self.canvas_size / 2

    @property
    def left(self) -> float:
        return self.center - self.width / 2

    @property
    def top(self) -> float:
        return self.center - self.height / 2

    @property
    def right(self) -> float:
        return self.center + self.width / 2

    @property
    def bottom(self) -> float:
        return self.center + self.height / 2


@dataclass(frozen=True)
class GradientSpec:
    """Прямоугольник и опорные точки линейного градиента белого цвета.

    Fields:
        x, y, width, height: Заливаемый прямоугольник в координатах холста.
        vertical: True: градиент вдоль оси Y (сверху вниз), иначе вдоль X (слева направо).
        alpha_start / alpha_end: Альфа на начальной и конечной границе, [0, 1].
    """
    x: float
    y: float
    width: float
    height: float
    vertical: bool
    alpha_start: float
    alpha_end: float
    color: Tuple[int, int, int] = (255, 255, 255)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def axis(self) -> str:
        return "vertical" if self.vertical else "horizontal"

    def as_box(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.x + self.width, self.y + self.height
