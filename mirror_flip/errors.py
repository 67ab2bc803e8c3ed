"""Исключения приложения.

Принципы:
- Единый базовый класс, чтобы UI мог ловить ошибки приложения одним `except`.
- Ошибки параметров не выбрасываются: значения слайдеров зажимаются в допустимый диапазон.
"""
from __future__ import annotations


class MirrorFlipError(Exception):
    """Базовое исключение пакета."""


class DecodeError(MirrorFlipError, ValueError):
    """Файл или байты не удалось декодировать как изображение."""


class ConfigError(MirrorFlipError):
    """Файл конфигурации повреждён или содержит недопустимые значения."""
