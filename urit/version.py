from __future__ import annotations

from importlib import metadata

DISTRIBUTION = "urit"


def tool_version() -> str:
    """
    Версия установленного дистрибутива urit.

    При запуске из исходников без установки возвращает "0.0.0".
    """
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["tool_version", "DISTRIBUTION"]
