# src/ospflab/logs.py
# Configuración centralizada de logging: un único logger raíz "ospflab".
import logging
import sys
from typing import Optional

_ROOT = "ospflab"
_configured = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """
    Configura el logger raíz de ospflab con un solo handler.
    Llamadas repetidas no agregan handlers duplicados.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    root.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string))
    root.addHandler(handler)

    # propagar para que pytest (caplog) vea los registros
    root.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int | str) -> None:
    setup_root_logger()
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"nivel de log desconocido: {name}")
    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    for h in root.handlers:
        h.setLevel(level)


def reset_logging() -> None:
    """Solo para tests."""
    global _configured
    _configured = False
    root = logging.getLogger(_ROOT)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
