"""Logger adaptor forwarding to loguru, one bound logger per module name."""

import sys
from typing import Any, Dict, Optional

from loguru import logger as _loguru_logger

from vault_provider.constants import LOG_LEVEL

_loggers: Dict[str, "ProviderLogger"] = {}

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
)


class ProviderLogger:
    """Minimal logger that forwards to loguru. Same .info/.error/.warning/.debug/.exception API."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._log = _loguru_logger.bind(logger_name=name)

    @property
    def name(self) -> str:
        return self._name

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.info(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.debug(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.exception(msg, *args, **kwargs)


def setup_logging(level: Optional[str] = None, sink: Any = None) -> int:
    """Replace loguru's default handler with a single provider sink.

    Orchestrator plugins log to stderr; stdout is reserved for the plugin
    handshake.

    Args:
        level: Minimum level to emit. Defaults to LOG_LEVEL.
        sink: Destination passed to loguru. Defaults to sys.stderr.

    Returns:
        int: The loguru handler id.
    """
    _loguru_logger.remove()
    _loguru_logger.configure(extra={"logger_name": "vault_provider"})
    return _loguru_logger.add(
        sink if sink is not None else sys.stderr,
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )


def get_logger(name: Optional[str] = None) -> ProviderLogger:
    if name is None:
        name = "vault_provider"
    if name not in _loggers:
        _loggers[name] = ProviderLogger(name)
    return _loggers[name]


default_logger = get_logger()
