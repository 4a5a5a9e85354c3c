"""
procura_config -- single public entrypoint for configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``. Returns a validated ``ProcuraConfig``.

Architecture position:
    Sits above ``procura_kernel``. Neither the kernel nor the engines
    import this package; callers hand configured values to them
    (e.g. ``TotalsCalculator(config.default_tax_rate)``).

Failure modes:
    - ``FileNotFoundError`` -- configuration file missing.
    - ``InvalidConfigError`` -- values failed validation.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``PROCURA_CONFIG_TRACE`` log entry with the source path and checksum.
"""

from __future__ import annotations

import threading
from pathlib import Path

from procura_config.loader import (
    compute_checksum,
    load_config,
    log_level_number,
    parse_config,
)
from procura_config.schema import CurrencySettings, ProcuraConfig
from procura_kernel.logging_config import configure_logging, get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

_cache_lock = threading.Lock()
_default_config: ProcuraConfig | None = None


def get_active_config(path: Path | None = None) -> ProcuraConfig:
    """The public configuration entrypoint.

    Args:
        path: Configuration file; the packaged ``defaults.yaml`` when None.
            The default file is parsed once and cached.
    """
    global _default_config
    if path is None:
        with _cache_lock:
            if _default_config is None:
                _default_config = load_config(DEFAULT_CONFIG_PATH)
            config = _default_config
    else:
        config = load_config(Path(path))

    _logger.info(
        "PROCURA_CONFIG_TRACE",
        extra={
            "trace_type": "PROCURA_CONFIG_TRACE",
            "source": config.source,
            "checksum": config.checksum,
            "default_tax_rate": str(config.default_tax_rate),
            "comparison_base_currency": config.comparison_base_currency.value,
        },
    )
    return config


def configure_logging_from(config: ProcuraConfig) -> None:
    """Configure the procura logger hierarchy at the configured level."""
    configure_logging(level=log_level_number(config))


def clear_config_cache() -> None:
    """Drop the cached default configuration. FOR TESTING ONLY."""
    global _default_config
    with _cache_lock:
        _default_config = None


__all__ = [
    "CurrencySettings",
    "DEFAULT_CONFIG_PATH",
    "ProcuraConfig",
    "clear_config_cache",
    "compute_checksum",
    "configure_logging_from",
    "get_active_config",
    "load_config",
    "log_level_number",
    "parse_config",
]
