"""
Configuration Loader (``procura_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into a validated
``ProcuraConfig``. Runtime callers go through
``procura_config.get_active_config()``; tests call ``load_config`` /
``parse_config`` directly.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Values that fail validation  -> ``InvalidConfigError`` listing every
  problem found.
"""

from __future__ import annotations

import hashlib
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from procura_config.schema import CurrencySettings, ProcuraConfig
from procura_kernel.domain.currency import Currency, CurrencyRegistry
from procura_kernel.exceptions import InvalidConfigError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def load_yaml_file(path: Path) -> Any:
    """
    Load a single YAML file; an empty document loads as an empty dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization; deterministic for equal data."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _parse_tax_rate(value: Any, errors: list[str]) -> Decimal:
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError):
        errors.append(f"default_tax_rate is not a number: {value!r}")
        return Decimal("0")
    if not rate.is_finite() or rate < 0 or rate > 1:
        errors.append(f"default_tax_rate must be between 0 and 1, got {value!r}")
    return rate


def _parse_currencies(data: Any, errors: list[str]) -> dict[str, CurrencySettings]:
    currencies: dict[str, CurrencySettings] = {}
    if data is None:
        return currencies
    if not isinstance(data, dict):
        errors.append(f"currencies must be a mapping, got {type(data).__name__}")
        return currencies
    for code, settings in data.items():
        normalized = str(code).strip().upper()
        if not CurrencyRegistry.is_valid(normalized):
            errors.append(f"unsupported currency in currencies: {code!r}")
            continue
        settings = settings or {}
        if not isinstance(settings, dict):
            errors.append(
                f"currencies.{normalized} must be a mapping, got {settings!r}"
            )
            continue
        currencies[normalized] = CurrencySettings(
            code=Currency(normalized),
            symbol=str(settings.get("symbol", normalized)),
            label=str(settings.get("label", CurrencyRegistry.get_info(normalized).name)),
        )
    return currencies


def parse_config(data: Any, source: str = "<memory>") -> ProcuraConfig:
    """
    Parse and validate a configuration dict.

    Raises:
        InvalidConfigError: if any value fails validation.
    """
    if not isinstance(data, dict):
        raise InvalidConfigError(
            source, [f"configuration must be a mapping, got {type(data).__name__}"]
        )

    errors: list[str] = []

    tax_rate = _parse_tax_rate(data.get("default_tax_rate", "0.16"), errors)

    base_code = str(data.get("comparison_base_currency", "USD")).strip().upper()
    if not CurrencyRegistry.is_valid(base_code):
        errors.append(f"unsupported comparison_base_currency: {base_code!r}")
        base_code = "USD"

    log_level = str(data.get("log_level", "INFO")).strip().upper()
    if log_level not in _LOG_LEVELS:
        errors.append(f"unknown log_level: {log_level!r}")

    currencies = _parse_currencies(data.get("currencies", {}), errors)

    if errors:
        raise InvalidConfigError(source, errors)

    return ProcuraConfig(
        default_tax_rate=tax_rate,
        comparison_base_currency=Currency(base_code),
        log_level=log_level,
        currencies=currencies,
        source=source,
        checksum=compute_checksum(data),
    )


def load_config(path: Path) -> ProcuraConfig:
    """Load and validate a configuration file."""
    return parse_config(load_yaml_file(path), source=str(path))


def log_level_number(config: ProcuraConfig) -> int:
    """Numeric ``logging`` level for ``config.log_level``."""
    return logging.getLevelName(config.log_level)
