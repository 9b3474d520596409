# src/solana_relay/config.py

import os
from typing import Any, Dict, Mapping, Optional

from .core.derivation import DerivationPath
from .core.exceptions import UnknownScheme
from .fee_relayer.relayer import DEFAULT_FEE_RELAYER_URL, DEFAULT_TIMEOUT_SECONDS
from .utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_VARS = ("SOLANA_NODE_RPC_ENDPOINT",)

OPTIONAL_DEFAULTS: Dict[str, Any] = {
    "SOLANA_NODE_WSS_ENDPOINT": "",
    "SOLANA_PRIVATE_KEY": "",
    "FEE_RELAYER_URL": DEFAULT_FEE_RELAYER_URL,
    "FEE_RELAYER_TIMEOUT_SECONDS": float(DEFAULT_TIMEOUT_SECONDS),
    "RPC_COMMITMENT": "confirmed",
    "AUDIT_LOG_FILE": "",
}


def load_config(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read relay settings from ``env`` (defaults to the process environment)."""
    source = os.environ if env is None else env
    config: Dict[str, Any] = {}

    for var in REQUIRED_VARS:
        val = source.get(var)
        if not val:
            raise ValueError(f"Missing required config var: {var}")
        config[var] = val

    for var, default in OPTIONAL_DEFAULTS.items():
        raw = source.get(var)
        if raw is None or raw == "":
            config[var] = default
            continue
        try:
            config[var] = type(default)(raw)
        except (TypeError, ValueError):
            logger.warning(f"Config warning: invalid type for {var}, using default {default}")
            config[var] = default

    raw_path = source.get("DERIVATION_PATH")
    try:
        config["DERIVATION_PATH"] = DerivationPath.parse(raw_path) if raw_path else DerivationPath.default()
    except UnknownScheme:
        logger.warning(f"Config warning: unknown DERIVATION_PATH {raw_path!r}, using default")
        config["DERIVATION_PATH"] = DerivationPath.default()

    logger.info("Configuration loaded successfully.")
    return config
