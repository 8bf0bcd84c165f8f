"""
Ledger configuration loaded from TOML.

Example scanledger.toml:

    [contract]
    identity = "SP000000000000000000002Q6VF78.scan-ledger"

    [types]
    capacity = 9
    defaults = ["transfer", "contract-call", "stake", "vote", "mint"]

    [limits]
    display_name = 50
    note = 100

Every key is optional; a missing file yields the built-in defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "scanledger.toml"

DEFAULT_CONTRACT_IDENTITY = "SP000000000000000000002Q6VF78.scan-ledger"
DEFAULT_TX_TYPES = ("transfer", "contract-call", "stake", "vote", "mint")
TX_TYPE_CAPACITY = 9


@dataclass(frozen=True)
class TextLimits:
    """Maximum character lengths for bounded text arguments."""

    display_name: int = 50
    tx_type: int = 20
    note: int = 100
    scan_name: int = 50
    description: int = 200


@dataclass(frozen=True)
class LedgerConfig:
    contract_identity: str = DEFAULT_CONTRACT_IDENTITY
    type_capacity: int = TX_TYPE_CAPACITY
    default_types: tuple[str, ...] = DEFAULT_TX_TYPES
    limits: TextLimits = field(default_factory=TextLimits)

    def __post_init__(self) -> None:
        if not self.contract_identity:
            raise ValueError("contract identity is required")
        if self.type_capacity <= 0:
            raise ValueError("type capacity must be a positive integer")
        if len(self.default_types) > self.type_capacity:
            raise ValueError(
                f"{len(self.default_types)} default types exceed capacity {self.type_capacity}"
            )
        for label in self.default_types:
            if not label.isascii() or len(label) > self.limits.tx_type:
                raise ValueError(f"invalid default type label: {label!r}")


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def config_from_dict(data: dict[str, Any]) -> LedgerConfig:
    """Build a LedgerConfig from parsed TOML data."""
    kwargs: dict[str, Any] = {}

    contract = _coerce_dict(data.get("contract"))
    identity = contract.get("identity")
    if identity is not None:
        kwargs["contract_identity"] = str(identity).strip()

    types = _coerce_dict(data.get("types"))
    if "capacity" in types:
        kwargs["type_capacity"] = _positive_int(types["capacity"], "types.capacity")
    if "defaults" in types:
        defaults = types["defaults"]
        if not isinstance(defaults, list) or not all(isinstance(t, str) for t in defaults):
            raise ValueError("types.defaults must be a list of strings")
        kwargs["default_types"] = tuple(defaults)

    raw_limits = _coerce_dict(data.get("limits"))
    if raw_limits:
        known = set(TextLimits.__dataclass_fields__)
        unknown = sorted(set(raw_limits) - known)
        if unknown:
            raise ValueError(f"unknown limits: {', '.join(unknown)}")
        kwargs["limits"] = TextLimits(
            **{k: _positive_int(v, f"limits.{k}") for k, v in raw_limits.items()}
        )

    return LedgerConfig(**kwargs)


def load_config(path: Path | None = None) -> LedgerConfig:
    """
    Load configuration from TOML.

    With no path, looks for scanledger.toml in the working directory and
    falls back to defaults when it is absent. An explicit path must exist.
    """
    import tomllib

    if path is None:
        path = Path.cwd() / CONFIG_FILENAME
        if not path.exists():
            return LedgerConfig()

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return config_from_dict(data)
