"""Load recompute settings from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from domain.config_base import BaseConfig, load_configs, parse_system_metadata

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "recompute"


@dataclass(frozen=True)
class RecomputeParameters:
    batch_size: int = 1000
    lock_timeout_seconds: float = 0.0
    statement_timeout_ms: int = 0


@dataclass(frozen=True)
class RecomputeConfig(BaseConfig):
    """Settings for one recompute profile."""

    parameters: RecomputeParameters = field(default_factory=RecomputeParameters)

    @property
    def lock_timeout(self) -> float | None:
        """Seconds to wait for the scope lock; None waits indefinitely."""
        if self.parameters.lock_timeout_seconds == 0.0:
            return None
        return self.parameters.lock_timeout_seconds

    def as_config_json(self) -> dict[str, Any]:
        return {
            "batch_size": self.parameters.batch_size,
            "lock_timeout_seconds": self.parameters.lock_timeout_seconds,
            "statement_timeout_ms": self.parameters.statement_timeout_ms,
        }


def default_recompute_config() -> RecomputeConfig:
    return RecomputeConfig(
        name="builtin",
        description=None,
        file_path=Path("<builtin>"),
        parameters=RecomputeParameters(),
    )


def load_recompute_configs(config_dir: Path = DEFAULT_CONFIG_DIR) -> list[RecomputeConfig]:
    """Load and validate all recompute TOML config files in a directory."""
    return load_configs(
        config_dir,
        _parse_recompute_config,
        duplicate_name_label="recompute",
    )


def _parse_recompute_config(raw: dict[str, Any], file_path: Path) -> RecomputeConfig:
    name, description = parse_system_metadata(raw, file_path)
    recompute_raw = raw.get("recompute", {})

    parameters = RecomputeParameters(
        batch_size=int(recompute_raw.get("batch_size", 1000)),
        lock_timeout_seconds=float(recompute_raw.get("lock_timeout_seconds", 0.0)),
        statement_timeout_ms=int(recompute_raw.get("statement_timeout_ms", 0)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return RecomputeConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _validate_parameters(*, file_path: Path, parameters: RecomputeParameters) -> None:
    if parameters.batch_size <= 0:
        raise ValueError(f"{file_path}: [recompute].batch_size must be > 0")
    if parameters.lock_timeout_seconds < 0.0:
        raise ValueError(f"{file_path}: [recompute].lock_timeout_seconds must be >= 0")
    if parameters.statement_timeout_ms < 0:
        raise ValueError(f"{file_path}: [recompute].statement_timeout_ms must be >= 0")


__all__ = [
    "DEFAULT_CONFIG_DIR",
    "RecomputeConfig",
    "RecomputeParameters",
    "default_recompute_config",
    "load_recompute_configs",
]
