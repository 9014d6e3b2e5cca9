"""TOML profile loading shared by every config family."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib


@dataclass(frozen=True)
class BaseConfig:
    """Metadata every profile carries in its [system] table."""

    name: str
    description: str | None
    file_path: Path

    def as_config_json(self) -> dict[str, Any]:
        raise NotImplementedError


ConfigT = TypeVar("ConfigT", bound=BaseConfig)


def read_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file, prefixing syntax errors with its path."""
    try:
        with file_path.open("rb") as file:
            return tomllib.load(file)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"{file_path}: invalid TOML ({exc})") from exc


def profile_files(config_dir: Path) -> list[Path]:
    """Profile files in name order; files starting with '_' are ignored."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    files = [path for path in sorted(config_dir.glob("*.toml")) if not path.name.startswith("_")]
    if not files:
        raise ValueError(f"No .toml config files found in: {config_dir}")
    return files


def load_configs(
    config_dir: Path,
    parser: Callable[[dict[str, Any], Path], ConfigT],
    *,
    duplicate_name_label: str = "recompute",
) -> list[ConfigT]:
    """Parse every profile in `config_dir`; profile names must be unique."""
    configs = [parser(read_toml(path), path) for path in profile_files(config_dir)]

    duplicates = sorted(name for name, count in Counter(c.name for c in configs).items() if count > 1)
    if duplicates:
        raise ValueError(
            f"Duplicate {duplicate_name_label} config names found in {config_dir}: {duplicates}"
        )
    return configs


def parse_system_metadata(raw: dict[str, Any], file_path: Path) -> tuple[str, str | None]:
    """Read and validate the shared [system] table."""
    system_raw = raw.get("system", {})
    if not isinstance(system_raw, dict):
        raise ValueError(f"{file_path}: [system] must be a table")

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description = system_raw.get("description")
    return name, None if description is None else str(description)


__all__ = ["BaseConfig", "load_configs", "parse_system_metadata", "profile_files", "read_toml"]
