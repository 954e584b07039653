"""
elfcat Configuration
=====================

Settings for logging and report generation, stored as slotted dataclasses
and loaded from an optional TOML file.

Example ``elfcat.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "logs/elfcat.log"
    log_json = true

    [report]
    output_dir = "reports"
    bytes_per_row = 32

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


_DEFAULT_CONFIG_NAME: str = "elfcat.toml"


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging and general behaviour."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False
    debug: bool = False


@dataclass(frozen=False, slots=True)
class ReportConfig:
    """Input limits and report output settings."""

    output_dir: str = "."
    report_suffix: str = ".html"
    bytes_per_row: int = 16
    max_file_size: int = 104_857_600  # 100 MiB

    def __post_init__(self) -> None:
        if self.bytes_per_row <= 0:
            raise ValueError(
                f"report.bytes_per_row must be positive, got {self.bytes_per_row}"
            )
        if self.max_file_size <= 0:
            raise ValueError(
                f"report.max_file_size must be positive, got {self.max_file_size}"
            )


@dataclass(frozen=False, slots=True)
class ElfcatConfig:
    """Top-level configuration.

    Usage:
        >>> config = ElfcatConfig.load()                 # ./elfcat.toml or defaults
        >>> config = ElfcatConfig.load("custom.toml")
        >>> config.report.bytes_per_row
        16
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> ElfcatConfig:
        """Load configuration from a TOML file.

        Missing keys fall back to dataclass defaults and unknown keys are
        ignored.  When *path* is ``None`` and ``./elfcat.toml`` does not
        exist, pure defaults are returned.

        Raises:
            FileNotFoundError: If an explicitly given *path* does not exist.
            ValueError: If the file is not valid TOML or a report setting is
                out of range.
        """
        config_path = (
            Path(path) if path is not None else Path.cwd() / _DEFAULT_CONFIG_NAME
        )

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            report=cls._build_section(ReportConfig, raw.get("report", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _build_section(section_cls: type, data: dict[str, Any]) -> Any:
        """Instantiate *section_cls* from the keys it declares."""
        valid_keys = set(section_cls.__dataclass_fields__)  # type: ignore[attr-defined]
        return section_cls(**{k: v for k, v in data.items() if k in valid_keys})


def get_config(path: str | Path | None = None) -> ElfcatConfig:
    """Cached wrapper around :meth:`ElfcatConfig.load`.

    Passing *path* forces a reload.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = ElfcatConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
