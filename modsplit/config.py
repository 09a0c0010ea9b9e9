"""Configuration model and loaders for modsplit.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `SplitterConfig`: normalized runtime settings for one split run.
- `ConfigLoader`: static construction helpers for `SplitterConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    normalize_optional_string,
    parse_permissive_boolean,
    parse_positive_number,
)
from .text.headings import DEFAULT_TOP_BAND_HEIGHT
from .text.lines import DEFAULT_LINE_TOLERANCE
from .text.module_ranges import MAX_PART_PAGES


@dataclass(slots=True)
class SplitterConfig:
    """Runtime configuration for one split run.

    Attributes:
        input_pdf: Path to the source PDF.
        output_dir: Directory receiving module PDFs and the manifest.
        max_part_pages: Maximum number of pages per output PDF.
        line_tolerance: Baseline distance below which fragments share a line.
        top_band_height: Distance below the topmost line searched for headings.
        detect_headings: Whether to run heading detection before resolving modules.
        modules_file: Optional text file with manual module lines.
        extra: Metadata copied into the split manifest.
    """

    input_pdf: Path
    output_dir: Path = Path("out")
    max_part_pages: int = MAX_PART_PAGES
    line_tolerance: float = DEFAULT_LINE_TOLERANCE
    top_band_height: float = DEFAULT_TOP_BAND_HEIGHT
    detect_headings: bool = False
    modules_file: Path | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate runtime configuration values before pipeline execution."""

        if isinstance(self.max_part_pages, bool) or self.max_part_pages <= 0:
            raise ValueError("`max_part_pages` must be a positive integer.")
        if self.line_tolerance <= 0:
            raise ValueError("`line_tolerance` must be a positive number.")
        if self.top_band_height <= 0:
            raise ValueError("`top_band_height` must be a positive number.")


class ConfigLoader:
    """Factory methods for loading `SplitterConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_pdf",
            "output_dir",
            "max_part_pages",
            "line_tolerance",
            "top_band_height",
            "detect_headings",
            "modules_file",
            "extra",
        }
    )
    _REQUIRED_YAML_KEYS = frozenset({"input_pdf"})

    @staticmethod
    def from_yaml(path: Path) -> SplitterConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> SplitterConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_pdf = ConfigLoader._required_env_path(env_map, "MODSPLIT_INPUT_PDF")
        output_dir = ConfigLoader._optional_env_path(env_map, "MODSPLIT_OUTPUT_DIR") or Path("out")
        max_part_pages = ConfigLoader._optional_env_positive_int(
            env_map, "MODSPLIT_MAX_PART_PAGES"
        ) or MAX_PART_PAGES
        line_tolerance = ConfigLoader._optional_env_positive_number(
            env_map, "MODSPLIT_LINE_TOLERANCE"
        ) or DEFAULT_LINE_TOLERANCE
        top_band_height = ConfigLoader._optional_env_positive_number(
            env_map, "MODSPLIT_TOP_BAND_HEIGHT"
        ) or DEFAULT_TOP_BAND_HEIGHT
        detect_headings = (
            ConfigLoader._optional_env_boolean(env_map, "MODSPLIT_DETECT_HEADINGS") or False
        )
        modules_file = ConfigLoader._optional_env_path(env_map, "MODSPLIT_MODULES_FILE")

        config = SplitterConfig(
            input_pdf=input_pdf,
            output_dir=output_dir,
            max_part_pages=max_part_pages,
            line_tolerance=line_tolerance,
            top_band_height=top_band_height,
            detect_headings=detect_headings,
            modules_file=modules_file,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> SplitterConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        input_pdf = ConfigLoader._required_path(payload, "input_pdf", source_label)
        output_dir = ConfigLoader._optional_path(payload, "output_dir") or Path("out")
        max_part_pages = ConfigLoader._optional_positive_int(
            payload,
            "max_part_pages",
            source_label,
            default=MAX_PART_PAGES,
        )
        line_tolerance = ConfigLoader._optional_positive_number(
            payload,
            "line_tolerance",
            source_label,
            default=DEFAULT_LINE_TOLERANCE,
        )
        top_band_height = ConfigLoader._optional_positive_number(
            payload,
            "top_band_height",
            source_label,
            default=DEFAULT_TOP_BAND_HEIGHT,
        )
        detect_headings = ConfigLoader._optional_boolean(
            payload,
            "detect_headings",
            source_label,
            default=False,
        )
        modules_file = ConfigLoader._optional_path(payload, "modules_file")
        extra = ConfigLoader._optional_string_map(payload, "extra", source_label)

        config = SplitterConfig(
            input_pdf=input_pdf,
            output_dir=output_dir,
            max_part_pages=max_part_pages,
            line_tolerance=line_tolerance,
            top_band_height=top_band_height,
            detect_headings=detect_headings,
            modules_file=modules_file,
            extra=extra,
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _required_path(payload: Mapping[str, Any], key: str, source_label: str) -> Path:
        """Read a required non-empty path-like field from a payload."""

        value = ConfigLoader._optional_path(payload, key)
        if value is None:
            raise ValueError(f"{source_label} requires non-empty `{key}`.")
        return value

    @staticmethod
    def _optional_path(payload: Mapping[str, Any], key: str) -> Path | None:
        """Read an optional path field and normalize blank values to `None`."""

        if key not in payload:
            return None
        value = normalize_optional_string(payload[key])
        if value is None:
            return None
        return Path(value)

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str, default: int
    ) -> int:
        """Read and validate a positive integer payload field."""

        if key not in payload:
            return default

        raw_value = payload[key]
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = normalize_optional_string(raw_value)
            if normalized is None:
                return default
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` must be a positive integer."
                ) from exc

        if parsed <= 0:
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_positive_number(
        payload: Mapping[str, Any], key: str, source_label: str, default: float
    ) -> float:
        """Read and validate a positive numeric payload field."""

        if key not in payload or payload[key] is None:
            return default
        try:
            return parse_positive_number(payload[key], key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, str]:
        """Read an optional mapping with non-empty string keys and values."""

        if key not in payload:
            return {}

        raw = payload[key]
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_value in raw.items():
            key_value = normalize_optional_string(raw_key)
            value_value = normalize_optional_string(raw_value)
            if key_value is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank key.")
            if value_value is None:
                raise ValueError(
                    f"{source_label} field `{key}` contains blank value for `{key_value}`."
                )
            normalized[key_value] = value_value
        return normalized

    @staticmethod
    def _required_env_path(env: Mapping[str, str], key: str) -> Path:
        """Read a required non-empty path value from environment mapping."""

        value = ConfigLoader._optional_env_string(env, key)
        if value is None:
            raise ValueError(f"Environment variable `{key}` is required.")
        return Path(value)

    @staticmethod
    def _optional_env_path(env: Mapping[str, str], key: str) -> Path | None:
        """Read an optional path value from environment mapping."""

        value = ConfigLoader._optional_env_string(env, key)
        if value is None:
            return None
        return Path(value)

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _optional_env_positive_int(env: Mapping[str, str], key: str) -> int | None:
        """Read an optional positive integer from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        try:
            parsed = int(raw_value)
        except ValueError as exc:
            raise ValueError(f"Environment variable `{key}` must be a positive integer.") from exc
        if parsed <= 0:
            raise ValueError(f"Environment variable `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_env_positive_number(env: Mapping[str, str], key: str) -> float | None:
        """Read an optional positive number from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        try:
            return parse_positive_number(raw_value, key)
        except ValueError as exc:
            raise ValueError(f"Environment variable `{key}` must be a positive number.") from exc

    @staticmethod
    def _optional_env_boolean(env: Mapping[str, str], key: str) -> bool | None:
        """Read an optional boolean from environment mapping."""

        if key not in env:
            return None
        parsed = parse_permissive_boolean(env.get(key))
        if parsed is None:
            raise ValueError(
                f"Environment variable `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
