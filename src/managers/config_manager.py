"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and converts them into the typed AppConfig.
"""

import yaml
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional
from utils.logger import get_logger, LogCategory
from models.config import (
    ApiConfig,
    AppConfig,
    ConfigError,
    EngineConfig,
    LoggingConfig,
    StripConfig,
)
from models.enums import ChannelOrder, LogLevel
from managers.pattern_manager import PatternManager

log = get_logger().for_category(LogCategory.CONFIG)


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Falls back to factory_defaults.yaml when the main config cannot be read.
    Invalid values are not silently replaced: they raise ConfigError.

    Example:
        config_manager = ConfigManager()
        config_manager.load()

        app_config = config_manager.config
        strip = app_config.strip                       # StripConfig
        rain = config_manager.pattern_manager.get_pattern("rain")
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to src/, or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}

        # Initialized in load()
        self.pattern_manager: PatternManager
        self.config: AppConfig = AppConfig()

    def load(self) -> AppConfig:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory defaults on failure
        5. Convert sections into AppConfig

        Returns:
            Parsed AppConfig

        Raises:
            ConfigError: a section holds an invalid value
        """
        src_dir = Path(__file__).parent.parent
        full_path = src_dir / self.config_path

        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if not isinstance(main_config, dict):
                raise ValueError("top level must be a mapping")

            if 'include' in main_config:
                log.info("Using include-based configuration", path=str(full_path))
                includes = main_config.pop('include')
                self.data = self._load_with_includes(includes, full_path.parent)
                # Keys next to include: override the included files
                self.data.update(main_config)
            else:
                log.info("Using monolithic configuration", path=str(full_path))
                self.data = main_config

        except (OSError, yaml.YAMLError, ValueError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = src_dir / self.factory_defaults_path
            with open(defaults_path, "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self.config = self._build_config()
        return self.config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["strip.yaml", "patterns.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except yaml.YAMLError as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Overrides =====

    def apply_overrides(self, device: Optional[str] = None, virtual: Optional[bool] = None) -> AppConfig:
        """Apply command line overrides on top of the loaded config."""
        strip = self.config.strip
        if device is not None:
            strip = replace(strip, device=device)
        if virtual:
            strip = replace(strip, virtual=True)
        self.config = replace(self.config, strip=strip)
        return self.config

    # ===== Section parsing =====

    def _build_config(self) -> AppConfig:
        self.pattern_manager = PatternManager(self.data)

        config = AppConfig(
            strip=self._parse_strip(self._section("strip")),
            engine=self._parse_engine(self._section("engine")),
            api=self._parse_api(self._section("api")),
            logging=self._parse_logging(self._section("logging")),
            patterns=self.pattern_manager.get_all_patterns(),
        )

        ids = [p.id for p in config.patterns if p.enabled]
        # An unknown initial_pattern falls back at load time, an unknown default cannot
        if config.engine.default_pattern not in ids:
            raise ConfigError(
                "engine.default_pattern",
                f"'{config.engine.default_pattern}' is not an enabled pattern",
            )

        log.info(
            "Configuration loaded",
            device=config.strip.device,
            pixels=config.strip.pixel_count,
            patterns=len(ids),
            tick=f"{config.engine.tick_interval_ms}ms",
        )
        return config

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(name, "expected a mapping")
        return section

    @staticmethod
    def _get(section: Dict[str, Any], prefix: str, key: str, kind: type, default: Any) -> Any:
        if key not in section:
            return default
        raw = section[key]
        if kind is bool:
            if not isinstance(raw, bool):
                raise ConfigError(f"{prefix}.{key}", "expected true/false")
            return raw
        try:
            return kind(raw)
        except (TypeError, ValueError):
            raise ConfigError(f"{prefix}.{key}", f"expected {kind.__name__}, got {raw!r}")

    def _parse_strip(self, section: Dict[str, Any]) -> StripConfig:
        d = StripConfig()
        order_raw = self._get(section, "strip", "channel_order", str, d.channel_order.value)
        try:
            channel_order = ChannelOrder(order_raw.upper())
        except ValueError:
            raise ConfigError("strip.channel_order", f"unknown channel order {order_raw!r}")

        config = StripConfig(
            device=self._get(section, "strip", "device", str, d.device),
            pixel_count=self._get(section, "strip", "pixel_count", int, d.pixel_count),
            channel_order=channel_order,
            virtual=self._get(section, "strip", "virtual", bool, d.virtual),
            write_buffer_high_water=self._get(
                section, "strip", "write_buffer_high_water", int, d.write_buffer_high_water
            ),
        )
        if config.pixel_count <= 0:
            raise ConfigError("strip.pixel_count", "must be positive")
        if config.write_buffer_high_water <= 0:
            raise ConfigError("strip.write_buffer_high_water", "must be positive")
        return config

    def _parse_engine(self, section: Dict[str, Any]) -> EngineConfig:
        d = EngineConfig()
        config = EngineConfig(
            tick_interval_ms=self._get(section, "engine", "tick_interval_ms", int, d.tick_interval_ms),
            default_pattern=self._get(section, "engine", "default_pattern", str, d.default_pattern),
            initial_pattern=self._get(section, "engine", "initial_pattern", str, d.initial_pattern),
        )
        if config.tick_interval_ms <= 0:
            raise ConfigError("engine.tick_interval_ms", "must be positive")
        return config

    def _parse_api(self, section: Dict[str, Any]) -> ApiConfig:
        d = ApiConfig()
        config = ApiConfig(
            enabled=self._get(section, "api", "enabled", bool, d.enabled),
            host=self._get(section, "api", "host", str, d.host),
            port=self._get(section, "api", "port", int, d.port),
        )
        if not 0 < config.port < 65536:
            raise ConfigError("api.port", f"out of range: {config.port}")
        return config

    def _parse_logging(self, section: Dict[str, Any]) -> LoggingConfig:
        d = LoggingConfig()
        level_raw = self._get(section, "logging", "level", str, d.level.name)
        try:
            level = LogLevel[level_raw.upper()]
        except KeyError:
            raise ConfigError("logging.level", f"unknown level {level_raw!r}")
        return LoggingConfig(
            level=level,
            colors=self._get(section, "logging", "colors", bool, d.colors),
        )
