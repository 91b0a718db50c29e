"""
Pattern Manager - Parses pattern definitions from YAML

Each entry under `patterns:` becomes a PatternConfig. Options are kept raw
here; the pattern class validates them when the registry is built.
"""

from typing import Any, Dict, List, Optional

from models.config import ConfigError, PatternConfig, default_pattern_configs
from models.enums import PatternType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)


class PatternManager:
    """
    Pattern table access

    Example YAML (list format, order of entries is registry order):
        patterns:
          - id: orange
            type: rain
            name: Orange Haze
            order: 3
            options:
              base_hue: 0.13
    """

    def __init__(self, data: dict):
        self.patterns: List[PatternConfig] = []
        self._process_data(data)

    def _process_data(self, data: dict):
        entries = data.get('patterns')
        if entries is None:
            self.patterns = default_pattern_configs()
            log.info("No patterns section, using built-in pattern table")
            return

        if not isinstance(entries, list):
            raise ConfigError("patterns", "expected a list of pattern definitions")

        for index, entry in enumerate(entries):
            self.patterns.append(self._parse_entry(index, entry))
            log.debug(f"Loaded pattern definition: {self.patterns[-1].id}")

    def _parse_entry(self, index: int, entry: Any) -> PatternConfig:
        if not isinstance(entry, dict):
            raise ConfigError(f"patterns[{index}]", "expected a mapping")

        pattern_id = entry.get('id')
        if not pattern_id or not isinstance(pattern_id, str):
            raise ConfigError(f"patterns[{index}].id", "missing or not a string")

        key = f"patterns.{pattern_id}"
        try:
            pattern_type = PatternType(entry.get('type', ''))
        except ValueError:
            allowed = ", ".join(t.value for t in PatternType)
            raise ConfigError(f"{key}.type", f"expected one of: {allowed}")

        options = entry.get('options') or {}
        if not isinstance(options, dict):
            raise ConfigError(f"{key}.options", "expected a mapping")

        try:
            order = int(entry.get('order', 10))
        except (TypeError, ValueError):
            raise ConfigError(f"{key}.order", "expected an integer")

        return PatternConfig(
            id=pattern_id,
            type=pattern_type,
            name=str(entry.get('name', pattern_id)),
            order=order,
            enabled=bool(entry.get('enabled', True)),
            options=dict(options),
        )

    def get_pattern(self, pattern_id: str) -> Optional[PatternConfig]:
        """Get pattern config by ID"""
        for pattern in self.patterns:
            if pattern.id == pattern_id:
                return pattern
        return None

    def get_all_patterns(self) -> List[PatternConfig]:
        """All pattern definitions in file order"""
        return list(self.patterns)

    def get_enabled_patterns(self) -> List[PatternConfig]:
        return [p for p in self.patterns if p.enabled]
