"""
Tests for ConfigManager: include merging, fallback and value validation.
"""

import textwrap

import pytest

from managers.config_manager import ConfigManager
from models.config import ConfigError
from models.enums import ChannelOrder, LogLevel, PatternType


def write(path, text):
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def load(path) -> ConfigManager:
    manager = ConfigManager(config_path=str(path))
    manager.load()
    return manager


class TestLoading:

    def test_shipped_config_loads(self):
        config = ConfigManager().load()

        assert config.strip.channel_order == ChannelOrder.GRB
        assert config.engine.tick_interval_ms == 33
        assert [p.id for p in config.patterns] == ["rainbow", "bananas", "rain", "orange", "blackbody"]

    def test_monolithic_file(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            strip:
              device: /dev/spidev1.0
              pixel_count: 64
              channel_order: rgb
            engine:
              tick_interval_ms: 20
            logging:
              level: debug
        """)
        config = load(path).config

        assert config.strip.device == "/dev/spidev1.0"
        assert config.strip.pixel_count == 64
        assert config.strip.channel_order == ChannelOrder.RGB
        assert config.engine.tick_interval == pytest.approx(0.02)
        assert config.logging.level == LogLevel.DEBUG
        # No patterns section: built-in table
        assert len(config.patterns) == 5

    def test_includes_merge_in_order(self, tmp_path):
        write(tmp_path / "a.yaml", """
            strip:
              pixel_count: 10
        """)
        write(tmp_path / "b.yaml", """
            strip:
              pixel_count: 20
            patterns:
              - id: rainbow
                type: rainbow
                name: Only Rainbow
        """)
        path = write(tmp_path / "config.yaml", """
            include:
              - a.yaml
              - b.yaml
            api:
              port: 8080
        """)
        manager = load(path)

        assert manager.config.strip.pixel_count == 20
        assert manager.config.api.port == 8080
        assert manager.pattern_manager.get_pattern("rainbow").name == "Only Rainbow"

    def test_missing_file_falls_back_to_factory_defaults(self, tmp_path):
        config = load(tmp_path / "missing.yaml").config

        assert config.strip.device == "/dev/spidev0.0"
        assert config.engine.default_pattern == "rainbow"

    def test_broken_yaml_falls_back(self, tmp_path):
        path = write(tmp_path / "config.yaml", "strip: [unclosed\n")
        assert load(path).config.api.port == 3001

    def test_overrides(self, tmp_path):
        manager = load(tmp_path / "missing.yaml")
        config = manager.apply_overrides(device="/tmp/fifo", virtual=True)

        assert config.strip.device == "/tmp/fifo"
        assert config.strip.virtual is True


class TestPatterns:

    def test_pattern_entries(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            patterns:
              - id: rainbow
                type: rainbow
                name: Rainbow
                order: 0
              - id: embers
                type: black_body_rain
                name: Embers
                order: 5
                enabled: false
                options:
                  start_temperature: 4000
        """)
        manager = load(path)
        embers = manager.pattern_manager.get_pattern("embers")

        assert embers.type == PatternType.BLACK_BODY_RAIN
        assert embers.enabled is False
        assert embers.options == {"start_temperature": 4000}
        assert [p.id for p in manager.pattern_manager.get_enabled_patterns()] == ["rainbow"]

    def test_unknown_type(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            patterns:
              - id: rainbow
                type: sparkles
        """)
        with pytest.raises(ConfigError) as info:
            load(path)
        assert info.value.key == "patterns.rainbow.type"

    def test_default_pattern_must_exist(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            engine:
              default_pattern: rain
            patterns:
              - id: rainbow
                type: rainbow
        """)
        with pytest.raises(ConfigError) as info:
            load(path)
        assert info.value.key == "engine.default_pattern"


class TestValidation:

    @pytest.mark.parametrize("yaml_text, key", [
        ("strip:\n  pixel_count: 0\n", "strip.pixel_count"),
        ("strip:\n  pixel_count: lots\n", "strip.pixel_count"),
        ("strip:\n  channel_order: XYZ\n", "strip.channel_order"),
        ("strip:\n  virtual: maybe\n", "strip.virtual"),
        ("engine:\n  tick_interval_ms: -5\n", "engine.tick_interval_ms"),
        ("api:\n  port: 70000\n", "api.port"),
        ("logging:\n  level: LOUD\n", "logging.level"),
        ("strip: 5\n", "strip"),
    ])
    def test_invalid_values(self, tmp_path, yaml_text, key):
        path = write(tmp_path / "config.yaml", yaml_text)
        with pytest.raises(ConfigError) as info:
            load(path)
        assert info.value.key == key
