"""
Configuration module for connector presets and YAML-based connector sets.

Presets are the recommended (t, w, l, g, j, h, s, a) bundles. Bigger
presets make a stronger connection (larger t, w, l) at the cost of needing
more clearance (larger g, j), which suits less accurate printers.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional, Any
import logging

import yaml

from .geometry import SnapParams, ConfigurationError

logger = logging.getLogger(__name__)


PRESETS: Dict[str, Dict[str, Any]] = {
    'small': {
        'description': 'light-duty clip for well-tuned printers',
        'params': {'t': 1.75, 'w': 5.25, 'l': 7.0, 'g': 0.3,
                   'j': 0.6, 'h': 1.0, 's': 1.0, 'a': 7.0},
    },
    'medium': {
        'description': 'general purpose clip',
        'params': {'t': 2.5, 'w': 7.5, 'l': 10.0, 'g': 0.3,
                   'j': 0.75, 'h': 1.5, 's': 1.2, 'a': 10.0},
    },
    'large': {
        'description': 'strong clip with extra clearance for coarse printers',
        'params': {'t': 3.5, 'w': 10.5, 'l': 14.0, 'g': 0.4,
                   'j': 1.0, 'h': 2.0, 's': 1.5, 'a': 14.0},
    },
}

DEFAULT_PRESET = 'small'


def get_preset(name: str, **overrides: float) -> SnapParams:
    """Parameters for a named preset, with optional per-field overrides."""
    if name not in PRESETS:
        raise ConfigurationError(
            [f"unknown preset '{name}' (choose from {', '.join(sorted(PRESETS))})"]
        )
    params = SnapParams.from_dict(PRESETS[name]['params'])
    unknown = set(overrides) - set(SnapParams.__dataclass_fields__)
    if unknown:
        raise ConfigurationError([f"unknown parameter '{k}'" for k in sorted(unknown)])
    return replace(params, **overrides) if overrides else params


@dataclass
class ConnectorConfig:
    """Configuration for a single connector."""
    name: str
    preset: str = DEFAULT_PRESET
    overrides: Dict[str, float] = field(default_factory=dict)
    include_cavity: bool = True
    upside_down: bool = False

    def to_dict(self) -> dict:
        return {
            'preset': self.preset,
            'overrides': dict(self.overrides),
            'include_cavity': self.include_cavity,
            'upside_down': self.upside_down,
        }

    @classmethod
    def from_dict(cls, name: str, d: dict) -> 'ConnectorConfig':
        if not isinstance(d, dict):
            raise ConfigurationError([f"{name}: connector entry must be a mapping"])
        overrides = d.get('overrides', {}) or {}
        if not isinstance(overrides, dict):
            raise ConfigurationError([f"{name}: overrides must be a mapping"])
        values = {}
        for k, v in overrides.items():
            try:
                values[k] = float(v)
            except (TypeError, ValueError):
                raise ConfigurationError([f"{name}: override {k}={v!r} is not a number"])
        return cls(
            name=name,
            preset=d.get('preset', DEFAULT_PRESET),
            overrides=values,
            include_cavity=bool(d.get('include_cavity', True)),
            upside_down=bool(d.get('upside_down', False)),
        )

    def to_params(self) -> SnapParams:
        """Resolve preset plus overrides into a parameter set."""
        return get_preset(self.preset, **self.overrides)


@dataclass
class Config:
    """Main configuration container for a set of connectors."""
    version: str = "1.0"
    connectors: Dict[str, ConnectorConfig] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'version': self.version,
            'connectors': {k: v.to_dict() for k, v in self.connectors.items()},
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Config':
        entries = d.get('connectors') or {}
        if not isinstance(entries, dict):
            raise ConfigurationError(["connectors must be a mapping"])
        connectors = {}
        for name, data in entries.items():
            connectors[name] = ConnectorConfig.from_dict(name, data or {})
        return cls(version=str(d.get('version', '1.0')), connectors=connectors)

    def save(self, path: Path) -> None:
        """Save config to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, allow_unicode=True,
                      default_flow_style=False, sort_keys=False)
        logger.info(f"Config saved to: {path}")

    @classmethod
    def load(cls, path: Path) -> 'Config':
        """Load config from YAML file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError([f"{path}: top level must be a mapping"])
        return cls.from_dict(data)

    def add_connector(self, name: str, preset: str = DEFAULT_PRESET,
                      overrides: Optional[Dict[str, float]] = None,
                      include_cavity: bool = True,
                      upside_down: bool = False) -> ConnectorConfig:
        """Add or replace a connector entry."""
        if preset not in PRESETS:
            raise ConfigurationError([f"unknown preset '{preset}'"])
        connector = ConnectorConfig(
            name=name,
            preset=preset,
            overrides=dict(overrides or {}),
            include_cavity=include_cavity,
            upside_down=upside_down,
        )
        self.connectors[name] = connector
        return connector


def create_default_config() -> Config:
    """One connector per preset, standard orientation."""
    config = Config()
    for name in PRESETS:
        config.add_connector(name, preset=name)
    return config
