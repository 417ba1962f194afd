"""
slidesnap - Parametric slide-n-snap connector generator
"""

from .dimensions import (
    DIAGONAL_GAP_FACTOR,
    clip_height,
    channel_width,
    female_length,
)
from .geometry import (
    SnapParams,
    ConfigurationError,
    Envelope,
    DEFAULT_EPSILON,
    UPSIDE_DOWN_EPSILON,
    male_profile_points,
    channel_profile_points,
    relief_profile_points,
    latch_profile_points,
)
from .solids import (
    make_male_clip,
    make_female_channel,
    make_spring_relief,
    make_latch,
    make_latch_pocket,
    make_spring_cavity,
    make_female_clip_negative,
    make_upside_down_female_clip_negative,
    make_connector,
)
from .generator import generate_connector, batch_generate, GenerationStatus, GenerationResult
from .quality_gate import validate_shape, check_envelope, ValidationResult
from .config import Config, ConnectorConfig, PRESETS, get_preset

__version__ = "0.1.0"

__all__ = [
    'DIAGONAL_GAP_FACTOR',
    'clip_height',
    'channel_width',
    'female_length',
    'SnapParams',
    'ConfigurationError',
    'Envelope',
    'DEFAULT_EPSILON',
    'UPSIDE_DOWN_EPSILON',
    'male_profile_points',
    'channel_profile_points',
    'relief_profile_points',
    'latch_profile_points',
    'make_male_clip',
    'make_female_channel',
    'make_spring_relief',
    'make_latch',
    'make_latch_pocket',
    'make_spring_cavity',
    'make_female_clip_negative',
    'make_upside_down_female_clip_negative',
    'make_connector',
    'generate_connector',
    'batch_generate',
    'GenerationStatus',
    'GenerationResult',
    'validate_shape',
    'check_envelope',
    'ValidationResult',
    'Config',
    'ConnectorConfig',
    'PRESETS',
    'get_preset',
]
