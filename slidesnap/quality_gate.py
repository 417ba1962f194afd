"""
Quality gate module for connector shape validation.

Provides B-Rep validity checking, bounding-box envelope comparison against
the derived dimensions, and profile simplicity checks.
"""

from dataclasses import dataclass, field
from typing import List
from enum import Enum

from .geometry import (
    Envelope,
    SnapParams,
    male_profile_points,
    channel_profile_points,
    relief_profile_points,
    latch_profile_points,
    is_simple_polygon,
)


class ValidationStatus(Enum):
    """Validation result status."""
    VALID = "valid"
    INVALID = "invalid"


@dataclass
class ValidationResult:
    """Result of shape validation."""
    status: ValidationStatus
    is_valid: bool
    errors: List[str]
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls(ValidationStatus.VALID, True, [], [])

    @classmethod
    def invalid(cls, errors: List[str]) -> 'ValidationResult':
        return cls(ValidationStatus.INVALID, False, errors, [])

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Combine two results; invalid wins."""
        errors = self.errors + other.errors
        warnings = self.warnings + other.warnings
        if errors:
            result = ValidationResult.invalid(errors)
        else:
            result = ValidationResult.valid()
        result.warnings = warnings
        return result


def validate_shape(shape) -> ValidationResult:
    """
    Validate shape geometry.

    Checks:
    - Shape is not null
    - B-Rep validity (OCP BRepCheck_Analyzer)
    """
    errors = []
    warnings = []

    if shape is None:
        errors.append("Shape is null")
        return ValidationResult.invalid(errors)

    if hasattr(shape, 'wrapped'):
        try:
            from OCP.BRepCheck import BRepCheck_Analyzer
            analyzer = BRepCheck_Analyzer(shape.wrapped)
            if not analyzer.IsValid():
                errors.append("Shape B-Rep is invalid")
        except ImportError as e:
            warnings.append(f"Could not perform B-Rep check: {e}")

    if errors:
        return ValidationResult.invalid(errors)

    result = ValidationResult.valid()
    result.warnings = warnings
    return result


def check_envelope(shape, envelope: Envelope, tolerance: float = 1e-4) -> ValidationResult:
    """
    Compare the shape's bounding box with the expected envelope.

    Each of the six box faces must match within tolerance.
    """
    if shape is None:
        return ValidationResult.invalid(["Shape is null"])

    bbox = shape.bounding_box()
    actual_min = (bbox.min.X, bbox.min.Y, bbox.min.Z)
    actual_max = (bbox.max.X, bbox.max.Y, bbox.max.Z)

    errors = []
    for axis, lo, hi, exp_lo, exp_hi in zip(
        "XYZ", actual_min, actual_max, envelope.min, envelope.max
    ):
        if abs(lo - exp_lo) > tolerance:
            errors.append(f"{axis} min {lo:.5f} != expected {exp_lo:.5f}")
        if abs(hi - exp_hi) > tolerance:
            errors.append(f"{axis} max {hi:.5f} != expected {exp_hi:.5f}")

    if errors:
        return ValidationResult.invalid(errors)
    return ValidationResult.valid()


def check_profiles(params: SnapParams, epsilon: float) -> ValidationResult:
    """All four connector profiles must be simple polygons."""
    profiles = {
        'male': male_profile_points(params.t, params.w),
        'channel': channel_profile_points(params.t, params.w, params.g, epsilon),
        'relief': relief_profile_points(params),
        'latch': latch_profile_points(params, epsilon),
    }
    errors = [
        f"{name} profile self-intersects"
        for name, points in profiles.items()
        if not is_simple_polygon(points)
    ]
    if errors:
        return ValidationResult.invalid(errors)
    return ValidationResult.valid()
