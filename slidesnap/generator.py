"""
Connector generator module - main pipeline for slide-n-snap solids.

Integrates parameter validation, solid construction and the quality gate.
"""

from dataclasses import dataclass, field
from typing import Optional, List
from enum import Enum
import logging
import time

from .geometry import (
    SnapParams,
    ConfigurationError,
    DEFAULT_EPSILON,
    UPSIDE_DOWN_EPSILON,
    male_envelope,
    female_envelope,
)
from .solids import make_male_clip, make_female_clip_negative, make_upside_down_female_clip_negative
from .quality_gate import validate_shape, check_envelope, check_profiles, ValidationResult
from .config import Config


logger = logging.getLogger(__name__)


class GenerationStatus(Enum):
    """Status of connector generation."""
    SUCCESS = "success"
    SUCCESS_WITH_WARNINGS = "success_with_warnings"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Result of a connector generation attempt."""
    status: GenerationStatus
    params: SnapParams
    male: Optional[object]
    female_negative: Optional[object]
    upside_down: bool
    include_cavity: bool
    validation_result: Optional[ValidationResult]
    error_message: Optional[str]
    generation_time_ms: float
    warnings: List[str] = field(default_factory=list)
    name: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != GenerationStatus.FAILED

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            'name': self.name,
            'status': self.status.value,
            'params': self.params.to_dict(),
            'upside_down': self.upside_down,
            'include_cavity': self.include_cavity,
            'clip_height': self.params.clip_height,
            'channel_width': self.params.channel_width,
            'female_length': self.params.female_length,
            'is_valid': (
                self.validation_result.is_valid
                if self.validation_result else False
            ),
            'warnings': list(self.warnings),
            'error': self.error_message,
            'generation_time_ms': self.generation_time_ms,
        }


def generate_connector(
    params: SnapParams,
    upside_down: bool = False,
    include_cavity: bool = True,
    run_envelope_check: bool = True,
    name: Optional[str] = None,
) -> GenerationResult:
    """
    Generate the male clip and female negative for one parameter set.

    Pipeline:
    1. Validate parameters
    2. Build both solids
    3. Validate shapes and profiles
    4. Compare bounding boxes with the derived dimensions
    """
    start_time = time.perf_counter()
    cavity = include_cavity and not upside_down

    def _failed(message: str, validation: Optional[ValidationResult] = None,
                warnings: Optional[List[str]] = None) -> GenerationResult:
        return GenerationResult(
            status=GenerationStatus.FAILED,
            params=params,
            male=None,
            female_negative=None,
            upside_down=upside_down,
            include_cavity=cavity,
            validation_result=validation,
            error_message=message,
            generation_time_ms=(time.perf_counter() - start_time) * 1000,
            warnings=list(warnings or []),
            name=name,
        )

    # Stage 1: Parameter validation
    is_valid, errors = params.validate()
    if not is_valid:
        logger.error(f"Invalid parameters: {errors}")
        return _failed(f"Invalid parameters: {errors}")

    warnings = params.advisories()
    epsilon = params.resolve_epsilon(UPSIDE_DOWN_EPSILON if upside_down else DEFAULT_EPSILON)

    # Stage 2: Build geometry
    try:
        male = make_male_clip(params.t, params.w, params.l)
        if upside_down:
            female = make_upside_down_female_clip_negative(params, epsilon=epsilon)
        else:
            female = make_female_clip_negative(params, include_cavity=cavity, epsilon=epsilon)
    except Exception as e:
        logger.error(f"Geometry construction failed: {e}")
        return _failed(f"Geometry construction failed: {e}", warnings=warnings)

    # Stage 3: Validate shapes
    validation = (
        validate_shape(male)
        .merge(validate_shape(female))
        .merge(check_profiles(params, epsilon))
    )

    # Stage 4: Envelope against derived dimensions
    if run_envelope_check:
        validation = validation.merge(
            check_envelope(male, male_envelope(params.t, params.w, params.l))
        ).merge(
            check_envelope(
                female,
                female_envelope(params, include_cavity=cavity,
                                upside_down=upside_down, epsilon=epsilon),
            )
        )

    warnings.extend(validation.warnings)

    if not validation.is_valid:
        logger.warning(f"Shape validation failed: {validation.errors}")
        return _failed(
            f"Shape validation failed: {validation.errors}",
            validation=validation,
            warnings=warnings,
        )

    status = (
        GenerationStatus.SUCCESS_WITH_WARNINGS if warnings
        else GenerationStatus.SUCCESS
    )

    return GenerationResult(
        status=status,
        params=params,
        male=male,
        female_negative=female,
        upside_down=upside_down,
        include_cavity=cavity,
        validation_result=validation,
        error_message=None,
        generation_time_ms=(time.perf_counter() - start_time) * 1000,
        warnings=warnings,
        name=name,
    )


def batch_generate(config: Config, run_envelope_check: bool = True) -> List[GenerationResult]:
    """Generate every connector of a config, in config order."""
    results = []
    total = len(config.connectors)

    for i, (name, connector) in enumerate(config.connectors.items()):
        try:
            params = connector.to_params()
        except ConfigurationError as e:
            logger.error(f"[{i+1}/{total}] {name}: {e}")
            results.append(GenerationResult(
                status=GenerationStatus.FAILED,
                params=SnapParams(),
                male=None,
                female_negative=None,
                upside_down=connector.upside_down,
                include_cavity=connector.include_cavity,
                validation_result=None,
                error_message=str(e),
                generation_time_ms=0.0,
                name=name,
            ))
            continue

        result = generate_connector(
            params,
            upside_down=connector.upside_down,
            include_cavity=connector.include_cavity,
            run_envelope_check=run_envelope_check,
            name=name,
        )
        results.append(result)

        logger.info(
            f"[{i+1}/{total}] {name}: {result.status.value} "
            f"({result.generation_time_ms:.1f}ms)"
        )

    success = sum(1 for r in results if r.ok)
    warned = sum(1 for r in results if r.status == GenerationStatus.SUCCESS_WITH_WARNINGS)

    logger.info(
        f"Batch complete: {success}/{len(results)} success "
        f"({warned} with warnings)"
    )

    return results
