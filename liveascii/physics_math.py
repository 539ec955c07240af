"""Vector math and the per-value helpers used by the physics simulation."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        """The unit vector in the same direction; NaN components for a zero vector."""
        length = self.length()
        if length == 0.0 or math.isnan(length):
            return Vec2(math.nan, math.nan)
        return Vec2(self.x / length, self.y / length)

    @classmethod
    def from_angle(cls, angle: float) -> Vec2:
        """The unit vector at ``angle`` radians from the x axis."""
        return cls(math.cos(angle), math.sin(angle))


@dataclass(frozen=True)
class PhysicsNormalization:
    minimum: float
    maximum: float
    default: float


@dataclass
class PhysicsParticle:
    """One vertex of a simulated strand."""

    mobility: float
    delay: float
    acceleration: float
    radius: float
    position: Vec2
    initial_position: Vec2 = field(default_factory=Vec2)
    last_position: Vec2 = field(default_factory=Vec2)
    last_gravity: Vec2 = field(default_factory=Vec2)
    force: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)


def normalize_parameter_value(
    value: float,
    para_minimum: float,
    para_maximum: float,
    para_default: float,
    norm_minimum: float,
    norm_maximum: float,
    norm_default: float,
    is_inverted: bool,
) -> float:
    """Map a parameter value from its own range onto a normalization range."""
    if not para_minimum <= para_maximum:
        raise ValueError(
            f"parameter minimum {para_minimum} is not below maximum {para_maximum}"
        )
    clamped = min(max(value, para_minimum), para_maximum)

    result = 0.0
    if clamped < para_default:
        span = para_default - para_minimum
    else:
        span = para_maximum - para_default
    if span != 0.0:
        result = (clamped - para_default) / span

    if is_inverted:
        result = -result

    if result < 0.0:
        return result * (norm_default - norm_minimum) + norm_default
    return result * (norm_maximum - norm_default) + norm_default


def get_input_translation_x_from_normalized(
    translation: Vec2,
    angle: float,
    value: float,
    para_min_value: float,
    para_max_value: float,
    para_default_value: float,
    norm_position: PhysicsNormalization,
    norm_angle: PhysicsNormalization,
    is_inverted: bool,
    weight: float,
) -> tuple[Vec2, float]:
    """Add the weighted normalized value to the x translation; returns (translation, angle)."""
    delta = normalize_parameter_value(
        value,
        para_min_value,
        para_max_value,
        para_default_value,
        norm_position.minimum,
        norm_position.maximum,
        norm_position.default,
        is_inverted,
    ) * weight
    return Vec2(translation.x + delta, translation.y), angle


def get_input_translation_y_from_normalized(
    translation: Vec2,
    angle: float,
    value: float,
    para_min_value: float,
    para_max_value: float,
    para_default_value: float,
    norm_position: PhysicsNormalization,
    norm_angle: PhysicsNormalization,
    is_inverted: bool,
    weight: float,
) -> tuple[Vec2, float]:
    """Add the weighted normalized value to the y translation; returns (translation, angle)."""
    delta = normalize_parameter_value(
        value,
        para_min_value,
        para_max_value,
        para_default_value,
        norm_position.minimum,
        norm_position.maximum,
        norm_position.default,
        is_inverted,
    ) * weight
    return Vec2(translation.x, translation.y + delta), angle


def get_input_angle_from_normalized(
    translation: Vec2,
    angle: float,
    value: float,
    para_min_value: float,
    para_max_value: float,
    para_default_value: float,
    norm_position: PhysicsNormalization,
    norm_angle: PhysicsNormalization,
    is_inverted: bool,
    weight: float,
) -> tuple[Vec2, float]:
    """Add the weighted normalized value to the angle; returns (translation, angle)."""
    delta = normalize_parameter_value(
        value,
        para_min_value,
        para_max_value,
        para_default_value,
        norm_angle.minimum,
        norm_angle.maximum,
        norm_angle.default,
        is_inverted,
    ) * weight
    return translation, angle + delta


def get_output_translation_x(
    translation: Vec2,
    particles: Sequence[PhysicsParticle],
    particle_index: int,
    is_inverted: bool,
    parent_gravity: Vec2,
) -> float:
    return -translation.x if is_inverted else translation.x


def get_output_translation_y(
    translation: Vec2,
    particles: Sequence[PhysicsParticle],
    particle_index: int,
    is_inverted: bool,
    parent_gravity: Vec2,
) -> float:
    return -translation.y if is_inverted else translation.y


def get_output_angle(
    translation: Vec2,
    particles: Sequence[PhysicsParticle],
    particle_index: int,
    is_inverted: bool,
    parent_gravity: Vec2,
) -> float:
    """Angle between the parent segment (or reversed gravity) and ``translation``."""
    if particle_index >= 2:
        parent = particles[particle_index - 1].position - particles[particle_index - 2].position
    else:
        parent = -parent_gravity
    value = direction_to_radian(parent, translation)
    return -value if is_inverted else value


def get_output_scale_translation_x(translation_scale: Vec2, angle_scale: float) -> float:
    return translation_scale.x


def get_output_scale_translation_y(translation_scale: Vec2, angle_scale: float) -> float:
    return translation_scale.y


def get_output_scale_angle(translation_scale: Vec2, angle_scale: float) -> float:
    return angle_scale


def direction_to_radian(from_: Vec2, to: Vec2) -> float:
    """Signed angle from ``from_`` to ``to``, wrapped into [-pi, pi]."""
    result = math.atan2(to.y, to.x) - math.atan2(from_.y, from_.x)
    while result < -math.pi:
        result += 2.0 * math.pi
    while result > math.pi:
        result -= 2.0 * math.pi
    return result


def direction_to_degrees(from_: Vec2, to: Vec2) -> float:
    """The angle in degrees, negated when ``to`` lies further right than ``from_``."""
    degree = math.degrees(direction_to_radian(from_, to))
    if to.x - from_.x > 0.0:
        degree = -degree
    return degree