"""Pendulum-style physics that drives model parameters from other parameters."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from itertools import pairwise

from liveascii.physics_json import PhysicsJson
from liveascii.physics_math import (
    PhysicsNormalization,
    PhysicsParticle,
    Vec2,
    direction_to_radian,
    get_input_angle_from_normalized,
    get_input_translation_x_from_normalized,
    get_input_translation_y_from_normalized,
    get_output_angle,
    get_output_scale_angle,
    get_output_scale_translation_x,
    get_output_scale_translation_y,
    get_output_translation_x,
    get_output_translation_y,
)

InputGetter = Callable[..., tuple[Vec2, float]]
ValueGetter = Callable[[Vec2, Sequence[PhysicsParticle], int, bool, Vec2], float]
ScaleGetter = Callable[[Vec2, float], float]


class PhysicsTargetType(enum.Enum):
    PARAMETER = "Parameter"


class PhysicsSource(enum.Enum):
    X = "X"
    Y = "Y"
    ANGLE = "Angle"


_INPUT_GETTERS: dict[PhysicsSource, InputGetter] = {
    PhysicsSource.X: get_input_translation_x_from_normalized,
    PhysicsSource.Y: get_input_translation_y_from_normalized,
    PhysicsSource.ANGLE: get_input_angle_from_normalized,
}

_VALUE_GETTERS: dict[PhysicsSource, ValueGetter] = {
    PhysicsSource.X: get_output_translation_x,
    PhysicsSource.Y: get_output_translation_y,
    PhysicsSource.ANGLE: get_output_angle,
}

_SCALE_GETTERS: dict[PhysicsSource, ScaleGetter] = {
    PhysicsSource.X: get_output_scale_translation_x,
    PhysicsSource.Y: get_output_scale_translation_y,
    PhysicsSource.ANGLE: get_output_scale_angle,
}


def _source_kind(kind: str, what: str) -> PhysicsSource:
    try:
        return PhysicsSource(kind)
    except ValueError:
        raise ValueError(f"Unknown physics {what} type: {kind}") from None


@dataclass
class PhysicsParameter:
    id: str
    target_type: PhysicsTargetType = PhysicsTargetType.PARAMETER


@dataclass
class PhysicsSubRig:
    """Where one setting's inputs, outputs and particles sit in the rig's lists."""

    input_count: int
    output_count: int
    particle_count: int
    base_input_index: int
    base_output_index: int
    base_particle_index: int
    normalization_position: PhysicsNormalization
    normalization_angle: PhysicsNormalization


@dataclass
class PhysicsInput:
    source: PhysicsParameter
    weight: float
    kind: PhysicsSource
    reflect: bool
    source_parameter_index: int | None = None

    @property
    def get_normalized_parameter_value(self) -> InputGetter:
        return _INPUT_GETTERS[self.kind]


@dataclass
class PhysicsOutput:
    destination: PhysicsParameter
    vertex_index: int
    angle_scale: float
    weight: float
    kind: PhysicsSource
    reflect: bool
    destination_parameter_index: int | None = None
    translation_scale: Vec2 = field(default_factory=Vec2)
    value_below_minimum: float = 0.0
    value_exceeded_maximum: float = 0.0

    @property
    def get_value(self) -> ValueGetter:
        return _VALUE_GETTERS[self.kind]

    @property
    def get_scale(self) -> ScaleGetter:
        return _SCALE_GETTERS[self.kind]


@dataclass
class Options:
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, -1.0))
    wind: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))


@dataclass
class PhysicsRig:
    sub_rig_count: int
    settings: list[PhysicsSubRig]
    inputs: list[PhysicsInput]
    outputs: list[PhysicsOutput]
    particles: list[PhysicsParticle]
    gravity: Vec2
    wind: Vec2
    fps: int


@dataclass
class ParameterSet:
    """A model's parameters: ids with their current values and ranges."""

    ids: list[str]
    values: list[float]
    minimums: list[float]
    maximums: list[float]
    defaults: list[float]

    def __post_init__(self) -> None:
        self.ids = list(self.ids)
        self.values = [float(v) for v in self.values]
        self.minimums = [float(v) for v in self.minimums]
        self.maximums = [float(v) for v in self.maximums]
        self.defaults = [float(v) for v in self.defaults]
        lengths = {
            len(self.ids),
            len(self.values),
            len(self.minimums),
            len(self.maximums),
            len(self.defaults),
        }
        if len(lengths) > 1:
            raise ValueError("parameter ids, values and ranges must have the same length")

    def __len__(self) -> int:
        return len(self.ids)

    def index_of(self, parameter_id: str) -> int:
        """Position of a parameter by id; raises KeyError when it is unknown."""
        try:
            return self.ids.index(parameter_id)
        except ValueError:
            raise KeyError(parameter_id) from None


class Physics:
    """Steps a physics rig at a fixed rate and writes its outputs into parameters."""

    MAX_DELTA_TIME = 0.5
    MOVEMENT_THRESHOLD = 0.01
    AIR_RESISTANCE = 1.0
    MAX_WEIGHT = 100.0

    def __init__(self, physics_rig: PhysicsRig) -> None:
        self.options = Options()
        self.physics_rig = physics_rig
        self.current_rig_outputs: list[list[float]] = []
        self.previous_rig_outputs: list[list[float]] = []
        self.current_remain_time = 0.0
        self.parameter_caches: list[float] = []
        self.parameter_input_caches: list[float] = []

    @classmethod
    def from_json(cls, json: PhysicsJson) -> Physics:
        """Build the simulation from a parsed physics document."""
        forces = json.meta.effective_forces
        sub_rigs: list[PhysicsSubRig] = []
        inputs: list[PhysicsInput] = []
        outputs: list[PhysicsOutput] = []
        particles: list[PhysicsParticle] = []

        for setting in json.settings:
            pos = setting.normalization.position
            ang = setting.normalization.angle
            sub_rig = PhysicsSubRig(
                input_count=len(setting.input),
                output_count=len(setting.output),
                particle_count=len(setting.vertices),
                base_input_index=len(inputs),
                base_output_index=len(outputs),
                base_particle_index=len(particles),
                normalization_position=PhysicsNormalization(pos.minimum, pos.maximum, pos.default),
                normalization_angle=PhysicsNormalization(ang.minimum, ang.maximum, ang.default),
            )
            inputs.extend(
                PhysicsInput(
                    source=PhysicsParameter(item.source.id),
                    weight=item.weight,
                    kind=_source_kind(item.kind, "input"),
                    reflect=item.reflect,
                )
                for item in setting.input
            )
            outputs.extend(
                PhysicsOutput(
                    destination=PhysicsParameter(item.destination.id),
                    vertex_index=item.vertex_index,
                    angle_scale=item.scale,
                    weight=item.weight,
                    kind=_source_kind(item.kind, "output"),
                    reflect=item.reflect,
                )
                for item in setting.output
            )
            particles.extend(
                PhysicsParticle(
                    mobility=v.mobility,
                    delay=v.delay,
                    acceleration=v.acceleration,
                    radius=v.radius,
                    position=Vec2(v.position.x, v.position.y),
                )
                for v in setting.vertices
            )
            sub_rigs.append(sub_rig)

        rig = PhysicsRig(
            sub_rig_count=json.meta.setting_count,
            settings=sub_rigs,
            inputs=inputs,
            outputs=outputs,
            particles=particles,
            gravity=Vec2(forces.gravity.x, forces.gravity.y),
            wind=Vec2(forces.wind.x, forces.wind.y),
            fps=json.meta.fps,
        )
        return cls(rig)

    def _active_settings(self) -> list[PhysicsSubRig]:
        count = self.physics_rig.sub_rig_count
        settings = self.physics_rig.settings
        if count > len(settings):
            raise ValueError(
                f"rig declares {count} settings but holds only {len(settings)}"
            )
        return settings[:count]

    def evaluate(self, params: ParameterSet, delta_time: float) -> None:
        """Advance the simulation by ``delta_time`` seconds and update ``params``."""
        if delta_time <= 0.0:
            return
        self.current_remain_time += delta_time
        if self.current_remain_time > self.MAX_DELTA_TIME:
            self.current_remain_time = 0.0

        param_count = len(params)
        values = params.values
        if len(self.parameter_caches) < param_count:
            self.parameter_caches.extend([0.0] * (param_count - len(self.parameter_caches)))
        if len(self.parameter_input_caches) < param_count:
            self.parameter_input_caches.extend(
                values[len(self.parameter_input_caches):param_count]
            )

        if not self.current_rig_outputs:
            for setting in self.physics_rig.settings:
                self.current_rig_outputs.append([0.0] * setting.output_count)
                self.previous_rig_outputs.append([0.0] * setting.output_count)

        fps = self.physics_rig.fps
        step = 1.0 / fps if fps > 0 else delta_time
        active = self._active_settings()

        while self.current_remain_time >= step:
            for idx, _ in enumerate(active):
                self.previous_rig_outputs[idx][:] = self.current_rig_outputs[idx]

            input_weight = step / self.current_remain_time
            for j in range(param_count):
                blended = (
                    self.parameter_input_caches[j] * (1.0 - input_weight)
                    + values[j] * input_weight
                )
                self.parameter_caches[j] = blended
                self.parameter_input_caches[j] = blended

            for idx, setting in enumerate(active):
                self._step_setting(params, idx, setting, step)

            self.current_remain_time -= step

        self.interpolate(params, self.current_remain_time / step)

    def _step_setting(
        self, params: ParameterSet, idx: int, setting: PhysicsSubRig, step: float
    ) -> None:
        rig = self.physics_rig
        caches = self.parameter_caches
        total_angle = 0.0
        total_translation = Vec2()

        start = setting.base_input_index
        for item in rig.inputs[start:start + setting.input_count]:
            if item.source_parameter_index is None:
                item.source_parameter_index = params.index_of(item.source.id)
            src = item.source_parameter_index
            total_translation, total_angle = item.get_normalized_parameter_value(
                total_translation,
                total_angle,
                caches[src],
                params.minimums[src],
                params.maximums[src],
                params.defaults[src],
                setting.normalization_position,
                setting.normalization_angle,
                item.reflect,
                item.weight / 100.0,
            )

        rad_angle = -math.radians(total_angle)
        sin_a, cos_a = math.sin(rad_angle), math.cos(rad_angle)
        rotated = Vec2(
            total_translation.x * cos_a - total_translation.y * sin_a,
            total_translation.x * sin_a + total_translation.y * cos_a,
        )

        start = setting.base_particle_index
        particles = rig.particles[start:start + setting.particle_count]
        self.update_particles(
            particles,
            rotated,
            total_angle,
            self.options.wind,
            self.MOVEMENT_THRESHOLD * setting.normalization_position.maximum,
            step,
            self.AIR_RESISTANCE,
        )

        start = setting.base_output_index
        for i, output in enumerate(rig.outputs[start:start + setting.output_count]):
            if output.destination_parameter_index is None:
                output.destination_parameter_index = params.index_of(output.destination.id)
            p_idx = output.vertex_index
            if p_idx < 1 or p_idx >= setting.particle_count:
                continue
            translation = particles[p_idx].position - particles[p_idx - 1].position
            value = output.get_value(
                translation, particles, p_idx, output.reflect, self.options.gravity
            )
            self.current_rig_outputs[idx][i] = value
            dest = output.destination_parameter_index
            caches[dest] = self.update_output_parameter_value(
                caches[dest], params.minimums[dest], params.maximums[dest], value, output
            )

    def interpolate(self, params: ParameterSet, weight: float) -> None:
        """Blend previous and current outputs by ``weight`` into the parameter values."""
        rig = self.physics_rig
        for idx, setting in enumerate(rig.settings):
            start = setting.base_output_index
            for local, output in enumerate(rig.outputs[start:start + setting.output_count]):
                dest = output.destination_parameter_index
                if dest is None:
                    continue
                value = (
                    self.previous_rig_outputs[idx][local] * (1.0 - weight)
                    + self.current_rig_outputs[idx][local] * weight
                )
                params.values[dest] = self.update_output_parameter_value(
                    params.values[dest],
                    params.minimums[dest],
                    params.maximums[dest],
                    value,
                    output,
                )

    @staticmethod
    def update_output_parameter_value(
        current: float,
        para_v_min: float,
        para_v_max: float,
        translation: float,
        output: PhysicsOutput,
    ) -> float:
        """The new parameter value after applying an output; records out-of-range extremes."""
        scale = output.get_scale(output.translation_scale, output.angle_scale)
        value = translation * scale
        if value < para_v_min:
            output.value_below_minimum = min(output.value_below_minimum, value)
            value = para_v_min
        elif value > para_v_max:
            output.value_exceeded_maximum = max(output.value_exceeded_maximum, value)
            value = para_v_max

        weight = output.weight / Physics.MAX_WEIGHT
        if weight >= 1.0:
            return value
        return current * (1.0 - weight) + value * weight

    @staticmethod
    def update_particles(
        strand: Sequence[PhysicsParticle],
        total_translation: Vec2,
        total_angle: float,
        wind_direction: Vec2,
        threshold_value: float,
        delta_time: float,
        air_resistance: float,
    ) -> None:
        """Move a strand of particles one step; the particles are updated in place."""
        strand[0].position = total_translation
        radian = math.radians(total_angle)
        current_gravity = Vec2(math.sin(radian), math.cos(radian)).normalize()

        for prev, particle in pairwise(strand):
            particle.force = current_gravity * particle.acceleration + wind_direction
            particle.last_position = particle.position
            delay = particle.delay * delta_time * 30.0

            direction = particle.position - prev.position
            turn = direction_to_radian(particle.last_gravity, current_gravity) / air_resistance
            rotation = Vec2.from_angle(turn)
            direction = Vec2(
                direction.x * rotation.x - direction.y * rotation.y,
                direction.x * rotation.y + direction.y * rotation.x,
            )
            position = prev.position + direction
            position = position + particle.velocity * delay + particle.force * delay * delay
            new_direction = (position - prev.position).normalize()
            position = prev.position + new_direction * particle.radius
            if abs(position.x) < threshold_value:
                position = Vec2(0.0, position.y)
            particle.position = position

            if delay != 0.0:
                particle.velocity = (
                    (particle.position - particle.last_position) / delay * particle.mobility
                )
            particle.force = Vec2()
            particle.last_gravity = current_gravity