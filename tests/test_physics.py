import math

import pytest

from liveascii.physics import (
    Options,
    ParameterSet,
    Physics,
    PhysicsOutput,
    PhysicsParameter,
    PhysicsRig,
    PhysicsSource,
)
from liveascii.physics_json import PhysicsJson
from liveascii.physics_math import PhysicsParticle, Vec2


def _doc(input_type="X", output_type="Angle", fps=30, setting_count=1):
    norm = {"Minimum": -10, "Default": 0, "Maximum": 10}
    return PhysicsJson.from_dict(
        {
            "Version": 3,
            "Meta": {
                "PhysicsSettingCount": setting_count,
                "TotalInputCount": 1,
                "TotalOutputCount": 1,
                "VertexCount": 2,
                "Fps": fps,
                "EffectiveForces": {
                    "Gravity": {"X": 0, "Y": -1},
                    "Wind": {"X": 0, "Y": 0},
                },
                "PhysicsDictionary": [{"Id": "PhysicsSetting1", "Name": "Hair Sway_Front"}],
            },
            "PhysicsSettings": [
                {
                    "Id": "PhysicsSetting1",
                    "Input": [
                        {
                            "Source": {"Target": "Parameter", "Id": "ParamAngleX"},
                            "Type": input_type,
                            "Weight": 60,
                            "Reflect": False,
                        }
                    ],
                    "Output": [
                        {
                            "Destination": {"Target": "Parameter", "Id": "ParamHairFront"},
                            "VertexIndex": 1,
                            "Scale": 1,
                            "Weight": 100,
                            "Type": output_type,
                            "Reflect": False,
                        }
                    ],
                    "Vertices": [
                        {
                            "Position": {"X": 0, "Y": 0},
                            "Mobility": 1,
                            "Delay": 1,
                            "Acceleration": 1,
                            "Radius": 0,
                        },
                        {
                            "Position": {"X": 0, "Y": 10},
                            "Mobility": 0.95,
                            "Delay": 0.8,
                            "Acceleration": 1.12,
                            "Radius": 10,
                        },
                    ],
                    "Normalization": {"Position": norm, "Angle": norm},
                }
            ],
        }
    )


def _params(ids=("ParamAngleX", "ParamHairFront")):
    n = len(ids)
    return ParameterSet(
        ids=list(ids),
        values=[0.0] * n,
        minimums=[-30.0] * n,
        maximums=[30.0] * n,
        defaults=[0.0] * n,
    )


def _output(kind=PhysicsSource.ANGLE, weight=100.0):
    return PhysicsOutput(
        destination=PhysicsParameter("ParamHairFront"),
        vertex_index=1,
        angle_scale=1.0,
        weight=weight,
        kind=kind,
        reflect=False,
    )


def test_from_json_builds_rig():
    physics = Physics.from_json(_doc())
    rig = physics.physics_rig
    assert rig.sub_rig_count == 1
    assert rig.fps == 30
    assert rig.gravity == Vec2(0.0, -1.0)
    assert len(rig.inputs) == 1 and len(rig.outputs) == 1 and len(rig.particles) == 2
    assert rig.inputs[0].kind is PhysicsSource.X
    assert rig.inputs[0].source.id == "ParamAngleX"
    assert rig.outputs[0].kind is PhysicsSource.ANGLE
    assert rig.outputs[0].angle_scale == 1.0
    assert rig.particles[1].position == Vec2(0.0, 10.0)
    setting = rig.settings[0]
    assert (setting.input_count, setting.output_count, setting.particle_count) == (1, 1, 2)
    assert (setting.base_input_index, setting.base_output_index) == (0, 0)


def test_options_defaults():
    options = Options()
    assert options.gravity == Vec2(0.0, -1.0)
    assert options.wind == Vec2(0.0, 0.0)


@pytest.mark.parametrize("kind", ["input", "output"])
def test_from_json_rejects_unknown_kind(kind):
    doc = _doc(input_type="Z") if kind == "input" else _doc(output_type="Z")
    with pytest.raises(ValueError, match=f"Unknown physics {kind} type: Z"):
        Physics.from_json(doc)


def test_parameter_set_index_of():
    params = _params()
    assert params.index_of("ParamHairFront") == 1
    with pytest.raises(KeyError):
        params.index_of("Missing")


def test_parameter_set_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        ParameterSet(ids=["a"], values=[0.0, 1.0], minimums=[0.0], maximums=[1.0], defaults=[0.0])


def test_update_output_clamps_to_maximum_and_records():
    output = _output()
    result = Physics.update_output_parameter_value(0.0, -1.0, 1.0, 5.0, output)
    assert result == 1.0
    assert output.value_exceeded_maximum == 5.0
    assert output.value_below_minimum == 0.0


def test_update_output_clamps_to_minimum_and_records():
    output = _output()
    result = Physics.update_output_parameter_value(0.0, -1.0, 1.0, -3.0, output)
    assert result == -1.0
    assert output.value_below_minimum == -3.0


def test_update_output_translation_scale_is_zero():
    output = _output(kind=PhysicsSource.X)
    assert Physics.update_output_parameter_value(0.7, -1.0, 1.0, 0.9, output) == 0.0


def test_update_output_blends_by_weight():
    output = _output(weight=50.0)
    result = Physics.update_output_parameter_value(0.0, -1.0, 1.0, 0.5, output)
    assert result == pytest.approx(0.25)


def test_update_particles_keeps_radius():
    strand = [
        PhysicsParticle(1.0, 1.0, 1.0, 0.0, Vec2(0.0, 0.0)),
        PhysicsParticle(0.95, 0.8, 1.12, 10.0, Vec2(0.0, 10.0)),
        PhysicsParticle(0.9, 0.8, 1.0, 5.0, Vec2(0.0, 15.0)),
    ]
    Physics.update_particles(strand, Vec2(1.0, 2.0), 0.0, Vec2(), 0.0, 1 / 30, 1.0)
    assert strand[0].position == Vec2(1.0, 2.0)
    for prev, particle in zip(strand, strand[1:]):
        assert (particle.position - prev.position).length() == pytest.approx(particle.radius)
        assert particle.last_gravity == Vec2(0.0, 1.0)
        assert particle.force == Vec2()


def test_update_particles_snaps_small_x_to_zero():
    particle = PhysicsParticle(1.0, 0.0, 1.0, 5.0, Vec2(0.001, 5.0))
    particle.last_gravity = Vec2(0.0, 1.0)
    particle.velocity = Vec2(3.0, 4.0)
    strand = [PhysicsParticle(1.0, 0.0, 1.0, 0.0, Vec2()), particle]
    Physics.update_particles(strand, Vec2(), 0.0, Vec2(), 0.1, 1 / 30, 1.0)
    assert particle.position.x == 0.0
    assert particle.position.y == pytest.approx(5.0)
    assert particle.velocity == Vec2(3.0, 4.0)
    assert particle.last_position == Vec2(0.001, 5.0)


def test_evaluate_ignores_non_positive_delta():
    physics = Physics.from_json(_doc())
    params = _params()
    params.values = [5.0, 2.0]
    physics.evaluate(params, 0.0)
    assert params.values == [5.0, 2.0]
    assert physics.current_remain_time == 0.0
    assert physics.parameter_caches == []


def test_evaluate_steps_and_keeps_values_in_range():
    physics = Physics.from_json(_doc())
    params = _params()
    physics.evaluate(params, 0.05)
    step = 1 / 30
    assert physics.physics_rig.inputs[0].source_parameter_index == 0
    assert physics.physics_rig.outputs[0].destination_parameter_index == 1
    assert 0.0 <= physics.current_remain_time < step
    assert math.isfinite(params.values[1])
    assert -30.0 <= params.values[1] <= 30.0
    particles = physics.physics_rig.particles
    assert (particles[1].position - particles[0].position).length() == pytest.approx(10.0)
    assert len(physics.parameter_caches) == len(params)


def test_evaluate_resets_after_long_pause():
    physics = Physics.from_json(_doc())
    params = _params()
    params.values = [1.0, 2.0]
    physics.evaluate(params, 1.0)
    assert physics.current_remain_time == 0.0
    assert params.values == [1.0, 2.0]
    assert physics.physics_rig.outputs[0].destination_parameter_index is None
    assert physics.parameter_input_caches == [1.0, 2.0]


def test_evaluate_without_settings_blends_caches_to_values():
    rig = PhysicsRig(0, [], [], [], [], Vec2(0.0, -1.0), Vec2(), 0)
    physics = Physics(rig)
    params = _params()
    params.values = [3.0, -4.0]
    physics.evaluate(params, 0.1)
    assert physics.parameter_caches == pytest.approx([3.0, -4.0])
    assert physics.parameter_input_caches == pytest.approx([3.0, -4.0])
    assert physics.current_remain_time == pytest.approx(0.0)


def test_evaluate_unknown_parameter_raises():
    physics = Physics.from_json(_doc())
    with pytest.raises(KeyError):
        physics.evaluate(_params(ids=("ParamHairFront",)), 0.05)


def test_evaluate_rejects_missing_settings():
    physics = Physics.from_json(_doc(setting_count=2))
    with pytest.raises(ValueError):
        physics.evaluate(_params(), 0.05)


def test_interpolate_blends_outputs():
    physics = Physics.from_json(_doc())
    physics.current_rig_outputs = [[2.0]]
    physics.previous_rig_outputs = [[0.0]]
    physics.physics_rig.outputs[0].destination_parameter_index = 1
    params = _params()
    physics.interpolate(params, 0.5)
    assert params.values == [0.0, 1.0]


def test_interpolate_skips_unresolved_outputs():
    physics = Physics.from_json(_doc())
    physics.current_rig_outputs = [[2.0]]
    physics.previous_rig_outputs = [[2.0]]
    params = _params()
    params.values = [7.0, 8.0]
    physics.interpolate(params, 1.0)
    assert params.values == [7.0, 8.0]