# liveascii

Building blocks for animating a rigged 2D character as ASCII art in a
terminal. The package has no dependencies outside the standard library.

## Modules

### `liveascii.physics_json`

This module reads `*.physics3.json` rig descriptions into dataclasses.

- `PhysicsJson.from_path(base_dir, path)` reads the file at `base_dir / path`.
- `PhysicsJson.from_str(text)` parses JSON text.
- `PhysicsJson.from_dict(data)` builds the document from JSON data that is
  already decoded.
- `PhysicsJson.to_dict()` returns the document with the file's key names.

A missing field, a value of the wrong type, invalid JSON or an unreadable file
raises `PhysicsJsonError`, which is a subclass of `ValueError`. `Meta.Fps` is
optional and defaults to `0`.

### `liveascii.physics_math`

This module holds the vector math and the per-value helpers of the simulation:

- `Vec2`, an immutable vector with `normalize()` and `Vec2.from_angle(angle)`.
- `PhysicsNormalization` and `PhysicsParticle`.
- `normalize_parameter_value(...)`.
- The input helpers `get_input_translation_x_from_normalized`,
  `get_input_translation_y_from_normalized` and
  `get_input_angle_from_normalized`. Each returns a new `(translation, angle)`
  pair.
- The output helpers `get_output_translation_x`, `get_output_translation_y`,
  `get_output_angle` and the `get_output_scale_*` functions.
- `direction_to_radian(from_, to)` and `direction_to_degrees(from_, to)`.

### `liveascii.physics`

This module holds the pendulum physics that makes hair and accessories sway.

- `Physics.from_json(json)` builds a rig from a `PhysicsJson`. An input or
  output type other than `X`, `Y` or `Angle` raises `ValueError`.
- `Physics.evaluate(params, delta_time)` runs fixed steps. It steps at the
  rig's fps, or at `delta_time` when fps is 0. Each step reads the input
  parameters from a `ParameterSet` and writes the interpolated output values
  back into `params.values`.
- `ParameterSet(ids, values, minimums, maximums, defaults)` holds a model's
  parameters. `index_of(id)` raises `KeyError` for an unknown id.
- `Physics.update_output_parameter_value(...)` and
  `Physics.update_particles(...)` are the two steps, exposed as static methods.

### `liveascii.shader`

`ShaderManager` cycles through a ring of shaders with `next()` and `prev()`.
`current_shader()` returns the selected one, and `insert_hd(shader)` adds a
shader at the front. There are two kinds of shader:

- `CharShader`, a ramp of characters chosen by luminance.
- `TextShader`, a repeating text.

By default the ring holds, in this order:

1. An ASCII ramp.
2. The text `"HELLO"`.
3. A Braille ramp.

### `liveascii.tracker`

- `parse_packet(buf)` decodes a little-endian face-tracking packet into a
  `Packet`. A buffer that is too short raises `ValueError`.
- `Tracker()` listens on `127.0.0.1:11573` by default, in a background thread.
  - `run()` starts it and raises `OSError` if the port cannot be bound.
  - `latest()` returns the newest valid packet, or `None`.
  - `stop()` ends the thread.

### `liveascii.receiver`

`MsgReceiver(port, sender)` listens for UDP datagrams on a local port. It
decodes each one as UTF-8 and puts the resulting string on the `queue.Queue`
given as `sender`. It has the same `run()` and `stop()` pair as `Tracker`.

### `liveascii.popup`

- `Popup` is a notice with a duration in seconds, a size and an RGB colour.
  `is_expired()` tells whether its time is up, and `with_position(pos)`
  returns a copy placed at `pos`.
- `Popups` collects popups:
  - `push_err(text)` adds a red popup that lasts 3 seconds.
  - `push_msg(text)` adds a green popup that lasts 4 seconds.
  - `update()` drops the popups that have expired.

### `liveascii.utils`

- `KeyCode` and `KeyModifiers` describe a key press.
- `key_code_to_str(code)` gives the key's name for hotkey settings. A
  character key's name is its upper-case form.
- `modifiers_to_list(modifiers)` lists the held modifiers in the order
  Control, Alt, Shift, Super.
- `get_file_name(name)` returns the part of a file name before the first dot.
- `default_fade_time()` returns `-1.0`.

## Example

```python
from liveascii.physics import ParameterSet, Physics
from liveascii.physics_json import PhysicsJson

physics = Physics.from_json(PhysicsJson.from_path("model", "model.physics3.json"))
params = ParameterSet(
    ids=["ParamAngleX", "ParamHairFront"],
    values=[10.0, 0.0],
    minimums=[-30.0, -1.0],
    maximums=[30.0, 1.0],
    defaults=[0.0, 0.0],
)
physics.evaluate(params, 1 / 60)
print(params.values)
```

```python
from liveascii.shader import ShaderManager

shaders = ShaderManager()
shaders.next()
print(shaders.current_shader())  # TextShader(text='HELLO')
```

## What it does not do

The package offers no command-line program and does not draw anything to the
terminal. It does not load character models or textures, rasterise meshes, or
play motions and expressions. The physics works on a plain `ParameterSet` that
the caller supplies and reads back.

## Installation and tests

```
pip install .[test]
pytest
```