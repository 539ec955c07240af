"""Data model of a physics settings document (``*.physics3.json``)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class PhysicsJsonError(ValueError):
    """Raised when a physics document cannot be read or does not match the schema."""


def _object(data: Any, where: str) -> dict:
    if not isinstance(data, dict):
        raise PhysicsJsonError(f"{where}: expected an object")
    return data


def _field(data: Any, key: str, where: str) -> Any:
    obj = _object(data, where)
    if key not in obj:
        raise PhysicsJsonError(f"{where}: missing field `{key}`")
    return obj[key]


def _uint(data: Any, key: str, where: str, default: int | None = None) -> int:
    if default is not None and key not in _object(data, where):
        return default
    value = _field(data, key, where)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PhysicsJsonError(f"{where}.{key}: expected a non-negative integer")
    return value


def _i32(data: Any, key: str, where: str) -> int:
    value = _field(data, key, where)
    if isinstance(value, bool) or not isinstance(value, int) or not _I32_MIN <= value <= _I32_MAX:
        raise PhysicsJsonError(f"{where}.{key}: expected a 32-bit integer")
    return value


def _float(data: Any, key: str, where: str) -> float:
    value = _field(data, key, where)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PhysicsJsonError(f"{where}.{key}: expected a number")
    return float(value)


def _bool(data: Any, key: str, where: str) -> bool:
    value = _field(data, key, where)
    if not isinstance(value, bool):
        raise PhysicsJsonError(f"{where}.{key}: expected a boolean")
    return value


def _str(data: Any, key: str, where: str) -> str:
    value = _field(data, key, where)
    if not isinstance(value, str):
        raise PhysicsJsonError(f"{where}.{key}: expected a string")
    return value


def _list(data: Any, key: str, where: str) -> list:
    value = _field(data, key, where)
    if not isinstance(value, list):
        raise PhysicsJsonError(f"{where}.{key}: expected an array")
    return value


@dataclass
class Vector2:
    x: float
    y: float

    @classmethod
    def _load(cls, data: Any, where: str) -> Vector2:
        return cls(x=_float(data, "X", where), y=_float(data, "Y", where))

    def _dump(self) -> dict:
        return {"X": self.x, "Y": self.y}


@dataclass
class DictEntry:
    id: str
    name: str

    @classmethod
    def _load(cls, data: Any, where: str) -> DictEntry:
        return cls(id=_str(data, "Id", where), name=_str(data, "Name", where))

    def _dump(self) -> dict:
        return {"Id": self.id, "Name": self.name}


@dataclass
class Force:
    gravity: Vector2
    wind: Vector2

    @classmethod
    def _load(cls, data: Any, where: str) -> Force:
        return cls(
            gravity=Vector2._load(_field(data, "Gravity", where), f"{where}.Gravity"),
            wind=Vector2._load(_field(data, "Wind", where), f"{where}.Wind"),
        )

    def _dump(self) -> dict:
        return {"Gravity": self.gravity._dump(), "Wind": self.wind._dump()}


@dataclass
class PhysicsMeta:
    setting_count: int
    input_count: int
    output_count: int
    vertex_count: int
    effective_forces: Force
    dictionary: list[DictEntry] = field(default_factory=list)
    fps: int = 0

    @classmethod
    def _load(cls, data: Any, where: str) -> PhysicsMeta:
        entries = _list(data, "PhysicsDictionary", where)
        return cls(
            setting_count=_uint(data, "PhysicsSettingCount", where),
            input_count=_uint(data, "TotalInputCount", where),
            output_count=_uint(data, "TotalOutputCount", where),
            vertex_count=_uint(data, "VertexCount", where),
            fps=_uint(data, "Fps", where, default=0),
            effective_forces=Force._load(
                _field(data, "EffectiveForces", where), f"{where}.EffectiveForces"
            ),
            dictionary=[
                DictEntry._load(entry, f"{where}.PhysicsDictionary[{n}]")
                for n, entry in enumerate(entries)
            ],
        )

    def _dump(self) -> dict:
        return {
            "PhysicsSettingCount": self.setting_count,
            "TotalInputCount": self.input_count,
            "TotalOutputCount": self.output_count,
            "VertexCount": self.vertex_count,
            "Fps": self.fps,
            "EffectiveForces": self.effective_forces._dump(),
            "PhysicsDictionary": [entry._dump() for entry in self.dictionary],
        }


@dataclass
class Source:
    target: str
    id: str

    @classmethod
    def _load(cls, data: Any, where: str) -> Source:
        return cls(target=_str(data, "Target", where), id=_str(data, "Id", where))

    def _dump(self) -> dict:
        return {"Target": self.target, "Id": self.id}


@dataclass
class NormalizationValue:
    minimum: float
    maximum: float
    default: float

    @classmethod
    def _load(cls, data: Any, where: str) -> NormalizationValue:
        return cls(
            minimum=_float(data, "Minimum", where),
            maximum=_float(data, "Maximum", where),
            default=_float(data, "Default", where),
        )

    def _dump(self) -> dict:
        return {"Minimum": self.minimum, "Maximum": self.maximum, "Default": self.default}


@dataclass
class Normalization:
    position: NormalizationValue
    angle: NormalizationValue

    @classmethod
    def _load(cls, data: Any, where: str) -> Normalization:
        return cls(
            position=NormalizationValue._load(
                _field(data, "Position", where), f"{where}.Position"
            ),
            angle=NormalizationValue._load(_field(data, "Angle", where), f"{where}.Angle"),
        )

    def _dump(self) -> dict:
        return {"Position": self.position._dump(), "Angle": self.angle._dump()}


@dataclass
class PhysicsInputJson:
    source: Source
    kind: str
    weight: float
    reflect: bool

    @classmethod
    def _load(cls, data: Any, where: str) -> PhysicsInputJson:
        return cls(
            source=Source._load(_field(data, "Source", where), f"{where}.Source"),
            kind=_str(data, "Type", where),
            weight=_float(data, "Weight", where),
            reflect=_bool(data, "Reflect", where),
        )

    def _dump(self) -> dict:
        return {
            "Source": self.source._dump(),
            "Type": self.kind,
            "Weight": self.weight,
            "Reflect": self.reflect,
        }


@dataclass
class PhysicsOutputJson:
    destination: Source
    vertex_index: int
    scale: float
    weight: float
    kind: str
    reflect: bool

    @classmethod
    def _load(cls, data: Any, where: str) -> PhysicsOutputJson:
        return cls(
            destination=Source._load(
                _field(data, "Destination", where), f"{where}.Destination"
            ),
            vertex_index=_i32(data, "VertexIndex", where),
            scale=_float(data, "Scale", where),
            weight=_float(data, "Weight", where),
            kind=_str(data, "Type", where),
            reflect=_bool(data, "Reflect", where),
        )

    def _dump(self) -> dict:
        return {
            "Destination": self.destination._dump(),
            "VertexIndex": self.vertex_index,
            "Scale": self.scale,
            "Weight": self.weight,
            "Type": self.kind,
            "Reflect": self.reflect,
        }


@dataclass
class PhysicsVertex:
    position: Vector2
    mobility: float
    delay: float
    acceleration: float
    radius: float

    @classmethod
    def _load(cls, data: Any, where: str) -> PhysicsVertex:
        return cls(
            position=Vector2._load(_field(data, "Position", where), f"{where}.Position"),
            mobility=_float(data, "Mobility", where),
            delay=_float(data, "Delay", where),
            acceleration=_float(data, "Acceleration", where),
            radius=_float(data, "Radius", where),
        )

    def _dump(self) -> dict:
        return {
            "Position": self.position._dump(),
            "Mobility": self.mobility,
            "Delay": self.delay,
            "Acceleration": self.acceleration,
            "Radius": self.radius,
        }


@dataclass
class PhysicsSetting:
    id: str
    input: list[PhysicsInputJson]
    output: list[PhysicsOutputJson]
    vertices: list[PhysicsVertex]
    normalization: Normalization

    @classmethod
    def _load(cls, data: Any, where: str) -> PhysicsSetting:
        return cls(
            id=_str(data, "Id", where),
            input=[
                PhysicsInputJson._load(item, f"{where}.Input[{n}]")
                for n, item in enumerate(_list(data, "Input", where))
            ],
            output=[
                PhysicsOutputJson._load(item, f"{where}.Output[{n}]")
                for n, item in enumerate(_list(data, "Output", where))
            ],
            vertices=[
                PhysicsVertex._load(item, f"{where}.Vertices[{n}]")
                for n, item in enumerate(_list(data, "Vertices", where))
            ],
            normalization=Normalization._load(
                _field(data, "Normalization", where), f"{where}.Normalization"
            ),
        )

    def _dump(self) -> dict:
        return {
            "Id": self.id,
            "Input": [item._dump() for item in self.input],
            "Output": [item._dump() for item in self.output],
            "Vertices": [item._dump() for item in self.vertices],
            "Normalization": self.normalization._dump(),
        }


@dataclass
class PhysicsJson:
    """A whole physics settings document."""

    version: int
    meta: PhysicsMeta
    settings: list[PhysicsSetting]

    @classmethod
    def from_dict(cls, data: Any) -> PhysicsJson:
        """Build the document from already decoded JSON data."""
        where = "$"
        return cls(
            version=_uint(data, "Version", where),
            meta=PhysicsMeta._load(_field(data, "Meta", where), f"{where}.Meta"),
            settings=[
                PhysicsSetting._load(item, f"{where}.PhysicsSettings[{n}]")
                for n, item in enumerate(_list(data, "PhysicsSettings", where))
            ],
        )

    @classmethod
    def from_str(cls, text: str) -> PhysicsJson:
        """Parse the document from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PhysicsJsonError(f"Failed to parse JSON: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_path(cls, base_dir: str | Path, path: str | Path) -> PhysicsJson:
        """Read and parse the document at ``base_dir / path``."""
        full_path = Path(base_dir) / path
        try:
            text = full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PhysicsJsonError(f"Failed to read file {str(full_path)!r}: {exc}") from exc
        try:
            return cls.from_str(text)
        except PhysicsJsonError as exc:
            raise PhysicsJsonError(f"Failed to parse JSON ({str(full_path)!r}): {exc}") from exc

    def to_dict(self) -> dict:
        """Return the document as JSON-ready data with the file's key names."""
        return {
            "Version": self.version,
            "Meta": self.meta._dump(),
            "PhysicsSettings": [setting._dump() for setting in self.settings],
        }