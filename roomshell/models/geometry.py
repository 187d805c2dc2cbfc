"""Geometric primitives used throughout the engine.

World convention: Y is up, +Z is North, +X is East.
"""

from __future__ import annotations
import math
from pydantic import BaseModel, ConfigDict


class Vector3(BaseModel):
    """Point or direction in 3D space."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Vector3:
        return cls(x=0.0, y=0.0, z=0.0)

    @classmethod
    def one(cls) -> Vector3:
        return cls(x=1.0, y=1.0, z=1.0)

    @classmethod
    def up(cls) -> Vector3:
        return cls(x=0.0, y=1.0, z=0.0)

    @classmethod
    def from_tuple(cls, values: tuple[float, float, float] | list[float]) -> Vector3:
        return cls(x=values[0], y=values[1], z=values[2])

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(x=self.x * scalar, y=self.y * scalar, z=self.z * scalar)

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(x=self.x / scalar, y=self.y / scalar, z=self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(x=-self.x, y=-self.y, z=-self.z)

    def scaled(self, other: Vector3) -> Vector3:
        """Component-wise product."""
        return Vector3(x=self.x * other.x, y=self.y * other.y, z=self.z * other.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            x=self.y * other.z - self.z * other.y,
            y=self.z * other.x - self.x * other.z,
            z=self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        ln = self.length()
        if ln < 1e-10:
            return Vector3.zero()
        return Vector3(x=self.x / ln, y=self.y / ln, z=self.z / ln)

    def horizontal(self) -> Vector3:
        """Projection onto the floor plane."""
        return Vector3(x=self.x, y=0.0, z=self.z)

    def distance_to(self, other: Vector3) -> float:
        return (self - other).length()

    def lerp(self, other: Vector3, t: float) -> Vector3:
        return Vector3(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
            z=self.z + (other.z - self.z) * t,
        )

    def angle_to(self, other: Vector3) -> float:
        """Undirected angle between two vectors in degrees (0-180)."""
        denom = math.sqrt(
            (self.x * self.x + self.y * self.y + self.z * self.z)
            * (other.x * other.x + other.y * other.y + other.z * other.z)
        )
        if denom < 1e-15:
            return 0.0
        d = max(-1.0, min(1.0, self.dot(other) / denom))
        return math.degrees(math.acos(d))


class Quaternion(BaseModel):
    """Rotation as a unit quaternion."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(x=0.0, y=0.0, z=0.0, w=1.0)

    @classmethod
    def from_yaw(cls, degrees: float) -> Quaternion:
        """Rotation about the up axis."""
        half = math.radians(degrees) * 0.5
        return cls(x=0.0, y=math.sin(half), z=0.0, w=math.cos(half))

    @classmethod
    def look_rotation(cls, forward: Vector3) -> Quaternion:
        """Yaw rotation that turns +Z onto the horizontal part of `forward`."""
        flat = forward.horizontal()
        if flat.length() < 0.001:
            return cls.identity()
        return cls.from_yaw(math.degrees(math.atan2(flat.x, flat.z)))

    def inverse(self) -> Quaternion:
        return Quaternion(x=-self.x, y=-self.y, z=-self.z, w=self.w)

    def rotate(self, v: Vector3) -> Vector3:
        u = Vector3(x=self.x, y=self.y, z=self.z)
        uv = u.cross(v)
        uuv = u.cross(uv)
        return v + uv * (2.0 * self.w) + uuv * 2.0

    def angle_to(self, other: Quaternion) -> float:
        """Angle in degrees between two rotations."""
        d = abs(self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w)
        return math.degrees(2.0 * math.acos(min(d, 1.0)))


class Transform(BaseModel):
    """Local-to-world placement: scale, then rotate, then translate."""
    position: Vector3 = Vector3()
    rotation: Quaternion = Quaternion()
    scale: Vector3 = Vector3(x=1.0, y=1.0, z=1.0)

    def transform_point(self, p: Vector3) -> Vector3:
        return self.rotation.rotate(p.scaled(self.scale)) + self.position

    def inverse_transform_point(self, p: Vector3) -> Vector3:
        local = self.rotation.inverse().rotate(p - self.position)
        return Vector3(
            x=local.x / self.scale.x,
            y=local.y / self.scale.y,
            z=local.z / self.scale.z,
        )

    def transform_direction(self, d: Vector3) -> Vector3:
        """Rotate a direction; scale is ignored."""
        return self.rotation.rotate(d)


class Bounds(BaseModel):
    """Axis-aligned world-space box."""
    center: Vector3
    size: Vector3

    @property
    def min(self) -> Vector3:
        return self.center - self.size * 0.5

    @property
    def max(self) -> Vector3:
        return self.center + self.size * 0.5

    @classmethod
    def from_points(cls, points: list[Vector3]) -> Bounds:
        if not points:
            return cls(center=Vector3.zero(), size=Vector3.zero())
        lo = Vector3(
            x=min(p.x for p in points),
            y=min(p.y for p in points),
            z=min(p.z for p in points),
        )
        hi = Vector3(
            x=max(p.x for p in points),
            y=max(p.y for p in points),
            z=max(p.z for p in points),
        )
        return cls(center=(lo + hi) * 0.5, size=hi - lo)

    def intersects(self, other: Bounds) -> bool:
        """Overlap test; touching faces count as intersecting."""
        a_min, a_max = self.min, self.max
        b_min, b_max = other.min, other.max
        return (
            a_min.x <= b_max.x and a_max.x >= b_min.x
            and a_min.y <= b_max.y and a_max.y >= b_min.y
            and a_min.z <= b_max.z and a_max.z >= b_min.z
        )
