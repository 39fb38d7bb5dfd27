"""Orbit, pan and zoom camera model for the map tile viewer."""

from __future__ import annotations

import math
from dataclasses import dataclass

PAN_SPEED = 0.01
ZOOM_SPEED = 1.7
MIN_DISTANCE = 1.0
MAX_DISTANCE = 20.0
FIELD_OF_VIEW = 45.0


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the range [low, high]; the upper bound wins on conflict."""
    result = low if value < low else value
    return high if result > high else result


@dataclass(frozen=True)
class Vector3:
    """Immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; a zero vector is returned unchanged."""
        length = self.length()
        if length == 0:
            return self
        return self.scaled(1.0 / length)

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def scaled(self, factor: float) -> Vector3:
        return Vector3(self.x * factor, self.y * factor, self.z * factor)


@dataclass
class MapCamera:
    """Perspective camera looking at a target on the map plane."""

    position: Vector3
    target: Vector3 = Vector3()
    up: Vector3 = Vector3(0.0, 1.0, 0.0)
    fovy: float = FIELD_OF_VIEW
    is_orbiting: bool = False
    is_panning: bool = False

    def direction(self) -> Vector3:
        """Unit vector from the camera position towards its target."""
        return (self.target - self.position).normalized()

    def distance(self) -> float:
        return (self.target - self.position).length()

    def zoom(self, wheel_move: float) -> float:
        """Move along the view direction by a wheel amount; return the new distance."""
        offset = self.target - self.position
        direction = offset.normalized()
        distance = offset.length()
        speed = ZOOM_SPEED * clamp(distance / MAX_DISTANCE, 0.1, 1.0)
        new_distance = clamp(distance - wheel_move * speed, MIN_DISTANCE, MAX_DISTANCE)
        self.position = self.target + (-direction).scaled(new_distance)
        return new_distance

    def pan(self, delta_x: float, delta_y: float) -> None:
        """Slide camera and target together across the ground plane by a mouse delta."""
        direction = self.direction()
        right = self.up.cross(direction)
        forward = self.up.cross(right)
        movement = right.scaled(delta_x) + forward.scaled(-delta_y)
        step = movement.scaled(PAN_SPEED)
        self.target = self.target + step
        self.position = self.position + step

    def set_input(self, orbiting: bool, panning: bool) -> None:
        """Record whether the orbit and pan buttons are held."""
        self.is_orbiting = bool(orbiting)
        self.is_panning = bool(panning)

    def cursor_hidden(self) -> bool:
        return self.is_orbiting or self.is_panning


def new_camera() -> MapCamera:
    """Camera in its starting pose above and behind the origin."""
    direction = Vector3(0.0, 1.0, 1.0).normalized()
    half_distance = (MIN_DISTANCE + MAX_DISTANCE) / 2.0
    position = direction + direction.scaled(half_distance)
    return MapCamera(position=position, target=Vector3(0.0, 0.0, 0.0))