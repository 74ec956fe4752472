from __future__ import annotations

import math

from pygame.math import Vector2


def _clamp_length(vector: Vector2, max_length: float) -> Vector2:
    if max_length <= 0:
        return Vector2()
    magnitude_sq = vector.length_squared()
    if magnitude_sq <= max_length * max_length:
        return vector
    if magnitude_sq == 0:
        return Vector2()
    return vector.normalize() * max_length


def _steer_towards(direction: Vector2, velocity: Vector2, max_velocity: float) -> Vector2:
    # desired velocity minus current velocity; no direction means no force
    if direction.length_squared() == 0.0:
        return Vector2()
    return direction.normalize() * max_velocity - velocity


def _heading_from_velocity(vector: Vector2) -> float:
    if vector.length_squared() < 1e-12:
        return 0.0
    return math.atan2(vector.y, vector.x)


def _as_vector(point: Vector2 | tuple[float, float]) -> Vector2:
    return Vector2(float(point[0]), float(point[1]))
