from __future__ import annotations

from typing import Sequence

from pygame.math import Vector2

from ..core.agent import Agent
from ..core.config import SteeringConfig
from ..utils.math2d import _clamp_length, _steer_towards


def _neighbors(agent: Agent, snapshot: Sequence[Agent], radius: float) -> list[Agent]:
    radius_sq = radius * radius
    pos_x = agent.position.x
    pos_y = agent.position.y
    found = []
    for other in snapshot:
        if other.id == agent.id:
            continue
        dx = other.position.x - pos_x
        dy = other.position.y - pos_y
        if dx * dx + dy * dy < radius_sq:
            found.append(other)
    return found


def separation(agent: Agent, snapshot: Sequence[Agent], config: SteeringConfig) -> Vector2:
    away = Vector2()
    for other in _neighbors(agent, snapshot, config.separation_radius):
        away += agent.position - other.position
    return _steer_towards(away, agent.velocity, config.max_velocity)


def alignment(agent: Agent, snapshot: Sequence[Agent], config: SteeringConfig) -> Vector2:
    # raw velocity sum, so faster neighbors pull harder on the heading
    heading = Vector2()
    for other in _neighbors(agent, snapshot, config.alignment_radius):
        heading += other.velocity
    return _steer_towards(heading, agent.velocity, config.max_velocity)


def cohesion(agent: Agent, snapshot: Sequence[Agent], config: SteeringConfig) -> Vector2:
    neighbors = _neighbors(agent, snapshot, config.cohesion_radius)
    if not neighbors:
        return Vector2()
    centroid = Vector2()
    for other in neighbors:
        centroid += other.position
    centroid /= len(neighbors)
    return _steer_towards(centroid - agent.position, agent.velocity, config.max_velocity)


def seek(agent: Agent, config: SteeringConfig) -> Vector2:
    return _steer_towards(agent.target - agent.position, agent.velocity, config.max_velocity)


def compute_steering(agent: Agent, snapshot: Sequence[Agent], config: SteeringConfig) -> Vector2:
    """Weighted sum of the flocking rules for ``agent``, truncated to ``max_force``.

    ``snapshot`` is the frame-start copy of the whole population; the acting
    agent may appear in it and is skipped by id.
    """
    steer = separation(agent, snapshot, config) * config.separation_weight
    steer += alignment(agent, snapshot, config) * config.alignment_weight
    steer += cohesion(agent, snapshot, config) * config.cohesion_weight
    if config.seek_enabled:
        steer += seek(agent, config) * config.seek_weight
    return _clamp_length(steer, config.max_force)
