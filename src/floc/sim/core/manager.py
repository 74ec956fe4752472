from __future__ import annotations

import logging
from time import perf_counter
from typing import List, Set

from pygame.math import Vector2

from .agent import Agent, spawn_agent
from .config import SimulationConfig, SteeringConfig
from .rng import DeterministicRng
from ..systems import metrics as metrics_system, steering
from ..types.metrics import FrameMetrics
from ..types.snapshot import AgentTransform, Frame
from ..utils.math2d import _as_vector, _clamp_length, _heading_from_velocity

logger = logging.getLogger(__name__)


class DuplicateAgentError(ValueError):
    """Raised when an agent id is registered twice with the same manager."""


class SteeringManager:
    def __init__(self, config: SteeringConfig | None = None):
        self._config = config if config is not None else SteeringConfig()
        self._agents: List[Agent] = []
        self._ids: Set[int] = set()
        self._tick = 0
        self._width = 0.0
        self._height = 0.0
        self._metrics: FrameMetrics | None = None

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "SteeringManager":
        manager = cls(config.steering)
        rng = DeterministicRng(config.seed)
        for agent_id in range(config.population):
            manager.add_agent(spawn_agent(agent_id, rng, config.steering.max_velocity, config.spawn_extent))
        return manager

    @property
    def config(self) -> SteeringConfig:
        return self._config

    @property
    def agents(self) -> List[Agent]:
        return self._agents

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def metrics(self) -> FrameMetrics | None:
        return self._metrics

    def add_agent(self, agent: Agent) -> None:
        if agent.id in self._ids:
            raise DuplicateAgentError(f"agent id {agent.id} is already registered")
        self._ids.add(agent.id)
        self._agents.append(agent)
        logger.debug("registered agent %d at (%.2f, %.2f)", agent.id, agent.position.x, agent.position.y)

    def update_target(self, point: Vector2 | tuple[float, float]) -> None:
        target = _as_vector(point)
        for agent in self._agents:
            agent.target = Vector2(target)
        logger.debug("target set to (%.2f, %.2f) for %d agents", target.x, target.y, len(self._agents))

    def update(self, width: float, height: float) -> Frame:
        start = perf_counter()
        config = self._config
        # every agent steers against the same frame-start copy of the population
        snapshot = [agent.copy() for agent in self._agents]
        steer_total = 0.0
        for agent in self._agents:
            steer = steering.compute_steering(agent, snapshot, config)
            steer_total += steer.length()
            agent.velocity = _clamp_length(agent.velocity + steer, config.max_velocity)
            agent.position += agent.velocity
            agent.wrap(width, height)
            if config.orient_to_velocity:
                agent.rotation = _heading_from_velocity(agent.velocity)
        self._tick += 1
        self._width = width
        self._height = height
        elapsed_ms = (perf_counter() - start) * 1000.0
        self._metrics = metrics_system.compute_frame_metrics(self._tick, self._agents, steer_total, elapsed_ms)
        return self.snapshot()

    def snapshot(self) -> Frame:
        transforms = [
            AgentTransform(id=agent.id, x=agent.position.x, y=agent.position.y, rotation=agent.rotation)
            for agent in self._agents
        ]
        return Frame(tick=self._tick, width=self._width, height=self._height, transforms=transforms)
