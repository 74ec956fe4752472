from __future__ import annotations

from typing import Sequence

from ..core.agent import Agent
from ..types.metrics import FrameMetrics


def compute_frame_metrics(
    tick: int,
    agents: Sequence[Agent],
    steer_total: float,
    tick_duration_ms: float,
) -> FrameMetrics:
    population = len(agents)
    if population == 0:
        return FrameMetrics(tick, 0, 0.0, 0.0, 0.0, tick_duration_ms)
    speeds = [agent.velocity.length() for agent in agents]
    return FrameMetrics(
        tick=tick,
        population=population,
        average_speed=sum(speeds) / population,
        max_speed=max(speeds),
        average_steer=steer_total / population,
        tick_duration_ms=tick_duration_ms,
    )
