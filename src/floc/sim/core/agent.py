from __future__ import annotations

from dataclasses import dataclass, field

from pygame.math import Vector2

from .rng import DeterministicRng
from ..utils.math2d import _clamp_length


@dataclass(slots=True)
class Agent:
    id: int
    position: Vector2
    velocity: Vector2
    rotation: float = 0.0
    target: Vector2 = field(default_factory=Vector2)

    def copy(self) -> "Agent":
        return Agent(
            id=self.id,
            position=Vector2(self.position),
            velocity=Vector2(self.velocity),
            rotation=self.rotation,
            target=Vector2(self.target),
        )

    def wrap(self, width: float, height: float) -> None:
        """Re-enter from the opposite edge of a ``width`` x ``height`` viewport centered on the origin.

        Edges are tested left, right, bottom, top and only the first match is
        corrected, so an agent outside on both axes needs a second call to be
        fully back inside.
        """
        half_w = width / 2.0
        half_h = height / 2.0
        if self.position.x < -half_w:
            self.position.x = half_w
        elif self.position.x > half_w:
            self.position.x = -half_w
        elif self.position.y < -half_h:
            self.position.y = half_h
        elif self.position.y > half_h:
            self.position.y = -half_h


def spawn_agent(agent_id: int, rng: DeterministicRng, max_velocity: float, extent: float = 400.0) -> Agent:
    position = Vector2(rng.next_range(-extent, extent), rng.next_range(-extent, extent))
    velocity = Vector2(
        rng.next_range(-max_velocity, max_velocity),
        rng.next_range(-max_velocity, max_velocity),
    )
    return Agent(id=agent_id, position=position, velocity=_clamp_length(velocity, max_velocity))
