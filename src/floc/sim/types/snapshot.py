from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True, slots=True)
class AgentTransform:
    id: int
    x: float
    y: float
    rotation: float


@dataclass(slots=True)
class Frame:
    tick: int
    width: float
    height: float
    transforms: List[AgentTransform]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "width": self.width,
            "height": self.height,
            "agents": [
                {"id": t.id, "x": t.x, "y": t.y, "rotation": t.rotation} for t in self.transforms
            ],
        }
