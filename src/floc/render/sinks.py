from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Protocol, TextIO, Tuple

from pygame.math import Vector2

from ..sim.types.snapshot import Frame


class RenderSink(Protocol):
    def set_transform(self, position: Vector2, rotation: float) -> None: ...


class SinkRegistry:
    """Maps agent ids to display handles and forwards each frame to them.

    Agents without a bound sink are skipped; the simulation never reads back
    from a sink.
    """

    def __init__(self) -> None:
        self._sinks: Dict[int, RenderSink] = {}

    def __len__(self) -> int:
        return len(self._sinks)

    def __contains__(self, agent_id: int) -> bool:
        return agent_id in self._sinks

    def bind(self, agent_id: int, sink: RenderSink) -> None:
        self._sinks[agent_id] = sink

    def push(self, frame: Frame) -> int:
        pushed = 0
        for transform in frame.transforms:
            sink = self._sinks.get(transform.id)
            if sink is None:
                continue
            sink.set_transform(Vector2(transform.x, transform.y), transform.rotation)
            pushed += 1
        return pushed


class RecordingSink:
    def __init__(self) -> None:
        self.history: List[Tuple[float, float, float]] = []

    def set_transform(self, position: Vector2, rotation: float) -> None:
        self.history.append((position.x, position.y, rotation))

    @property
    def last(self) -> Tuple[float, float, float] | None:
        return self.history[-1] if self.history else None


class CsvTraceSink:
    """Writes every frame of every agent as ``tick,id,x,y,rotation`` rows."""

    HEADER = ["tick", "id", "x", "y", "rotation"]

    def __init__(self, handle: TextIO, owns_handle: bool = False) -> None:
        self._handle = handle
        self._owns_handle = owns_handle
        self._writer = csv.writer(handle)
        self._writer.writerow(self.HEADER)

    @classmethod
    def open(cls, path: Path) -> "CsvTraceSink":
        return cls(Path(path).open("w", newline=""), owns_handle=True)

    def __enter__(self) -> "CsvTraceSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_handle and not self._handle.closed:
            self._handle.close()

    def write_frame(self, frame: Frame) -> None:
        for transform in frame.transforms:
            self._writer.writerow(
                [frame.tick, transform.id, f"{transform.x:.4f}", f"{transform.y:.4f}", f"{transform.rotation:.4f}"]
            )
