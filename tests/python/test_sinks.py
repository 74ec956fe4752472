from __future__ import annotations

import csv

from pygame.math import Vector2

from floc.render.sinks import CsvTraceSink, RecordingSink, SinkRegistry
from floc.sim.core.agent import Agent
from floc.sim.core.manager import SteeringManager


def _manager() -> SteeringManager:
    manager = SteeringManager()
    manager.add_agent(Agent(id=0, position=Vector2(0.0, 0.0), velocity=Vector2(1.0, 0.0)))
    manager.add_agent(Agent(id=1, position=Vector2(200.0, 0.0), velocity=Vector2(0.0, -1.0)))
    return manager


def test_registry_forwards_frames_to_bound_sinks():
    manager = _manager()
    registry = SinkRegistry()
    sink = RecordingSink()
    registry.bind(0, sink)

    assert 0 in registry and 1 not in registry
    assert len(registry) == 1
    assert sink.last is None

    for _ in range(3):
        assert registry.push(manager.update(800.0, 600.0)) == 1

    assert sink.history == [(1.0, 0.0, 0.0), (2.0, 0.0, 0.0), (3.0, 0.0, 0.0)]
    assert sink.last == (3.0, 0.0, 0.0)


def test_sinks_do_not_alias_simulation_state():
    manager = _manager()
    registry = SinkRegistry()
    positions = []

    class Grabber:
        def set_transform(self, position, rotation):
            positions.append(position)
            position.x = -999.0

    registry.bind(1, Grabber())
    registry.push(manager.update(800.0, 600.0))

    assert manager.agents[1].position == Vector2(200.0, -1.0)
    assert len(positions) == 1


def test_csv_trace_writes_one_row_per_agent_per_frame(tmp_path):
    manager = _manager()
    with CsvTraceSink.open(tmp_path / "trace.csv") as trace:
        trace.write_frame(manager.update(800.0, 600.0))
        trace.write_frame(manager.update(800.0, 600.0))

    with (tmp_path / "trace.csv").open(newline="") as stream:
        rows = list(csv.reader(stream))
    assert rows[0] == CsvTraceSink.HEADER
    assert len(rows) == 5
    assert rows[1] == ["1", "0", "1.0000", "0.0000", "0.0000"]
    assert rows[4] == ["2", "1", "200.0000", "-2.0000", "0.0000"]


def test_csv_trace_closes_only_files_it_opened(tmp_path):
    trace = CsvTraceSink.open(tmp_path / "owned.csv")
    trace.close()
    trace.close()
    assert (tmp_path / "owned.csv").read_text().splitlines() == [",".join(CsvTraceSink.HEADER)]

    with (tmp_path / "borrowed.csv").open("w", newline="") as handle:
        with CsvTraceSink(handle) as borrowed:
            borrowed.write_frame(_manager().update(800.0, 600.0))
        assert not handle.closed
