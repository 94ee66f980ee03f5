"""Readers whose value is sampled from a function on every commit."""

from __future__ import annotations

from typing import Any, Callable

from lager.nodes import Connection, ReaderNode


class SensorNode(ReaderNode[Any]):
    """A root node that samples ``sensor()`` whenever it is recomputed."""

    def __init__(self, sensor: Callable[[], Any]) -> None:
        super().__init__(sensor())
        self._sensor = sensor

    def recompute(self) -> None:
        """Sample the sensor function again."""
        self.push_down(self._sensor())


class Sensor:
    """A reader over a function that is sampled when the sensor is committed."""

    def __init__(self, fn: Callable[[], Any]) -> None:
        self._node = SensorNode(fn)

    @property
    def node(self) -> SensorNode:
        return self._node

    def roots(self) -> SensorNode:
        return self._node

    def get(self) -> Any:
        """The value visible since the last commit."""
        return self._node.last

    def watch(self, fn: Callable[[Any, Any], Any]) -> Connection:
        """Call ``fn(old, new)`` whenever a commit changes the value."""
        return self._node.observe(fn)


def make_sensor(fn: Callable[[], Any]) -> Sensor:
    """Create a sensor sampling ``fn``."""
    return Sensor(fn)