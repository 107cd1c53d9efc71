import pytest

from trajectory.simulation import ProjectileSimulation


class RecordingSurface:
    """In-memory RenderSurface that records every primitive drawn."""

    def __init__(self, size=(1100, 600)):
        self._size = size
        self.calls = []

    @property
    def size(self):
        return self._size

    def clear(self, color):
        self.calls.append(("clear", color))

    def fill_circle(self, center, radius, color):
        self.calls.append(("circle", center, radius, color))

    def draw_rect(self, rect, fill, border=None, width=1):
        self.calls.append(("rect", rect, fill, border))

    def draw_line(self, start, end, color, width=1):
        self.calls.append(("line", start, end, color))

    def draw_polyline(self, points, color, width=1, dashed=False):
        self.calls.append(("polyline", list(points), color, dashed))

    def draw_text(self, text, pos, color):
        self.calls.append(("text", text, pos))

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def sinks():
    stats, statuses = [], []
    return stats, statuses


@pytest.fixture
def sim(surface, sinks):
    stats, statuses = sinks
    s = ProjectileSimulation()
    s.initialize(surface, stats.append, statuses.append)
    stats.clear()
    statuses.clear()
    return s
