import sys
from pathlib import Path

import pytest

# Ensure src/ is on PYTHONPATH so `import slclient` works without installing
_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from slclient.model.engine import RenderFrame, SpatialGraph  # noqa: E402


class RecordingRenderer:
    """Keeps every frame the engine hands over."""

    def __init__(self):
        self.frames: list[RenderFrame] = []

    def render(self, frame: RenderFrame) -> None:
        self.frames.append(frame)

    @property
    def last(self) -> RenderFrame:
        return self.frames[-1]


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def graph(renderer):
    # 11 x 9 cells: window center is (5, 4)
    return SpatialGraph(renderer=renderer, width=11, height=9)


@pytest.fixture
def maps_dir(tmp_path):
    p = tmp_path / "Maps"
    p.mkdir()
    return p
