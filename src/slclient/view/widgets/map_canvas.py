"""
Map Canvas
Paints render frames of the auto-map onto a QGraphicsScene.
"""
from __future__ import annotations

import logging
from typing import Callable
from PySide6.QtCore import Qt, QPointF, QRectF, Signal
from PySide6.QtGui import QBrush, QColor, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView, QWidget

from slclient.config import CELL_SIZE, TOTAL_CELL_SIZE
from slclient.model.engine import RenderFrame

logger = logging.getLogger(__name__)

# Colors
CELL_FILL = QColor("lightgray")
CELL_STROKE = QColor("gray")
LINE_COLOR = QColor("black")
PLAYER_FILL = QColor("red")
PLAYER_STROKE = QColor("darkred")
UP_MARKER = QColor("limegreen")
DOWN_MARKER = QColor("dodgerblue")


class MapCanvas(QGraphicsView):
    """
    Draws what the engine reports as visible; the map window feeds it.

    Emits the usable grid size whenever the widget is resized, and the
    pointer position (in canvas pixels) on double click.
    """
    grid_resized = Signal(int, int)  # (cells wide, cells high)
    cell_double_clicked = Signal(float, float)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)

        self.setRenderHint(QPainter.Antialiasing)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setMinimumSize(TOTAL_CELL_SIZE * 5, TOTAL_CELL_SIZE * 5)

        self._line_pen = QPen(LINE_COLOR, 2)
        self._cell_pen = QPen(CELL_STROKE, 1)
        self._player_pen = QPen(PLAYER_STROKE, 1)

    # --- GRID SIZE ---

    def grid_size(self) -> tuple[int, int]:
        viewport = self.viewport()
        return viewport.width() // TOTAL_CELL_SIZE, viewport.height() // TOTAL_CELL_SIZE

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        width, height = self.grid_size()
        self.grid_resized.emit(width, height)

    def mouseDoubleClickEvent(self, event) -> None:
        pos = event.position()
        self.cell_double_clicked.emit(pos.x(), pos.y())
        event.accept()

    # --- DRAWING ---

    def draw_frame(self, frame: RenderFrame) -> None:
        self._scene.clear()
        self._scene.setSceneRect(
            QRectF(0, 0, frame.width * TOTAL_CELL_SIZE, frame.height * TOTAL_CELL_SIZE)
        )

        half = CELL_SIZE / 2.0
        for line in frame.lines:
            (x1, y1), (x2, y2) = line.start, line.end
            self._scene.addLine(
                x1 * TOTAL_CELL_SIZE + half, y1 * TOTAL_CELL_SIZE + half,
                x2 * TOTAL_CELL_SIZE + half, y2 * TOTAL_CELL_SIZE + half,
                self._line_pen,
            )

        for node in frame.nodes:
            left = node.local_x * TOTAL_CELL_SIZE
            top = node.local_y * TOTAL_CELL_SIZE
            self._scene.addRect(left, top, CELL_SIZE, CELL_SIZE, self._cell_pen, QBrush(CELL_FILL))

            # Stairs: green corner top-left for up, blue corner bottom-right for down
            if node.has_up:
                self._add_triangle(
                    [(left, top), (left + CELL_SIZE, top), (left, top + CELL_SIZE)], UP_MARKER
                )
            if node.has_down:
                self._add_triangle(
                    [(left + CELL_SIZE, top + CELL_SIZE), (left, top + CELL_SIZE), (left + CELL_SIZE, top)],
                    DOWN_MARKER,
                )

        px, py = frame.player
        self._scene.addRect(
            px * TOTAL_CELL_SIZE, py * TOTAL_CELL_SIZE, CELL_SIZE, CELL_SIZE,
            self._player_pen, QBrush(PLAYER_FILL),
        )

    def _add_triangle(self, points: list[tuple[float, float]], color: QColor) -> None:
        polygon = QPolygonF([QPointF(x, y) for x, y in points])
        self._scene.addPolygon(polygon, QPen(Qt.NoPen), QBrush(color))


class CanvasRenderer:
    """
    Engine-side renderer for a MapCanvas. Also reports the map title, which
    the map window shows in its title bar.
    """
    def __init__(self, canvas: MapCanvas, title_changed: Callable[[str], None] | None = None) -> None:
        self.canvas = canvas
        self.title_changed = title_changed

    def render(self, frame: RenderFrame) -> None:
        self.canvas.draw_frame(frame)
        if self.title_changed is not None:
            self.title_changed(frame.title)
