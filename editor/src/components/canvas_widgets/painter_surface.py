"""DrawingSurface backed by a QPainter."""

from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import QPainter, QPen, QBrush, QColor

from services.circuit_renderer import DrawingSurface
from constants import COLOR_LABEL


def parse_color(value):
	"""Convert '#RRGGBBAA' / '#RRGGBB' / named color to QColor."""
	if isinstance(value, QColor):
		return value
	if value.startswith('#') and len(value) == 9:
		r, g, b, a = (int(value[i:i + 2], 16) for i in (1, 3, 5, 7))
		return QColor(r, g, b, a)
	return QColor(value)


class QPainterSurface(DrawingSurface):
	"""Adapts the renderer's drawing calls to an active QPainter."""

	def __init__(self, painter):
		self.painter = painter
		self.painter.setRenderHint(QPainter.Antialiasing)

	def clear(self, width, height, color):
		self.painter.fillRect(QRectF(0, 0, width, height), parse_color(color))

	def set_stroke(self, color, width=1, dashed=False):
		pen = QPen(parse_color(color))
		pen.setWidthF(float(width))
		pen.setStyle(Qt.DashLine if dashed else Qt.SolidLine)
		self.painter.setPen(pen)

	def set_fill(self, color):
		self.painter.setBrush(QBrush(parse_color(color)))

	def draw_line(self, x1, y1, x2, y2):
		self.painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

	def draw_circle(self, cx, cy, radius):
		self.painter.save()
		self.painter.setPen(Qt.NoPen)
		self.painter.drawEllipse(QPointF(cx, cy), float(radius), float(radius))
		self.painter.restore()

	def draw_rect(self, x, y, width, height):
		self.painter.save()
		self.painter.setPen(Qt.NoPen)
		self.painter.drawRect(QRectF(x, y, width, height))
		self.painter.restore()

	def draw_text(self, x, y, text):
		self.painter.save()
		self.painter.setPen(QPen(parse_color(COLOR_LABEL)))
		self.painter.drawText(QPointF(x, y), str(text))
		self.painter.restore()
