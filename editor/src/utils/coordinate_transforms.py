"""Coordinate transformation utilities for canvas rendering.

Provides conversion between the two coordinate systems:
- World space (unbounded, circuit element positions)
- Screen pixels (top-left origin, Y-down, canvas-sized)

Convention:
	screen = (world - offset) * scale + canvas_size / 2
	world  = (screen - canvas_size / 2) / scale + offset

so offset is the world point shown at the canvas center.
"""

from models.transform import Vec2, Viewport


def world_to_screen_coords(wx, wy, scale, offset_x, offset_y, width, height):
	"""Map a world position to screen pixels.

	Args:
		wx, wy: World coordinates
		scale: Viewport scale (pixels per world unit)
		offset_x, offset_y: World point at the canvas center
		width, height: Canvas size in pixels

	Returns:
		(sx, sy): Screen pixel coordinates
	"""
	sx = (wx - offset_x) * scale + width / 2
	sy = (wy - offset_y) * scale + height / 2
	return sx, sy


def screen_to_world_coords(sx, sy, scale, offset_x, offset_y, width, height):
	"""Map screen pixels back to world coordinates (inverse of world_to_screen_coords).

	Args:
		sx, sy: Screen pixel coordinates
		scale: Viewport scale (pixels per world unit)
		offset_x, offset_y: World point at the canvas center
		width, height: Canvas size in pixels

	Returns:
		(wx, wy): World coordinates
	"""
	wx = (sx - width / 2) / scale + offset_x
	wy = (sy - height / 2) / scale + offset_y
	return wx, wy


class ViewportTransform:
	"""Bidirectional world <-> screen mapping for one canvas.

	Reads the viewport's scale/offset on every call and never mutates
	them. Only resize() changes state here, and only the screen extent.
	"""

	def __init__(self, viewport: Viewport, width, height):
		self.viewport = viewport
		self.width = width
		self.height = height

	def resize(self, width, height):
		"""Update canvas pixel size (world content is unaffected)."""
		self.width = width
		self.height = height

	@property
	def center(self):
		"""Screen-space center of the canvas."""
		return Vec2(self.width / 2, self.height / 2)

	def world_to_screen(self, wx, wy) -> Vec2:
		vp = self.viewport
		return Vec2(*world_to_screen_coords(wx, wy, vp.scale, vp.offset.x, vp.offset.y, self.width, self.height))

	def screen_to_world(self, sx, sy) -> Vec2:
		vp = self.viewport
		return Vec2(*screen_to_world_coords(sx, sy, vp.scale, vp.offset.x, vp.offset.y, self.width, self.height))

	def world_length_to_screen(self, length):
		return length * self.viewport.scale

	def screen_length_to_world(self, length):
		return length / self.viewport.scale

	def visible_world_rect(self):
		"""World-space (left, top, right, bottom) currently on screen."""
		top_left = self.screen_to_world(0, 0)
		bottom_right = self.screen_to_world(self.width, self.height)
		return top_left.x, top_left.y, bottom_right.x, bottom_right.y
