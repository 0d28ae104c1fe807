"""GUI widgets package - reusable UI components"""

from .canvas_toolbar import CanvasToolbar

__all__ = ['CanvasToolbar']
