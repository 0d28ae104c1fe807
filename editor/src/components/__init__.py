"""UI components for Circuit Canvas

- canvas_widgets: mixins and the QPainter drawing surface behind CircuitCanvas
- gui_widgets: toolbar widgets

The interaction controller is Qt-free and can be driven directly in tests.
"""

from .interaction_controller import InteractionController, InteractionMode, PointerButton
from .canvas_widget import CircuitCanvas

__all__ = [
    'InteractionController',
    'InteractionMode',
    'PointerButton',
    'CircuitCanvas',
]
