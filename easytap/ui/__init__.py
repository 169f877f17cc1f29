"""UI package."""

from .ruler_input import RulerInput, format_time
from .ruler_widget import RulerWidget

__all__ = ["RulerInput", "format_time", "RulerWidget"]
