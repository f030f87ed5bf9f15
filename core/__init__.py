"""Core application components.

``core.application`` needs a GL context, import it directly.
"""

from .input_handler import InputHandler

__all__ = ["InputHandler"]
