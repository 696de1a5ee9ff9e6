"""
Base ViewModel class for DepGraph.

ViewModels hold the state behind one view, expose commands as methods
and announce changes through pyqtSignals. They never reference widgets,
so they can be driven from tests without a display.
"""

from typing import Optional, Any
from PyQt6.QtCore import QObject, pyqtSignal


class BaseViewModel(QObject):
    """Base class for DepGraph ViewModels."""

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

    def _update(self, attr: str, value: Any, signal: pyqtSignal, *args: Any) -> bool:
        """
        Store ``value`` in ``attr`` and emit ``signal`` if it changed.

        Args:
            attr: Name of the private attribute holding the state
            value: New value
            signal: Change signal to emit
            *args: Signal arguments

        Returns:
            True if the value changed
        """
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        signal.emit(*args)
        return True
