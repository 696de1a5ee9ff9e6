"""
Views for DepGraph.

Qt widgets that render ViewModel state and forward user input. The
widget modules are imported directly so that ``presentation`` stays
usable without loading QtGui.
"""
