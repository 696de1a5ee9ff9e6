"""
DepGraph App - PyQt6 front end for exploring resource dependency graphs.
"""
