"""
Orbit: radial graph editor for the "expertise" section of a portfolio site.

Categories orbit a fixed center node by angle/radius and carry a ring of
tool satellites. See ``orbit.editor.EditorSession`` for the entry point.
"""

__version__ = "0.1.0"
