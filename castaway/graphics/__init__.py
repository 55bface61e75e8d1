"""
Rendering helpers (pygame). Nothing in here mutates simulation state.
"""
