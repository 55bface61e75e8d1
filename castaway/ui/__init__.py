"""
UI package.
"""
from .hud import HUD
