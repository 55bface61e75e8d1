"""
Game entities package.
"""
from .campfire import Campfire
from .inventory import Inventory
from .player import Player
