"""
Game systems package.
"""
from .campfires import CampfireSystem
from .heat import HeatModel, HeatReading
from .rescue import RescueSystem
from .resources import PlacementRule, PlacementResult, default_rules, place_resources
from .terrain import synthesize_terrain
