"""
World renderer: draws the island and everything on it from read-only state.

Reads the World (tiles/resources) and a SurvivalSnapshot; never mutates either.
"""
from __future__ import annotations

import math

import pygame

from config import (
    COLOR_ORANGE, COLOR_PLAYER, COLOR_SHIP_DECK, COLOR_SHIP_HULL, COLOR_YELLOW,
    RESOURCE_COLORS, SHIP_RADIUS,
)
from castaway.graphics.tile_sprites import TileSpriteLibrary
from castaway.sim.contracts import SurvivalSnapshot
from castaway.world import World


class WorldRenderer:
    """Camera-relative drawing of tiles, ship, supplies, fires and the player."""

    def __init__(self, world: World):
        self.world = world
        self._night_overlay = None
        self._night_overlay_size = (0, 0)
        self._glow_cache: dict[int, pygame.Surface] = {}

    def camera_for(self, snapshot: SurvivalSnapshot, view_w: int, view_h: int) -> tuple[int, int]:
        # Pixel art: quantize camera to integer pixels to reduce shimmer.
        return int(snapshot.player_x - view_w / 2), int(snapshot.player_y - view_h / 2)

    def render(self, surface: pygame.Surface, snapshot: SurvivalSnapshot, now_ms: int = 0):
        cam = self.camera_for(snapshot, surface.get_width(), surface.get_height())
        self.render_tiles(surface, cam)
        self.render_ship(surface, cam, snapshot, now_ms)
        self.render_resources(surface, cam)
        self.render_campfires(surface, cam, snapshot)
        self.render_player(surface, cam, snapshot)
        self.render_night(surface, snapshot)

    def render_tiles(self, surface: pygame.Surface, camera_offset: tuple[int, int]):
        """Render only the visible tile range."""
        cam_x, cam_y = camera_offset
        ts = self.world.tile_size
        start_x = max(0, int(cam_x // ts))
        start_y = max(0, int(cam_y // ts))
        end_x = min(self.world.width, int((cam_x + surface.get_width()) // ts) + 1)
        end_y = min(self.world.height, int((cam_y + surface.get_height()) // ts) + 1)

        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                tile_img = TileSpriteLibrary.get(self.world.get_tile(x, y), x, y, size=ts)
                if tile_img is not None:
                    wx, wy = self.world.grid_to_world(x, y)
                    surface.blit(tile_img, (wx - cam_x, wy - cam_y))

    def render_ship(self, surface, camera_offset, snapshot: SurvivalSnapshot, now_ms: int):
        cx, cy = self.world.center
        sx = int(cx - camera_offset[0])
        sy = int(cy - camera_offset[1])

        # Safe zone ring
        pygame.draw.circle(surface, (200, 200, 200), (sx, sy), int(SHIP_RADIUS), 1)
        pygame.draw.rect(surface, COLOR_SHIP_HULL, (sx - 20, sy - 12, 40, 24))
        pygame.draw.rect(surface, COLOR_SHIP_DECK, (sx - 16, sy - 8, 32, 16))

        if snapshot.beacon_armed:
            pulse = 26 + math.sin(now_ms / 200.0) * 6
            pygame.draw.circle(surface, COLOR_YELLOW, (sx, sy), int(pulse), 2)

    def render_resources(self, surface, camera_offset):
        cam_x, cam_y = camera_offset
        w, h = surface.get_width(), surface.get_height()
        ts = self.world.tile_size
        for node in self.world.resources:
            if node.collected:
                continue
            rx, ry = node.world_center(ts)
            sx, sy = int(rx - cam_x), int(ry - cam_y)
            if sx < -ts or sy < -ts or sx > w + ts or sy > h + ts:
                continue
            pygame.draw.circle(surface, RESOURCE_COLORS.get(node.kind.value, (255, 255, 255)), (sx, sy), 8)
            if node.highlight:
                pygame.draw.circle(surface, COLOR_YELLOW, (sx, sy), 12, 1)

    def _glow(self, radius: int) -> pygame.Surface:
        surf = self._glow_cache.get(radius)
        if surf is None:
            surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            for r in range(radius, 0, -4):
                alpha = int(90 * (1 - r / radius))
                pygame.draw.circle(surf, (*COLOR_ORANGE, alpha), (radius, radius), r)
            self._glow_cache[radius] = surf
        return surf

    def render_campfires(self, surface, camera_offset, snapshot: SurvivalSnapshot):
        cam_x, cam_y = camera_offset
        for fire in snapshot.campfires:
            fx, fy = int(fire.x - cam_x), int(fire.y - cam_y)
            if fire.active:
                glow = self._glow(70)
                surface.blit(glow, (fx - 70, fy - 70))
                pygame.draw.circle(surface, (255, 179, 71), (fx, fy), 10)
            else:
                pygame.draw.circle(surface, (68, 68, 68), (fx, fy), 10)

    def render_player(self, surface, camera_offset, snapshot: SurvivalSnapshot):
        px = int(snapshot.player_x - camera_offset[0])
        py = int(snapshot.player_y - camera_offset[1])
        pygame.draw.circle(surface, COLOR_PLAYER, (px, py), 10)
        pygame.draw.circle(surface, (46, 204, 113), (px, py), 10, 2)
        fx, fy = snapshot.facing
        pygame.draw.line(surface, (20, 60, 30), (px, py), (px + int(fx * 10), py + int(fy * 10)), 2)

    def render_night(self, surface: pygame.Surface, snapshot: SurvivalSnapshot):
        """Day/night tint over the whole view."""
        size = surface.get_size()
        if self._night_overlay is None or self._night_overlay_size != size:
            self._night_overlay = pygame.Surface(size, pygame.SRCALPHA)
            self._night_overlay_size = size
        alpha = int(255 * (0.2 + snapshot.night_factor * 0.55))
        self._night_overlay.fill((6, 10, 24, alpha))
        surface.blit(self._night_overlay, (0, 0))
