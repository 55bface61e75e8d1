"""
Heads-up display for survival information.
"""
import pygame
from config import (
    COLOR_UI_BG, COLOR_UI_BORDER, COLOR_WHITE, COLOR_RED, COLOR_GREEN,
    COLOR_ORANGE, COLOR_YELLOW, RESOURCE_COLORS,
)
from castaway.graphics.font_cache import get_font, render_text_cached
from castaway.sim.contracts import RescuePhase, SurvivalSnapshot

OVERLAY_TEXT = {
    RescuePhase.DEAD: "You succumbed to the cold. Press Enter for a new island.",
    RescuePhase.RESCUED: "Rescued! You signaled long enough to be found.",
}


class HUD:
    """Displays survival information to the player. Read-only over the snapshot."""

    def __init__(self, screen_width: int, screen_height: int):
        self.screen_width = screen_width
        self.screen_height = screen_height

        # HUD dimensions
        self.top_bar_height = 40
        self.panel_width = 240

        # Fonts
        self.font_large = get_font(32)
        self.font_medium = get_font(24)
        self.font_small = get_font(18)
        self.font_tiny = get_font(16)

        # Help/controls overlay (toggled by engine)
        self.show_help = False
        self._help_panel_cache = None  # pygame.Surface built once (avoid per-frame allocations)
        self._help_hint_cache = self.font_small.render("F3: Help", True, (180, 180, 180))
        self._overlay = pygame.Surface((screen_width, screen_height), pygame.SRCALPHA)
        self._overlay.fill((0, 0, 0, 150))

        # Loop timings shown under the help panel (set by the engine)
        self.perf_text = ""

        # Messages
        self.messages = []
        self.message_duration = 3000  # ms

    def add_message(self, text: str, color: tuple = COLOR_WHITE):
        """Add a message to display."""
        self.messages.append({
            "text": text,
            "color": color,
            "time": pygame.time.get_ticks()
        })
        # Keep only last 5 messages
        if len(self.messages) > 5:
            self.messages.pop(0)

    def update(self):
        """Update HUD state."""
        current_time = pygame.time.get_ticks()
        # Remove old messages
        self.messages = [
            m for m in self.messages
            if current_time - m["time"] < self.message_duration
        ]

    def toggle_help(self):
        """Toggle help/controls visibility."""
        self.show_help = not self.show_help

    def render(self, surface: pygame.Surface, snapshot: SurvivalSnapshot):
        """Render the HUD."""
        # Top bar background
        pygame.draw.rect(surface, COLOR_UI_BG, (0, 0, self.screen_width, self.top_bar_height))
        pygame.draw.line(
            surface,
            COLOR_UI_BORDER,
            (0, self.top_bar_height),
            (self.screen_width, self.top_bar_height),
            2
        )

        # Vitals
        x = 16
        for label, value, color in (
            ("Health", snapshot.health, COLOR_RED),
            ("Warmth", snapshot.warmth, COLOR_ORANGE),
            ("Energy", snapshot.energy, COLOR_GREEN),
        ):
            self._render_bar(surface, x, 8, label, value, color)
            x += 170

        # Inventory
        for kind, count in snapshot.inventory.items():
            text = self.font_medium.render(f"{kind.title()}: {count}", True, RESOURCE_COLORS.get(kind, COLOR_WHITE))
            surface.blit(text, (x, 10))
            x += text.get_width() + 16

        # Seed + day (top right)
        night = "  (night)" if snapshot.is_night else ""
        seed_text = self.font_small.render(f"Seed {snapshot.seed}  Day {snapshot.day}{night}", True, (210, 210, 210))
        surface.blit(seed_text, (self.screen_width - seed_text.get_width() - 90, 12))

        # Help/controls overlay (toggle via F3)
        if self.show_help:
            self._render_help(surface, origin=(self.screen_width - 310, self.top_bar_height + 5))
        else:
            hint = self._help_hint_cache
            surface.blit(hint, (self.screen_width - hint.get_width() - 12, 12))

        self.render_hints(surface, snapshot)
        self.render_beacon(surface, snapshot)
        self.render_messages(surface)

        if snapshot.phase.is_terminal:
            self.render_overlay(surface, snapshot.phase)

    def _render_bar(self, surface, x: int, y: int, label: str, value: float, color: tuple):
        bar_w, bar_h = 150, 8
        text = self.font_tiny.render(f"{label} {round(value)}", True, COLOR_WHITE)
        surface.blit(text, (x, y))
        pygame.draw.rect(surface, (60, 60, 60), (x, y + 14, bar_w, bar_h))
        pygame.draw.rect(surface, color, (x, y + 14, bar_w * max(0.0, min(1.0, value / 100.0)), bar_h))

    def render_hints(self, surface: pygame.Surface, snapshot: SurvivalSnapshot):
        """Hint list, bottom left (latest last)."""
        y = self.screen_height - 12 - 18 * len(snapshot.hints)
        for hint in snapshot.hints:
            surface.blit(render_text_cached(18, hint, (220, 220, 255)), (12, y))
            y += 18

    def render_beacon(self, surface: pygame.Surface, snapshot: SurvivalSnapshot):
        """Outstanding beacon materials, or the rescue countdown once lit."""
        x = self.screen_width - self.panel_width - 10
        y = self.top_bar_height + 10
        if snapshot.rescue_time_remaining is not None:
            text = self.font_medium.render(
                f"Rescue in {snapshot.rescue_time_remaining:.0f}s", True, COLOR_YELLOW
            )
            surface.blit(text, (x, y))
            return

        outstanding = snapshot.beacon_cost_outstanding
        if outstanding is None:
            return
        if not outstanding:
            line = "Beacon ready - return to the ship" if not snapshot.near_ship else "Beacon ready - press B"
            surface.blit(self.font_small.render(line, True, COLOR_YELLOW), (x, y))
            return
        left = snapshot.supplies_left
        parts = ", ".join(f"{n} {kind} ({left.get(kind, 0)} on island)" for kind, n in outstanding.items())
        surface.blit(self.font_small.render(f"Beacon needs: {parts}", True, (200, 200, 200)), (x, y))

    def _render_help(self, surface: pygame.Surface, origin: tuple[int, int]):
        """Render a compact controls/help panel."""
        x0, y0 = origin
        if self._help_panel_cache is None:
            pad = 10
            w = 300
            lines = [
                ("Controls (F3 to hide)", COLOR_YELLOW),
                ("WASD / Arrows  move (stand still to rest)", COLOR_WHITE),
                ("Walk over supplies to gather them", COLOR_WHITE),
                ("Q eat   F build campfire", COLOR_WHITE),
                ("B arm beacon (at ship)", COLOR_WHITE),
                ("R sleep until morning (at ship)", COLOR_WHITE),
                ("ESC pause   Enter new island (after game over)", COLOR_WHITE),
            ]

            # Background box sized by content
            h = pad * 2 + len(lines) * 16 + 6
            panel = pygame.Surface((w, h), pygame.SRCALPHA)
            panel.fill((*COLOR_UI_BG, 235))
            pygame.draw.rect(panel, COLOR_UI_BORDER, (0, 0, w, h), 2)

            y = pad
            for text, color in lines:
                t = self.font_tiny.render(text, True, color)
                panel.blit(t, (pad, y))
                y += 16

            self._help_panel_cache = panel

        surface.blit(self._help_panel_cache, (x0, y0))
        if self.perf_text:
            perf = self.font_tiny.render(self.perf_text, True, (180, 180, 180))
            surface.blit(perf, (x0 + 10, y0 + self._help_panel_cache.get_height() + 4))

    def render_messages(self, surface: pygame.Surface):
        """Render floating messages."""
        y_offset = self.top_bar_height + 10
        for msg in self.messages:
            text = self.font_small.render(msg["text"], True, msg["color"])
            surface.blit(text, (10, y_offset))
            y_offset += 18

    def render_overlay(self, surface: pygame.Surface, phase: RescuePhase):
        """Terminal overlay (death / rescue)."""
        surface.blit(self._overlay, (0, 0))
        text = self.font_large.render(OVERLAY_TEXT[phase], True, COLOR_WHITE)
        rect = text.get_rect(center=(self.screen_width // 2, self.screen_height // 2))
        surface.blit(text, rect)
