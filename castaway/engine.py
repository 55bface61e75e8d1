"""
Main game engine - handles the game loop, input, and coordination.

The engine is only a collaborator of the simulation: it turns keyboard state into an
InputIntent once per tick, forwards one-shot commands, and renders snapshots.
"""
import logging
import time

import pygame
from config import (
    WINDOW_WIDTH, WINDOW_HEIGHT, FPS, GAME_TITLE, COLOR_BLACK, WORLD_SIZE,
    DETERMINISTIC_SIM, SIM_TICK_HZ,
)
from castaway.graphics import font_cache
from castaway.graphics.world_renderer import WorldRenderer
from castaway.sim.contracts import InputIntent, SimEvent
from castaway.simulation import SurvivalSimulation
from castaway.ui import HUD

logger = logging.getLogger(__name__)

MOVE_KEYS = {
    "up": (pygame.K_w, pygame.K_UP),
    "down": (pygame.K_s, pygame.K_DOWN),
    "left": (pygame.K_a, pygame.K_LEFT),
    "right": (pygame.K_d, pygame.K_RIGHT),
}


class GameEngine:
    """Main game engine class."""

    def __init__(self, seed=None, world_size: int = WORLD_SIZE, deterministic: bool = DETERMINISTIC_SIM):
        pygame.init()
        pygame.font.init()
        font_cache.reset()

        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False

        # Seed as given by the user (None/garbage -> fresh seed each new game).
        self._seed_arg = seed
        self.world_size = int(world_size)
        self.deterministic = bool(deterministic)

        # Loop timings (diagnostic only; EMA smoothing)
        self._perf_update_ms = 0.0
        self._perf_render_ms = 0.0

        self._pause_overlay = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.SRCALPHA)
        self._pause_overlay.fill((0, 0, 0, 128))

        self.hud = HUD(WINDOW_WIDTH, WINDOW_HEIGHT)
        self.sim = None
        self.renderer = None
        self.new_game()

    def new_game(self):
        """Generate an island and start a fresh simulation on it."""
        self.sim = SurvivalSimulation.new_game(self._seed_arg, self.world_size)
        self.renderer = WorldRenderer(self.sim.world)
        self.hud.messages.clear()
        self.paused = False
        pygame.display.set_caption(f"{GAME_TITLE} - Seed {self.sim.seed}")
        print(f"Island seed: {self.sim.seed}  (reuse with --seed {self.sim.seed})")

    def handle_events(self):
        """Process input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event)

    def handle_keydown(self, event):
        """One-shot commands. Held movement keys are sampled in sample_intent()."""
        sim = self.sim
        if event.key == pygame.K_ESCAPE:
            self.paused = not self.paused

        elif event.key == pygame.K_F3:
            self.hud.toggle_help()

        elif event.key == pygame.K_RETURN:
            if sim.is_over:
                self.new_game()

        elif self.paused or sim.is_over:
            return

        elif event.key == pygame.K_q:
            if not sim.eat():
                self.hud.add_message("Nothing to eat!", (255, 100, 100))

        elif event.key == pygame.K_f:
            if sim.build_fire():
                self.hud.add_message("Campfire lit", (255, 179, 71))
            else:
                self.hud.add_message(f"Need {sim.campfires.cost} wood for a campfire!", (255, 100, 100))

        elif event.key == pygame.K_b:
            if sim.activate_beacon():
                self.hud.add_message("Beacon armed!", (255, 230, 90))
            elif not sim.near_ship:
                self.hud.add_message("The beacon is on the ship.", (200, 200, 200))
            elif sim.beacon_cost_outstanding():
                self.hud.add_message("Not enough supplies for the beacon!", (255, 100, 100))

        elif event.key == pygame.K_r:
            if sim.sleep_at_ship():
                self.hud.add_message("You sleep until morning.", (180, 200, 255))
            else:
                self.hud.add_message("You can only sleep at the ship.", (200, 200, 200))

    def sample_intent(self) -> InputIntent:
        """Read held movement keys once per tick."""
        keys = pygame.key.get_pressed()
        dx = dy = 0
        if any(keys[k] for k in MOVE_KEYS["up"]):
            dy -= 1
        if any(keys[k] for k in MOVE_KEYS["down"]):
            dy += 1
        if any(keys[k] for k in MOVE_KEYS["left"]):
            dx -= 1
        if any(keys[k] for k in MOVE_KEYS["right"]):
            dx += 1
        return InputIntent(dx, dy)

    def update(self, dt: float):
        """Update game state."""
        self.hud.update()
        if self.paused:
            return
        self.sim.update(dt, self.sample_intent())
        for event in self.sim.poll_events():
            self.on_sim_event(event)

    def on_sim_event(self, event: SimEvent):
        if event is SimEvent.DEATH:
            logger.info("Game over (death) on day %d, seed %d", self.sim.clock.day, self.sim.seed)
        elif event is SimEvent.RESCUED:
            logger.info("Game won (rescued) on day %d, seed %d", self.sim.clock.day, self.sim.seed)

    def render(self):
        """Render the game."""
        self.screen.fill(COLOR_BLACK)
        snapshot = self.sim.snapshot()
        self.renderer.render(self.screen, snapshot, now_ms=pygame.time.get_ticks())
        self.hud.render(self.screen, snapshot)

        # Pause overlay
        if self.paused:
            self.screen.blit(self._pause_overlay, (0, 0))
            font = pygame.font.Font(None, 72)
            text = font.render("PAUSED", True, (255, 255, 255))
            text_rect = text.get_rect(center=(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2))
            self.screen.blit(text, text_rect)

        pygame.display.flip()

    def run(self):
        """Main game loop."""
        while self.running:
            if self.deterministic:
                # Keep realtime pacing, but do not use wall-clock delta for simulation.
                self.clock.tick(FPS)
                dt = 1.0 / max(1, int(SIM_TICK_HZ))
            else:
                dt = self.clock.tick(FPS) / 1000.0  # Delta time in seconds; clamped by the sim

            self.handle_events()
            t1 = time.perf_counter()
            self.update(dt)
            t2 = time.perf_counter()
            self.render()
            t3 = time.perf_counter()

            # Perf timings (EMA). Diagnostic only: must not affect simulation state.
            alpha = 0.12
            upd_ms = (t2 - t1) * 1000.0
            rnd_ms = (t3 - t2) * 1000.0
            self._perf_update_ms = upd_ms if self._perf_update_ms <= 0 else (self._perf_update_ms * (1 - alpha) + upd_ms * alpha)
            self._perf_render_ms = rnd_ms if self._perf_render_ms <= 0 else (self._perf_render_ms * (1 - alpha) + rnd_ms * alpha)
            self.hud.perf_text = f"update {self._perf_update_ms:.2f}ms  render {self._perf_render_ms:.2f}ms"

        pygame.quit()
