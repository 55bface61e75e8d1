"""
Cached pygame fonts and label surfaces for the HUD.

Hints and control labels repeat every frame; rendering them once per
(size, text, color) keeps the HUD cheap. Vitals and timers change constantly and go
through get_font() directly.
"""

from __future__ import annotations

import pygame

RGB = tuple[int, int, int]

_fonts: dict[int, pygame.font.Font] = {}
_labels: dict[tuple[int, str, RGB], pygame.Surface] = {}
LABEL_CACHE_LIMIT = 256


def get_font(size: int) -> pygame.font.Font:
    """Default font at `size` points. Requires pygame.font.init()."""
    size = int(size)
    if size not in _fonts:
        _fonts[size] = pygame.font.Font(None, size)
    return _fonts[size]


def render_text_cached(size: int, text: str, color: RGB) -> pygame.Surface:
    """Antialiased label surface, rendered on first use. Oldest entries are evicted first."""
    rgb = (int(color[0]), int(color[1]), int(color[2]))
    key = (int(size), str(text), rgb)
    label = _labels.get(key)
    if label is not None:
        return label
    while len(_labels) >= LABEL_CACHE_LIMIT:
        del _labels[next(iter(_labels))]
    label = get_font(size).render(text, True, rgb)
    _labels[key] = label
    return label


def reset() -> None:
    """Drop cached fonts and labels; they are invalid after pygame.quit()."""
    _fonts.clear()
    _labels.clear()
