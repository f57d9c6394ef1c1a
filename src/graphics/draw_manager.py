"""
draw_manager.py
---------------
Centralized rendering manager for batching and layered draw calls.

Responsibilities:
- Maintain layered draw queue
- Render queued surfaces and shapes in layer order
- Skip world layers while world rendering is disabled (loading screen up)
"""

import pygame

from src.core.debug.debug_logger import DebugLogger
from src.core.runtime.game_settings import Layers


class DrawManager:
    """Handles all rendering operations with layered batching."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, background_color=(50, 50, 100)):
        """Initialize draw manager with empty queues."""
        self.surface_layers = {}  # {layer: [(surface, rect), ...]}
        self.shape_layers = {}    # {layer: [shape_data, ...]}
        self._layer_keys_cache = []
        self._layers_dirty = False

        self.background_color = background_color
        self._bg_cache = None

        # Cleared by the loading screen presenter while the indicator covers the world
        self.world_rendering_enabled = True

        DebugLogger.init_entry("DrawManager")

    # ===========================================================
    # Queue Management
    # ===========================================================

    def clear(self):
        """Clear all draw queues for new frame."""
        for layer_items in self.surface_layers.values():
            layer_items.clear()
        for layer_items in self.shape_layers.values():
            layer_items.clear()

    def queue_draw(self, surface, rect, layer=0):
        """
        Queue a surface for drawing.

        Args:
            surface: pygame.Surface to draw
            rect: Position rectangle
            layer: Render layer (lower = first)
        """
        if surface is None or rect is None:
            DebugLogger.warn(f"Skipped invalid draw call at layer {layer}", category="render")
            return

        if layer not in self.surface_layers:
            self.surface_layers[layer] = []
            self._layers_dirty = True

        self.surface_layers[layer].append((surface, rect))

    def queue_shape(self, shape_type, rect, color, layer=0, **kwargs):
        """
        Queue a primitive shape.

        Args:
            shape_type: "rect", "circle", "ellipse" or "line"
            rect: Position and dimensions
            color: RGB tuple
            layer: Render layer
            **kwargs: Shape-specific params
        """
        if layer not in self.shape_layers:
            self.shape_layers[layer] = []
            self._layers_dirty = True

        self.shape_layers[layer].append((shape_type, rect, color, kwargs))

    def queued_count(self, layer=None) -> int:
        """Number of queued surfaces and shapes, optionally for one layer."""
        if layer is not None:
            return len(self.surface_layers.get(layer, [])) + len(self.shape_layers.get(layer, []))
        surfaces = sum(len(items) for items in self.surface_layers.values())
        shapes = sum(len(items) for items in self.shape_layers.values())
        return surfaces + shapes

    # ===========================================================
    # Rendering
    # ===========================================================

    def is_layer_visible(self, layer) -> bool:
        """World layers are hidden while world rendering is disabled."""
        return self.world_rendering_enabled or layer >= Layers.UI

    def render(self, target_surface):
        """
        Render all queued items to target surface.

        Args:
            target_surface: Main display surface
        """
        if self.world_rendering_enabled:
            self._render_background(target_surface)
        else:
            target_surface.fill((0, 0, 0))

        if self._layers_dirty:
            all_layers = set(self.surface_layers.keys()) | set(self.shape_layers.keys())
            self._layer_keys_cache = sorted(all_layers)
            self._layers_dirty = False

        for layer in self._layer_keys_cache:
            if not self.is_layer_visible(layer):
                continue

            if self.surface_layers.get(layer):
                target_surface.blits(self.surface_layers[layer])

            for shape_type, rect, color, kwargs in self.shape_layers.get(layer, []):
                self._draw_shape(target_surface, shape_type, rect, color, **kwargs)

    def _render_background(self, target_surface):
        """Render flat background."""
        if self._bg_cache is None or self._bg_cache.get_size() != target_surface.get_size():
            self._bg_cache = pygame.Surface(target_surface.get_size())
            self._bg_cache.fill(self.background_color)
        target_surface.blit(self._bg_cache, (0, 0))

    def _draw_shape(self, surface, shape_type, rect, color, **kwargs):
        """Draw primitive shape on surface."""
        width = kwargs.get("width", 0)

        if shape_type == "rect":
            pygame.draw.rect(surface, color, rect, width)
        elif shape_type == "circle":
            pygame.draw.circle(surface, color, rect.center, rect.width // 2, width)
        elif shape_type == "ellipse":
            pygame.draw.ellipse(surface, color, rect, width)
        elif shape_type == "line":
            start = kwargs.get("start_pos")
            end = kwargs.get("end_pos")
            if start and end:
                pygame.draw.line(surface, color, start, end, max(width, 1))
        else:
            DebugLogger.warn(f"Unknown shape type: {shape_type}", category="render")
