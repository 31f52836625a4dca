"""Entry point and render loop."""
from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace

import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, TITLE,
    SceneConfig, ConfigError, load_config, validate_canvas_size,
)
from .core.scene import Scene
from .ui.input import InputHandler, InputAction
from .ui.renderer import Renderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Perspective star field with a swarm of ships')
    parser.add_argument('--config', type=str, default=None, help='JSON scene configuration file')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible run')
    parser.add_argument('--stars', type=int, default=None, help='Number of stars')
    parser.add_argument('--ships', type=int, default=None, help='Number of ships')
    parser.add_argument('--fps', type=int, default=None, help='Frame rate cap')
    parser.add_argument('--placement', choices=['center', 'fan'], default=None, help='Initial ship layout')
    parser.add_argument('--multi-color', action='store_true', help='Give stars random palette colors')
    parser.add_argument('--no-stars', action='store_true', help='Disable the star field')
    parser.add_argument('--no-ships', action='store_true', help='Disable the ship swarm')
    parser.add_argument('--width', type=int, default=None, help='Initial window width')
    parser.add_argument('--height', type=int, default=None, help='Initial window height')
    parser.add_argument('--overlay', action='store_true', help='Start with the debug overlay shown')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='More logging (-vv for debug)')
    return parser


def config_from_args(args: argparse.Namespace) -> SceneConfig:
    """Build the scene configuration from a config file plus CLI overrides.

    Raises:
        ConfigError: If the resulting configuration is invalid
    """
    config = load_config(args.config) if args.config else SceneConfig()

    stars = config.stars
    if args.stars is not None:
        stars = replace(stars, star_count=args.stars)
    if args.multi_color:
        stars = replace(stars, color_mode="multi")
    if args.no_stars:
        stars = replace(stars, enabled=False)

    ships = config.ships
    if args.ships is not None:
        ships = replace(ships, count=args.ships)
    if args.placement is not None:
        ships = replace(ships, placement=args.placement)
    if args.no_ships:
        ships = replace(ships, enabled=False)

    config = replace(config, stars=stars, ships=ships)
    if args.seed is not None:
        config = replace(config, seed=args.seed)
    if args.fps is not None:
        config = replace(config, fps_max=args.fps)
    if args.overlay:
        config = replace(config, show_overlay=True)

    config.validate()
    return config


def run(config: SceneConfig, width: int, height: int) -> None:
    """Open the window and run the render loop until quit."""
    pygame.init()

    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    scene = Scene(config)
    scene.initialize((width, height))
    renderer = Renderer(screen, show_overlay=config.show_overlay)

    input_handler = InputHandler()
    input_handler.register_callback(InputAction.PAUSE, scene.toggle_pause)
    input_handler.register_callback(InputAction.TOGGLE_OVERLAY, renderer.toggle_overlay)
    input_handler.register_callback(InputAction.RESIZE, scene.request_resize)

    running = True
    while running:
        running = input_handler.process_events(pygame.event.get())
        if not running:
            break

        # The display surface changes size immediately; the scene rebuilds
        # once resizing settles
        display = pygame.display.get_surface()
        if display is not renderer.canvas.surface:
            renderer.handle_resize(display)

        # Update scene
        dt = clock.tick(config.fps_max) / 1000.0  # Delta time in seconds
        scene.tick(dt)

        # Render
        renderer.render(scene, clock.get_fps())

        # Flip display
        pygame.display.flip()

    # Cleanup
    pygame.quit()


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    width = args.width if args.width is not None else SCREEN_WIDTH
    height = args.height if args.height is not None else SCREEN_HEIGHT

    try:
        config = config_from_args(args)
        validate_canvas_size(width, height)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(2)

    run(config, width, height)

    sys.exit(0)


if __name__ == "__main__":
    main()
