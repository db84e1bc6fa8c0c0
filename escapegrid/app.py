"""The game window, input handling and the main loop."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import pygame

from escapegrid.game import (
    DEBUG_LEVEL,
    LEVEL_FILES,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Game,
    GameState,
)
from escapegrid.screens import draw_game

logger = logging.getLogger(__name__)

TITLE = "Escape the Grid - Clocktower Edition"
FPS = 60

_LEVEL_KEYS = {
    pygame.K_1: LEVEL_FILES[0],
    pygame.K_2: LEVEL_FILES[1],
    pygame.K_3: LEVEL_FILES[2],
    pygame.K_4: LEVEL_FILES[3],
}
_CONFIRM_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)


def handle_key(game: Game, key: int) -> None:
    """React to a key press according to what the game is showing."""
    state = game.state
    if state is GameState.MENU:
        if key in _LEVEL_KEYS:
            game.show_tutorial(_LEVEL_KEYS[key])
        elif key == pygame.K_t:
            game.show_tutorial(DEBUG_LEVEL)
        elif key == pygame.K_ESCAPE:
            logger.info("press a number to choose a level")
    elif state is GameState.TUTORIAL:
        if key in _CONFIRM_KEYS:
            game.confirm_tutorial()
        elif key == pygame.K_ESCAPE:
            game.return_to_menu()
    elif state is GameState.PLAYING:
        if key == pygame.K_r:
            game.reset()
        elif key == pygame.K_SPACE:
            game.start_auto_solve()
        elif key == pygame.K_ESCAPE:
            game.return_to_menu()
    elif key == pygame.K_r:
        game.reset()
    elif key == pygame.K_ESCAPE:
        game.return_to_menu()


def handle_event(game: Game, event: pygame.event.Event) -> bool:
    """Apply one window event to the game; False when the window should close."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        handle_key(game, event.key)
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        if game.state is GameState.TUTORIAL:
            game.confirm_tutorial()
        elif game.state is GameState.PLAYING:
            game.click(event.pos)
    elif event.type == pygame.MOUSEMOTION:
        if game.state is GameState.PLAYING:
            game.hover(event.pos)
    elif event.type == pygame.VIDEORESIZE:
        game.screen_width = event.w
        game.screen_height = event.h
    return True


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="escapegrid", description="A turn-based hexagonal maze puzzle."
    )
    parser.parse_args(argv)

    pygame.init()
    try:
        surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        game = Game()
        pulse_timer = 0.0
        running = True
        while running:
            dt = clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if not handle_event(game, event):
                    running = False
                    break
            if not running:
                break
            surface = pygame.display.get_surface()
            game.screen_width, game.screen_height = surface.get_size()
            if game.state is GameState.PLAYING:
                game.hover(pygame.mouse.get_pos())
            game.update_auto_solve(dt)
            game.tick()
            pulse_timer += dt * 3.0
            draw_game(surface, game, pulse_timer)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0