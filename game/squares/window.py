"""
Arcade window - frame driver, input source and renderer for the game
"""

from __future__ import annotations

from typing import Optional, Set

import arcade

from .game_state import FrameInput, Game
from .scenes import Scene

UP_KEYS = (arcade.key.W, arcade.key.UP)
DOWN_KEYS = (arcade.key.S, arcade.key.DOWN)
LEFT_KEYS = (arcade.key.A, arcade.key.LEFT)
RIGHT_KEYS = (arcade.key.D, arcade.key.RIGHT)
CONFIRM_KEYS = (arcade.key.ENTER, arcade.key.SPACE)
QUIT_KEYS = (arcade.key.ESCAPE,)


class SquaresWindow(arcade.Window):
    """Arcade window that samples input, ticks the game and draws it"""

    def __init__(self, game: Game, title: str = "Square Collector"):
        super().__init__(game.width, game.height, title)
        self.game = game

        self._held: Set[int] = set()
        self._confirm_pressed = False
        self._quit_pressed = False

        # Colors
        self.BG = (18, 18, 22)
        self.PLAYER_C = (80, 200, 120)
        self.TARGET_C = (240, 210, 80)
        self.ENEMY_C = (220, 80, 80)
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, key: int, modifiers: int):
        self._held.add(key)
        if key in CONFIRM_KEYS:
            self._confirm_pressed = True
        elif key in QUIT_KEYS:
            self._quit_pressed = True

    def on_key_release(self, key: int, modifiers: int):
        self._held.discard(key)

    def sample_input(self) -> FrameInput:
        """Held keys plus press edges since the last sample"""
        held = self._held
        frame_input = FrameInput(
            up=any(k in held for k in UP_KEYS),
            down=any(k in held for k in DOWN_KEYS),
            left=any(k in held for k in LEFT_KEYS),
            right=any(k in held for k in RIGHT_KEYS),
            confirm=self._confirm_pressed,
            quit=self._quit_pressed,
        )
        self._confirm_pressed = False
        self._quit_pressed = False
        return frame_input

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        self.game.update(self.sample_input(), delta_time)
        if not self.game.running:
            self.game.shutdown()
            self.close()

    def _draw_square(self, position, size, color):
        camera = self.game.camera
        sx, sy = camera.world_to_screen(position)
        w = size[0] * camera.zoom
        h = size[1] * camera.zoom
        # Game space has +y down, Arcade has +y up
        top = self.height - sy
        arcade.draw_lrbt_rectangle_filled(sx, sx + w, top - h, top, color)

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        arcade.set_background_color(self.BG)

        scene = self.game.scene

        if scene == Scene.PLAYING:
            for t in self.game.active_targets():
                color = self.ENEMY_C if t.is_enemy else self.TARGET_C
                self._draw_square(t.entity.position, t.entity.size, color)

            player = self.game.player.entity
            self._draw_square(player.position, player.size, self.PLAYER_C)

            arcade.draw_text(f"Score: {self.game.player.score}", 12, self.height - 30, self.HUD_C, 16)
            return

        if scene == Scene.GAME_OVER:
            title = f"GAME OVER - score {self.game.player.score}"
        else:
            title = "SQUARE COLLECTOR"
        arcade.draw_text(title, self.width / 2, self.height / 2 + 20, self.HUD_C, 28,
                         anchor_x="center")
        arcade.draw_text("ENTER to play, ESC to quit", self.width / 2, self.height / 2 - 20,
                         self.HUD_C, 14, anchor_x="center")


def play(game: Optional[Game] = None):
    """Open a window and run the game until the player quits"""
    if game is None:
        game = Game(verbose=1)
    SquaresWindow(game)
    arcade.run()


if __name__ == "__main__":
    play()
