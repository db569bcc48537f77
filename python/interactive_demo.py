"""
Interactive demo for the rock platform.
Display a platform and tilt it with keyboard commands.
"""

from pathlib import Path
import logging

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_platform
from grid_types import Direction, PuzzleError
from rocks import Platform, north_load, parse_platform, spin_cycle, tilt

TILT_KEYS = {
    "w": Direction.N,
    "a": Direction.W,
    "s": Direction.S,
    "d": Direction.E,
}


class InteractiveDemo:
    """Interactive demo for tilt operations."""

    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        self.original_platform = platform  # Keep a copy of the original state
        self.moves = 0
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with platform and status."""
        status = Text()
        status.append("North load: ", style="bold")
        status.append(f"{north_load(self.platform)}\n")
        status.append("Moves: ", style="bold")
        status.append(f"{self.moves}\n\n")

        # Convert ANSI-colored platform text to Rich Text
        status.append(Text.from_ansi(render_platform(self.platform)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W - Tilt North\n")
        status.append("  A - Tilt West\n")
        status.append("  S - Tilt South\n")
        status.append("  D - Tilt East\n")
        status.append("  C - Spin cycle\n")
        status.append("  R - Reset to original platform\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Rock Platform", border_style="green", width=80)

    def attempt_tilt(self, direction: Direction) -> None:
        tilted = tilt(self.platform, direction)
        if tilted == self.platform:
            self.status_message = f"✗ Nothing moves {direction.value}"
            return
        self.platform = tilted
        self.moves += 1
        self.status_message = f"✓ Tilted {direction.value}"

    def spin(self) -> None:
        self.platform = spin_cycle(self.platform)
        self.moves += 1
        self.status_message = "✓ Spin cycle"

    def reset_platform(self) -> None:
        """Reset the platform to its original state."""
        self.platform = self.original_platform
        self.moves = 0
        self.status_message = "Platform reset to original state"

    def handle_key(self, key: str) -> bool:
        """Apply a key press; returns False when the demo should stop."""
        key = key.lower()
        if key == "q":
            self.status_message = "Quitting..."
            return False
        if key == "r":
            self.reset_platform()
        elif key == "c":
            self.spin()
        elif key in TILT_KEYS:
            self.attempt_tilt(TILT_KEYS[key])
        else:
            self.status_message = f"Unknown key: {repr(key)}"
        return True

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


EXAMPLE = """\
O....#....
O.OO#....#
.....##...
OO.#O....O
.O.....O#.
O.#..O.#.#
..O..#O..O
.......O..
#....###..
#OO..#....
"""


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    try:
        text = Path(sys.argv[1]).read_text() if len(sys.argv) > 1 else EXAMPLE
        platform = parse_platform(text)
    except (OSError, PuzzleError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    InteractiveDemo(platform).run()
