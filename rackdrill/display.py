"""Terminal rendering of draws and word lists."""

from __future__ import annotations

from typing import Iterable

from rackdrill.game import GameSession
from rackdrill.tiles import Tile

SUBSCRIPT_ZERO = 0x2080
WORD_SEPARATOR = " · "


def subscript_points(points: int) -> str:
    """Points as subscript digits, ``ₓ`` standing for 10."""
    if points == 10:
        return "ₓ"
    return "".join(chr(SUBSCRIPT_ZERO + int(d)) for d in str(points))


def render_tile(tile: Tile, with_points: bool = False) -> str:
    text = tile.symbol
    if with_points:
        text += subscript_points(tile.points)
    # Carried-over tiles are bracketed.
    if tile.carried_forward:
        return f"[{text}]"
    return f" {text} "


def render_draw(tiles: Iterable[Tile], with_points: bool = False) -> str:
    rendered = "".join(render_tile(t, with_points) for t in tiles)
    return rendered or "(empty draw)"


def render_word_list(words: list[str], width: int = 60) -> str:
    """Wrap *words* into lines of at most *width* characters."""
    lines: list[str] = []
    line = ""
    for word in words:
        candidate = f"{line}{WORD_SEPARATOR}{word}" if line else word
        if line and width > 0 and len(candidate) > width:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return "\n".join(lines)


def format_duration(seconds: float) -> str:
    seconds = int(round(seconds))
    h, rest = divmod(seconds, 3600)
    m, s = divmod(rest, 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


def print_draw(session: GameSession) -> None:
    """Print the round header and the tiles of the draw."""
    print(f"\nDraw {session.play_count}.{session.draw_count}")
    print(render_draw(session.hand(), session.options.show_points))
    print(f"Pool: {len(session.pool)} tiles remaining")


def print_insight(session: GameSession, level: int) -> None:
    """Level 1 prints the number of words, level 2 and above lists them."""
    if level <= 0:
        print("(type I for insight)")
        return
    words = session.words
    if not words:
        print("no scrabble found")
        return
    plural = "s" if len(words) > 1 else ""
    print(f"found {len(words)} scrabble{plural}")
    if level >= 2:
        print(render_word_list([w.lower() for w in words]))
