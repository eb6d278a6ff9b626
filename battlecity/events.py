"""Player input for one simulation step."""

from dataclasses import dataclass, field, fields


@dataclass
class PressedButtons:
    """Buttons held down by one player."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    shoot: bool = False
    esc: bool = False
    reset: bool = False

    def __or__(self, other: "PressedButtons") -> "PressedButtons":
        if not isinstance(other, PressedButtons):
            return NotImplemented
        merged = {
            f.name: getattr(self, f.name) or getattr(other, f.name)
            for f in fields(self)
        }
        # Reset on the left-hand side is taken from its escape button.
        merged["reset"] = other.reset or self.esc
        return PressedButtons(**merged)


@dataclass
class Event:
    """Input of both players."""

    player1: PressedButtons = field(default_factory=PressedButtons)
    player2: PressedButtons = field(default_factory=PressedButtons)