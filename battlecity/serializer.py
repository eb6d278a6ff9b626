"""Wire format for objects and player input."""

from .base import NetworkObject
from .enums import ObjectType
from .events import Event, PressedButtons

OBJECT_SIZE = 7

# Bit positions of buttons in an input byte.
_BUTTON_BITS = {
    "esc": 7,
    "reset": 6,
    "up": 4,
    "left": 3,
    "down": 2,
    "right": 1,
    "shoot": 0,
}


def object_to_bytes(obj) -> bytes:
    """Encode an object as [id hi][id lo][type][destroyed][x][y][state]."""
    return bytes(
        [
            (obj.id >> 8) & 0xFF,
            obj.id & 0xFF,
            int(obj.type) & 0xFF,
            int(bool(obj.destroyed)),
            int(obj.position.x) & 0xFF,
            int(obj.position.y) & 0xFF,
            int(obj.state) & 0xFF,
        ]
    )


def bytes_to_object(data: bytes) -> NetworkObject:
    """Decode one object record; raises ValueError on a short or unknown record."""
    if len(data) < OBJECT_SIZE:
        raise ValueError(f"object record needs {OBJECT_SIZE} bytes, got {len(data)}")
    return NetworkObject(
        data[0] << 8 | data[1],
        ObjectType(data[2]),
        bool(data[3]),
        data[4],
        data[5],
        data[6],
    )


def event_to_bytes(event: Event) -> bytes:
    """Encode the input of both players, merged, as one byte."""
    value = 0
    for name, bit in _BUTTON_BITS.items():
        if getattr(event.player1, name) or getattr(event.player2, name):
            value |= 1 << bit
    return bytes([value])


def _decode_buttons(byte: int) -> PressedButtons:
    return PressedButtons(
        **{name: bool((byte >> bit) & 1) for name, bit in _BUTTON_BITS.items()}
    )


def bytes_to_event(player1: bytes, player2: bytes) -> Event:
    """Build an event from the input bytes sent by both clients."""
    first = _decode_buttons(player1[0])
    second = _decode_buttons(player2[0])
    # Reset is shared: both players take it from the first client.
    second.reset = first.reset
    return Event(first, second)