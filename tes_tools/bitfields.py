"""Fixed-width bit-field packing (low bits first)."""

from __future__ import annotations

from typing import Final, Sequence


# seconds, minutes, hours, day, month, year-offset (LSB upward)
DATE_FIELD_WIDTHS: Final[tuple[int, ...]] = (6, 6, 5, 5, 4, 6)


def _mask(width: int) -> int:
    return (1 << width) - 1


def unpack_fields(word: int, widths: Sequence[int]) -> tuple[int, ...]:
    """Split a word into fields, the first width taken from the least significant bits.

    Args:
        word: Unsigned integer holding the packed fields.
        widths: Bit width of each field, in low-to-high order.

    Returns:
        Field values in the same order as ``widths``.
    """

    out: list[int] = []
    for width in widths:
        out.append(word & _mask(width))
        word >>= width
    return tuple(out)


def pack_fields(values: Sequence[int], widths: Sequence[int]) -> int:
    """Inverse of :func:`unpack_fields`.

    Fields are packed from the most significant one down (shift left, then OR),
    so ``values[0]`` lands in the lowest bits. Each value is masked to its width,
    out-of-range values wrap silently.

    Raises:
        ValueError: If ``values`` and ``widths`` differ in length.
    """

    if len(values) != len(widths):
        raise ValueError(f"got {len(values)} values for {len(widths)} fields")

    word = 0
    for value, width in zip(reversed(values), reversed(widths)):
        word = (word << width) | (int(value) & _mask(width))
    return word
