from __future__ import annotations

from typing import List

from .board import COLS, ROWS, BoardState, InvalidBoardEncoding, parse_heights


def heights_from_row_masks(data: bytes) -> BoardState:
    """Translates the persisted row-bitmask layout into a board.

    Byte r holds row r; bit (7 - c) set means cell (r, c) is eaten. Missing
    bytes count as empty rows. Eaten cells in a column must run unbroken
    from row 0; the result is then validated like any external input.
    """
    heights: List[int] = [-1] * COLS
    for c in range(COLS):
        mask = 1 << (7 - c)
        for r in range(ROWS):
            byte = data[r] if r < len(data) else 0
            if not byte & mask:
                continue
            if heights[c] != r - 1:
                raise InvalidBoardEncoding(
                    f"column {c + 1}: row {r + 1} eaten but row {heights[c] + 2} is not"
                )
            heights[c] = r
    return parse_heights(heights)


def row_masks_from_state(state: BoardState) -> bytes:
    out = bytearray(ROWS)
    for c, h in enumerate(state.heights):
        for r in range(h + 1):
            out[r] |= 1 << (7 - c)
    return bytes(out)
