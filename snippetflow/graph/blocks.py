"""
Block boundary resolution over a statement stream, driven by indentation depth.

A statement that opens a block (conditional or loop) owns every following statement that
is strictly deeper. The block closes at the first later statement whose depth is less than
or equal to its own; that statement is the block's exit. The last statement before the
exit, when deeper than the opener, is the last statement of the body.

Resolved in one pass with an explicit stack of open blocks instead of per-block forward
scans. Both give the same result; the stack keeps the search linear.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from snippetflow.classify.statement import BRANCH_KINDS, Statement


@dataclass(frozen=True)
class BlockBoundary:
    """Where a block opened at opener_index ends, by statement index (None = end of input / empty body)."""

    opener_index: int
    exit_index: int | None
    last_body_index: int | None


@dataclass
class OpenBlock:
    index: int
    depth: int


class BlockScanner:
    """Depth-indexed stack of blocks that have not yet seen their exit statement."""

    def __init__(self) -> None:
        self._open: list[OpenBlock] = []

    def __len__(self) -> int:
        return len(self._open)

    def push(self, index: int, depth: int) -> None:
        self._open.append(OpenBlock(index, depth))

    def close_at(self, index: int, depth: int) -> list[BlockBoundary]:
        """
        Close every open block whose depth is >= depth; statement index is their exit.
        Blocks on the stack are nested, so closing stops at the first shallower block.
        """
        closed: list[BlockBoundary] = []
        while self._open and self._open[-1].depth >= depth:
            block = self._open.pop()
            last = index - 1 if index - 1 > block.index else None
            closed.append(BlockBoundary(block.index, index, last))
        return closed

    def close_all(self, stream_length: int) -> list[BlockBoundary]:
        """Blocks still open at the end of input exit to the end node."""
        closed: list[BlockBoundary] = []
        while self._open:
            block = self._open.pop()
            last = stream_length - 1 if stream_length - 1 > block.index else None
            closed.append(BlockBoundary(block.index, None, last))
        return closed


def resolve_block_boundaries(
    statements: Sequence[Statement],
    opener_kinds: frozenset[str] = BRANCH_KINDS,
) -> dict[int, BlockBoundary]:
    """Map each opener statement index to its BlockBoundary."""
    scanner = BlockScanner()
    boundaries: dict[int, BlockBoundary] = {}
    for index, statement in enumerate(statements):
        for boundary in scanner.close_at(index, statement.indent_depth):
            boundaries[boundary.opener_index] = boundary
        if statement.kind in opener_kinds:
            scanner.push(index, statement.indent_depth)
    for boundary in scanner.close_all(len(statements)):
        boundaries[boundary.opener_index] = boundary
    return boundaries
