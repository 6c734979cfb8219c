"""
Bookkeeping for chunked sample buffers.

A buffer of ``capacity`` columns is filled one sample at a time. When it is
full its contents belong to the next contiguous block of the output, and the
buffer is reused from the first column. ChunkCounter records where we are in
that cycle and ``advance`` is the only way to move it forward, so the flush
arithmetic can be checked without any storage attached.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class ChunkCounter:
    """
    Position of a chunked buffer in its fill/flush cycle.

    Attributes:
        capacity (int): Number of samples the buffer holds.
        fill_count (int): Samples currently waiting in the buffer, 0..capacity-1.
        flush_count (int): Number of full buffers written out so far.
    """

    capacity: int
    fill_count: int = 0
    flush_count: int = 0

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"capacity must be positive, got {self.capacity}.")
        if not 0 <= self.fill_count < self.capacity:
            raise ValueError(
                f"fill_count must lie in [0, {self.capacity}), got {self.fill_count}."
            )
        if self.flush_count < 0:
            raise ValueError(f"flush_count must be non-negative, got {self.flush_count}.")

    @property
    def written(self) -> int:
        """Samples already handed off by completed flushes."""
        return self.flush_count * self.capacity

    @property
    def pending(self) -> slice:
        """Destination of the samples currently waiting in the buffer."""
        return slice(self.written, self.written + self.fill_count)


def advance(counter: ChunkCounter) -> Tuple[ChunkCounter, Optional[slice]]:
    """
    Account for one sample written into ``buffer[:, counter.fill_count]``.

    Returns:
        The new counter, and the output slice the full buffer must be copied
        to if this sample filled it (None otherwise). The k-th flush
        (1-indexed) targets columns [(k-1)*capacity, k*capacity).
    """
    fill_count = counter.fill_count + 1
    if fill_count < counter.capacity:
        return replace(counter, fill_count=fill_count), None

    start = counter.flush_count * counter.capacity
    destination = slice(start, start + counter.capacity)
    return replace(counter, fill_count=0, flush_count=counter.flush_count + 1), destination
