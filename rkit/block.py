"""An input-blocking overlay with an animated loading indicator."""

from __future__ import annotations

from typing import Callable, Generic, Optional, Sequence, TypeVar

TICK_MS = 100

T = TypeVar("T")


class FrameCycler(Generic[T]):
    """Steps endlessly through a sequence of animation frames."""

    def __init__(self, frames: Sequence[T] = ()) -> None:
        self.frames: list[T] = list(frames)
        self._index = 0

    def next_frame(self) -> T:
        """Return the current frame and advance, wrapping at the end."""
        if not self.frames:
            raise IndexError("no frames to show")
        frame = self.frames[self._index % len(self.frames)]
        self._index = (self._index + 1) % len(self.frames)
        return frame

    def reset(self) -> None:
        """Start again from the first frame."""
        self._index = 0


class BlockLayer:
    """Blocks input while visible and unblocks itself after an optional timeout."""

    def __init__(self, on_lock: Optional[Callable[[bool], None]] = None) -> None:
        self._on_lock = on_lock or (lambda locked: None)
        self.blocked = False
        self.visible = False
        self.background_visible = True
        self.timeout_ms = -1
        self.elapsed_ms: Optional[int] = None

    def set_block(
        self, block: bool, background_visible: bool = True, timeout_ms: int = -1
    ) -> None:
        """Show or hide the layer; a positive timeout unblocks it automatically."""
        if self.blocked == block:
            return
        self.timeout_ms = timeout_ms
        self.blocked = block
        self.background_visible = background_visible
        self._set_visible(block)

    def _set_visible(self, visible: bool) -> None:
        if visible == self.visible:
            return
        self.visible = visible
        self.elapsed_ms = 0 if visible else None
        self._on_lock(visible)

    def tick(self) -> bool:
        """Advance the clock by one tick; returns whether still blocked."""
        if self.elapsed_ms is not None:
            self.elapsed_ms += TICK_MS
        if (
            self.blocked
            and self.timeout_ms > 0
            and self.elapsed_ms is not None
            and self.elapsed_ms >= self.timeout_ms
        ):
            self.set_block(False)
        return self.blocked