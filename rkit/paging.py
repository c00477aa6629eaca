"""Paged grid layout and touch-driven scrolling between pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

PageCallback = Callable[[int], None]
ClickCallback = Callable[[int, int, int, int], None]

NUMBER_ITEMS = 9
NUMBER_FOCUS = (0, 45, 30, 30)


def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _div(a, b)


def _bound(low: int, value: int, high: int) -> int:
    return max(low, min(value, high))


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in integer pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


class PageWheel:
    """Lays items out on pages of a grid and moves between whole pages."""

    def __init__(self, on_page_change: Optional[PageCallback] = None) -> None:
        self._on_page_change = on_page_change or (lambda page: None)
        self.focus = Rect()
        self.horizontal = True
        self.columns = 1
        self.rows = 1
        self.margin = 0
        self.item_count = 0
        self.total_pages = 0
        self.page = 0
        self.items: list[Rect] = []
        self.offset: tuple[int, int] = (0, 0)

    @property
    def content_size(self) -> tuple[int, int]:
        """Width and height of the strip holding every page."""
        f = self.focus
        if self.horizontal:
            return f.x + self.total_pages * f.width, f.height
        return f.width, f.y + self.total_pages * f.height

    def set_page(
        self,
        focus: Rect,
        horizontal: bool,
        columns: int,
        rows: int,
        item_count: int,
        margin: int = 0,
        border: int = 0,
    ) -> list[Rect]:
        """Place item_count items on pages of columns x rows and return their rects."""
        if columns <= 0 or rows <= 0:
            raise ValueError("columns and rows must be positive")
        self.focus = focus
        self.horizontal = horizontal
        self.columns = columns
        self.rows = rows
        self.margin = margin
        self.item_count = item_count
        per_page = columns * rows
        self.total_pages = -(-item_count // per_page) if item_count > 0 else 0

        width = _div(focus.width - border * (columns - 1) - margin * 2, columns)
        height = _div(focus.height - border * (rows - 1) - margin * 2, rows)
        items = []
        for index in range(item_count):
            page, slot = divmod(index, per_page)
            row, col = divmod(slot, columns)
            x = margin + (width + border) * col
            y = margin + (height + border) * row
            if horizontal:
                x += focus.x + page * focus.width
            else:
                y += focus.y + page * focus.height
            items.append(Rect(x, y, width, height))
        self.items = items
        return list(items)

    def go_page(self, index: int) -> bool:
        """Move to page index; an index out of range is ignored and returns False."""
        if index < 0 or index >= self.total_pages:
            return False
        previous = self.page
        self.page = index
        if self.horizontal:
            self.offset = (-index * self.focus.width, 0)
        else:
            self.offset = (0, -index * self.focus.height)
        if previous != self.page:
            self._on_page_change(self.page)
        return True

    def next_page(self) -> bool:
        """Advance one page; returns whether the page is below the page count."""
        self.go_page(self.page + 1)
        return self.page < self.total_pages

    def prev_page(self) -> bool:
        """Go back one page; returns whether the page is past the first."""
        self.go_page(self.page - 1)
        return self.page > 0


class ScrollView(PageWheel):
    """A page wheel driven by press, move and release gestures."""

    def __init__(
        self,
        width: int,
        height: int,
        on_page_change: Optional[PageCallback] = None,
        on_click: Optional[ClickCallback] = None,
    ) -> None:
        super().__init__(on_page_change)
        self.width = width
        self.height = height
        self._on_click = on_click or (lambda index, page, col, row: None)
        self.h_move = True
        self.v_move = True
        self.auto_page = False
        self.touch_enabled = False
        self._press_point = (0, 0)
        self._press_offset = (0, 0)

    @property
    def page_size(self) -> tuple[int, int]:
        """The focus size, or the view size when no focus area is set."""
        if self.focus.width == 0 and self.focus.height == 0:
            return self.width, self.height
        return self.focus.width, self.focus.height

    @property
    def frame_border(self) -> tuple[int, int]:
        """How far content may be dragged past its edges."""
        pw, ph = self.page_size
        return _div(pw, 3), _div(ph, 3)

    def set_content(self, h_move: bool, v_move: bool, auto_page: bool) -> None:
        """Choose the drag axes and whether release snaps to a page."""
        self.offset = (0, 0)
        self.touch_enabled = True
        self.h_move = h_move
        self.v_move = v_move
        self.auto_page = auto_page

    def press(self, x: int, y: int) -> None:
        self._press_point = (x, y)
        self._press_offset = self.offset

    def move(self, x: int, y: int) -> tuple[int, int]:
        """Drag the content, kept within its edges plus a border; returns the offset."""
        pw, ph = self.page_size
        bw, bh = self.frame_border
        cw, ch = self.content_size
        px, py = self._press_point
        ox, oy = self._press_offset
        new_x = _bound(-cw - bw + pw + self.focus.x, x - px + ox, bw)
        new_y = _bound(-ch - bh + ph + self.focus.y, y - py + oy, bh)
        if not self.h_move:
            new_x = ox
        if not self.v_move:
            new_y = oy
        self.offset = (new_x, new_y)
        return self.offset

    def release(self, x: int, y: int) -> int:
        """Snap to a page when auto paging is on; returns the current page."""
        if not self.auto_page:
            return self.page
        previous = self.page
        changed = False
        pw, ph = self.page_size
        px, py = self._press_point
        if self.horizontal:
            size, pos, start, end = pw, self.offset[0], px, x
        else:
            size, pos, start, end = ph, self.offset[1], py, y
        third = _div(size, 3)
        page = self.page
        if end < start:
            page += abs(_div(start - end, size))
            if abs(_mod(pos, size)) >= third:
                changed = True
                page += 1
        else:
            page -= abs(_div(end - start, size))
            if size - abs(_mod(pos, size)) > third:
                changed = True
                page -= 1
        self.page = _bound(0, page, self.total_pages - 1)
        if self.horizontal:
            self.offset = (-self.page * size, 0)
        else:
            self.offset = (0, -self.page * size)
        if changed or self.page != previous:
            self._on_page_change(self.page)
        return self.page

    def click(self, x: int, y: int) -> Optional[int]:
        """Return the index of the item under the point, or None."""
        pw, ph = self.page_size
        cx = x - self.offset[0]
        cy = y - self.offset[1]
        page_h = abs(_div(cx, pw))
        page_v = abs(_div(cy, ph))
        page = page_h if self.horizontal else page_v
        range_w = _div(pw, self.columns)
        range_h = _div(ph, self.rows)
        if range_w == 0 or range_h == 0:
            return None
        col = _div(_mod(cx, pw), range_w)
        row = _div(_mod(cy, ph), range_h)
        index = self.columns * self.rows * page + row * self.columns + col
        if 0 <= index < self.item_count:
            self._on_click(index, page, col, row)
            return index
        return None


def number_selector(width: int, height: int) -> ScrollView:
    """A vertical one-digit picker holding the digits 0 to 8."""
    view = ScrollView(width, height)
    view.set_page(Rect(*NUMBER_FOCUS), False, 1, 1, NUMBER_ITEMS, 0, 0)
    view.set_content(False, True, True)
    return view