"""On-screen keyboard models: an editable line and two keyboard layouts."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Callable, Optional

TextCallback = Callable[[str], None]

SPACE = "space"
POINT = "point"
BACKSPACE = "backspace"

LETTERS = list(string.ascii_uppercase)

SYMBOL_PAGES = (
    ["1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "/", ":", ";",
     "(", ")", "$", "@", '"', ",", "?", "!", "'"],
    ["[", "]", "{", "}", "#", "%", "^", "*", "+", "=", "_", "\\", "|", "~",
     "<", ">", "£", "¥", "•", ",", "?", "!", "'"],
)

SYMBOLS_LABELS = ("#+=", "123")
PAGE_LABELS = ("123", "ABC")


@dataclass
class LineBuffer:
    """A single line of text with a cursor position."""

    text: str = ""
    cursor: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cursor is None:
            self.cursor = len(self.text)
        self.cursor = max(0, min(self.cursor, len(self.text)))

    def set(self, text: str) -> None:
        """Replace the text and put the cursor at its end."""
        self.text = text
        self.cursor = len(text)

    def insert(self, text: str) -> None:
        """Insert text at the cursor and move the cursor past it."""
        index = max(0, min(self.cursor, len(self.text)))
        self.text = self.text[:index] + text + self.text[index:]
        self.cursor = index + len(text)

    def backspace(self) -> None:
        """Delete the character before the cursor.

        At the start of the line the first character is deleted instead.
        """
        index = max(0, min(self.cursor, len(self.text)))
        if index > 0:
            index -= 1
        self.text = self.text[:index] + self.text[index + 1:]
        self.cursor = index

    def clear(self) -> None:
        """Empty the line."""
        self.text = ""
        self.cursor = 0


class Keyboard:
    """A sliding keyboard with a letter page and two pages of symbols.

    Keys are pressed by their current label; SPACE, POINT and BACKSPACE
    name the keys without a character label.
    """

    def __init__(self, on_text: Optional[TextCallback] = None) -> None:
        self._on_text = on_text
        self.buffer = LineBuffer()
        self.visible = False
        self.letters = list(LETTERS)
        self.symbol_page = 0
        self.symbols = list(SYMBOL_PAGES[0])
        self.symbols_label = SYMBOLS_LABELS[0]
        self.page = 0
        self.page_label = PAGE_LABELS[0]

    @property
    def text(self) -> str:
        return self.buffer.text

    def open(self, text: str = "") -> None:
        """Show the keyboard editing text, with the cursor at its end."""
        self.buffer.set(text)
        self.visible = True

    def press(self, key: str) -> str:
        """Press a key and return the edited text."""
        if key == BACKSPACE:
            self.buffer.backspace()
            return self.buffer.text
        if key == SPACE:
            typed = " "
        elif key == POINT:
            typed = "."
        elif key in self.letters or key in self.symbols:
            typed = key
        else:
            raise ValueError(f"no key labelled {key!r}")
        self.buffer.insert(typed)
        return self.buffer.text

    def set_shift(self, lowercase: bool) -> None:
        """Show the letters in lower case when lowercase, else upper case."""
        self.letters = [
            label.lower() if lowercase else label.upper() for label in self.letters
        ]

    def set_symbols(self, alternate: bool) -> None:
        """Switch between the first and the alternate symbol page."""
        self.symbol_page = 1 if alternate else 0
        self.symbols = list(SYMBOL_PAGES[self.symbol_page])
        self.symbols_label = SYMBOLS_LABELS[self.symbol_page]

    def set_letters_page(self, numeric: bool) -> None:
        """Show the symbol keys when numeric, else the letter keys."""
        self.page = 1 if numeric else 0
        self.page_label = PAGE_LABELS[self.page]

    def _hide(self) -> None:
        self.buffer.clear()
        self.visible = False

    def submit(self) -> str:
        """Deliver the text to the bound target, then close the keyboard."""
        text = self.buffer.text
        if self._on_text is not None:
            self._on_text(text)
        self._hide()
        return text

    def cancel(self) -> None:
        """Close the keyboard, discarding the text."""
        self._hide()


SIMPLE_DIGITS = ["1", "2", "3", "4", "5", "6", "7", "8", "9", "0"]
SIMPLE_CHARACTERS = {"space": " ", ".": ".", "@": "@", "+": "+", "-": "-", "/": "/"}
ENTER = "Enter"
CLOSE = "close"
SHIFT = "shift"


class SimpleKeyboard:
    """A plain keyboard that appends typed characters to the end of its text."""

    def __init__(self, on_enter: Optional[TextCallback] = None) -> None:
        self._on_enter = on_enter
        self.text = ""
        self.visible = False
        self.lowercase = True
        self.letters = list(string.ascii_lowercase)

    def open(self, text: str = "") -> None:
        """Show the keyboard editing text."""
        self.text = text
        self.visible = True

    def input(self, key: str) -> str:
        """Press a key by its label and return the edited text."""
        if key == BACKSPACE:
            self.text = self.text[:-1]
        elif key == ENTER:
            if self._on_enter is not None:
                self._on_enter(self.text)
            self.text = ""
            self.visible = False
        elif key == CLOSE:
            self.visible = False
        elif key == SHIFT:
            self.toggle_case()
        elif key in SIMPLE_CHARACTERS:
            self.text += SIMPLE_CHARACTERS[key]
        elif key in self.letters or key in SIMPLE_DIGITS:
            self.text += key
        else:
            raise ValueError(f"no key labelled {key!r}")
        return self.text

    def toggle_case(self) -> None:
        """Flip the letter keys between lower and upper case."""
        self.letters = [
            label.upper() if self.lowercase else label.lower() for label in self.letters
        ]
        self.lowercase = not self.lowercase