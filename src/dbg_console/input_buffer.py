class InputBuffer:
    """The live, editable entry line.

    Text only ever grows or shrinks at its end: characters and fragments
    are appended, backspace drops the last character.
    """

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def append(self, text: str):
        """Append a character or text fragment."""
        self._text += text

    def backspace(self):
        """Delete the last character, if any."""
        if self._text:
            self._text = self._text[:-1]

    def set_text(self, text: str):
        """Replace buffer content."""
        self._text = text

    def clear(self) -> str:
        """Clear the buffer and return the previous content."""
        text = self._text
        self._text = ""
        return text
