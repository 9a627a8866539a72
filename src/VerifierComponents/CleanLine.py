import re

# \r\n, \r and \n only; form feeds and unicode separators stay inside a line
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class SourceLine:
    """
    Class representing one line of an S-Java source file.

    Attributes:
        raw_line (str): The line exactly as read, without its line terminator.
        line_number (int): The line number in the source file (1-based).
    """

    def __init__(self, raw_line: str, line_number: int):
        """
        Initialize the SourceLine instance.

        Args:
            raw_line (str): The line as read from the file.
            line_number (int): The line number in the source file.
        """
        self.raw_line = raw_line
        self.line_number = line_number


def split_source_lines(source_code: str) -> list[SourceLine]:
    """Split source text into numbered lines, keeping blank ones.

    A terminator at the very end does not start another line.
    """
    pieces = _LINE_BREAK_RE.split(source_code)
    if pieces[-1] == "":
        pieces.pop()
    return [SourceLine(line, i + 1) for i, line in enumerate(pieces)]
