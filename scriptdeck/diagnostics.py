"""Classification of script error output into short key titles."""

import re


# Ordered: the first substring found in the message wins.
PYTHON_ERROR_LABELS: tuple[tuple[str, str], ...] = (
    ("SyntaxError", "Python\nSyntax\nError"),
    ("NameError", "Python\nName\nError"),
    ("TypeError", "Python\nType\nError"),
    ("ValueError", "Python\nValue\nError"),
    ("ZeroDivisionError", "Python\nZeroDiv\nError"),
    ("IndexError", "Python\nIndex\nError"),
    ("KeyError", "Python\nKey\nError"),
    ("AttributeError", "Python\nAttribute\nError"),
    ("ImportError", "Python\nImport\nError"),
    ("No such file or directory", "Python\nFile\nError"),
    ("ModuleNotFoundError", "Python\nModule\nError"),
    ("RuntimeError", "Python\nRuntime\nError"),
    ("MemoryError", "Python\nMemory\nError"),
    ("OverflowError", "Python\nOverflow\nError"),
    ("SystemError", "Python\nSystem\nError"),
    ("Microsoft Store", "Python\nnot found\nError"),
)

OTHER_ISSUE_LABEL = "python\nother\nissue"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def collapse_newlines(text: str) -> str:
    """Trim text and replace every line break with a single space."""
    return _LINE_BREAK_RE.sub(" ", text.strip())


def classify_error(message: str) -> str:
    """Return the key title for an error message.

    Args:
        message: Error text as written by the script

    Returns:
        Label of the first known error kind found in the message, or
        OTHER_ISSUE_LABEL when none matches
    """
    for needle, label in PYTHON_ERROR_LABELS:
        if needle in message:
            return label
    return OTHER_ISSUE_LABEL
