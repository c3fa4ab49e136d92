"""Split an SQL script into individual statements.

The ``mysql`` client accepts a whole file on stdin; a DB-API cursor executes
one statement at a time. This splitter bridges the two for the dialect subset
init scripts use:

- ``;`` ends a statement, except inside quotes (``'``, ``"``, backticks) or
  comments.
- Backslash escapes and doubled quotes inside string literals are honoured.
- ``-- `` and ``#`` line comments and ``/* */`` block comments are dropped;
  MySQL executable comments (``/*! ... */``) are kept verbatim.

``DELIMITER`` directives (stored procedure bodies) are a ``mysql`` client
feature and are not supported.
"""

from __future__ import annotations

QUOTES = {"'", '"', "`"}


def _starts_line_comment(script: str, i: int) -> bool:
    """MySQL needs whitespace (or end of input) after ``--``."""
    if script.startswith("--", i):
        nxt = script[i + 2 : i + 3]
        return nxt == "" or nxt.isspace()
    return script[i] == "#"


def split_statements(script: str) -> list[str]:
    """Return the non-empty statements of ``script``, stripped, in order.

    Args:
        script: Full text of an SQL file.

    Returns:
        list[str]: Statements without their terminating ``;``.
    """
    statements: list[str] = []
    current: list[str] = []
    i = 0
    n = len(script)

    while i < n:
        ch = script[i]

        if ch in QUOTES:
            # copy the literal through to its closing quote
            j = i + 1
            while j < n:
                if script[j] == "\\" and ch != "`":
                    j += 2
                    continue
                if script[j] == ch:
                    break
                j += 1
            current.append(script[i : j + 1])
            i = j + 1
        elif _starts_line_comment(script, i):
            end = script.find("\n", i)
            i = n if end == -1 else end
        elif script.startswith("/*", i):
            end = script.find("*/", i + 2)
            stop = n if end == -1 else end + 2
            if script.startswith("/*!", i):
                current.append(script[i:stop])
            else:
                current.append(" ")
            i = stop
        elif ch == ";":
            statements.append("".join(current))
            current = []
            i += 1
        else:
            current.append(ch)
            i += 1

    statements.append("".join(current))
    return [s.strip() for s in statements if s.strip()]
