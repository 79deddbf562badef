"""Translation of operator-facing title globs to SQL LIKE patterns."""

LIKE_ESCAPE = "\\"


def glob_to_store_pattern(glob: str) -> str:
    """Translate a shell-style glob to a LIKE pattern.

    ``*`` becomes ``%`` and ``?`` becomes ``_``. Characters that LIKE treats
    specially (``%``, ``_`` and the escape character itself) are escaped
    with ``LIKE_ESCAPE`` so they match literally.
    """
    out = []
    for ch in glob:
        if ch == "*":
            out.append("%")
        elif ch == "?":
            out.append("_")
        elif ch in ("%", "_", LIKE_ESCAPE):
            out.append(LIKE_ESCAPE + ch)
        else:
            out.append(ch)
    return "".join(out)
