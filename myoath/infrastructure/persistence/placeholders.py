"""
MyOath – Placeholder translation
=================================
La API pública usa "?" (qmark). PyMySQL/aiomysql usan "%s" y aplican
`sql % args`, así que:

- "?" fuera de literales, identificadores citados y comentarios → "%s"
- todo "%" literal → "%%" (también dentro de literales)
"""

from __future__ import annotations

_QUOTES = ("'", '"', "`")


def _is_line_comment(sql: str, i: int) -> bool:
    if sql[i] == "#":
        return True
    # MySQL exige espacio (o fin) después de "--"
    return sql.startswith("--", i) and (i + 2 >= len(sql) or sql[i + 2].isspace())


def qmark_to_format(sql: str) -> str:
    """Traduce una sentencia con placeholders "?" al paramstyle "format"."""
    out = []
    quote = None
    i, n = 0, len(sql)
    while i < n:
        ch = sql[i]
        if ch == "%":
            out.append("%%")
        elif quote is not None:
            out.append(ch)
            if ch == "\\" and quote != "`" and i + 1 < n:
                i += 1
                out.append("%%" if sql[i] == "%" else sql[i])
            elif ch == quote:
                # '' dentro de un literal: cierra y reabre en la siguiente vuelta
                quote = None
        elif ch in _QUOTES:
            quote = ch
            out.append(ch)
        elif ch == "?":
            out.append("%s")
        elif _is_line_comment(sql, i):
            end = sql.find("\n", i)
            end = n if end == -1 else end
            out.append(sql[i:end].replace("%", "%%"))
            i = end
            continue
        elif sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.append(sql[i:end].replace("%", "%%"))
            i = end
            continue
        else:
            out.append(ch)
        i += 1
    return "".join(out)
