"""
Edit distance helpers used by fuzzy vocabulary matching and the index.
"""

from typing import Any


def levenshtein(a: Any, b: Any) -> int:
    """
    Classic Levenshtein distance (insert/delete/substitute cost 1).

    The table has len(b)+1 rows and len(a)+1 columns.
    """
    a = str(a)
    b = str(b)

    table = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        table[i][0] = i
    for j in range(len(a) + 1):
        table[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j],      # deletion
                    table[i][j - 1],      # insertion
                    table[i - 1][j - 1],  # substitution
                )
    return table[len(b)][len(a)]
