"""
str2quantity.core.utils
=======================

Helpers for displaying dimensions in a readable scientific format
(e.g. 'kg·m/s²'). Used by `Dimension.__str__` and therefore by every
error message that names a dimension.
"""

from __future__ import annotations

from typing import List, Sequence

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def format_exponents(exponents: Sequence[int]) -> str:
    """
    Turn SI exponents (L,M,T,I,Θ,N,J) into 'kg·m/s²' style.
    Conventional order: M, L, T, I, Θ, N, J. All-zero exponents give '1'.
    """
    # indices: L=0 M=1 T=2 I=3 Θ=4 N=5 J=6
    labels: List[str] = ["m", "kg", "s", "A", "K", "mol", "cd"]
    order: List[int] = [1, 0, 2, 3, 4, 5, 6]  # M, L, T, I, Θ, N, J  (fixed order)

    num: List[str] = []
    den: List[str] = []
    for i in order:
        e = exponents[i]
        if e > 0:
            num.append(labels[i] + _sup(e))
        elif e < 0:
            den.append(labels[i] + _sup(-e))

    numerator = "·".join(num) if num else "1"
    denominator = "·".join(den)
    return f"{numerator}/{denominator}" if denominator else numerator


def format_dim(exponents: Sequence[int], extra: str = "") -> str:
    """
    Like `format_exponents`, with the non-SI discriminator appended.

    A pure discriminator dimension prints as the discriminator alone
    ('storage'); a mixed one as 'm [storage]'.
    """
    base = format_exponents(exponents)
    if not extra:
        return base
    if base == "1":
        return extra
    return f"{base} [{extra}]"
