"""Money formatting helpers."""


def format_vnd(amount: int) -> str:
    """
    Format an integer amount the way vi-VN renders VND.

    >>> format_vnd(150000)
    '150.000 ₫'
    """
    return f"{amount:,}".replace(",", ".") + " ₫"
