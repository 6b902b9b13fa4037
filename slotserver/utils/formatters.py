def format_currency(amount_minor: int) -> str:
    """Форматирование валюты"""
    return f"${amount_minor / 100:,.2f}"


def format_percent(fraction: float, digits: int = 2) -> str:
    """Доля как проценты"""
    return f"{fraction * 100:.{digits}f}%"
