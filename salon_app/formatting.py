def format_currency(amount, symbol="$"):
    """Render an amount the way en-US currency is displayed, e.g. ``$1,234.50``."""
    if amount is None:
        amount = 0
    value = round(float(amount), 2)
    if value < 0:
        return f"-{symbol}{abs(value):,.2f}"
    return f"{symbol}{value:,.2f}"


def badge_label(count, cap):
    """Unread counter text for a badge; anything above ``cap`` shows as ``cap+``."""
    if count > cap:
        return f"{cap}+"
    return str(count)
