from decimal import Decimal


def format_number(amount: Decimal) -> str:
    """Format number pt-BR style (1.234,56)"""
    return f"{amount:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")

def format_currency(amount: Decimal, symbol: str = "R$") -> str:
    """Format currency amount"""
    return f"{symbol} {format_number(amount)}"

def format_percentage(rate: Decimal) -> str:
    """Format percentage"""
    return f"{format_number(rate)}%"

def format_hours(hours: Decimal) -> str:
    return f"{format_number(hours)}h"

def format_days_ratio(rest_days: int, working_days: int) -> str:
    """Rest days over working days, as shown on DSR rows"""
    return f"{rest_days}/{working_days}"
