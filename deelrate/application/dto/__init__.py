"""Data Transfer Objects for port communication."""
from deelrate.application.dto.rates import RateQuote

__all__ = [
    "RateQuote",
]
