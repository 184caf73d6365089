"""Credit Report API - Data Models"""
from .ssot import (
    Identity, Summary, CreditCard, Address, AccountRecord, NormalizedReport,
)

__all__ = [
    "Identity", "Summary", "CreditCard", "Address", "AccountRecord", "NormalizedReport",
]
