"""
Credit Report API - Normalized Report Models

NormalizedReport is the only structure handed to storage and display.
Nothing downstream of the normalizer reads the raw bureau tree.

Every leaf is raw text copied from the bureau document. Missing values are
the empty string, never None.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Tuple


# =============================================================================
# IDENTITY & SUMMARY
# =============================================================================

@dataclass(frozen=True)
class Identity:
    """Borrower identity as reported by the bureau."""
    name: str = ""
    mobileNumber: str = ""
    pan: str = ""
    creditScore: str = ""


@dataclass(frozen=True)
class Summary:
    """Aggregate account counts, outstanding balances and recent enquiries."""
    totalAccounts: str = ""
    activeAccounts: str = ""
    closedAccounts: str = ""
    currentBalanceAmount: str = ""
    securedAccountsAmount: str = ""
    unsecuredAccountsAmount: str = ""
    last7DaysCreditEnquiries: str = ""


# =============================================================================
# ACCOUNTS
# =============================================================================

@dataclass(frozen=True)
class CreditCard:
    bankName: str = ""
    accountNumber: str = ""
    accountType: str = ""
    portfolioType: str = ""


@dataclass(frozen=True)
class Address:
    """Primary holder address of an account (first listed entry only)."""
    line1: str = ""
    line2: str = ""
    line3: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""


@dataclass(frozen=True)
class AccountRecord:
    """Single tradeline, one per account-detail element in the report."""
    creditCard: CreditCard = field(default_factory=CreditCard)
    openDate: str = ""
    closedDate: str = ""
    creditLimit: str = ""
    highestCredit: str = ""
    currentBalance: str = ""
    amountOverdue: str = ""
    accountStatus: str = ""
    dateReported: str = ""
    address: Address = field(default_factory=Address)


# =============================================================================
# NORMALIZED REPORT
# =============================================================================

@dataclass(frozen=True)
class NormalizedReport:
    """
    Output of the normalizer.

    Accounts keep the order in which they appear in the bureau document.
    """
    identity: Identity = field(default_factory=Identity)
    summary: Summary = field(default_factory=Summary)
    accounts: Tuple[AccountRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Field-named JSON-ready form used by the API and the store."""
        data = asdict(self)
        data["accounts"] = list(data["accounts"])
        return data
