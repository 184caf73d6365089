"""
Credit Report API - Bureau Report Normalizer

Maps an Experian style INProfileResponse tree onto NormalizedReport.
This module owns all knowledge of where fields live in the bureau document;
path_resolver only knows how to read them.

Every subtree lookup defaults to an empty mapping, so a missing section
blanks its own fields and nothing else.
"""
from __future__ import annotations
import logging
from typing import Any, Dict

from ...models.ssot import (
    NormalizedReport, Identity, Summary, AccountRecord, CreditCard, Address,
)
from .path_resolver import resolve, first_child, children

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

ENVELOPE_KEY = "INProfileResponse"

SUMMARY_FIELDS = {
    # output field: (summary child, source field)
    "totalAccounts": ("Credit_Account", "CreditAccountTotal"),
    "activeAccounts": ("Credit_Account", "CreditAccountActive"),
    "closedAccounts": ("Credit_Account", "CreditAccountClosed"),
    "currentBalanceAmount": ("Total_Outstanding_Balance", "Outstanding_Balance_All"),
    "securedAccountsAmount": ("Total_Outstanding_Balance", "Outstanding_Balance_Secured"),
    "unsecuredAccountsAmount": ("Total_Outstanding_Balance", "Outstanding_Balance_UnSecured"),
}

CREDIT_CARD_FIELDS = {
    "bankName": "Subscriber_Name",
    "accountNumber": "Account_Number",
    "accountType": "Account_Type",
    "portfolioType": "Portfolio_Type",
}

ACCOUNT_FIELDS = {
    "openDate": "Open_Date",
    "closedDate": "Date_Closed",
    "creditLimit": "Credit_Limit_Amount",
    "highestCredit": "Highest_Credit_or_Original_Loan_Amount",
    "currentBalance": "Current_Balance",
    "amountOverdue": "Amount_Past_Due",
    "accountStatus": "Account_Status",
    "dateReported": "Date_Reported",
}

ADDRESS_FIELDS = {
    "line1": "First_Line_Of_Address_non_normalized",
    "line2": "Second_Line_Of_Address_non_normalized",
    "line3": "Third_Line_Of_Address_non_normalized",
    "city": "City_non_normalized",
    "state": "State_non_normalized",
    "pincode": "ZIP_Postal_Code_non_normalized",
}


# =============================================================================
# SECTION EXTRACTORS
# =============================================================================

def _extract_identity(root: Dict[str, Any]) -> Identity:
    applicant = first_child(
        first_child(
            first_child(root, "Current_Application"),
            "Current_Application_Details",
        ),
        "Current_Applicant_Details",
    )
    first_holder = first_child(
        first_child(first_child(root, "CAIS_Account"), "CAIS_Account_DETAILS"),
        "CAIS_Holder_Details",
    )
    full_name = f"{resolve(applicant, 'First_Name')} {resolve(applicant, 'Last_Name')}"

    return Identity(
        name=full_name.strip(),
        mobileNumber=resolve(applicant, "MobilePhoneNumber"),
        pan=resolve(first_holder, "Income_TAX_PAN"),
        creditScore=resolve(first_child(root, "SCORE"), "BureauScore"),
    )


def _extract_summary(root: Dict[str, Any]) -> Summary:
    cais_summary = first_child(first_child(root, "CAIS_Account"), "CAIS_Summary")
    fields = {
        name: resolve(first_child(cais_summary, section), source)
        for name, (section, source) in SUMMARY_FIELDS.items()
    }
    # Enquiry totals sit beside CAIS_Account, not under it
    caps_summary = first_child(root, "TotalCAPS_Summary")
    fields["last7DaysCreditEnquiries"] = resolve(caps_summary, "TotalCAPSLast7Days")
    return Summary(**fields)


def _extract_account(account: Any) -> AccountRecord:
    """Map one CAIS_Account_DETAILS element; only its first holder address is kept."""
    address = first_child(account, "CAIS_Holder_Address_Details")

    return AccountRecord(
        creditCard=CreditCard(**{
            name: resolve(account, source) for name, source in CREDIT_CARD_FIELDS.items()
        }),
        address=Address(**{
            name: resolve(address, source) for name, source in ADDRESS_FIELDS.items()
        }),
        **{name: resolve(account, source) for name, source in ACCOUNT_FIELDS.items()},
    )


# =============================================================================
# ENTRY POINT
# =============================================================================

def normalize(parsed: Any) -> NormalizedReport:
    """
    Build a NormalizedReport from a parsed bureau document.

    Total function: a tree that is not a mapping or lacks the
    INProfileResponse envelope gives an all-empty report.
    """
    root = first_child(parsed, ENVELOPE_KEY)
    if not root:
        logger.warning(f"{ENVELOPE_KEY} envelope empty or missing in parsed report; returning empty report")
        return NormalizedReport()

    accounts = tuple(
        _extract_account(account)
        for account in children(first_child(root, "CAIS_Account"), "CAIS_Account_DETAILS")
    )
    logger.debug(f"Normalized bureau report with {len(accounts)} accounts")

    return NormalizedReport(
        identity=_extract_identity(root),
        summary=_extract_summary(root),
        accounts=accounts,
    )
