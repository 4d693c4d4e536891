# This project was developed with assistance from AI tools.
"""
Domain enums for the wholesale deal marketplace.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class UserRole(str, enum.Enum):
    WHOLESALER = "wholesaler"
    CASH_BUYER = "cash_buyer"
    ADMIN = "admin"

    @classmethod
    def self_registerable(cls) -> frozenset["UserRole"]:
        """Roles a visitor may pick at sign-up. Admins are seeded, never registered."""
        return frozenset({cls.WHOLESALER, cls.CASH_BUYER})


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DocumentType(str, enum.Enum):
    ID = "id"
    PROOF_OF_FUNDS = "proof_of_funds"
    CONTRACT = "contract"


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PropertyType(str, enum.Enum):
    SINGLE_FAMILY = "single_family"
    MULTI_FAMILY = "multi_family"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    LAND = "land"
    COMMERCIAL = "commercial"


class PropertyStatus(str, enum.Enum):
    AVAILABLE = "available"
    UNDER_CONTRACT = "under_contract"
    CLOSED = "closed"

    @classmethod
    def closable(cls) -> frozenset["PropertyStatus"]:
        """Statuses from which a deal may be closed."""
        return frozenset({cls.AVAILABLE, cls.UNDER_CONTRACT})

    @classmethod
    def valid_transitions(cls) -> dict["PropertyStatus", frozenset["PropertyStatus"]]:
        """Manual status transitions. CLOSED is only reached by closing a deal."""
        return {
            cls.AVAILABLE: frozenset({cls.UNDER_CONTRACT}),
            cls.UNDER_CONTRACT: frozenset({cls.AVAILABLE}),
            cls.CLOSED: frozenset(),
        }


class FinancingType(str, enum.Enum):
    CASH = "cash"
    FINANCING = "financing"


class ExitStrategy(str, enum.Enum):
    FLIP = "flip"
    BUY_AND_HOLD = "buy_and_hold"
    WHOLETAIL = "wholetail"
    OTHER = "other"


class ClosingTimeframe(str, enum.Enum):
    DAYS_14 = "14_days"
    DAYS_30 = "30_days"
    DAYS_60 = "60_days"
    DAYS_90 = "90_days"
