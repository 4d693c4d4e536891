# This project was developed with assistance from AI tools.
"""
Wholesale deal marketplace -- domain models

Users and their verification documents, wholesaler property listings,
buyer bookmarks/criteria/contact requests, closed deals with commission,
and an append-only audit trail.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import (
    ClosingTimeframe,
    DocumentStatus,
    DocumentType,
    ExitStrategy,
    FinancingType,
    PropertyStatus,
    PropertyType,
    UserRole,
    VerificationStatus,
)


def utcnow() -> datetime:
    return datetime.now(UTC)


def _enum(enum_cls, name: str) -> Enum:
    """Store enum *values* (e.g. 'cash_buyer') as plain strings."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=50,
        values_callable=lambda members: [m.value for m in members],
    )


class User(Base):
    """Marketplace account. Verification state is changed only through set_verification()."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(_enum(UserRole, "user_role"), nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    verification_status = Column(
        _enum(VerificationStatus, "verification_status"),
        nullable=False,
        default=VerificationStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    documents = relationship("VerificationDocument", back_populates="user")
    properties = relationship("Property", back_populates="owner")

    def set_verification(self, status: VerificationStatus) -> None:
        """Set status and the derived is_verified flag together."""
        self.verification_status = status
        self.is_verified = status == VerificationStatus.VERIFIED

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"


class VerificationDocument(Base):
    """Proof artifact (ID, proof of funds, sample contract) awaiting admin review."""

    __tablename__ = "verification_documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    document_type = Column(_enum(DocumentType, "document_type"), nullable=False)
    file_path = Column(String(500), nullable=False)
    status = Column(
        _enum(DocumentStatus, "document_status"),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    reviewed_by = Column(Integer, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="documents")

    def __repr__(self):
        return f"<VerificationDocument(id={self.id}, type='{self.document_type}', status='{self.status}')>"


class BuyerCriteria(Base):
    """A cash buyer's stated preferences. One row per user."""

    __tablename__ = "buyer_criteria"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    locations = Column(JSON, nullable=False, default=list)
    property_types = Column(JSON, nullable=False, default=list)
    min_price = Column(Integer, nullable=True)
    max_price = Column(Integer, nullable=True)
    financing_type = Column(_enum(FinancingType, "financing_type"), nullable=False)
    exit_strategy = Column(_enum(ExitStrategy, "exit_strategy"), nullable=True)
    closing_timeframe = Column(_enum(ClosingTimeframe, "closing_timeframe"), nullable=True)

    def __repr__(self):
        return f"<BuyerCriteria(user_id={self.user_id}, financing='{self.financing_type}')>"


class Property(Base):
    """A wholesaler's listing of an assignable purchase contract."""

    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(50), nullable=False, index=True)
    zip_code = Column(String(20), nullable=False)
    property_type = Column(_enum(PropertyType, "property_type"), nullable=False)
    contract_price = Column(Integer, nullable=False)
    arv = Column(Integer, nullable=False)
    repair_cost = Column(Integer, nullable=False)
    assignment_fee = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    contract_document = Column(String(500), nullable=False)
    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    status = Column(
        _enum(PropertyStatus, "property_status"),
        nullable=False,
        default=PropertyStatus.AVAILABLE,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="properties")

    def __repr__(self):
        return f"<Property(id={self.id}, status='{self.status}', approved={self.is_approved})>"


class ClosedDeal(Base):
    """Completed contract assignment with the platform commission owed on it."""

    __tablename__ = "closed_deals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    assignment_fee = Column(Integer, nullable=False)
    commission_amount = Column(Integer, nullable=False)
    commission_paid = Column(Boolean, nullable=False, default=False)
    commission_paid_at = Column(DateTime(timezone=True), nullable=True)
    proof_document = Column(String(500), nullable=False)
    closed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<ClosedDeal(id={self.id}, property_id={self.property_id}, commission={self.commission_amount})>"


class SavedDeal(Base):
    """A buyer's bookmark of a property. Duplicate saves are allowed."""

    __tablename__ = "saved_deals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    saved_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<SavedDeal(user_id={self.user_id}, property_id={self.property_id})>"


class ContactRequest(Base):
    """Message from a user to a property's owner."""

    __tablename__ = "contact_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<ContactRequest(id={self.id}, from={self.sender_id}, to={self.recipient_id})>"


class AuditEvent(Base):
    """Append-only audit trail of admin decisions and lifecycle transitions."""

    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    actor_id = Column(Integer, nullable=True)
    actor_role = Column(String(50), nullable=True)
    event_type = Column(String(100), nullable=False, index=True)
    entity = Column(String(50), nullable=False, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    event_data = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<AuditEvent(id={self.id}, type='{self.event_type}')>"
