# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import (
    Base,
    DatabaseService,
    SessionLocal,
    build_engine,
    build_sessionmaker,
    engine,
    get_db,
    get_db_service,
    init_models,
)
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
from .models import (
    AuditEvent,
    BuyerCriteria,
    ClosedDeal,
    ContactRequest,
    Property,
    SavedDeal,
    User,
    VerificationDocument,
)

__all__ = [
    "Base",
    "DatabaseService",
    "SessionLocal",
    "build_engine",
    "build_sessionmaker",
    "engine",
    "get_db",
    "get_db_service",
    "init_models",
    "__version__",
    # Enums
    "UserRole",
    "VerificationStatus",
    "DocumentType",
    "DocumentStatus",
    "PropertyType",
    "PropertyStatus",
    "FinancingType",
    "ExitStrategy",
    "ClosingTimeframe",
    # Models
    "AuditEvent",
    "BuyerCriteria",
    "ClosedDeal",
    "ContactRequest",
    "Property",
    "SavedDeal",
    "User",
    "VerificationDocument",
]
