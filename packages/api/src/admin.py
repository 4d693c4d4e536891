# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for the marketplace admin console UI

Access the admin panel at: http://localhost:8000/admin

Login uses the same shared ADMIN_CONSOLE_SECRET as /api/console; any
username is accepted. When AUTH_DISABLED=true, the panel is open (dev mode).

Nothing here creates or edits rows. Verification, approval, status and
commission changes go through the API, which checks and audits each one.
"""

from db import (
    AuditEvent,
    BuyerCriteria,
    ClosedDeal,
    ContactRequest,
    Property,
    SavedDeal,
    User,
    VerificationDocument,
    engine,
)
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request
from starlette.responses import Response

from .core.config import settings
from .middleware.auth import check_console_secret


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin, keyed on the console secret."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        password = form.get("password")
        if check_console_secret(password if isinstance(password, str) else None):
            request.session.update({"console_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        if settings.AUTH_DISABLED:
            return True
        return request.session.get("console_authenticated", False)


class UserAdmin(ModelView, model=User):
    column_list = [
        User.id,
        User.username,
        User.email,
        User.role,
        User.verification_status,
        User.is_verified,
        User.created_at,
    ]
    column_details_exclude_list = [User.password_hash]
    column_searchable_list = [User.username, User.email, User.last_name]
    column_sortable_list = [User.id, User.role, User.verification_status, User.created_at]
    column_default_sort = [(User.created_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"


class VerificationDocumentAdmin(ModelView, model=VerificationDocument):
    column_list = [
        VerificationDocument.id,
        VerificationDocument.user_id,
        VerificationDocument.document_type,
        VerificationDocument.status,
        VerificationDocument.uploaded_at,
        VerificationDocument.reviewed_at,
    ]
    column_sortable_list = [
        VerificationDocument.id,
        VerificationDocument.document_type,
        VerificationDocument.status,
    ]
    column_default_sort = [(VerificationDocument.uploaded_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Verification Document"
    name_plural = "Verification Documents"
    icon = "fa-solid fa-file-upload"


class PropertyAdmin(ModelView, model=Property):
    column_list = [
        Property.id,
        Property.title,
        Property.city,
        Property.state,
        Property.contract_price,
        Property.assignment_fee,
        Property.is_approved,
        Property.status,
        Property.created_at,
    ]
    column_searchable_list = [Property.title, Property.address, Property.city]
    column_sortable_list = [Property.id, Property.status, Property.is_approved, Property.created_at]
    column_default_sort = [(Property.created_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Property"
    name_plural = "Properties"
    icon = "fa-solid fa-house"


class ClosedDealAdmin(ModelView, model=ClosedDeal):
    column_list = [
        ClosedDeal.id,
        ClosedDeal.property_id,
        ClosedDeal.seller_id,
        ClosedDeal.buyer_id,
        ClosedDeal.assignment_fee,
        ClosedDeal.commission_amount,
        ClosedDeal.commission_paid,
        ClosedDeal.closed_at,
    ]
    column_sortable_list = [ClosedDeal.id, ClosedDeal.commission_paid, ClosedDeal.closed_at]
    column_default_sort = [(ClosedDeal.closed_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Closed Deal"
    name_plural = "Closed Deals"
    icon = "fa-solid fa-handshake"


class BuyerCriteriaAdmin(ModelView, model=BuyerCriteria):
    column_list = [
        BuyerCriteria.id,
        BuyerCriteria.user_id,
        BuyerCriteria.financing_type,
        BuyerCriteria.min_price,
        BuyerCriteria.max_price,
    ]
    can_create = False
    can_edit = False
    name = "Buyer Criteria"
    name_plural = "Buyer Criteria"
    icon = "fa-solid fa-filter"


class SavedDealAdmin(ModelView, model=SavedDeal):
    column_list = [SavedDeal.id, SavedDeal.user_id, SavedDeal.property_id, SavedDeal.saved_at]
    can_create = False
    can_edit = False
    name = "Saved Deal"
    name_plural = "Saved Deals"
    icon = "fa-solid fa-bookmark"


class ContactRequestAdmin(ModelView, model=ContactRequest):
    column_list = [
        ContactRequest.id,
        ContactRequest.property_id,
        ContactRequest.sender_id,
        ContactRequest.recipient_id,
        ContactRequest.is_read,
        ContactRequest.created_at,
    ]
    column_default_sort = [(ContactRequest.created_at, True)]
    can_create = False
    can_edit = False
    name = "Contact Request"
    name_plural = "Contact Requests"
    icon = "fa-solid fa-envelope"


class AuditEventAdmin(ModelView, model=AuditEvent):
    column_list = [
        AuditEvent.id,
        AuditEvent.timestamp,
        AuditEvent.event_type,
        AuditEvent.actor_id,
        AuditEvent.actor_role,
        AuditEvent.entity,
        AuditEvent.entity_id,
    ]
    column_sortable_list = [AuditEvent.id, AuditEvent.timestamp, AuditEvent.event_type]
    column_default_sort = [(AuditEvent.timestamp, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Audit Event"
    name_plural = "Audit Events"
    icon = "fa-solid fa-shield-alt"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(
        secret_key=settings.SQLADMIN_SECRET_KEY,
    )
    admin = Admin(app, engine, title="Wholesale Deals Admin", authentication_backend=auth_backend)

    admin.add_view(UserAdmin)
    admin.add_view(VerificationDocumentAdmin)
    admin.add_view(PropertyAdmin)
    admin.add_view(ClosedDealAdmin)
    admin.add_view(BuyerCriteriaAdmin)
    admin.add_view(SavedDealAdmin)
    admin.add_view(ContactRequestAdmin)
    admin.add_view(AuditEventAdmin)

    return admin
