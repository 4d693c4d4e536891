# This project was developed with assistance from AI tools.
"""Per-entity repositories over an AsyncSession.

Pure CRUD + filtering. No business rules live here: visibility, ownership
and lifecycle checks belong to the api services that call these. Repositories
flush (so ids are assigned) but never commit; the caller owns the transaction.
"""

from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Base
from .enums import DocumentStatus, PropertyStatus, PropertyType, UserRole, VerificationStatus
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

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Generic id-keyed access for one mapped class."""

    model: ClassVar[type[Base]]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, entity_id: int) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def list(
        self,
        *criteria: ColumnElement[bool],
        order_by: Any = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Sequence[ModelT]:
        stmt = select(self.model).where(*criteria)
        stmt = stmt.order_by(order_by if order_by is not None else self.model.id.desc())
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count(self.model.id)).where(*criteria)
        return (await self.session.execute(stmt)).scalar() or 0


class UserRepository(Repository[User]):
    model = User

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def search(
        self,
        *,
        role: UserRole | None = None,
        verification_status: VerificationStatus | None = None,
    ) -> Sequence[User]:
        criteria = []
        if role is not None:
            criteria.append(User.role == role)
        if verification_status is not None:
            criteria.append(User.verification_status == verification_status)
        return await self.list(*criteria, order_by=User.id)


class VerificationDocumentRepository(Repository[VerificationDocument]):
    model = VerificationDocument

    async def list_for_user(self, user_id: int) -> Sequence[VerificationDocument]:
        return await self.list(VerificationDocument.user_id == user_id)

    async def list_all(self, status: DocumentStatus | None = None) -> Sequence[VerificationDocument]:
        if status is None:
            return await self.list()
        return await self.list(VerificationDocument.status == status)


class BuyerCriteriaRepository(Repository[BuyerCriteria]):
    model = BuyerCriteria

    async def get_for_user(self, user_id: int) -> BuyerCriteria | None:
        result = await self.session.execute(
            select(BuyerCriteria).where(BuyerCriteria.user_id == user_id)
        )
        return result.scalar_one_or_none()


class PropertyRepository(Repository[Property]):
    model = Property

    @staticmethod
    def _criteria(
        *,
        owner_id: int | None = None,
        property_type: PropertyType | None = None,
        state: str | None = None,
        city: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
        status: PropertyStatus | None = None,
        is_approved: bool | None = None,
    ) -> list[ColumnElement[bool]]:
        """Exact-match AND on scalar fields; inclusive range on contract price."""
        criteria: list[ColumnElement[bool]] = []
        if owner_id is not None:
            criteria.append(Property.user_id == owner_id)
        if property_type is not None:
            criteria.append(Property.property_type == property_type)
        if state is not None:
            criteria.append(Property.state == state)
        if city is not None:
            criteria.append(Property.city == city)
        if min_price is not None:
            criteria.append(Property.contract_price >= min_price)
        if max_price is not None:
            criteria.append(Property.contract_price <= max_price)
        if status is not None:
            criteria.append(Property.status == status)
        if is_approved is not None:
            criteria.append(Property.is_approved.is_(is_approved))
        return criteria

    async def search(
        self,
        *,
        offset: int = 0,
        limit: int | None = None,
        **filters: Any,
    ) -> tuple[Sequence[Property], int]:
        criteria = self._criteria(**filters)
        total = await self.count(*criteria)
        items = await self.list(*criteria, offset=offset, limit=limit)
        return items, total

    async def list_for_owner(self, owner_id: int) -> Sequence[Property]:
        return await self.list(Property.user_id == owner_id)


class ClosedDealRepository(Repository[ClosedDeal]):
    model = ClosedDeal

    async def list_for_user(self, user_id: int) -> Sequence[ClosedDeal]:
        return await self.list(or_(ClosedDeal.seller_id == user_id, ClosedDeal.buyer_id == user_id))

    async def list_for_property(self, property_id: int) -> Sequence[ClosedDeal]:
        return await self.list(ClosedDeal.property_id == property_id)


class SavedDealRepository(Repository[SavedDeal]):
    model = SavedDeal

    async def list_for_user(self, user_id: int) -> Sequence[SavedDeal]:
        return await self.list(SavedDeal.user_id == user_id)

    async def delete(self, saved_deal: SavedDeal) -> None:
        await self.session.delete(saved_deal)
        await self.session.flush()


class ContactRequestRepository(Repository[ContactRequest]):
    model = ContactRequest

    async def list_for_user(self, user_id: int) -> Sequence[ContactRequest]:
        return await self.list(
            or_(ContactRequest.sender_id == user_id, ContactRequest.recipient_id == user_id)
        )


class AuditEventRepository(Repository[AuditEvent]):
    model = AuditEvent

    async def list_for_entity(
        self, entity: str | None = None, entity_id: int | None = None
    ) -> Sequence[AuditEvent]:
        criteria = []
        if entity is not None:
            criteria.append(AuditEvent.entity == entity)
        if entity_id is not None:
            criteria.append(AuditEvent.entity_id == entity_id)
        return await self.list(*criteria, order_by=AuditEvent.id)
