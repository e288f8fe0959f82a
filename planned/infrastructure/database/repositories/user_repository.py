"""SQL implementation of the user lookup used by the TimeTac syncs."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ....domain.planning.repositories.user_repository import UserRepository
from ....domain.planning.value_objects.integration import TimeTacUserLink
from ....domain.shared.exceptions import RepositoryError
from ..sqlmodel_entities import UserModel


class SQLUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_tenant_with_timetac_id(self, tenant_id: UUID) -> list[TimeTacUserLink]:
        try:
            result = await self.session.execute(
                select(UserModel.id, UserModel.timetac_id).where(
                    UserModel.tenant_id == tenant_id,
                    UserModel.timetac_id.isnot(None),
                )
            )
            return [
                TimeTacUserLink(user_id=user_id, timetac_id=timetac_id)
                for user_id, timetac_id in result.all()
            ]
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Database error during find_by_tenant_with_timetac_id: {str(e)}",
                "find_by_tenant_with_timetac_id",
            ) from e
