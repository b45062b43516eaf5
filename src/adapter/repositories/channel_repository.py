"""SQLAlchemy Channel Repository Implementation"""

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.channel_repository import ChannelRepository
from src.domain.channel import Channel


class SqlAlchemyChannelRepository(ChannelRepository):
    """SQLAlchemy implementation of ChannelRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_by_clinic_id(self, clinic_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(Channel)
            .where(Channel.clinic_id == clinic_id)
        )
        result = await self.session.execute(statement)
        return int(result.scalar_one())
