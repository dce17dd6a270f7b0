import datetime as dt
from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from quiet_hours.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from quiet_hours.models.quiet_block_model import QuietBlock


class QuietBlockRepository(SQLAlchemyRepository[QuietBlock, str]):
    def __init__(self, db: Session):
        super().__init__(QuietBlock, db)

    def get_for_owner(self, quiet_block_id: str, user_id: str) -> Optional[QuietBlock]:
        stmt = select(QuietBlock).where(
            QuietBlock.id == quiet_block_id, QuietBlock.user_id == user_id
        )
        return self.db.scalar(stmt)

    def list_for_owner(
        self,
        user_id: str,
        *,
        include_inactive: bool = False,
        starting_after: Optional[dt.datetime] = None,
    ) -> List[QuietBlock]:
        """Owner's blocks ordered by date then start time."""
        conditions = [QuietBlock.user_id == user_id]
        if not include_inactive:
            conditions.append(QuietBlock.is_active.is_(True))
        if starting_after is not None:
            day, clock = starting_after.date(), starting_after.time().replace(tzinfo=None)
            conditions.append(
                or_(
                    QuietBlock.date > day,
                    and_(QuietBlock.date == day, QuietBlock.start_time >= clock),
                )
            )

        stmt = (
            select(QuietBlock)
            .where(and_(*conditions))
            .order_by(QuietBlock.date, QuietBlock.start_time)
        )
        return list(self.db.scalars(stmt).all())
