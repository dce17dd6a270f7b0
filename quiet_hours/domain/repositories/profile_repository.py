from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from quiet_hours.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from quiet_hours.models.profile_model import Profile


class ProfileRepository(SQLAlchemyRepository[Profile, str]):
    def __init__(self, db: Session):
        super().__init__(Profile, db)

    def get_by_email(self, email: str) -> Optional[Profile]:
        return self.db.scalar(select(Profile).where(Profile.email == email))
