"""SQLAlchemy-backed visitor counter."""
from sqlalchemy import update

from portfolio.infrastructure.database.models import VisitorCounterModel

_COUNTER_ID = 1


class PgVisitorRepository:
    def __init__(self, session_factory):
        self._sf = session_factory

    def get_count(self) -> int:
        with self._sf() as session:
            row = session.get(VisitorCounterModel, _COUNTER_ID)
            return row.count if row else 0

    def increment(self) -> int:
        with self._sf() as session:
            if session.get(VisitorCounterModel, _COUNTER_ID) is None:
                session.add(VisitorCounterModel(id=_COUNTER_ID, count=0))
                session.flush()
            # Increment in SQL so concurrent requests do not lose updates.
            session.execute(
                update(VisitorCounterModel)
                .where(VisitorCounterModel.id == _COUNTER_ID)
                .values(count=VisitorCounterModel.count + 1)
            )
            session.commit()
            return session.get(VisitorCounterModel, _COUNTER_ID, populate_existing=True).count
