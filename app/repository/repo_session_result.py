from datetime import datetime
from typing import List, Optional
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.models.model_session_result import SessionResult

class SessionResultRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def append(self, result: SessionResult) -> SessionResult:
        """Stage a new result. The caller commits together with the profile update."""
        self.db.add(result)
        return result

    def query_by_user(
        self,
        user_id,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[SessionResult]:
        """Results of a user ordered oldest first, optionally within [start, end)."""
        query = self.db.query(SessionResult).filter(SessionResult.user_id == user_id)
        if start is not None:
            query = query.filter(SessionResult.recorded_at >= start)
        if end is not None:
            query = query.filter(SessionResult.recorded_at < end)
        return query.order_by(SessionResult.recorded_at.asc()).all()
