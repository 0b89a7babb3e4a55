"""텔레메트리 스냅샷 리포지토리 - DB 접근 로직"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from src.core.exceptions import DatabaseQueryException
from src.core.logging import logger
from src.repositories.models import TelemetrySnapshot


class TelemetryRepository:
    """이름 → blob 저장소"""

    def __init__(self, db: Session):
        self.db = db

    def get_payload(self, name: str) -> Optional[str]:
        """저장된 blob 조회 (없으면 None)"""
        try:
            row = self.db.query(TelemetrySnapshot).filter(TelemetrySnapshot.name == name).first()
        except Exception as e:
            logger.error(f"[Telemetry] DB read error: {type(e).__name__}: {e}")
            raise DatabaseQueryException(query=f"select telemetry_snapshots[{name}]", reason=str(e))
        return row.payload_json if row else None

    def upsert(self, name: str, payload_json: str) -> None:
        """blob 삽입/갱신"""
        try:
            row = self.db.query(TelemetrySnapshot).filter(TelemetrySnapshot.name == name).first()
            if row:
                row.payload_json = payload_json
            else:
                row = TelemetrySnapshot(name=name, payload_json=payload_json)
                self.db.add(row)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"[Telemetry] DB write error: {type(e).__name__}: {e}")
            raise DatabaseQueryException(query=f"upsert telemetry_snapshots[{name}]", reason=str(e))
