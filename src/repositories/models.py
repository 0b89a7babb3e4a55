"""데이터베이스 모델"""
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func
from src.core.database import Base


class TelemetrySnapshot(Base):
    """텔레메트리 스냅샷 테이블

    - name: 레코드 이름 (terms, invocations, start_time)
    - payload_json: 직렬화된 레코드 (불투명 blob)
    """

    __tablename__ = "telemetry_snapshots"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True, index=True)
    payload_json = Column(Text, nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<TelemetrySnapshot(name={self.name}, updated_at={self.updated_at})>"
