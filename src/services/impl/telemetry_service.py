"""텔레메트리 영속화 Service

세 레코드를 각각 독립적으로 저장/복원합니다.
- terms: 검색어 → 타임스탬프 목록
- invocations: 메서드 → 타임스탬프 목록
- start_time: 시작 시각

모든 실패(DB 오류, 레코드 없음, 손상된 payload)는 로그를 남기고 False를
반환하며, 메모리 상태는 바뀌지 않습니다.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, List, Optional

from sqlalchemy.orm import Session

from src.core.database import SessionLocal
from src.core.exceptions import DatabaseException
from src.core.logging import logger
from src.engine.ledger import RequestLedger
from src.repositories.impl.telemetry_repository import TelemetryRepository

TERMS_RECORD = "terms"
INVOCATIONS_RECORD = "invocations"
START_TIME_RECORD = "start_time"


def _decode_series(payload: str) -> Dict[str, List[float]]:
    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("payload must be an object")
    decoded: Dict[str, List[float]] = {}
    for key, times in data.items():
        if not isinstance(times, list):
            raise ValueError(f"timestamps for '{key}' must be a list")
        decoded[str(key)] = [float(t) for t in times]
    return decoded


def _decode_start_time(payload: str) -> float:
    data = json.loads(payload)
    if not isinstance(data, dict) or START_TIME_RECORD not in data:
        raise ValueError("payload must contain start_time")
    return float(data[START_TIME_RECORD])


class TelemetryService:
    """RequestLedger ↔ TelemetryRepository"""

    def __init__(
        self,
        ledger: RequestLedger,
        session_factory: Callable[[], Session] = SessionLocal,
    ):
        self.ledger = ledger
        self._session_factory = session_factory

    @contextmanager
    def _repository(self) -> Generator[TelemetryRepository, None, None]:
        db = self._session_factory()
        try:
            yield TelemetryRepository(db)
        finally:
            db.close()

    # ------------------------------------------------------------------
    # 저장
    # ------------------------------------------------------------------

    def _save(self, name: str, payload: Any) -> bool:
        try:
            encoded = json.dumps(payload, ensure_ascii=False)
            with self._repository() as repo:
                repo.upsert(name, encoded)
            logger.info(f"[Telemetry] saved '{name}'")
            return True
        except (DatabaseException, TypeError, ValueError) as e:
            logger.error(f"[Telemetry] could not save '{name}': {e}")
            return False
        except Exception as e:
            logger.error(f"[Telemetry] could not save '{name}': {type(e).__name__}: {e}", exc_info=True)
            return False

    def save_terms(self) -> bool:
        return self._save(TERMS_RECORD, self.ledger.snapshot_terms())

    def save_invocations(self) -> bool:
        return self._save(INVOCATIONS_RECORD, self.ledger.snapshot_invocations())

    def save_start_time(self) -> bool:
        return self._save(START_TIME_RECORD, {START_TIME_RECORD: self.ledger.start_time})

    def save_all(self) -> Dict[str, bool]:
        return {
            TERMS_RECORD: self.save_terms(),
            INVOCATIONS_RECORD: self.save_invocations(),
            START_TIME_RECORD: self.save_start_time(),
        }

    # ------------------------------------------------------------------
    # 복원
    # ------------------------------------------------------------------

    def _load_payload(self, name: str) -> Optional[str]:
        try:
            with self._repository() as repo:
                payload = repo.get_payload(name)
        except DatabaseException as e:
            logger.error(f"[Telemetry] could not load '{name}': {e}")
            return None
        except Exception as e:
            logger.error(f"[Telemetry] could not load '{name}': {type(e).__name__}: {e}", exc_info=True)
            return None
        if payload is None:
            logger.warning(f"[Telemetry] no saved record '{name}'")
        return payload

    def load_terms(self) -> bool:
        payload = self._load_payload(TERMS_RECORD)
        if payload is None:
            return False
        try:
            terms = _decode_series(payload)
        except (TypeError, ValueError) as e:
            logger.error(f"[Telemetry] corrupt record '{TERMS_RECORD}': {e}")
            return False
        self.ledger.restore_terms(terms)
        return True

    def load_invocations(self) -> bool:
        payload = self._load_payload(INVOCATIONS_RECORD)
        if payload is None:
            return False
        try:
            invocations = _decode_series(payload)
        except (TypeError, ValueError) as e:
            logger.error(f"[Telemetry] corrupt record '{INVOCATIONS_RECORD}': {e}")
            return False
        self.ledger.restore_invocations(invocations)
        return True

    def load_start_time(self) -> bool:
        payload = self._load_payload(START_TIME_RECORD)
        if payload is None:
            return False
        try:
            start_time = _decode_start_time(payload)
        except (TypeError, ValueError) as e:
            logger.error(f"[Telemetry] corrupt record '{START_TIME_RECORD}': {e}")
            return False
        self.ledger.restore_start_time(start_time)
        return True

    def load_all(self) -> Dict[str, bool]:
        return {
            TERMS_RECORD: self.load_terms(),
            INVOCATIONS_RECORD: self.load_invocations(),
            START_TIME_RECORD: self.load_start_time(),
        }
