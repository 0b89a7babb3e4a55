"""텔레메트리 주기 저장 스케줄러"""

from typing import Dict, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.core.config import settings
from src.core.logging import logger
from src.services.impl.telemetry_service import TelemetryService


class TelemetrySnapshotScheduler:
    """원장 스냅샷을 일정 간격으로 DB에 저장"""

    JOB_ID = "telemetry_snapshot"

    def __init__(self, telemetry: TelemetryService, interval_seconds: Optional[int] = None):
        self.telemetry = telemetry
        self.interval_seconds = (
            settings.telemetry_autosave_seconds if interval_seconds is None else interval_seconds
        )
        self._scheduler: Optional[BackgroundScheduler] = None

    def run_snapshot(self) -> Dict[str, bool]:
        """스냅샷 1회 실행"""
        logger.info("[Scheduler] Saving telemetry snapshot...")
        results = self.telemetry.save_all()
        failed = [name for name, ok in results.items() if not ok]
        if failed:
            logger.warning(f"[Scheduler] Telemetry snapshot incomplete: failed={failed}")
        else:
            logger.info("[Scheduler] Telemetry snapshot saved")
        return results

    def start(self) -> Optional[BackgroundScheduler]:
        """APScheduler 백그라운드 작업 등록 (interval이 0이면 비활성)"""
        if self.interval_seconds <= 0:
            logger.info("[Scheduler] Telemetry autosave disabled")
            return None
        if self._scheduler is not None:
            return self._scheduler

        scheduler = BackgroundScheduler()
        scheduler.add_job(
            self.run_snapshot,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=self.JOB_ID,
            name="Telemetry Snapshot",
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler

        logger.info(f"[Scheduler] Telemetry snapshot job scheduled every {self.interval_seconds}s")
        return scheduler

    def shutdown(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("[Scheduler] Telemetry snapshot job stopped")
