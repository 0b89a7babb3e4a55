"""데이터베이스 연결 및 세션 관리 (텔레메트리 스냅샷 저장소)"""
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from src.core.config import settings
from src.core.exceptions import DatabaseConnectionException
from src.core.logging import logger

# SQLAlchemy Base
Base = declarative_base()


def _build_engine(database_url: str):
    """DB URL에 맞는 엔진 생성

    SQLite는 스레드 간 커넥션 공유를 허용하고 파일 디렉토리를 미리 만든다.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            try:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                # 연결 시점에 init_db가 실패를 보고함
                logger.warning(f"Could not create database directory: {e}")
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=5,
        max_overflow=10
    )


engine = _build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """데이터베이스 테이블 초기화

    Raises:
        DatabaseConnectionException: 저장소를 열 수 없거나 테이블 생성 실패
    """
    # 모델 등록을 위해 import
    from src.repositories import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise DatabaseConnectionException(reason=str(e))
