"""Alembic 마이그레이션: TelemetrySnapshot 테이블 추가"""
from alembic import op
import sqlalchemy as sa


def upgrade():
    """텔레메트리 스냅샷 테이블 생성 (레코드 이름당 1행)"""
    op.create_table(
        'telemetry_snapshots',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('payload_json', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_telemetry_snapshots_id', 'telemetry_snapshots', ['id'])
    op.create_index('ix_telemetry_snapshots_name', 'telemetry_snapshots', ['name'], unique=True)


def downgrade():
    """테이블 삭제"""
    op.drop_index('ix_telemetry_snapshots_name', table_name='telemetry_snapshots')
    op.drop_index('ix_telemetry_snapshots_id', table_name='telemetry_snapshots')
    op.drop_table('telemetry_snapshots')
