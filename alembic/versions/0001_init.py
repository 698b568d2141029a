"""initial

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None


def _ts(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable, server_default=sa.text('now()') if not nullable else None)


def upgrade() -> None:
    op.create_table('perfume',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('house', sa.String(length=200), nullable=False),
        sa.Column('scent_family', sa.String(length=16), nullable=False),
        sa.Column('secondary_scent_family', sa.String(length=16), nullable=True),
        sa.Column('performance', sa.String(length=16), nullable=False, server_default='balanced'),
        sa.Column('notes', sa.JSON(), nullable=False),
        sa.Column('aura_words', sa.JSON(), nullable=False),
        sa.Column('outfit_styles', sa.JSON(), nullable=False),
        sa.Column('occasions', sa.JSON(), nullable=False),
        sa.Column('moods', sa.JSON(), nullable=False),
        sa.Column('weather_performance', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        _ts('created_at', nullable=False),
        sa.UniqueConstraint('name', 'house', name='uq_perfume_name_house'),
    )
    op.create_index('ix_perfume_scent_family', 'perfume', ['scent_family'])
    op.create_index('ix_perfume_performance', 'perfume', ['performance'])

    op.create_table('user_perfume',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('perfume_id', sa.Uuid(), nullable=False),
        sa.Column('nickname', sa.Text(), nullable=True),
        sa.Column('personal_notes', sa.Text(), nullable=True),
        sa.Column('disliked_notes', sa.JSON(), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('wear_count', sa.Integer(), nullable=False, server_default='0'),
        _ts('last_worn_at'),
        _ts('created_at', nullable=False),
        sa.UniqueConstraint('user_id', 'perfume_id', name='uq_user_perfume_user_perfume'),
    )
    op.create_index('ix_user_perfume_user_id', 'user_perfume', ['user_id'])
    op.create_index('ix_user_perfume_user_favorite', 'user_perfume', ['user_id', 'is_favorite'])

    op.create_table('scent_session',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('outfit_styles', sa.JSON(), nullable=False),
        sa.Column('mood', sa.String(length=32), nullable=False),
        sa.Column('scent_directions', sa.JSON(), nullable=False),
        sa.Column('occasion', sa.String(length=32), nullable=False),
        sa.Column('weather', sa.JSON(), nullable=True),
        sa.Column('recommended_user_perfume_id', sa.Uuid(), nullable=True),
        sa.Column('recommendation_type', sa.String(length=32), nullable=True),
        sa.Column('match_score', sa.Float(), nullable=True),
        sa.Column('editorial_explanation', sa.Text(), nullable=True),
        sa.Column('affirmation', sa.Text(), nullable=True),
        sa.Column('copy_source', sa.String(length=16), nullable=True),
        _ts('completed_at'),
        _ts('created_at', nullable=False),
    )
    op.create_index('ix_scent_session_user_created', 'scent_session', ['user_id', 'created_at'])

    op.create_table('wear_log',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('perfume_id', sa.Uuid(), nullable=False),
        sa.Column('perfume_name', sa.String(length=200), nullable=False),
        sa.Column('perfume_house', sa.String(length=200), nullable=True),
        sa.Column('scent_family', sa.String(length=32), nullable=True),
        sa.Column('session_id', sa.Uuid(), nullable=True),
        sa.Column('vibe_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _ts('worn_at', nullable=False),
    )
    op.create_index('ix_wear_log_user_worn', 'wear_log', ['user_id', 'worn_at'])

    op.create_table('vibe',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('session_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('has_image', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('outfit_image_key', sa.Text(), nullable=True),
        sa.Column('perfume_name', sa.String(length=200), nullable=False),
        sa.Column('perfume_house', sa.String(length=200), nullable=False),
        sa.Column('scent_family', sa.String(length=32), nullable=False),
        sa.Column('aura_words', sa.JSON(), nullable=False),
        sa.Column('mood', sa.String(length=32), nullable=False),
        sa.Column('occasion', sa.String(length=32), nullable=False),
        _ts('created_at', nullable=False),
    )
    op.create_index('ix_vibe_user_created', 'vibe', ['user_id', 'created_at'])

    op.create_table('user_preferences',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Text(), nullable=False, unique=True),
        sa.Column('scent_preferences', sa.JSON(), nullable=True),
        sa.Column('avoid_notes', sa.JSON(), nullable=True),
        sa.Column('default_location', sa.JSON(), nullable=True),
        sa.Column('use_weather_context', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        _ts('created_at', nullable=False),
        _ts('updated_at', nullable=False),
    )


def downgrade() -> None:
    op.drop_table('user_preferences')
    op.drop_index('ix_vibe_user_created', table_name='vibe')
    op.drop_table('vibe')
    op.drop_index('ix_wear_log_user_worn', table_name='wear_log')
    op.drop_table('wear_log')
    op.drop_index('ix_scent_session_user_created', table_name='scent_session')
    op.drop_table('scent_session')
    op.drop_index('ix_user_perfume_user_favorite', table_name='user_perfume')
    op.drop_index('ix_user_perfume_user_id', table_name='user_perfume')
    op.drop_table('user_perfume')
    op.drop_index('ix_perfume_performance', table_name='perfume')
    op.drop_index('ix_perfume_scent_family', table_name='perfume')
    op.drop_table('perfume')
