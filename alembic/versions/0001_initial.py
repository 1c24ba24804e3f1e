"""initial rating schema

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(160), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('user_type', sa.String(20), nullable=False),
        sa.Column('rater_type', sa.String(50)),
        sa.Column('position', sa.String(160)),
        sa.Column('designation', sa.String(160)),
        sa.Column('administrative_privilege', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_users_user_type', 'users', ['user_type'])
    op.create_index('ix_users_rater_type', 'users', ['rater_type'])

    op.create_table(
        'publication_ranges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(160), nullable=False, unique=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint('end_date > start_date', name='ck_publication_ranges_dates'),
    )
    op.create_index('ix_publication_ranges_state', 'publication_ranges', ['is_archived', 'is_active'])

    op.create_table(
        'vacancies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('item_number', sa.String(120), nullable=False),
        sa.Column('position', sa.String(200), nullable=False),
        sa.Column('assignment', sa.String(200), nullable=False),
        sa.Column('salary_grade', sa.Integer(), nullable=False),
        sa.Column('publication_range_id', sa.Integer(), sa.ForeignKey('publication_ranges.id'), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime()),
        *_timestamps(),
        sa.UniqueConstraint('item_number', 'publication_range_id', name='uq_vacancies_item_range'),
        sa.CheckConstraint('salary_grade BETWEEN 1 AND 24', name='ck_vacancies_salary_grade'),
    )
    op.create_index('ix_vacancies_item_number', 'vacancies', ['item_number'])
    op.create_index('ix_vacancies_is_archived', 'vacancies', ['is_archived'])

    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('item_number', sa.String(120), nullable=False),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('publication_range_id', sa.Integer(), sa.ForeignKey('publication_ranges.id'), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('archived_at', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_candidates_item_number', 'candidates', ['item_number'])
    op.create_index('ix_candidates_status', 'candidates', ['status'])
    op.create_index('ix_candidates_is_archived', 'candidates', ['is_archived'])

    op.create_table(
        'competencies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('is_fixed', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_competencies_type', 'competencies', ['type'])

    op.create_table(
        'competency_vacancies',
        sa.Column('competency_id', sa.Integer(), sa.ForeignKey('competencies.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('vacancy_id', sa.Integer(), sa.ForeignKey('vacancies.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'ratings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False),
        sa.Column('rater_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('competency_id', sa.Integer(), sa.ForeignKey('competencies.id'), nullable=False),
        sa.Column('competency_type', sa.String(20), nullable=False),
        sa.Column('item_number', sa.String(120), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('candidate_id', 'rater_id', 'competency_id', 'competency_type', 'item_number',
                            name='uq_ratings_natural_key'),
        sa.CheckConstraint('score BETWEEN 1 AND 5', name='ck_ratings_score'),
    )
    op.create_index('ix_ratings_rater_id', 'ratings', ['rater_id'])
    op.create_index('ix_ratings_candidate_item', 'ratings', ['candidate_id', 'item_number'])

    op.create_table(
        'rating_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('action', sa.String(20), nullable=False),
        sa.Column('rating_id', sa.Integer()),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False),
        sa.Column('rater_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('competency_id', sa.Integer(), sa.ForeignKey('competencies.id')),
        sa.Column('competency_type', sa.String(20)),
        sa.Column('item_number', sa.String(120), nullable=False),
        sa.Column('old_score', sa.Integer()),
        sa.Column('new_score', sa.Integer()),
        sa.Column('performed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('ip_address', sa.String(64)),
        sa.Column('user_agent', sa.String(512)),
        sa.Column('batch_id', sa.String(32)),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_rating_logs_batch_id', 'rating_logs', ['batch_id'])
    op.create_index('ix_rating_logs_candidate_created', 'rating_logs', ['candidate_id', 'created_at'])
    op.create_index('ix_rating_logs_rater_created', 'rating_logs', ['rater_id', 'created_at'])
    op.create_index('ix_rating_logs_item_created', 'rating_logs', ['item_number', 'created_at'])
    op.create_index('ix_rating_logs_action_created', 'rating_logs', ['action', 'created_at'])


def downgrade():
    for name in ('rating_logs', 'ratings', 'competency_vacancies', 'competencies',
                 'candidates', 'vacancies', 'publication_ranges', 'users'):
        op.drop_table(name)
