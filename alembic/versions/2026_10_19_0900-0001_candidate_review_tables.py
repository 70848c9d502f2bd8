"""candidate review tables

Revision ID: 0001_candidate_review
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_candidate_review'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('user_type', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_business_id', 'jobs', ['business_id'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('job_id', sa.Uuid(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('job_seeker_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('resume_url', sa.String(length=1000), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('reviewed_by', sa.Uuid(), sa.ForeignKey('users.id'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_applications_job_id', 'applications', ['job_id'])
    op.create_index('ix_applications_job_seeker_id', 'applications', ['job_seeker_id'])
    op.create_index('idx_applications_job_queue', 'applications', ['job_id', 'created_at', 'id'])

    op.create_table(
        'application_documents',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('application_id', sa.Uuid(), sa.ForeignKey('applications.id', ondelete='CASCADE'), nullable=False),
        sa.Column('document_type', sa.String(length=50), nullable=True),
        sa.Column('storage_path', sa.String(length=1000), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('extracted_text', sa.Text(), nullable=True),
        sa.Column('extracted_metadata', sa.JSON(), nullable=True),
        sa.Column('extracted_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_application_documents_app_created', 'application_documents', ['application_id', 'created_at'])
    op.create_index('idx_application_documents_status', 'application_documents', ['status'])

    op.create_table(
        'application_reviews',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('application_id', sa.Uuid(), sa.ForeignKey('applications.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reviewer_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('ai_rating', sa.Integer(), nullable=True),
        sa.Column('ai_summary', sa.Text(), nullable=True),
        sa.Column('ai_version', sa.String(length=100), nullable=True),
        sa.Column('ai_generated_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_review_rating_range'),
        sa.CheckConstraint('ai_rating IS NULL OR (ai_rating >= 1 AND ai_rating <= 5)', name='ck_review_ai_rating_range'),
    )
    # Upsert target: one review per application
    op.create_index('ix_application_reviews_application_id', 'application_reviews', ['application_id'], unique=True)

    op.create_table(
        'business_review_progress',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('job_id', sa.Uuid(), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column(
            'last_reviewed_application_id',
            sa.Uuid(),
            sa.ForeignKey('applications.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('reviewed_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_applications', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('resumed_at', sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('job_id', 'business_id', name='unique_job_business_progress'),
    )
    op.create_index('ix_business_review_progress_job_id', 'business_review_progress', ['job_id'])
    op.create_index('ix_business_review_progress_business_id', 'business_review_progress', ['business_id'])


def downgrade() -> None:
    op.drop_table('business_review_progress')
    op.drop_table('application_reviews')
    op.drop_table('application_documents')
    op.drop_table('applications')
    op.drop_table('jobs')
    op.drop_table('users')
