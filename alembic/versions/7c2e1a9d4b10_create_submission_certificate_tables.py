"""create_submission_certificate_tables

Revision ID: 7c2e1a9d4b10
Revises:
Create Date: 2024-01-08 09:12:44.301127

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c2e1a9d4b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=30)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', _enum('user_role', 'advertiser', 'reviewer', 'admin'), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('user_id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'submissions',
        sa.Column('submission_id', sa.Integer(), nullable=False),
        sa.Column('advertiser_id', sa.Integer(), nullable=False),
        sa.Column('brand_name', sa.String(length=255), nullable=False),
        sa.Column('campaign_title', sa.String(length=255), nullable=False),
        sa.Column('advert_category',
                  _enum('advert_category', 'tv', 'radio', 'billboard', 'digital', 'print', 'online'),
                  nullable=False),
        sa.Column('geographic_scope',
                  _enum('geographic_scope', 'national', 'state', 'lga', 'regional'),
                  nullable=False),
        sa.Column('geographic_details', sa.Text(), nullable=True),
        sa.Column('campaign_start_date', sa.Date(), nullable=False),
        sa.Column('campaign_end_date', sa.Date(), nullable=False),
        sa.Column('creative_materials_urls', sa.JSON(), nullable=False),
        sa.Column('supporting_documents_urls', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('payment_confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status',
                  _enum('submission_status', 'pending', 'under_review', 'approved',
                        'rejected', 'requires_changes'),
                  nullable=False, server_default='pending'),
        sa.Column('reviewed_by_id', sa.Integer(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('campaign_end_date >= campaign_start_date',
                           name='ck_submissions_campaign_dates'),
        sa.ForeignKeyConstraint(['advertiser_id'], ['users.user_id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['reviewed_by_id'], ['users.user_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('submission_id')
    )
    op.create_index(op.f('ix_submissions_advertiser_id'), 'submissions', ['advertiser_id'], unique=False)
    op.create_index('ix_submissions_status_submitted_at', 'submissions',
                    ['status', 'submitted_at'], unique=False)

    op.create_table(
        'submission_comments',
        sa.Column('comment_id', sa.Integer(), nullable=False),
        sa.Column('submission_id', sa.Integer(), nullable=False),
        sa.Column('reviewer_id', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('is_internal', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('action_taken', sa.String(length=30), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['submission_id'], ['submissions.submission_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewer_id'], ['users.user_id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('comment_id')
    )
    op.create_index(op.f('ix_submission_comments_submission_id'), 'submission_comments',
                    ['submission_id'], unique=False)

    op.create_table(
        'certificates',
        sa.Column('certificate_id', sa.Integer(), nullable=False),
        sa.Column('submission_id', sa.Integer(), nullable=False),
        sa.Column('certificate_number', sa.String(length=32), nullable=False),
        sa.Column('qr_code_data', sa.Text(), nullable=False),
        sa.Column('issued_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('valid_from', sa.Date(), nullable=False),
        sa.Column('valid_until', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.Column('revoked_by_id', sa.Integer(), nullable=True),
        sa.Column('revocation_reason', sa.Text(), nullable=True),
        sa.CheckConstraint('valid_until > valid_from', name='ck_certificates_validity_window'),
        sa.ForeignKeyConstraint(['submission_id'], ['submissions.submission_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['revoked_by_id'], ['users.user_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('certificate_id'),
        sa.UniqueConstraint('submission_id')
    )
    # Uniqueness of the number is what arbitrates concurrent issuers
    op.create_index(op.f('ix_certificates_certificate_number'), 'certificates',
                    ['certificate_number'], unique=True)

    op.create_table(
        'audit_logs',
        sa.Column('log_id', sa.Integer(), nullable=False),
        sa.Column('entity_type', sa.String(length=50), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('changes', sa.JSON(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id']),
        sa.PrimaryKeyConstraint('log_id')
    )
    op.create_index(op.f('ix_audit_logs_log_id'), 'audit_logs', ['log_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_timestamp'), 'audit_logs', ['timestamp'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_audit_logs_timestamp'), table_name='audit_logs')
    op.drop_index(op.f('ix_audit_logs_log_id'), table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index(op.f('ix_certificates_certificate_number'), table_name='certificates')
    op.drop_table('certificates')
    op.drop_index(op.f('ix_submission_comments_submission_id'), table_name='submission_comments')
    op.drop_table('submission_comments')
    op.drop_index('ix_submissions_status_submitted_at', table_name='submissions')
    op.drop_index(op.f('ix_submissions_advertiser_id'), table_name='submissions')
    op.drop_table('submissions')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
