"""courses, registrations, suggestions, students, admins

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'courses',
        sa.Column('id', sa.String(length=64), primary_key=True, nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('instructor', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('base_price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('early_bird_price', sa.Integer(), nullable=True),
        sa.Column('special_offer_price', sa.Integer(), nullable=True),
        sa.Column('early_bird_slots', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_slots', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('thumbnail', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('whatsapp_link', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('offer_text', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_courses_name', 'courses', ['name'], unique=False)

    op.create_table(
        'registrations',
        sa.Column('id', sa.String(length=160), primary_key=True, nullable=False),
        sa.Column('student_id', sa.String(length=32), nullable=False),
        sa.Column('course_id', sa.String(length=64), nullable=False),
        sa.Column('course_name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('college', sa.String(length=255), nullable=False),
        sa.Column('screenshot_url', sa.String(length=1024), nullable=False),
        sa.Column('price_offered', sa.Integer(), nullable=False),
        sa.Column('amount_paid', sa.Integer(), nullable=False),
        sa.Column('payment_option', sa.String(length=16), nullable=False),
        sa.Column('payment_status', sa.String(length=32), nullable=False),
        sa.Column('confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('registered_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('student_id', 'course_id', name='uq_registrations_student_course'),
    )
    op.create_index('ix_registrations_student_id', 'registrations', ['student_id'], unique=False)
    op.create_index('ix_registrations_course_id', 'registrations', ['course_id'], unique=False)
    op.create_index('ix_registrations_phone', 'registrations', ['phone'], unique=False)
    op.create_index('ix_registrations_confirmed', 'registrations', ['confirmed'], unique=False)

    op.create_table(
        'suggestions',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('mobile', sa.String(length=20), nullable=False),
        sa.Column('suggestion', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'students',
        sa.Column('id', sa.String(length=32), primary_key=True, nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_students_phone', 'students', ['phone'], unique=True)

    op.create_table(
        'otp_challenges',
        sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('code_hash', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('consumed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_otp_challenges_phone', 'otp_challenges', ['phone'], unique=False)

    op.create_table(
        'admin_users',
        sa.Column('id', sa.String(length=32), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_admin_users_email', 'admin_users', ['email'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_admin_users_email', table_name='admin_users')
    op.drop_table('admin_users')
    op.drop_index('ix_otp_challenges_phone', table_name='otp_challenges')
    op.drop_table('otp_challenges')
    op.drop_index('ix_students_phone', table_name='students')
    op.drop_table('students')
    op.drop_table('suggestions')
    op.drop_index('ix_registrations_confirmed', table_name='registrations')
    op.drop_index('ix_registrations_phone', table_name='registrations')
    op.drop_index('ix_registrations_course_id', table_name='registrations')
    op.drop_index('ix_registrations_student_id', table_name='registrations')
    op.drop_table('registrations')
    op.drop_index('ix_courses_name', table_name='courses')
    op.drop_table('courses')
