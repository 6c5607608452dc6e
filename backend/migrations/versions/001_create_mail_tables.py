"""Create staff_user and mail_item tables with guest/staff access policies

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Shared trigger function for updated_at columns
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    op.create_table(
        'staff_user',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), server_default='ACTIVE', nullable=False),
        sa.Column('last_login_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_staff_user_email'),
        sa.CheckConstraint("status IN ('ACTIVE', 'DISABLED')", name='ck_staff_user_status')
    )

    op.execute("""
        CREATE TRIGGER update_staff_user_updated_at
        BEFORE UPDATE ON staff_user
        FOR EACH ROW
        EXECUTE FUNCTION update_updated_at_column();
    """)

    op.create_table(
        'mail_item',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('room_number', sa.Text(), nullable=False),
        sa.Column('initials', sa.Text(), nullable=False),
        sa.Column('kind', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), server_default='pending', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("kind IS NULL OR kind IN ('letter', 'package')", name='ck_mail_item_kind'),
        sa.CheckConstraint("status IN ('pending', 'received')", name='ck_mail_item_status')
    )

    op.create_index('ix_mail_item_created_at', 'mail_item', [sa.text('created_at DESC')])
    op.create_index('ix_mail_item_room_initials', 'mail_item', ['room_number', 'initials'])

    # Request roles. The application login role is granted membership so it
    # can SET LOCAL ROLE per transaction.
    op.execute("""
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_roles WHERE rolname = 'postdesk_staff') THEN
                CREATE ROLE postdesk_staff NOLOGIN;
            END IF;
            IF NOT EXISTS (SELECT 1 FROM pg_roles WHERE rolname = 'postdesk_guest') THEN
                CREATE ROLE postdesk_guest NOLOGIN;
            END IF;
        END
        $$;
    """)
    op.execute("GRANT postdesk_staff TO CURRENT_USER")
    op.execute("GRANT postdesk_guest TO CURRENT_USER")

    op.execute("GRANT SELECT, INSERT, UPDATE ON mail_item TO postdesk_staff")
    op.execute("GRANT SELECT ON mail_item TO postdesk_guest")

    # Row-level security: guests read only, staff read and write. No role may delete.
    op.execute("ALTER TABLE mail_item ENABLE ROW LEVEL SECURITY")
    op.execute("CREATE POLICY mail_item_guest_read ON mail_item FOR SELECT TO postdesk_guest USING (true)")
    op.execute("CREATE POLICY mail_item_staff_read ON mail_item FOR SELECT TO postdesk_staff USING (true)")
    op.execute("CREATE POLICY mail_item_staff_insert ON mail_item FOR INSERT TO postdesk_staff WITH CHECK (true)")
    op.execute(
        "CREATE POLICY mail_item_staff_update ON mail_item FOR UPDATE TO postdesk_staff "
        "USING (true) WITH CHECK (true)"
    )


def downgrade():
    op.execute("DROP POLICY IF EXISTS mail_item_staff_update ON mail_item")
    op.execute("DROP POLICY IF EXISTS mail_item_staff_insert ON mail_item")
    op.execute("DROP POLICY IF EXISTS mail_item_staff_read ON mail_item")
    op.execute("DROP POLICY IF EXISTS mail_item_guest_read ON mail_item")
    op.execute("ALTER TABLE mail_item DISABLE ROW LEVEL SECURITY")
    op.execute("REVOKE ALL ON mail_item FROM postdesk_guest")
    op.execute("REVOKE ALL ON mail_item FROM postdesk_staff")

    op.drop_index('ix_mail_item_room_initials', table_name='mail_item')
    op.drop_index('ix_mail_item_created_at', table_name='mail_item')
    op.drop_table('mail_item')

    op.execute('DROP TRIGGER IF EXISTS update_staff_user_updated_at ON staff_user')
    op.drop_table('staff_user')

    # Roles are cluster-wide and may be shared with other databases; not dropped
