"""Create users, threads, messages, closures, read cursors and typing intents

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _ts(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, postgresql.TIMESTAMP(timezone=True), **kwargs)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("about", sa.Text(), nullable=True),
        sa.Column("company_name", sa.String(200), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("occupation", sa.String(100), nullable=True),
        sa.Column("price_per_hour", sa.Numeric(10, 2), nullable=True),
        sa.Column("experience_years", sa.Integer(), nullable=True),
        sa.Column(
            "certifications",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        _ts("created_at", nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint("role IN ('builder', 'tradie')", name="ck_users_role"),
    )
    op.create_index("ix_users_role_name", "users", ["role", "first_name", "last_name"])

    op.create_table(
        "threads",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("builder_id", sa.BigInteger(), nullable=False),
        sa.Column("tradie_id", sa.BigInteger(), nullable=False),
        _ts("created_at", nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id", name="pk_threads"),
        sa.ForeignKeyConstraint(
            ["builder_id"], ["users.id"], name="fk_threads_builder_id_users", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["tradie_id"], ["users.id"], name="fk_threads_tradie_id_users", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("builder_id", "tradie_id", name="uq_thread_pair"),
    )
    op.create_index("ix_threads_tradie", "threads", ["tradie_id"])

    op.create_table(
        "messages",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("thread_id", sa.BigInteger(), nullable=False),
        sa.Column("sender_id", sa.BigInteger(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        _ts("created_at", nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id", name="pk_messages"),
        sa.ForeignKeyConstraint(
            ["thread_id"], ["threads.id"], name="fk_messages_thread_id_threads", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["sender_id"], ["users.id"], name="fk_messages_sender_id_users", ondelete="CASCADE",
        ),
        sa.CheckConstraint("length(btrim(body)) > 0", name="ck_messages_body_not_blank"),
    )
    op.create_index(
        "ix_messages_thread_timeline", "messages", ["thread_id", "created_at", "id"],
    )
    op.create_index("ix_messages_sender_created", "messages", ["sender_id", "created_at"])

    for table, left, right, ts_col, uq in (
        ("thread_closures", "user_id", "peer_id", "closed_at", "uq_thread_closure_pair"),
        ("read_cursors", "user_id", "peer_id", "last_read_at", "uq_read_cursor_pair"),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
            sa.Column(left, sa.BigInteger(), nullable=False),
            sa.Column(right, sa.BigInteger(), nullable=False),
            _ts(ts_col, nullable=False),
            sa.PrimaryKeyConstraint("id", name=f"pk_{table}"),
            sa.ForeignKeyConstraint(
                [left], ["users.id"], name=f"fk_{table}_{left}_users", ondelete="CASCADE",
            ),
            sa.ForeignKeyConstraint(
                [right], ["users.id"], name=f"fk_{table}_{right}_users", ondelete="CASCADE",
            ),
            sa.UniqueConstraint(left, right, name=uq),
        )

    op.create_table(
        "typing_intents",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("from_user_id", sa.BigInteger(), nullable=False),
        sa.Column("to_user_id", sa.BigInteger(), nullable=False),
        sa.Column("is_typing", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _ts("updated_at", nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_typing_intents"),
        sa.ForeignKeyConstraint(
            ["from_user_id"], ["users.id"],
            name="fk_typing_intents_from_user_id_users", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["to_user_id"], ["users.id"],
            name="fk_typing_intents_to_user_id_users", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("from_user_id", "to_user_id", name="uq_typing_intent_direction"),
    )


def downgrade() -> None:
    op.drop_table("typing_intents")
    op.drop_table("read_cursors")
    op.drop_table("thread_closures")
    op.drop_index("ix_messages_sender_created", table_name="messages")
    op.drop_index("ix_messages_thread_timeline", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_threads_tradie", table_name="threads")
    op.drop_table("threads")
    op.drop_index("ix_users_role_name", table_name="users")
    op.drop_table("users")
