"""cria clientes e logradouros

Revision ID: 0001_clientes_logradouros
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_clientes_logradouros"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clientes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("telefone", sa.String(), nullable=True),
        sa.Column("logotipo", sa.LargeBinary(), nullable=True),
        sa.Column(
            "data_criacao",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.Column("data_atualizacao", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("email", name="uq_clientes_email"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_clientes_id", "clientes", ["id"])
    op.create_index("ix_clientes_nome", "clientes", ["nome"])

    op.create_table(
        "logradouros",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("cliente_id", sa.Integer(), nullable=False),
        sa.Column("endereco", sa.String(length=200), nullable=False),
        sa.Column("complemento", sa.String(length=100), nullable=True),
        sa.Column("bairro", sa.String(length=50), nullable=False),
        sa.Column("cidade", sa.String(length=50), nullable=False),
        sa.Column("estado", sa.String(length=2), nullable=False),
        sa.Column("cep", sa.String(length=10), nullable=False),
        sa.Column(
            "data_criacao",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.Column("data_atualizacao", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["cliente_id"], ["clientes.id"], ondelete="CASCADE"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_logradouros_id", "logradouros", ["id"])
    op.create_index("ix_logradouros_cliente_id", "logradouros", ["cliente_id"])


def downgrade() -> None:
    op.drop_index("ix_logradouros_cliente_id", table_name="logradouros")
    op.drop_index("ix_logradouros_id", table_name="logradouros")
    op.drop_table("logradouros")
    op.drop_index("ix_clientes_nome", table_name="clientes")
    op.drop_index("ix_clientes_id", table_name="clientes")
    op.drop_table("clientes")
