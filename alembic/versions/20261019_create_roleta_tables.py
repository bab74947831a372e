"""create roleta tables

Revision ID: 20261019_roleta
Revises:
Create Date: 2026-10-19

Cria as tabelas da roleta de distribuição:
turnos, corretores, planejamento_plantao, leads,
rodadas_distribuicao e cursores_roleta.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_roleta'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'turnos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nome', sa.String(100), nullable=False),
        sa.Column('hora_inicio', sa.Time(), nullable=False),
        sa.Column('hora_fim', sa.Time(), nullable=False),
        sa.Column('ativo', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_turnos_ativo', 'turnos', ['ativo'])

    op.create_table(
        'corretores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nome', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('telefone', sa.String(20), nullable=True),
        sa.Column('equipe_id', sa.Integer(), nullable=True),
        sa.Column('roleta_ativa', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('ativo', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_corretores_equipe_id', 'corretores', ['equipe_id'])
    op.create_index('ix_corretores_roleta_ativa', 'corretores', ['roleta_ativa'])

    op.create_table(
        'planejamento_plantao',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('corretor_id', sa.Integer(), nullable=False),
        sa.Column('turno_id', sa.Integer(), nullable=False),
        sa.Column('dia', sa.Date(), nullable=False),
        sa.Column('equipe_id', sa.Integer(), nullable=True),
        sa.Column('observacoes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['corretor_id'], ['corretores.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['turno_id'], ['turnos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dia', 'turno_id', 'corretor_id', name='uq_plantao_dia_turno_corretor'),
    )
    op.create_index('ix_plantao_dia_turno', 'planejamento_plantao', ['dia', 'turno_id'])
    op.create_index('ix_planejamento_plantao_corretor_id', 'planejamento_plantao', ['corretor_id'])

    op.create_table(
        'leads',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('id_external', sa.String(100), nullable=True),
        sa.Column('nome', sa.String(200), nullable=True),
        sa.Column('telefone', sa.String(30), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('cidade', sa.String(100), nullable=True),
        sa.Column('imovel', sa.String(200), nullable=True),
        sa.Column('valor', sa.Float(), nullable=True),
        sa.Column('resumo', sa.Text(), nullable=True),
        sa.Column('origem', sa.String(100), nullable=True),
        sa.Column('intencao', sa.String(100), nullable=True),
        sa.Column('urgencia', sa.String(20), nullable=False, server_default='Normal'),
        sa.Column('pipeline', sa.String(30), nullable=False, server_default='Novo'),
        sa.Column('atribuido', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('responsavel_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['responsavel_id'], ['corretores.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leads_id_external', 'leads', ['id_external'])
    op.create_index('ix_leads_telefone', 'leads', ['telefone'])
    op.create_index('ix_leads_pipeline', 'leads', ['pipeline'])
    op.create_index('ix_leads_atribuido', 'leads', ['atribuido'])
    op.create_index('ix_leads_responsavel_id', 'leads', ['responsavel_id'])

    op.create_table(
        'rodadas_distribuicao',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('numero_rodada', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('escopo', sa.String(100), nullable=False),
        sa.Column('corretor_id', sa.Integer(), nullable=False),
        sa.Column('lead_id', sa.Integer(), nullable=True),
        sa.Column('cliente_atribuido', sa.String(200), nullable=False),
        sa.Column('telefone_cliente', sa.String(30), nullable=True),
        sa.Column('email_cliente', sa.String(255), nullable=True),
        sa.Column('origem_lead', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='sucesso'),
        sa.Column('origem_disparo', sa.String(20), nullable=False, server_default='manual'),
        sa.Column('observacoes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['corretor_id'], ['corretores.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rodadas_created', 'rodadas_distribuicao', ['created_at'])
    op.create_index('ix_rodadas_distribuicao_escopo', 'rodadas_distribuicao', ['escopo'])
    op.create_index('ix_rodadas_distribuicao_corretor_id', 'rodadas_distribuicao', ['corretor_id'])
    op.create_index('ix_rodadas_distribuicao_lead_id', 'rodadas_distribuicao', ['lead_id'])

    op.create_table(
        'cursores_roleta',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('escopo', sa.String(100), nullable=False),
        sa.Column('ultimo_corretor_id', sa.Integer(), nullable=True),
        sa.Column('total_rodadas', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('escopo'),
    )
    print("✅ Tabelas da roleta criadas")


def downgrade() -> None:
    op.drop_table('cursores_roleta')
    op.drop_table('rodadas_distribuicao')
    op.drop_table('leads')
    op.drop_table('planejamento_plantao')
    op.drop_table('corretores')
    op.drop_table('turnos')
