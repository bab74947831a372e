"""
TESTES DA API
==============

Rotas de cadastro e distribuição via httpx.AsyncClient (ASGI).
"""

from datetime import time

from httpx import AsyncClient
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from roleta.domain.entities import Lead, RodadaDistribuicao, CursorRoleta
from roleta.domain.exceptions import StoreError
from roleta.infrastructure.services.roleta_store import SqlAlchemyRoletaStore
from roleta.infrastructure.services.distribution_service import local_now
from roleta.api.routes import health as health_routes
from tests.utils import add_corretores, add_turno, add_plantao, add_lead


# =============================================================================
# LEADS + DISTRIBUIÇÃO
# =============================================================================

async def test_create_lead_starts_pending(async_client: AsyncClient):
    response = await async_client.post("/api/v1/leads", json={
        "nome": "John Doe",
        "telefone": "11999999999",
        "origem": "Site",
        "urgencia": "Alta",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["nome"] == "John Doe"
    assert data["urgencia"] == "Alta"
    assert data["atribuido"] is False
    assert data["responsavel_id"] is None
    assert data["pipeline"] == "Novo"

    pending = await async_client.get("/api/v1/leads", params={"pendentes": True})
    assert [lead["id"] for lead in pending.json()] == [data["id"]]


async def test_get_unknown_lead_returns_404(async_client: AsyncClient):
    response = await async_client.get("/api/v1/leads/999")
    assert response.status_code == 404


async def test_distribute_endpoint_assigns_next_broker(async_client: AsyncClient, db_session):
    x, y = await add_corretores(db_session, "Xavier", "Yara", roleta_ativa=True)
    first = await add_lead(db_session, "Primeiro")
    second = await add_lead(db_session, "Segundo")
    await db_session.commit()

    r1 = await async_client.post(f"/api/v1/leads/{first.id}/distribuir")
    r2 = await async_client.post(
        f"/api/v1/leads/{second.id}/distribuir",
        json={"origem_disparo": "automatico"},
    )

    assert r1.status_code == 200
    assert r1.json() == {
        "lead_id": first.id,
        "corretor_id": x.id,
        "origem_disparo": "manual",
        "pipeline": "Novo",
    }
    assert r2.status_code == 200
    assert r2.json()["corretor_id"] == y.id
    assert r2.json()["origem_disparo"] == "automatico"

    lead = (await async_client.get(f"/api/v1/leads/{second.id}")).json()
    assert lead["responsavel_id"] == y.id
    assert lead["atribuido"] is True


async def test_distribute_uses_current_shift_roster(async_client: AsyncClient, db_session):
    a, b = await add_corretores(db_session, "Ana", "Bruno")
    (x,) = await add_corretores(db_session, "Xavier", roleta_ativa=True)
    # 00:00 → 00:00 cobre o dia todo
    turno = await add_turno(db_session, "Integral", time(0, 0), time(0, 0))
    await add_plantao(db_session, turno, local_now().date(), b, a)
    lead = await add_lead(db_session, "Cliente")
    await db_session.commit()

    response = await async_client.post(f"/api/v1/leads/{lead.id}/distribuir")

    assert response.status_code == 200
    assert response.json()["corretor_id"] == b.id


async def test_distribute_without_brokers_returns_409(async_client: AsyncClient, db_session):
    lead = await add_lead(db_session, "Sem corretor")
    await db_session.commit()

    response = await async_client.post(f"/api/v1/leads/{lead.id}/distribuir")

    assert response.status_code == 409
    assert response.json()["detail"] == "Nenhum corretor disponível para distribuição."

    total = (await db_session.execute(select(func.count(RodadaDistribuicao.id)))).scalar()
    assert total == 0


async def test_failed_round_insert_rolls_back_assignment(async_client: AsyncClient, db_session, monkeypatch):
    await add_corretores(db_session, "Xavier", roleta_ativa=True)
    lead = await add_lead(db_session, "Cliente")
    await db_session.commit()

    async def failing_insert(self, rodada):
        raise StoreError("insert falhou")

    monkeypatch.setattr(SqlAlchemyRoletaStore, "insert_round", failing_insert)

    response = await async_client.post(f"/api/v1/leads/{lead.id}/distribuir")

    assert response.status_code == 503
    assert "insert falhou" in response.json()["detail"]

    await db_session.refresh(lead)
    assert lead.atribuido is False
    assert lead.responsavel_id is None

    cursors = (await db_session.execute(select(func.count(CursorRoleta.id)))).scalar()
    assert cursors == 0
    rounds = (await db_session.execute(select(func.count(RodadaDistribuicao.id)))).scalar()
    assert rounds == 0


async def test_distribute_unknown_lead_returns_404(async_client: AsyncClient, db_session):
    await add_corretores(db_session, "Xavier", roleta_ativa=True)
    await db_session.commit()

    response = await async_client.post("/api/v1/leads/4242/distribuir")

    assert response.status_code == 404


# =============================================================================
# WEBHOOK
# =============================================================================

async def test_webhook_creates_and_distributes_lead(async_client: AsyncClient, db_session):
    (x,) = await add_corretores(db_session, "Xavier", roleta_ativa=True)
    await db_session.commit()

    response = await async_client.post("/api/v1/webhook/leads", json={
        "nome": "Lead do Portal",
        "telefone": "11911112222",
        "origem": "Portal ZAP",
        "id_external": "zap-123",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["distribuido"] is True
    assert data["corretor_id"] == x.id

    rodada = (
        await db_session.execute(select(RodadaDistribuicao).where(RodadaDistribuicao.lead_id == data["lead_id"]))
    ).scalar_one()
    assert rodada.origem_disparo == "webhook"
    assert rodada.origem_lead == "Portal ZAP"


async def test_webhook_keeps_lead_pending_without_brokers(async_client: AsyncClient, db_session):
    response = await async_client.post("/api/v1/webhook/leads", json={"nome": "Sem plantão"})

    assert response.status_code == 201
    data = response.json()
    assert data["distribuido"] is False
    assert data["corretor_id"] is None

    lead = await db_session.get(Lead, data["lead_id"])
    assert lead is not None
    assert lead.atribuido is False


# =============================================================================
# TURNOS / PLANTÃO / CORRETORES
# =============================================================================

async def test_turnos_crud_and_overnight_flag(async_client: AsyncClient):
    created = await async_client.post("/api/v1/turnos", json={
        "nome": "Noturno",
        "hora_inicio": "22:00",
        "hora_fim": "06:00",
    })
    assert created.status_code == 201
    turno = created.json()
    assert turno["vira_meia_noite"] is True
    assert turno["ativo"] is True

    updated = await async_client.patch(f"/api/v1/turnos/{turno['id']}", json={"ativo": False})
    assert updated.status_code == 200
    assert updated.json()["ativo"] is False
    assert updated.json()["nome"] == "Noturno"

    listed = await async_client.get("/api/v1/turnos")
    assert [t["id"] for t in listed.json()] == [turno["id"]]

    deleted = await async_client.delete(f"/api/v1/turnos/{turno['id']}")
    assert deleted.status_code == 204
    assert (await async_client.get("/api/v1/turnos")).json() == []


async def test_current_turno(async_client: AsyncClient, db_session):
    assert (await async_client.get("/api/v1/turnos/atual")).status_code == 404

    turno = await add_turno(db_session, "Integral", time(0, 0), time(0, 0))
    await db_session.commit()

    response = await async_client.get("/api/v1/turnos/atual")
    assert response.status_code == 200
    assert response.json()["id"] == turno.id


async def test_plantao_create_list_and_duplicate(async_client: AsyncClient, db_session):
    (a,) = await add_corretores(db_session, "Ana")
    turno = await add_turno(db_session, "Manhã", time(8, 0), time(12, 0))
    await db_session.commit()

    payload = {"corretor_id": a.id, "turno_id": turno.id, "dia": "2026-10-19"}
    created = await async_client.post("/api/v1/plantao", json=payload)
    assert created.status_code == 201

    duplicated = await async_client.post("/api/v1/plantao", json=payload)
    assert duplicated.status_code == 409

    october = await async_client.get("/api/v1/plantao", params={"mes": "2026-10"})
    assert [p["id"] for p in october.json()] == [created.json()["id"]]

    november = await async_client.get("/api/v1/plantao", params={"mes": "2026-11"})
    assert november.json() == []

    invalid = await async_client.get("/api/v1/plantao", params={"mes": "outubro"})
    assert invalid.status_code == 422


async def test_plantao_requires_existing_broker(async_client: AsyncClient, db_session):
    turno = await add_turno(db_session, "Manhã", time(8, 0), time(12, 0))
    await db_session.commit()

    response = await async_client.post("/api/v1/plantao", json={
        "corretor_id": 999, "turno_id": turno.id, "dia": "2026-10-19",
    })
    assert response.status_code == 404


async def test_toggle_roleta(async_client: AsyncClient):
    created = await async_client.post("/api/v1/corretores", json={"nome": "Ana Lima"})
    corretor_id = created.json()["id"]
    assert created.json()["roleta_ativa"] is False

    toggled = await async_client.patch(f"/api/v1/corretores/{corretor_id}/roleta", json={"roleta_ativa": True})
    assert toggled.status_code == 200
    assert toggled.json()["roleta_ativa"] is True

    active = await async_client.get("/api/v1/corretores", params={"roleta_ativa": True})
    assert [c["id"] for c in active.json()] == [corretor_id]

    missing = await async_client.patch("/api/v1/corretores/999/roleta", json={"roleta_ativa": True})
    assert missing.status_code == 404


# =============================================================================
# HISTÓRICO / DASHBOARD / HEALTH
# =============================================================================

async def test_rodadas_history_and_dashboard(async_client: AsyncClient, db_session):
    x, y = await add_corretores(db_session, "Xavier", "Yara", roleta_ativa=True)
    leads = [await add_lead(db_session, f"Lead {i}") for i in range(3)]
    await db_session.commit()

    for lead in leads:
        assert (await async_client.post(f"/api/v1/leads/{lead.id}/distribuir")).status_code == 200

    history = await async_client.get("/api/v1/rodadas")
    assert history.status_code == 200
    assert [r["lead_id"] for r in history.json()] == [leads[2].id, leads[1].id, leads[0].id]

    only_y = await async_client.get("/api/v1/rodadas", params={"corretor_id": y.id})
    assert [r["lead_id"] for r in only_y.json()] == [leads[1].id]

    dashboard = (await async_client.get("/api/v1/rodadas/dashboard")).json()
    assert dashboard["total_distribuidos"] == 3
    assert dashboard["por_corretor"] == [
        {"corretor_id": x.id, "nome": "Xavier", "total": 2},
        {"corretor_id": y.id, "nome": "Yara", "total": 1},
    ]
    assert len(dashboard["recentes"]) == 3


async def test_health(async_client: AsyncClient):
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "ok"


class _UnreachableEngine:
    def connect(self):
        raise OperationalError("SELECT 1", {}, Exception("conexão recusada"))


async def test_health_reports_503_when_database_is_down(async_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(health_routes, "engine", _UnreachableEngine())

    response = await async_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["checks"]["database"].startswith("error:")
