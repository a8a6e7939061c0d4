from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from healthvault.schemas.records import PrescriptionCreate
from healthvault.services.assistant import RecordStoreUnavailable
from healthvault.services.prescriptions import SQLPrescriptionRepository


@pytest.mark.anyio
async def test_in_memory_list_is_user_scoped_and_newest_first(prescription_repository):
    await prescription_repository.create("alice", PrescriptionCreate(title="First"))
    await prescription_repository.create("bob", PrescriptionCreate(title="Other"))
    await prescription_repository.create("alice", PrescriptionCreate(title="Second"))

    records = await prescription_repository.list_for_user("alice")

    assert [r.title for r in records] == ["Second", "First"]
    assert all(r.user_id == "alice" for r in records)


@pytest.mark.anyio
async def test_in_memory_update_status(prescription_repository):
    created = await prescription_repository.create("alice", PrescriptionCreate(title="Rx"))

    updated = await prescription_repository.update_status(created.id, "completed")

    assert updated.status == "completed"
    assert (await prescription_repository.get(created.id)).status == "completed"
    assert await prescription_repository.update_status(999, "completed") is None


class FailingSession:
    async def execute(self, _query):
        raise OperationalError("SELECT", {}, ConnectionRefusedError("connection refused"))


class RowsSession:
    def __init__(self, rows):
        self.rows = rows
        self.queries = []

    async def execute(self, query):
        self.queries.append(query)
        rows = self.rows
        return SimpleNamespace(scalars=lambda: SimpleNamespace(all=lambda: rows))


@pytest.mark.anyio
async def test_sql_list_wraps_store_errors():
    repo = SQLPrescriptionRepository(FailingSession())

    with pytest.raises(RecordStoreUnavailable):
        await repo.list_for_user("alice")


@pytest.mark.anyio
async def test_sql_list_filters_by_user_and_orders_newest_first(make_record):
    from healthvault.models import Prescription

    row = Prescription(
        id=7,
        user_id="alice",
        title="Blood Test",
        upload_date=make_record().upload_date,
        status="reviewed",
        medication_names=["Metformin"],
    )
    session = RowsSession([row])
    repo = SQLPrescriptionRepository(session)

    records = await repo.list_for_user("alice")

    assert [r.title for r in records] == ["Blood Test"]
    assert records[0].medication_names == ["Metformin"]
    compiled = str(session.queries[0].compile(compile_kwargs={"literal_binds": True}))
    assert "prescriptions.user_id = 'alice'" in compiled
    assert "ORDER BY prescriptions.created_at DESC" in compiled


@pytest.mark.anyio
async def test_sql_list_loads_rows_that_skip_create_rules(make_record):
    from healthvault.models import Prescription
    from healthvault.services.assistant import MedicalChatService, TemplateResponseGenerator

    upload_date = make_record().upload_date
    rows = [
        Prescription(id=2, user_id="u1", title="", upload_date=upload_date, status="", medication_names=[" ", "Aspirin"]),
        Prescription(id=1, user_id="u1", title="Blood Test", upload_date=upload_date, status="Reviewed"),
    ]
    repo = SQLPrescriptionRepository(RowsSession(rows))

    records = await repo.list_for_user("u1")

    assert [r.title for r in records] == ["", "Blood Test"]
    assert records[0].status == "active"
    assert records[0].medication_names == ["Aspirin"]
    assert records[1].status == "Reviewed"

    service = MedicalChatService(repository=repo, generator=TemplateResponseGenerator())
    result = await service.answer("hi", "u1")

    assert result.context == "Based on 2 medical records"
    assert "2 record(s) available" in result.response
