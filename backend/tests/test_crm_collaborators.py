from decimal import Decimal

from cleanpro import models, schemas
from cleanpro.crud import crud_client, crud_proposal


def test_clients_default_to_client_status(db):
    client = crud_client.create_client(db, schemas.ClientCreate(name="Lee", email=" lee@example.com "))
    assert client.status == models.ClientStatus.CLIENT
    assert client.email == "lee@example.com"


def test_find_by_email_ignores_case_and_whitespace(db):
    prospect = crud_client.create_prospect(
        db, schemas.ClientCreate(name="Dana", email="Dana@Example.com", status="client")
    )
    assert prospect.status == models.ClientStatus.PROSPECT
    assert crud_client.find_by_email(db, "  dana@example.COM ").id == prospect.id
    assert crud_client.find_by_email(db, "nobody@example.com") is None
    assert crud_client.find_by_email(db, "") is None


def test_proposal_total_is_sum_of_line_items(db):
    client = crud_client.create_client(db, schemas.ClientCreate(name="Lee"))
    proposal = crud_proposal.create_proposal(
        db,
        schemas.ProposalCreate(
            client_id=client.id,
            title="Spring clean",
            line_items=[
                schemas.LineItem(id=1, service="Standard", price=Decimal("99.95")),
                schemas.LineItem(id=2, service="Oven", price=Decimal("20.05")),
            ],
        ),
    )
    assert proposal.total == Decimal("120.00")
    assert proposal.status == models.ProposalStatus.DRAFT
    assert proposal.job_id is None
    assert [p.id for p in crud_proposal.get_proposals(db, client_id=client.id)] == [proposal.id]


def test_proposal_without_client_reads_unknown(db):
    proposal = crud_proposal.create_proposal(db, schemas.ProposalCreate(client_id=999))
    assert proposal.client_name == "Unknown Client"
    assert proposal.total == Decimal("0")
