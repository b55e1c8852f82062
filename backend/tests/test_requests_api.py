import pytest

from tests.conftest import (
    BrokenCollection, FailingChannel, RecordingChannel, donor_payload, request_payload, run
)


def seed_donors(client):
    client.post("/api/donors", json=donor_payload(bloodGroup="O+", location="Mumbai Central"))
    client.post("/api/donors", json=donor_payload(bloodGroup="O+", location="Pune"))
    client.post("/api/donors", json=donor_payload(bloodGroup="A+", location="Mumbai"))


def test_submit_request_reports_matching_donors(client, ctx, channels):
    seed_donors(client)

    response = client.post("/api/requests", json=request_payload())

    assert response.status_code == 201
    assert response.json() == {"message": "Request submitted successfully", "matchingDonors": 1}

    run(client, ctx.dispatcher.drain)
    for channel in channels:
        assert len(channel.sent) == 1
        assert "Ravi Kumar" in channel.sent[0].email_body


def test_submitted_request_is_pending(client):
    client.post("/api/requests", json=request_payload())

    [stored] = client.get("/api/requests").json()

    assert stored["status"] == "Pending"
    assert stored["unitsRequired"] == 2
    assert stored["requiredDate"] == "2030-01-15"


@pytest.mark.parametrize("field", [
    "patientName", "bloodGroup", "unitsRequired", "hospitalName",
    "hospitalAddress", "city", "requiredDate", "requesterPhone",
])
def test_missing_field_persists_and_notifies_nothing(client, ctx, channels, field):
    payload = request_payload()
    del payload[field]

    response = client.post("/api/requests", json=payload)

    assert response.status_code == 400
    run(client, ctx.dispatcher.drain)
    assert run(client, ctx.db.blood_requests.count_documents, {}) == 0
    assert all(channel.sent == [] for channel in channels)


@pytest.mark.parametrize("units", [0, 11])
def test_units_out_of_range_is_rejected(client, ctx, units):
    response = client.post("/api/requests", json=request_payload(unitsRequired=units))

    assert response.status_code == 400
    assert run(client, ctx.db.blood_requests.count_documents, {}) == 0


class TestEmailFailure:
    @pytest.fixture
    def channels(self):
        return [FailingChannel("email"), RecordingChannel("sms")]

    def test_email_failure_does_not_fail_submission(self, client, ctx, channels):
        seed_donors(client)

        response = client.post("/api/requests", json=request_payload())

        assert response.status_code == 201
        assert response.json()["matchingDonors"] == 1

        run(client, ctx.dispatcher.drain)
        failing, sms = channels
        assert failing.attempts == 1
        assert len(sms.sent) == 1


def test_approve_is_idempotent(client, ctx, admin_headers):
    client.post("/api/requests", json=request_payload())
    [stored] = client.get("/api/requests").json()

    first = client.patch(f"/api/requests/{stored['id']}/approve", headers=admin_headers)
    second = client.patch(f"/api/requests/{stored['id']}/approve", headers=admin_headers)

    assert first.status_code == 200 and second.status_code == 200
    assert first.json()["status"] == "Approved"
    assert second.json()["status"] == "Approved"
    assert client.get("/api/requests").json()[0]["status"] == "Approved"

    approvals = run(client, ctx.db.audit_logs.count_documents, {"action": "approve"})
    assert approvals == 2


def test_approve_requires_admin(client):
    client.post("/api/requests", json=request_payload())
    [stored] = client.get("/api/requests").json()

    response = client.patch(f"/api/requests/{stored['id']}/approve")

    assert response.status_code == 403
    assert client.get("/api/requests").json()[0]["status"] == "Pending"


def test_approve_unknown_request_is_not_found(client, admin_headers):
    assert client.patch("/api/requests/missing/approve", headers=admin_headers).status_code == 404


def test_delete_request(client, admin_headers):
    client.post("/api/requests", json=request_payload())
    [stored] = client.get("/api/requests").json()

    assert client.delete(f"/api/requests/{stored['id']}").status_code == 403

    response = client.delete(f"/api/requests/{stored['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Request deleted"}
    assert client.get("/api/requests").json() == []
    assert client.delete(f"/api/requests/{stored['id']}", headers=admin_headers).status_code == 404


def test_approve_succeeds_when_audit_write_fails(client, ctx, admin_headers):
    client.post("/api/requests", json=request_payload())
    [stored] = client.get("/api/requests").json()
    ctx.audit.collection = BrokenCollection()

    response = client.patch(f"/api/requests/{stored['id']}/approve", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "Approved"


def test_list_returns_every_request(client, ctx):
    docs = [
        {
            "id": f"request-{i}", "patient_name": "Ravi Kumar", "blood_group": "O+",
            "units_required": 1, "hospital_name": "City Hospital", "hospital_address": "12 MG Road",
            "city": "Pune", "required_date": "2030-01-15", "requester_phone": "9123456780",
            "status": "Pending", "created_at": "2026-01-01T00:00:00.000001Z",
        }
        for i in range(1100)
    ]
    run(client, ctx.db.blood_requests.insert_many, docs)

    assert len(client.get("/api/requests").json()) == 1100
