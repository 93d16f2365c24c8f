"""
HTTP API tests: authentication, status codes and error bodies.

Amounts come back as JSON strings (Pydantic serializes Decimal that way),
so they are compared as Decimal.
"""

from datetime import date
from decimal import Decimal

import pytest
from jose import jwt

from models import Invoice, InvoiceStatus, Job, Payment


MARCH = {"start_date": "2025-03-01", "end_date": "2025-03-31"}


def _generate(api, headers, client_id, **overrides):
    body = {"client_id": client_id, **MARCH, **overrides}
    return api.post("/api/invoices/generate", json=body, headers=headers)


def _pay(api, headers, invoice, amount, method="CASH", **extra):
    body = {
        "invoice_id": invoice["id"],
        "client_id": invoice["client_id"],
        "amount": amount,
        "payment_method": method,
        **extra,
    }
    return api.post("/api/payments", json=body, headers=headers)


@pytest.fixture
def march_invoice(api, auth_headers, client_c, march_jobs):
    response = _generate(api, auth_headers, client_c.id)
    assert response.status_code == 201
    return response.json()


# =============================================================================
# Auth and routing
# =============================================================================


class TestAuth:

    def test_missing_token(self, api):
        response = api.get("/api/invoices")

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "UNAUTHORIZED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token(self, api):
        response = api.get("/api/invoices", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_token_signed_with_other_secret(self, api, operator):
        token = jwt.encode({"id": operator.id}, "some-other-secret", algorithm="HS256")

        response = api.get("/api/invoices", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_unknown_route(self, api, auth_headers):
        response = api.get("/api/nowhere", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    def test_missing_invoice_is_not_a_missing_route(self, api, auth_headers):
        response = api.get("/api/invoices/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"

    def test_health(self, api):
        response = api.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


# =============================================================================
# Invoices
# =============================================================================


class TestGenerateEndpoint:

    def test_creates_invoice_with_jobs(self, api, auth_headers, client_c, march_jobs):
        response = _generate(api, auth_headers, client_c.id, notes="March hire")

        assert response.status_code == 201
        body = response.json()
        assert body["invoice_number"].endswith("/24-25/1")
        assert Decimal(body["subtotal"]) == Decimal("4500.00")
        assert Decimal(body["tax"]) == Decimal("810.00")
        assert Decimal(body["total_amount"]) == Decimal("5310.00")
        assert Decimal(body["balance_amount"]) == Decimal("5310.00")
        assert body["status"] == "SENT"
        assert body["notes"] == "March hire"
        assert body["client"]["name"] == "Ravi Constructions"
        assert body["payments"] == []

        assert len(body["jobs"]) == 3
        job = body["jobs"][0]
        assert job["invoice_id"] == body["id"]
        assert job["date"] == "2025-03-03"
        assert job["driver"]["name"] == "Mahesh"
        assert job["vehicle"]["registration_no"] == "RJ01 AB 1234"
        assert job["vehicle"]["vehicle_type"]["name"] == "JCB 3DX"

    def test_jobs_linked_in_database(self, api, db, auth_headers, client_c, march_jobs):
        invoice_id = _generate(api, auth_headers, client_c.id).json()["id"]

        db.expire_all()
        linked = db.query(Job).filter(Job.invoice_id == invoice_id).count()
        assert linked == 3

    def test_nothing_to_bill(self, api, db, auth_headers, client_c):
        response = _generate(api, auth_headers, client_c.id)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NO_UNBILLED_JOBS"
        assert db.query(Invoice).count() == 0

    def test_second_generation_finds_nothing(self, api, auth_headers, client_c, march_invoice):
        response = _generate(api, auth_headers, client_c.id)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NO_UNBILLED_JOBS"

    def test_missing_client_id(self, api, auth_headers):
        response = api.post("/api/invoices/generate", json=MARCH, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_malformed_date(self, api, auth_headers, client_c):
        response = _generate(api, auth_headers, client_c.id, start_date="March 1st")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_start_after_end(self, api, auth_headers, client_c, march_jobs):
        response = _generate(
            api, auth_headers, client_c.id, start_date="2025-03-31", end_date="2025-03-01"
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_foreign_client(self, api, auth_headers, foreign_client):
        response = _generate(api, auth_headers, foreign_client.id)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"


class TestInvoiceReads:

    def test_get_invoice_with_payments(self, api, auth_headers, march_invoice):
        _pay(api, auth_headers, march_invoice, "1000.00", method="UPI", reference_no="UPI-77")

        response = api.get(f"/api/invoices/{march_invoice['id']}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "PARTIAL"
        assert Decimal(body["paid_amount"]) == Decimal("1000.00")
        assert Decimal(body["balance_amount"]) == Decimal("4310.00")
        assert len(body["payments"]) == 1
        assert body["payments"][0]["reference_no"] == "UPI-77"

    def test_other_operator_cannot_read(self, api, other_auth_headers, march_invoice):
        response = api.get(f"/api/invoices/{march_invoice['id']}", headers=other_auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"

    def test_list_search_and_status(self, api, auth_headers, client_d, make_job, march_invoice):
        make_job("800", date(2025, 3, 9), client=client_d)
        _generate(api, auth_headers, client_d.id)

        body = api.get("/api/invoices", headers=auth_headers).json()
        assert body["total"] == 2

        body = api.get("/api/invoices", params={"search": "ravi"}, headers=auth_headers).json()
        assert body["total"] == 1
        item = body["invoices"][0]
        assert item["id"] == march_invoice["id"]
        assert item["job_count"] == 3
        assert item["payment_count"] == 0
        assert item["client"]["name"] == "Ravi Constructions"

        body = api.get("/api/invoices", params={"status": "SENT", "limit": 1}, headers=auth_headers).json()
        assert body["total"] == 2
        assert len(body["invoices"]) == 1

        body = api.get("/api/invoices", params={"status": "PAID"}, headers=auth_headers).json()
        assert body == {"invoices": [], "total": 0}

    def test_list_unknown_status(self, api, auth_headers):
        response = api.get("/api/invoices", params={"status": "SETTLED"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_unbilled_jobs_preview(self, api, db, auth_headers, client_c, march_jobs):
        params = {"client_id": client_c.id, **MARCH}

        response = api.get("/api/invoices/unbilled-jobs", params=params, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert [job["id"] for job in body["jobs"]] == [job.id for job in march_jobs]
        assert Decimal(body["cgst"]) == Decimal("405.00")
        assert Decimal(body["sgst"]) == Decimal("405.00")
        assert Decimal(body["total_amount"]) == Decimal("5310.00")
        assert db.query(Invoice).count() == 0

    def test_client_summary(self, api, auth_headers, client_c, march_invoice):
        _pay(api, auth_headers, march_invoice, "310")

        response = api.get(f"/api/invoices/client/{client_c.id}/summary", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total_invoices"] == 1
        assert Decimal(body["total_billed"]) == Decimal("5310.00")
        assert Decimal(body["total_paid"]) == Decimal("310.00")
        assert Decimal(body["total_outstanding"]) == Decimal("5000.00")
        assert body["by_status"]["PARTIAL"]["count"] == 1


# =============================================================================
# Payments
# =============================================================================


class TestPaymentsEndpoint:

    def test_full_payment(self, api, db, auth_headers, march_invoice):
        response = _pay(api, auth_headers, march_invoice, "5310.00")

        assert response.status_code == 201
        body = response.json()
        assert Decimal(body["amount"]) == Decimal("5310.00")
        assert body["payment_method"] == "CASH"

        db.expire_all()
        invoice = db.get(Invoice, march_invoice["id"])
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.balance_amount == Decimal("0.00")

    def test_overpayment(self, api, db, auth_headers, march_invoice):
        response = _pay(api, auth_headers, march_invoice, "5310.01")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "EXCEEDS_BALANCE"
        assert db.query(Payment).count() == 0

    def test_zero_amount(self, api, auth_headers, march_invoice):
        response = _pay(api, auth_headers, march_invoice, 0)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_AMOUNT"

    def test_sub_paisa_amount(self, api, db, auth_headers, march_invoice):
        response = _pay(api, auth_headers, march_invoice, "0.005")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"
        assert db.query(Payment).count() == 0

    def test_unknown_invoice_before_amount_check(self, api, auth_headers, client_c):
        response = _pay(api, auth_headers, {"id": 9999, "client_id": client_c.id}, 0)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "NOT_FOUND"

    def test_unknown_method(self, api, auth_headers, march_invoice):
        response = _pay(api, auth_headers, march_invoice, "10", method="PAYPAL")

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_INPUT"

    def test_list_payments(self, api, auth_headers, other_auth_headers, march_invoice):
        _pay(api, auth_headers, march_invoice, "100", payment_date="2025-04-01T10:00:00")
        _pay(api, auth_headers, march_invoice, "200", payment_date="2025-04-05T10:00:00")

        response = api.get("/api/payments", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert [Decimal(p["amount"]) for p in body] == [Decimal("200.00"), Decimal("100.00")]
        assert body[0]["invoice_number"] == march_invoice["invoice_number"]
        assert body[0]["client_name"] == "Ravi Constructions"

        filtered = api.get(
            "/api/payments", params={"invoice_id": march_invoice["id"]}, headers=auth_headers
        ).json()
        assert len(filtered) == 2

        assert api.get("/api/payments", headers=other_auth_headers).json() == []
