from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from main import app

SARAH_PROMPT = (
    "Invoice for Sarah Johnson (sarah@company.com) - 5 hours of consulting at $150/hour, "
    "10% tax, due next week"
)


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["services"]["semantic_kernel"] is True


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "healthy"
    assert body["services"]["invoice_plugin"] is True


def test_generate_invoice(client):
    response = client.post("/api/invoices/generate", json={"prompt": SARAH_PROMPT})
    assert response.status_code == 200

    body = response.json()
    assert body["clientName"] == "Sarah Johnson"
    assert body["total"] == pytest.approx(825.0)
    issue_date = date.fromisoformat(body["issueDate"])
    assert body["dueDate"] == (issue_date + timedelta(days=7)).isoformat()


def test_generate_invoice_without_prompt_uses_defaults(client):
    body = client.post("/api/invoices/generate", json={}).json()
    assert body["clientName"] == "Client Name"
    assert body["lineItems"][0]["description"] == "Professional Services"
    assert body["total"] == 1000.0


def test_recalculate_invoice(client):
    invoice = client.post("/api/invoices/generate", json={"prompt": SARAH_PROMPT}).json()
    invoice["lineItems"][0]["quantity"] = 10

    body = client.post("/api/invoices/recalculate", json=invoice).json()
    assert body["lineItems"][0]["amount"] == pytest.approx(1500.0)
    assert body["total"] == pytest.approx(1650.0)


def test_recalculate_rejects_malformed_record(client):
    response = client.post("/api/invoices/recalculate", json={"clientName": "Only a name"})
    assert response.status_code == 422


def test_examples(client):
    examples = client.get("/api/invoices/examples").json()["examples"]
    assert len(examples) == 6
    assert all(isinstance(example, str) for example in examples)


def test_agent_invoke(client):
    response = client.post(
        "/api/agent/invoke",
        json={"function": "generate_invoice", "arguments": {"description": SARAH_PROMPT}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["result"]["clientName"] == "Sarah Johnson"


def test_agent_invoke_unknown_function(client):
    response = client.post("/api/agent/invoke", json={"function": "delete_everything"})
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert "delete_everything" in body["message"]


def test_agent_health(client):
    body = client.get("/api/agent/health").json()
    assert body["status"] == "healthy"
    assert "generate_invoice" in body["functions"]


def test_agent_invoke_reports_tool_errors(client):
    response = client.post(
        "/api/agent/invoke",
        json={"function": "recalculate_invoice_totals", "arguments": {"invoice_json": "not json"}},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("Failed to recalculate invoice")
