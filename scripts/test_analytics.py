#!/usr/bin/env python3
"""
Analytics Tests - latest row, mock fallback, generation.

Run: pytest scripts/test_analytics.py
"""
from sqlalchemy.exc import OperationalError

from hr360.api.routes.analytics_routes import MOCK_ANALYTICS
from hr360.services.records_service import AnalyticsRepository

ANALYTICS_INPUT = {
    "company_data": "320 employees, 14% attrition last year, engineering overtime up 20%.",
    "industry_benchmarks": "SaaS median attrition 12%, median engineer salary 28 LPA.",
    "economic_indicators": "Hiring market cooling, inflation at 5%.",
}

ANALYTICS_REPLY = {
    "attrition_prediction": "Attrition expected to rise to 16% in engineering.",
    "burnout_heatmap": "Engineering high, Sales moderate.",
    "salary_benchmarks": "Engineering 6% below median.",
    "key_insights": "Rebalance on-call load and review engineering pay bands.",
}


def _assert_mock(body):
    assert body["id"] == 1
    assert body["attrition_prediction"] == MOCK_ANALYTICS["attrition_prediction"]
    assert body["key_insights"] == MOCK_ANALYTICS["key_insights"]


def test_mock_without_database_credentials(client, settings, monkeypatch):
    monkeypatch.setattr(settings, "database_url", "")
    monkeypatch.setattr(settings, "postgres_password", "")
    response = client.get("/api/analytics")
    assert response.status_code == 200
    _assert_mock(response.json())


def test_mock_on_database_error(client, monkeypatch):
    def broken(self):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(AnalyticsRepository, "latest", broken)
    response = client.get("/api/analytics")
    assert response.status_code == 200
    _assert_mock(response.json())


def test_mock_when_table_is_empty(client, monkeypatch):
    monkeypatch.setattr(AnalyticsRepository, "latest", lambda self: None)
    _assert_mock(client.get("/api/analytics").json())


def test_generate_stores_newest_row(client, auth_headers, llm):
    llm.reply_with(ANALYTICS_REPLY)
    response = client.post("/api/analytics/generate", headers=auth_headers, json=ANALYTICS_INPUT)
    assert response.status_code == 201, response.text
    created = response.json()
    assert created["burnout_heatmap"] == "Engineering high, Sales moderate."

    latest = client.get("/api/analytics").json()
    assert latest["id"] == created["id"]
    assert latest["key_insights"] == ANALYTICS_REPLY["key_insights"]


def test_generate_requires_auth(client, llm):
    assert client.post("/api/analytics/generate", json=ANALYTICS_INPUT).status_code in (401, 403)
    assert llm.calls == []
