import asyncio
import json
import sys
from unittest.mock import patch

REQUEST = {"incident_type": "ransomware", "framework": "gdpr", "start_time": "2024-01-01T00:00:00Z"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_catalogs(client):
    incident_types = client.get("/timeline/incident-types").json()["incident_types"]
    frameworks = client.get("/timeline/frameworks").json()["frameworks"]

    assert {"id": "insider_threat", "name": "Insider Threat"} in incident_types
    assert [f["id"] for f in frameworks] == ["nerc_cip", "gdpr", "hipaa", "pci_dss", "ferc", "nist", "ccpa"]


def test_generate_timeline(client):
    resp = client.post("/timeline/generate", json=REQUEST)
    assert resp.status_code == 200

    body = resp.json()
    assert body["framework_name"] == "GDPR"
    assert body["incident_type_name"] == "Ransomware Attack"
    assert len(body["steps"]) == 8
    assert body["steps"][0]["id"] == "detect"
    assert body["steps"][0]["type"] == "identify"
    authority = next(s for s in body["steps"] if s["id"] == "authority_notification")
    assert authority["time"].startswith("2024-01-04T00:00:00")


def test_generate_rejects_malformed_body(client):
    resp = client.post("/timeline/generate", json={"incident_type": "ransomware", "start_time": "not a date"})
    assert resp.status_code == 422


def test_calendar_and_gantt(client):
    calendar = client.post("/timeline/calendar", json=REQUEST).json()
    assert [d["day"] for d in calendar][:2] == ["2024-01-01", "2024-01-04"]

    gantt = client.post("/timeline/gantt", json=REQUEST).json()
    assert gantt["total_days"] == 15
    assert gantt["rows"][-1]["day_offset"] == 14


def test_progress(client):
    resp = client.post("/timeline/progress", json={**REQUEST, "completed_ids": ["detect"]})
    assert resp.json()["completed"] == 1
    assert resp.json()["remaining"] == 7


def test_enhance_without_llm_returns_standard_timeline(client):
    body = client.post("/ai/enhance-timeline", json=REQUEST).json()
    assert body["enhanced"] is False
    assert body["recommendations"] == []
    assert [s["id"] for s in body["timeline"]][0] == "detect"
    assert len(body["timeline"]) == 8


def test_enhance_with_llm(client, use_llm):
    base = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    llm = use_llm(json.dumps({"timeline": base, "recommendations": ["Engage the DPO"]}))

    body = client.post("/ai/enhance-timeline", json=REQUEST).json()

    assert body["enhanced"] is True
    assert body["recommendations"] == ["Engage the DPO"]
    llm.ainvoke.assert_awaited_once()


def test_analyze_and_compliance_fallbacks(client, use_llm):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    payload = {**REQUEST, "steps": steps}
    use_llm("not json at all", RuntimeError("model overloaded"))

    compliance = client.post("/ai/compliance-check", json=payload).json()
    assert compliance["overallScore"] == 67
    assert compliance["generated"] is False

    analysis = client.post("/ai/analyze", json=payload).json()
    assert analysis["generated"] is False
    assert len(analysis["recommendations"]) == 3


def test_analyze_rejects_empty_timeline(client):
    resp = client.post("/ai/analyze", json={**REQUEST, "steps": []})
    assert resp.status_code == 422


def test_export_markdown(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    resp = client.post("/export/markdown", json={**REQUEST, "steps": steps})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/markdown")
    assert 'filename="incident-timeline-' in resp.headers["content-disposition"]
    assert "### Supervisory Authority Notification" in resp.text
    assert resp.headers["x-document-id"] in resp.text


def test_export_html_uses_default_classification(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    resp = client.post("/export/html", json={**REQUEST, "steps": steps})

    assert resp.status_code == 200
    assert "ransomware-attack-timeline-" in resp.headers["content-disposition"]
    assert "CONFIDENTIAL" in resp.text


def test_export_pdf_falls_back_to_html(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    with patch("chronosec.export.router.html_to_pdf", return_value=None):
        resp = client.post("/export/pdf", json={**REQUEST, "steps": steps, "classification": ""})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert '.html"' in resp.headers["content-disposition"]
    assert "CONFIDENTIAL" not in resp.text


def test_export_pdf(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    with patch("chronosec.export.router.html_to_pdf", return_value=b"%PDF-1.7 fake"):
        resp = client.post("/export/pdf", json={**REQUEST, "steps": steps})

    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content == b"%PDF-1.7 fake"


def test_metrics_endpoint_counts_timelines(client):
    client.post("/timeline/generate", json={**REQUEST, "framework": "nist"})
    text = client.get("/metrics").text
    assert 'chronosec_timelines_generated_total{framework="nist"}' in text


def test_generate_rejects_start_time_near_datetime_max(client):
    resp = client.post("/timeline/generate", json={**REQUEST, "framework": "nerc_cip", "start_time": "9999-12-01T00:00:00"})
    assert resp.status_code == 422
    assert "start_time" in resp.text

    resp = client.post("/timeline/generate", json={**REQUEST, "framework": "nerc_cip", "start_time": "9000-01-01T00:00:00"})
    assert resp.status_code == 200


def test_export_non_ascii_incident_type(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]

    for incident_type in ["勒索软件", 'say "cheese"']:
        resp = client.post("/export/html", json={**REQUEST, "incident_type": incident_type, "steps": steps})
        assert resp.status_code == 200
        disposition = resp.headers["content-disposition"]
        assert 'filename="' in disposition
        assert "filename*=UTF-8''" in disposition

    assert 'filename="say-cheese-timeline-' in disposition


def test_export_pdf_without_weasyprint(client, monkeypatch):
    from chronosec.export.pdf import html_to_pdf

    monkeypatch.setitem(sys.modules, "weasyprint", None)
    assert html_to_pdf("<p/>") is None

    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    resp = client.post("/export/pdf", json={**REQUEST, "steps": steps})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Incident Response Timeline" in resp.text


def test_export_custom_document_options(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    resp = client.post(
        "/export/html",
        json={
            **REQUEST,
            "steps": steps,
            "classification": "restricted",
            "document_id": "IR-2024-007",
            "notes": "Legal hold in effect.\n\nContact the DPO before release.",
        },
    )

    assert resp.headers["x-document-id"] == "IR-2024-007"
    assert "Handling Instructions - RESTRICTED" in resp.text
    assert "All access must be logged." in resp.text
    assert "<p>Contact the DPO before release.</p>" in resp.text
    assert "Document Revision History" in resp.text
    assert "Document ID: IR-2024-007" in resp.text

    resp = client.post("/export/html", json={**REQUEST, "steps": steps, "include_revision_history": False})
    assert "Document Revision History" not in resp.text


def test_export_rejects_unsafe_document_id(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    resp = client.post("/export/markdown", json={**REQUEST, "steps": steps, "document_id": "DOC 1\r\nX-Evil: 1"})
    assert resp.status_code == 422


def test_export_accepts_mixed_naive_and_aware_times(client):
    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    # internal_notify moved from +1h to a naive 06:00, after containment at +3h
    steps[1] = {**steps[1], "time": "2024-01-01T06:00:00"}

    resp = client.post("/export/markdown", json={**REQUEST, "steps": steps})

    assert resp.status_code == 200
    assert resp.text.index("### Begin Containment") < resp.text.index("### Internal Team Notification")


def test_export_pdf_converts_off_the_event_loop(client):
    loops = []

    def convert(html):
        try:
            loops.append(asyncio.get_running_loop())
        except RuntimeError:
            loops.append(None)
        return b"%PDF-1.7 fake"

    steps = client.post("/timeline/generate", json=REQUEST).json()["steps"]
    with patch("chronosec.export.router.html_to_pdf", side_effect=convert):
        resp = client.post("/export/pdf", json={**REQUEST, "steps": steps})

    assert resp.headers["content-type"] == "application/pdf"
    assert loops == [None]
