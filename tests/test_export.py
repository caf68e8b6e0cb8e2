import re
from datetime import datetime, timezone

from chronosec.export.document import build_context, export_filename, format_time, generate_document_id
from chronosec.export.html import render_html
from chronosec.export.markdown import render_markdown
from chronosec.export.references import citation_for, handling_for, references_for
from chronosec.timeline.generator import generate
from chronosec.timeline.models import StepType, TimelineStep


def test_document_id_format():
    doc_id = generate_document_id(datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert re.fullmatch(r"DOC-[0-9A-Z]+-[0-9A-Z]{6}", doc_id)
    # 1704067200000 ms in base 36
    assert doc_id.split("-")[1] == "LQU5M2O0"


def test_format_time():
    t = datetime(2024, 1, 4, 15, 5)
    assert format_time(t) == "Jan 4, 2024 3:05 PM"
    assert format_time(t, long=True) == "January 4, 2024 3:05 PM"
    assert format_time(datetime(2024, 1, 4, 0, 0)) == "Jan 4, 2024 12:00 AM"


def test_export_filename():
    today = datetime(2024, 2, 29)
    assert export_filename("data_breach", "pdf", today) == "data-breach-timeline-2024-02-29.pdf"
    assert export_filename("custom_thing", "html", today) == "custom-thing-timeline-2024-02-29.html"
    assert export_filename("勒索软件", "html", today) == "incident-timeline-2024-02-29.html"


def test_citations_fall_back_to_iso_references():
    assert citation_for(StepType.NOTIFY, "gdpr") == "GDPR Articles 33-34"
    assert citation_for(StepType.NOTIFY, "ferc") == "ISO/IEC 27035-1:2016, Section 7.4"
    assert references_for("ccpa")[0].site == "ISO.org"


def test_markdown_lists_every_step(start_time):
    steps = generate("ransomware", start_time, "gdpr")
    ctx = build_context(steps, "ransomware", "gdpr", start_time)

    md = render_markdown(ctx)

    assert md.startswith("# Incident Response Timeline")
    assert "**Incident Type:** Ransomware Attack" in md
    assert "**Framework:** GDPR" in md
    assert "**Start Time:** January 1, 2024 12:00 AM" in md
    for step in steps:
        assert f"### {step.title}" in md
    assert "**Time:** Jan 4, 2024 12:00 AM" in md
    assert "**Type:** Notify" in md
    assert md.count(ctx.document_id) == 2


def test_html_groups_steps_into_phases(start_time):
    steps = generate("data_breach", start_time, "hipaa")
    ctx = build_context(steps, "data_breach", "hipaa", start_time, classification="RESTRICTED")

    html = render_html(ctx)

    assert "RESTRICTED" in html
    assert "This timeline includes 17 steps across 90 days" in html
    assert "Phase 1: Detection &amp; Initial Response" in html
    assert "HIPAA Breach Notification Rule, 45 CFR §§ 164.400-414" in html
    assert "Forensic Investigator" in html
    for step in steps:
        assert f'id="step-{step.id}"' in html


def test_html_escapes_client_text(start_time):
    steps = [
        TimelineStep(
            id="detect",
            title="<script>alert(1)</script>",
            description="Tom & Jerry",
            time=start_time,
            type=StepType.IDENTIFY,
        )
    ]
    html = render_html(build_context(steps, "phishing", "nist", start_time))

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "Tom &amp; Jerry" in html


def test_handling_instructions_by_classification():
    assert handling_for("Internal").title == handling_for("INTERNAL USE ONLY").title
    assert handling_for(" confidential ").severity == "danger"
    assert handling_for("TOP SECRET").title == "Handling Instructions"


def test_custom_document_id_and_notes(start_time):
    steps = generate("phishing", start_time, "nist")
    ctx = build_context(steps, "phishing", "nist", start_time, document_id="IR-42", notes="  Board briefed.  ")

    md = render_markdown(ctx)
    html = render_html(ctx)

    assert md.count("IR-42") == 2
    assert "## Additional Notes\n\nBoard briefed." in md
    assert "Document Revision History" not in html
    assert "Handling Instructions" not in html
