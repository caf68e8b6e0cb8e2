from datetime import date, datetime

from chronosec.timeline.generator import generate
from chronosec.timeline.views import completion_summary, gantt_chart, gantt_rows, gantt_span, group_by_day


def test_group_by_day_buckets_gdpr_timeline(start_time):
    days = group_by_day(generate("ransomware", start_time, "gdpr"))

    assert list(days) == [
        date(2024, 1, 1),
        date(2024, 1, 4),
        date(2024, 1, 5),
        date(2024, 1, 6),
        date(2024, 1, 15),
    ]
    assert [s.id for s in days[date(2024, 1, 1)]] == [
        "detect",
        "internal_notify",
        "containment",
        "initial_documentation",
    ]


def test_gantt_offsets_count_calendar_days():
    # 22:00 start: the +4h containment step lands on the next calendar day.
    steps = generate("malware", datetime(2024, 3, 10, 22, 0), "nist")
    offsets = {r.step.id: r.day_offset for r in gantt_rows(steps)}

    assert offsets["detect"] == 0
    assert offsets["internal_notify"] == 0
    assert offsets["containment"] == 1
    assert offsets["post_incident_analysis"] == 14


def test_gantt_chart_span(start_time):
    chart = gantt_chart(generate("ransomware", start_time, "nerc_cip"))
    assert chart.start_date == date(2024, 1, 1)
    assert chart.total_days == 91
    assert gantt_span(chart.rows) == chart.total_days


def test_gantt_of_empty_timeline():
    chart = gantt_chart([])
    assert chart.rows == []
    assert chart.total_days == 0
    assert chart.start_date is None


def test_completion_summary_ignores_unknown_ids(start_time):
    steps = generate("ddos", start_time, "ferc")
    summary = completion_summary(steps, ["detect", "internal_notify", "not_a_step", "detect"])

    assert summary.total == 8
    assert summary.completed == 2
    assert summary.remaining == 6
    assert summary.percent_complete == 25.0
