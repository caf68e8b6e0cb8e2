"""Framework rule sets: which response steps each framework requires and when.

Each rule set is an ordered table of ``StepRule`` entries. Offsets are measured
from the incident start time. Steps that only apply to some incident types are
listed in ``CONDITIONAL_STEPS``, keyed by ``(framework, step_id)``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Callable

from pydantic import BaseModel, ConfigDict

from chronosec.timeline.models import StepType

DEFAULT_RULE_SET = "default"


class StepRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    offset: timedelta
    type: StepType


def _minutes(n: int) -> timedelta:
    return timedelta(minutes=n)


def _hours(n: int) -> timedelta:
    return timedelta(hours=n)


def _days(n: int) -> timedelta:
    return timedelta(days=n)


def _only_for(*incident_types: str) -> Callable[[str], bool]:
    allowed = frozenset(incident_types)
    return lambda incident_type: incident_type in allowed


DETECT = StepRule(
    id="detect",
    title="Initial Detection",
    description="Incident is first detected by monitoring systems or reported by users",
    offset=timedelta(0),
    type=StepType.IDENTIFY,
)

# ── NERC CIP-008 ─────────────────────────────────────────────────
# Reportable incidents go to E-ISAC within an hour of determination;
# initial report within 5 calendar days, final within 90.

_NERC_CIP = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify internal cybersecurity and management teams",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Initiate containment procedures to limit impact",
        offset=_hours(2),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="regulator_notify",
        title="E-ISAC Notification",
        description="Notify E-ISAC of reportable cyber security incident",
        offset=_hours(3),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details, actions taken, and initial assessment",
        offset=_hours(4),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Start remediation efforts to restore systems and services",
        offset=_days(1),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="initial_report",
        title="Initial Report Submission",
        description="Submit initial report to E-ISAC and NERC",
        offset=_days(5),
        type=StepType.REPORT,
    ),
    StepRule(
        id="final_report",
        title="Final Report Submission",
        description="Submit final report with detailed analysis and lessons learned",
        offset=_days(90),
        type=StepType.REPORT,
    ),
)

# ── GDPR ─────────────────────────────────────────────────────────
# Article 33: supervisory authority within 72 hours of awareness.

_GDPR = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify DPO and internal security teams",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Initiate containment procedures to limit data exposure",
        offset=_hours(3),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details, data affected, and initial assessment",
        offset=_hours(6),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="authority_notification",
        title="Supervisory Authority Notification",
        description="Notify relevant data protection authority within 72-hour deadline",
        offset=_hours(72),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="data_subject_notification",
        title="Data Subject Notification",
        description="Notify affected individuals without undue delay",
        offset=_hours(96),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement measures to address the breach and prevent recurrence",
        offset=_days(5),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="final_documentation",
        title="Final Documentation",
        description="Complete documentation of incident, response actions, and outcomes",
        offset=_days(14),
        type=StepType.DOCUMENT,
    ),
)

# ── HIPAA ────────────────────────────────────────────────────────
# Individuals within 60 days of discovery; HHS within 60 days for 500+
# individuals, otherwise in the annual report.

_HIPAA = (
    StepRule(
        id="immediate_actions",
        title="Immediate Response Actions",
        description="Isolate affected systems and implement emergency measures to prevent further exposure",
        offset=_minutes(30),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify Privacy Officer, Security Officer, and response team",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="risk_assessment",
        title="Risk Assessment",
        description=(
            "Conduct formal risk assessment to determine scope, impact, and whether "
            "the incident constitutes a breach under HIPAA"
        ),
        offset=_hours(4),
        type=StepType.ASSESS,
    ),
    StepRule(
        id="legal_consultation",
        title="Legal Consultation",
        description="Consult with legal counsel regarding breach determination and reporting obligations",
        offset=_hours(8),
        type=StepType.ASSESS,
    ),
    StepRule(
        id="containment",
        title="Complete Containment",
        description="Complete containment procedures to limit PHI exposure and prevent further compromise",
        offset=_hours(12),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="forensic_analysis",
        title="Forensic Analysis",
        description=(
            "Conduct forensic investigation to determine attack vectors, compromised data, "
            "and extent of breach"
        ),
        offset=_hours(24),
        type=StepType.ANALYZE,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details, PHI affected, and initial assessment findings",
        offset=_hours(36),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement measures to address the breach and mitigate harm",
        offset=_days(2),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="vendor_notification",
        title="Third-Party Vendor Notification",
        description="Notify relevant business associates and third-party vendors that may be affected",
        offset=_days(3),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="law_enforcement",
        title="Law Enforcement Notification",
        description="Notify appropriate law enforcement agencies of the security incident",
        offset=_days(5),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="individual_notification",
        title="Individual Notification",
        description="Notify affected individuals of the breach (required within 60 days of discovery)",
        offset=_days(30),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="hhs_notification",
        title="HHS Notification",
        description=(
            "Submit breach report to HHS Office for Civil Rights "
            "(required within 60 days for 500+ individuals)"
        ),
        offset=_days(45),
        type=StepType.REPORT,
    ),
    StepRule(
        id="media_notification",
        title="Media Notification",
        description=(
            "Provide notice to prominent media outlets for breaches affecting 500+ "
            "individuals in a state or jurisdiction"
        ),
        offset=_days(45),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="employee_training",
        title="Employee Training",
        description="Conduct targeted security awareness training to prevent similar incidents",
        offset=_days(60),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="post_incident_review",
        title="Post-Incident Review",
        description=(
            "Conduct comprehensive review to identify lessons learned and implement "
            "security improvements"
        ),
        offset=_days(75),
        type=StepType.REVIEW,
    ),
    StepRule(
        id="annual_report",
        title="Annual Breach Report",
        description="Include in annual report to HHS for breaches affecting fewer than 500 individuals",
        offset=_days(90),
        type=StepType.REPORT,
    ),
)

# ── PCI DSS ──────────────────────────────────────────────────────

_PCI_DSS = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify security team and management",
        offset=_minutes(30),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Initiate containment procedures to limit cardholder data exposure",
        offset=_hours(2),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details, cardholder data affected, and initial assessment",
        offset=_hours(4),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="payment_brand_notification",
        title="Payment Brand Notification",
        description="Notify relevant payment brands of the incident",
        offset=_hours(24),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement measures to address the breach and secure systems",
        offset=_days(1),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="forensic_investigation",
        title="Forensic Investigation",
        description="Engage PFI (PCI Forensic Investigator) for investigation",
        offset=_days(3),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="final_report",
        title="Final Report Submission",
        description="Submit final incident report to payment brands and card associations",
        offset=_days(30),
        type=StepType.REPORT,
    ),
)

# ── FERC ─────────────────────────────────────────────────────────

_FERC = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify security team and management",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Initiate containment procedures to limit impact",
        offset=_hours(3),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details, systems affected, and initial assessment",
        offset=_hours(6),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="ferc_notification",
        title="FERC Notification",
        description="Notify FERC of the cybersecurity incident",
        offset=_hours(24),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement measures to address the incident and restore operations",
        offset=_days(2),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="initial_report",
        title="Initial Report Submission",
        description="Submit initial incident report to FERC",
        offset=_days(7),
        type=StepType.REPORT,
    ),
    StepRule(
        id="final_report",
        title="Final Report Submission",
        description="Submit comprehensive incident report with root cause analysis",
        offset=_days(60),
        type=StepType.REPORT,
    ),
)

# ── NIST CSF / SP 800-61 ─────────────────────────────────────────

_NIST = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify CSIRT and management",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Implement containment strategy to limit impact",
        offset=_hours(4),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details following NIST SP 800-61 guidelines",
        offset=_hours(8),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="evidence_collection",
        title="Evidence Collection",
        description="Collect and preserve evidence for analysis and potential legal proceedings",
        offset=_hours(12),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement eradication and recovery procedures",
        offset=_days(1),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="stakeholder_notification",
        title="Stakeholder Notification",
        description="Notify relevant stakeholders based on communication plan",
        offset=_days(2),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="post_incident_analysis",
        title="Post-Incident Analysis",
        description="Conduct lessons learned meeting and document findings",
        offset=_days(14),
        type=StepType.DOCUMENT,
    ),
)

# ── CCPA ─────────────────────────────────────────────────────────

_CCPA = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify privacy team and management",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Initiate containment procedures to limit data exposure",
        offset=_hours(4),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description=(
            "Document incident details, California residents' data affected, "
            "and initial assessment"
        ),
        offset=_hours(8),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement measures to address the breach and secure systems",
        offset=_days(2),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="resident_notification",
        title="California Resident Notification",
        description="Notify affected California residents of the breach",
        offset=_days(15),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="ag_notification",
        title="Attorney General Notification",
        description="Notify California Attorney General for breaches affecting 500+ California residents",
        offset=_days(15),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="final_documentation",
        title="Final Documentation",
        description="Complete documentation of incident, response actions, and outcomes",
        offset=_days(30),
        type=StepType.DOCUMENT,
    ),
)

# ── Generic fallback ─────────────────────────────────────────────

_DEFAULT = (
    StepRule(
        id="internal_notify",
        title="Internal Team Notification",
        description="Notify security team and management",
        offset=_hours(1),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="containment",
        title="Begin Containment",
        description="Initiate containment procedures to limit impact",
        offset=_hours(4),
        type=StepType.CONTAIN,
    ),
    StepRule(
        id="initial_documentation",
        title="Initial Documentation",
        description="Document incident details and initial assessment",
        offset=_hours(8),
        type=StepType.DOCUMENT,
    ),
    StepRule(
        id="remediation",
        title="Begin Remediation",
        description="Implement measures to address the incident and restore operations",
        offset=_days(1),
        type=StepType.REMEDIATE,
    ),
    StepRule(
        id="stakeholder_notification",
        title="Stakeholder Notification",
        description="Notify relevant stakeholders of the incident",
        offset=_days(2),
        type=StepType.NOTIFY,
    ),
    StepRule(
        id="final_report",
        title="Final Report",
        description="Complete incident report with findings and recommendations",
        offset=_days(14),
        type=StepType.REPORT,
    ),
)

RULE_SETS: dict[str, tuple[StepRule, ...]] = {
    "nerc_cip": _NERC_CIP,
    "gdpr": _GDPR,
    "hipaa": _HIPAA,
    "pci_dss": _PCI_DSS,
    "ferc": _FERC,
    "nist": _NIST,
    "ccpa": _CCPA,
    DEFAULT_RULE_SET: _DEFAULT,
}

# Latest step in any rule set; start times must leave this much room before datetime.max.
MAX_OFFSET = max(rule.offset for rules in RULE_SETS.values() for rule in rules)

# Steps absent from this table are unconditional.
CONDITIONAL_STEPS: dict[tuple[str, str], Callable[[str], bool]] = {
    ("hipaa", "vendor_notification"): _only_for("phishing", "data_breach"),
    ("hipaa", "law_enforcement"): _only_for("ransomware", "data_breach"),
    ("hipaa", "media_notification"): _only_for("data_breach", "phishing"),
    ("ccpa", "ag_notification"): _only_for("data_breach"),
}


def resolve_rule_set(framework: str) -> str:
    """Name of the rule set that handles ``framework``."""
    return framework if framework in RULE_SETS else DEFAULT_RULE_SET


def applicable_rules(framework: str, incident_type: str) -> list[StepRule]:
    """Rules of the framework's rule set that apply to this incident type, in table order."""
    rule_set = resolve_rule_set(framework)
    rules = []
    for rule in RULE_SETS[rule_set]:
        predicate = CONDITIONAL_STEPS.get((rule_set, rule.id))
        if predicate is None or predicate(incident_type):
            rules.append(rule)
    return rules
