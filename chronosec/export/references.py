"""Regulatory citations and per-step guidance used in exported documents."""

from __future__ import annotations

from pydantic import BaseModel

from chronosec.timeline.models import StepType


class FrameworkReference(BaseModel):
    author: str
    year: int
    title: str
    detail: str = ""
    url: str
    site: str


class StepGuidance(BaseModel):
    context: str
    responsible_role: str
    checklist: list[str]
    estimated_effort: str


class HandlingInstructions(BaseModel):
    title: str
    severity: str
    paragraphs: list[str]


_CITATIONS: dict[str, dict[StepType, str]] = {
    "hipaa": {
        StepType.IDENTIFY: "HIPAA Security Rule, 45 CFR § 164.308(a)(6)(ii)",
        StepType.NOTIFY: "HIPAA Breach Notification Rule, 45 CFR §§ 164.400-414",
        StepType.CONTAIN: "HHS Guidance on HIPAA Security Rule Contingency Planning",
        StepType.DOCUMENT: "HIPAA Security Rule, 45 CFR § 164.308(a)(6)(ii)",
        StepType.REMEDIATE: "HIPAA Security Rule, 45 CFR § 164.308(a)(7)(ii)",
        StepType.REPORT: "HIPAA Breach Notification Rule, 45 CFR § 164.404",
        StepType.ASSESS: "HIPAA Security Rule, 45 CFR § 164.308(a)(1)(ii)(A)",
        StepType.ANALYZE: "HIPAA Security Rule, 45 CFR § 164.308(a)(6)(ii)",
        StepType.REVIEW: "HIPAA Security Rule, 45 CFR § 164.308(a)(8)",
    },
    "gdpr": {
        StepType.IDENTIFY: "GDPR Article 33(1)",
        StepType.NOTIFY: "GDPR Articles 33-34",
        StepType.CONTAIN: "GDPR Article 32",
        StepType.DOCUMENT: "GDPR Article 33(5)",
        StepType.REMEDIATE: "GDPR Article 32",
        StepType.REPORT: "GDPR Article 33(1)",
        StepType.ASSESS: "GDPR Article 35",
        StepType.ANALYZE: "GDPR Article 33(3)(d)",
        StepType.REVIEW: "GDPR Article 32(1)(d)",
    },
    "nist": {
        StepType.IDENTIFY: "NIST SP 800-61r2, Section 3.2.1",
        StepType.NOTIFY: "NIST SP 800-61r2, Section 3.2.7",
        StepType.CONTAIN: "NIST SP 800-61r2, Section 3.3.1",
        StepType.DOCUMENT: "NIST SP 800-61r2, Section 3.3.2",
        StepType.REMEDIATE: "NIST SP 800-61r2, Section 3.4",
        StepType.REPORT: "NIST SP 800-61r2, Section 3.4.3",
        StepType.ASSESS: "NIST SP 800-61r2, Section 3.2.6",
        StepType.ANALYZE: "NIST SP 800-61r2, Section 3.2.4",
        StepType.REVIEW: "NIST SP 800-61r2, Section 3.4.1",
    },
    "pci_dss": {
        StepType.IDENTIFY: "PCI DSS v4.0, Requirement 12.10.1",
        StepType.NOTIFY: "PCI DSS v4.0, Requirement 12.10.4",
        StepType.CONTAIN: "PCI DSS v4.0, Requirement 12.10.5",
        StepType.DOCUMENT: "PCI DSS v4.0, Requirement 12.10.6",
        StepType.REMEDIATE: "PCI DSS v4.0, Requirement 12.10.7",
        StepType.REPORT: "PCI DSS v4.0, Requirement 12.10.4",
        StepType.ASSESS: "PCI DSS v4.0, Requirement 12.10.3",
        StepType.ANALYZE: "PCI DSS v4.0, Requirement 12.10.6",
        StepType.REVIEW: "PCI DSS v4.0, Requirement 12.10.8",
    },
}

_DEFAULT_CITATIONS: dict[StepType, str] = {
    StepType.IDENTIFY: "ISO/IEC 27035-1:2016, Section 7.2",
    StepType.NOTIFY: "ISO/IEC 27035-1:2016, Section 7.4",
    StepType.CONTAIN: "SANS Incident Handler's Handbook, Section 4.3",
    StepType.DOCUMENT: "ISO/IEC 27035-2:2016, Section 7.3",
    StepType.REMEDIATE: "ISO/IEC 27035-2:2016, Section 7.5",
    StepType.REPORT: "FIRST CSIRT Framework v2.1, Section 3.4",
    StepType.ASSESS: "ISO/IEC 27035-1:2016, Section 7.2",
    StepType.ANALYZE: "SANS Incident Handler's Handbook, Section 4.4",
    StepType.REVIEW: "ISO/IEC 27035-2:2016, Section 7.6",
}

_FRAMEWORK_REFERENCES: dict[str, list[FrameworkReference]] = {
    "hipaa": [
        FrameworkReference(
            author="U.S. Department of Health & Human Services",
            year=2013,
            title="HIPAA Breach Notification Rule, 45 CFR §§ 164.400-414",
            url="https://www.hhs.gov/hipaa/for-professionals/breach-notification/index.html",
            site="HHS.gov",
        ),
        FrameworkReference(
            author="Office for Civil Rights",
            year=2023,
            title="Guidance on HIPAA & Contingency Planning",
            url="https://www.hhs.gov/hipaa/for-professionals/security/guidance/contingency-planning/index.html",
            site="HHS.gov",
        ),
        FrameworkReference(
            author="U.S. Department of Health & Human Services",
            year=2013,
            title="HIPAA Security Rule, 45 CFR § 164.308",
            url="https://www.hhs.gov/hipaa/for-professionals/security/laws-regulations/index.html",
            site="HHS.gov",
        ),
    ],
    "gdpr": [
        FrameworkReference(
            author="European Data Protection Board",
            year=2022,
            title="Guidelines on Personal Data Breach Notification under GDPR",
            url="https://edpb.europa.eu/our-work-tools/our-documents/guidelines/guidelines-012021-examples-regarding-personal-data-breach_en",
            site="EDPB.europa.eu",
        ),
        FrameworkReference(
            author="Information Commissioner's Office",
            year=2023,
            title="Guide to the UK General Data Protection Regulation",
            url="https://ico.org.uk/for-organisations/uk-gdpr-guidance-and-resources/",
            site="ICO.org.uk",
        ),
        FrameworkReference(
            author="European Union",
            year=2016,
            title="General Data Protection Regulation",
            detail="Articles 32-34",
            url="https://gdpr-info.eu/",
            site="GDPR-info.eu",
        ),
    ],
    "pci_dss": [
        FrameworkReference(
            author="PCI Security Standards Council",
            year=2022,
            title="Payment Card Industry Data Security Standard v4.0",
            detail="Section 12.10",
            url="https://www.pcisecuritystandards.org/document_library/",
            site="PCISecurityStandards.org",
        ),
        FrameworkReference(
            author="PCI Security Standards Council",
            year=2018,
            title="Information Supplement: Best Practices for Implementing a Security Incident Response Program",
            url="https://www.pcisecuritystandards.org/document_library/?category=best_practices",
            site="PCISecurityStandards.org",
        ),
    ],
    "nist": [
        FrameworkReference(
            author="Cichonski, P., et al.",
            year=2012,
            title="Computer Security Incident Handling Guide",
            detail="NIST Special Publication 800-61 Revision 2",
            url="https://csrc.nist.gov/publications/detail/sp/800-61/rev-2/final",
            site="NIST.gov",
        ),
        FrameworkReference(
            author="National Institute of Standards and Technology",
            year=2023,
            title="Framework for Improving Critical Infrastructure Cybersecurity",
            detail="Version 1.1",
            url="https://www.nist.gov/cyberframework",
            site="NIST.gov",
        ),
    ],
}

_DEFAULT_REFERENCES = [
    FrameworkReference(
        author="International Organization for Standardization",
        year=2016,
        title="ISO/IEC 27035:2016 Information Security Incident Management",
        url="https://www.iso.org/standard/60803.html",
        site="ISO.org",
    ),
    FrameworkReference(
        author="FIRST.org",
        year=2019,
        title="Computer Security Incident Response Team (CSIRT) Services Framework",
        detail="Version 2.1",
        url="https://www.first.org/standards/frameworks/csirts/",
        site="FIRST.org",
    ),
    FrameworkReference(
        author="SANS Institute",
        year=2020,
        title="Incident Handler's Handbook",
        url="https://www.sans.org/white-papers/33901/",
        site="SANS.org",
    ),
]

_GUIDANCE: dict[StepType, StepGuidance] = {
    StepType.IDENTIFY: StepGuidance(
        context="Identifying the scope and nature of the incident is crucial for effective response.",
        responsible_role="Security Analyst",
        checklist=["Verify the incident", "Determine the scope", "Document initial findings"],
        estimated_effort="1-2 hours",
    ),
    StepType.NOTIFY: StepGuidance(
        context="Timely notification ensures all stakeholders are aware and can take appropriate action.",
        responsible_role="Incident Manager",
        checklist=["Identify stakeholders", "Prepare notification message", "Send notifications"],
        estimated_effort="30 minutes",
    ),
    StepType.CONTAIN: StepGuidance(
        context="Containment prevents further damage and limits the impact of the incident.",
        responsible_role="Security Engineer",
        checklist=[
            "Isolate affected systems",
            "Disable compromised accounts",
            "Implement temporary security measures",
        ],
        estimated_effort="2-4 hours",
    ),
    StepType.DOCUMENT: StepGuidance(
        context="Proper documentation provides a record of the incident and supports compliance efforts.",
        responsible_role="Compliance Officer",
        checklist=["Record all actions taken", "Collect evidence", "Maintain a timeline of events"],
        estimated_effort="1-2 hours",
    ),
    StepType.REMEDIATE: StepGuidance(
        context="Remediation restores systems to normal operation and prevents recurrence.",
        responsible_role="System Administrator",
        checklist=["Apply patches", "Restore from backups", "Rebuild compromised systems"],
        estimated_effort="4-8 hours",
    ),
    StepType.REPORT: StepGuidance(
        context="Reporting to authorities ensures compliance and helps prevent future incidents.",
        responsible_role="Legal Counsel",
        checklist=["Prepare a formal report", "Submit to relevant authorities", "Document lessons learned"],
        estimated_effort="2-4 hours",
    ),
    StepType.ASSESS: StepGuidance(
        context="Assessing the impact helps prioritize response efforts.",
        responsible_role="Security Analyst",
        checklist=[
            "Determine the impact on business operations",
            "Identify affected assets",
            "Prioritize response efforts",
        ],
        estimated_effort="1-2 hours",
    ),
    StepType.ANALYZE: StepGuidance(
        context="Analyzing the root cause helps prevent similar incidents in the future.",
        responsible_role="Forensic Investigator",
        checklist=["Identify the root cause", "Determine the attack vector", "Analyze malware samples"],
        estimated_effort="4-8 hours",
    ),
    StepType.REVIEW: StepGuidance(
        context="Reviewing the incident response process helps identify areas for improvement.",
        responsible_role="Incident Response Team",
        checklist=[
            "Evaluate the effectiveness of the response",
            "Identify areas for improvement",
            "Update incident response plan",
        ],
        estimated_effort="2-4 hours",
    ),
}


def citation_for(step_type: StepType, framework: str) -> str:
    return _CITATIONS.get(framework, {}).get(step_type) or _DEFAULT_CITATIONS[step_type]


def references_for(framework: str) -> list[FrameworkReference]:
    return _FRAMEWORK_REFERENCES.get(framework, _DEFAULT_REFERENCES)


def guidance_for(step_type: StepType) -> StepGuidance:
    return _GUIDANCE[step_type]


_CONFIDENTIAL_HANDLING = HandlingInstructions(
    title="Handling Instructions - CONFIDENTIAL",
    severity="danger",
    paragraphs=[
        "This document contains sensitive information. Access should be limited to authorized personnel only.",
        "Do not share electronically without encryption. "
        "Physical copies must be stored in locked containers when not in use.",
        "Disposal must be via secure shredding or deletion.",
    ],
)

_INTERNAL_HANDLING = HandlingInstructions(
    title="Handling Instructions - INTERNAL USE ONLY",
    severity="warning",
    paragraphs=[
        "This document is for internal use only and should not be shared outside the organization without approval.",
        "Store electronic copies only on approved internal systems. Do not store on personal devices.",
    ],
)

# Keyed by upper-cased classification label.
_HANDLING: dict[str, HandlingInstructions] = {
    "PUBLIC": HandlingInstructions(
        title="Handling Instructions - PUBLIC",
        severity="info",
        paragraphs=[
            "This document is classified as PUBLIC and may be freely distributed both internally and externally.",
            "No specific handling precautions are required.",
        ],
    ),
    "INTERNAL": _INTERNAL_HANDLING,
    "INTERNAL USE ONLY": _INTERNAL_HANDLING,
    "CONFIDENTIAL": _CONFIDENTIAL_HANDLING,
    "RESTRICTED": HandlingInstructions(
        title="Handling Instructions - RESTRICTED",
        severity="restricted",
        paragraphs=[
            "This document contains highly sensitive information. Access is restricted to named individuals only.",
            "Do not print unless absolutely necessary. Electronic copies must be encrypted at rest and in transit.",
            "Do not forward or share without explicit authorization. All access must be logged.",
            "Disposal must be witnessed and documented.",
        ],
    ),
}

_DEFAULT_HANDLING = HandlingInstructions(
    title="Handling Instructions",
    severity="info",
    paragraphs=["Handle according to your organization's information security policies."],
)


def handling_for(classification: str) -> HandlingInstructions:
    return _HANDLING.get(classification.strip().upper(), _DEFAULT_HANDLING)
