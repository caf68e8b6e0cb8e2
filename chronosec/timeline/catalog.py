"""Known incident types and compliance frameworks."""

from __future__ import annotations

from pydantic import BaseModel


class IncidentType(BaseModel):
    id: str
    name: str


class Framework(BaseModel):
    id: str
    name: str


INCIDENT_TYPES: list[IncidentType] = [
    IncidentType(id="ransomware", name="Ransomware Attack"),
    IncidentType(id="phishing", name="Phishing Campaign"),
    IncidentType(id="data_breach", name="Data Breach"),
    IncidentType(id="ddos", name="DDoS Attack"),
    IncidentType(id="malware", name="Malware Infection"),
    IncidentType(id="insider_threat", name="Insider Threat"),
    IncidentType(id="physical_breach", name="Physical Security Breach"),
]

FRAMEWORKS: list[Framework] = [
    Framework(id="nerc_cip", name="NERC CIP-008"),
    Framework(id="gdpr", name="GDPR"),
    Framework(id="hipaa", name="HIPAA"),
    Framework(id="pci_dss", name="PCI DSS"),
    Framework(id="ferc", name="FERC"),
    Framework(id="nist", name="NIST Cybersecurity Framework"),
    Framework(id="ccpa", name="CCPA"),
]

_INCIDENT_NAMES = {i.id: i.name for i in INCIDENT_TYPES}
_FRAMEWORK_NAMES = {f.id: f.name for f in FRAMEWORKS}


def incident_type_name(incident_type: str) -> str:
    """Display name for an incident type, or the raw id when unknown."""
    return _INCIDENT_NAMES.get(incident_type, incident_type)


def framework_name(framework: str) -> str:
    """Display name for a framework, or the raw id when unknown."""
    return _FRAMEWORK_NAMES.get(framework, framework)
