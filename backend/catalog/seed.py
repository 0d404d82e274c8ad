from __future__ import annotations

from .models import Column, VendorRecord

CLOUD_VENDORS: list[VendorRecord] = [
    VendorRecord(
        id="aws",
        category="cloud",
        name="Amazon Web Services",
        focus_areas=[
            "Virtual Machine",
            "Storage",
            "Machine Learning",
            "Networking",
            "Security",
            "DevOps",
        ],
        workloads=["Enterprise", "Growth", "Public Sector"],
        mitigates=["scalability", "operational", "compliance"],
        strengths="Global infrastructure, automation tooling, rich marketplace of partners.",
        pricing_model="Pay-as-you-go, reserved instances",
        certifications=["ISO 27001", "SOC 2", "FedRAMP"],
        regional_coverage="32 regions, 102 availability zones",
        differentiators=(
            "Deep partner ecosystem with managed service providers for regulated workloads."
        ),
    ),
    VendorRecord(
        id="azure",
        category="cloud",
        name="Microsoft Azure",
        focus_areas=[
            "Virtual Machine",
            "Storage",
            "BI",
            "Machine Learning",
            "Data Analytics",
            "Security",
        ],
        workloads=["Enterprise", "Public Sector", "Growth", "Regulated"],
        mitigates=["identity", "residency", "migration"],
        strengths=(
            "Deep integration with Microsoft 365, hybrid cloud, built-in governance tooling."
        ),
        pricing_model="Consumption with hybrid benefits",
        certifications=["ISO 27001", "SOC 1/2", "GDPR", "HIPAA"],
        regional_coverage="60+ regions worldwide",
        differentiators="Strong hybrid story with Azure Arc and local data center connectivity.",
    ),
    VendorRecord(
        id="gcp",
        category="cloud",
        name="Google Cloud Platform",
        focus_areas=[
            "Data Analytics",
            "Machine Learning",
            "Virtual Machine",
            "DevOps",
            "Networking",
        ],
        workloads=["Digital Native", "Growth", "Startup"],
        mitigates=["cost", "insight", "automation"],
        strengths=(
            "Industry-leading data & AI services, opinionated security defaults, "
            "sustainable infrastructure."
        ),
        pricing_model="Granular pay-as-you-go with committed use discounts",
        certifications=["ISO 27001", "SOC 2", "PCI DSS"],
        regional_coverage="39 regions, 118 zones",
        differentiators="Data analytics stack with BigQuery, Looker, and Vertex AI accelerators.",
    ),
    VendorRecord(
        id="ibm",
        category="cloud",
        name="IBM Cloud",
        focus_areas=["Security", "Data Analytics", "Networking", "Virtual Machine"],
        workloads=["Regulated", "Enterprise", "Public Sector"],
        mitigates=["regulation", "sovereignty", "risk"],
        strengths="Compliance-first cloud with strong data protection and mainframe connectivity.",
        pricing_model="Subscription, reserved capacity, pay-as-you-go",
        certifications=["FISMA", "HIPAA", "GxP"],
        regional_coverage="18 availability zones with EU sovereign options",
        differentiators="Focus on regulated industries with financial services validated zones.",
    ),
    VendorRecord(
        id="do",
        category="cloud",
        name="DigitalOcean",
        focus_areas=["Virtual Machine", "Storage", "DevOps", "Networking"],
        workloads=["Startup", "SMB", "Digital Native"],
        mitigates=["time", "cost", "simplicity"],
        strengths="Simple pricing, managed databases, rapid provisioning for lean teams.",
        pricing_model="Fixed droplets, predictable billing",
        certifications=["SOC 2"],
        regional_coverage="15 data centers across 9 regions",
        differentiators="Developer-friendly UX with flat-rate support plans for startups.",
    ),
]

SECURITY_VENDORS: list[VendorRecord] = [
    VendorRecord(
        id="crowdstrike",
        category="security",
        name="CrowdStrike Falcon",
        focus_areas=["Endpoint", "Threat Intel", "Incident Response"],
        segments=["Enterprise", "Growth"],
        certifications=["FedRAMP", "SOC 2"],
        differentiators="Cloud-native EDR with managed hunting team.",
    ),
    VendorRecord(
        id="wiz",
        category="security",
        name="Wiz",
        focus_areas=["Cloud Posture", "Vulnerability", "Identity"],
        segments=["Enterprise", "Digital Native"],
        certifications=["SOC 2", "ISO 27001"],
        differentiators="Agentless scanning across multi-cloud estates.",
    ),
]

SEED_RECORDS: list[VendorRecord] = CLOUD_VENDORS + SECURITY_VENDORS

# Display metadata per category; rows are filled from storage.
COLLECTION_DEFINITIONS: dict[str, dict] = {
    "cloud": {
        "label": "Cloud Providers",
        "description": (
            "Curated infrastructure partners covering compute, storage, data, "
            "and platform automation needs."
        ),
        "columns": [
            Column(key="name", label="Provider"),
            Column(key="focusAreas", label="Focus areas"),
            Column(key="workloads", label="Workload fit"),
            Column(key="pricingModel", label="Pricing"),
            Column(key="certifications", label="Certifications"),
        ],
    },
    "security": {
        "label": "Security Platforms",
        "description": (
            "Endpoint protection, vulnerability management, and cloud posture "
            "vendors ready for quick engagement."
        ),
        "columns": [
            Column(key="name", label="Vendor"),
            Column(key="focusAreas", label="Focus areas"),
            Column(key="segments", label="Segment"),
            Column(key="certifications", label="Certifications"),
        ],
    },
    "support": {
        "label": "Support & Service Desks",
        "description": "Service desk and ITSM options. Add records here as you expand the catalogue.",
        "columns": [
            Column(key="name", label="Vendor"),
            Column(key="focusAreas", label="Focus"),
            Column(key="segments", label="Segment"),
        ],
    },
    "workos": {
        "label": "Work OS & Collaboration",
        "description": (
            "Project operating systems and collaboration hubs. "
            "Seed with partners as you capture requirements."
        ),
        "columns": [
            Column(key="name", label="Vendor"),
            Column(key="focusAreas", label="Focus"),
            Column(key="segments", label="Segment"),
        ],
    },
}
