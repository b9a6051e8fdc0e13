"""Authority reliability and relevance configuration for approval scoring.

Source hierarchy (from most to least reliable):
1. FDA recall database: 0.98
2. FDA clearance/approval databases: 0.95
3. EMA, ISO standards: 0.90
4. BfArM, Swissmedic, IEC standards: 0.85
5. MHRA, PMDA: 0.80
6. WHO prequalification: 0.75
7. NMPA: 0.70
8. ANVISA: 0.65
9. Unknown authorities: 0.50

The values are hand-picked baselines carried over from the production
dashboard. They are exposed through EngineConfig so deployments can
override individual entries.
"""

from typing import Dict, List

# Key: source identifier or authority name (lowercase)
# Value: reliability score 0.5-0.98
AUTHORITY_RELIABILITY: Dict[str, float] = {
    # Source feed identifiers
    "fda_510k": 0.95,
    "fda_recalls": 0.98,
    "ema_epar": 0.90,
    "bfarm_guidelines": 0.85,
    "swissmedic_guidelines": 0.85,
    "mhra_guidance": 0.80,
    "iso_standards": 0.90,
    "iec_standards": 0.85,
    "who_prequalification": 0.75,
    "pmda_japan": 0.80,
    "nmpa_china": 0.70,
    "anvisa_brazil": 0.65,

    # Authority names
    "fda": 0.95,
    "ema": 0.90,
    "bfarm": 0.85,
    "swissmedic": 0.85,
    "mhra": 0.80,
    "iso": 0.90,
    "iec": 0.85,
    "who": 0.75,
    "pmda": 0.80,
    "nmpa": 0.70,
    "anvisa": 0.65,
}

# Fallback for authorities missing from AUTHORITY_RELIABILITY
DEFAULT_RELIABILITY: float = 0.5

# Jurisdictions that earn the relevance bonus
HIGH_PRIORITY_JURISDICTIONS: List[str] = ["US", "EU", "DE", "CH", "UK"]

# Content-quality keywords (searched in the body)
REGULATORY_KEYWORDS: List[str] = [
    "regulation",
    "compliance",
    "approval",
    "standard",
    "guideline",
]

# Relevance keywords (searched in title + body)
HIGH_RELEVANCE_KEYWORDS: List[str] = [
    "medical device",
    "medizinprodukt",
    "mdr",
    "ivdr",
    "510k",
    "pma",
    "clinical evaluation",
    "post-market surveillance",
    "cybersecurity",
]

MEDIUM_RELEVANCE_KEYWORDS: List[str] = [
    "healthcare",
    "health technology",
    "digital health",
    "telemedicine",
    "artificial intelligence",
    "machine learning",
    "iot device",
]

# Legal relevance keywords (searched in title + summary)
MEDTECH_KEYWORDS: List[str] = [
    "medical device",
    "implant",
    "pacemaker",
    "catheter",
    "stent",
    "diagnostic device",
    "surgical instrument",
    "medical software",
]

LEGAL_RELEVANCE_KEYWORDS: List[str] = [
    "product liability",
    "fda violation",
    "regulatory compliance",
    "clinical trial",
    "informed consent",
    "medical malpractice",
]

# Content analysis vocabularies
DEVICE_TYPE_KEYWORDS: List[str] = [
    "diagnostic", "therapeutic", "surgical", "monitoring", "imaging",
    "implantable", "prosthetic", "orthopedic", "cardiovascular", "neurological",
    "ophthalmic", "dental", "dermatological", "respiratory", "anesthesia",
    "infusion pump", "defibrillator", "pacemaker", "catheter", "stent",
    "artificial intelligence", "machine learning", "software", "mobile app",
]

THERAPEUTIC_AREAS: List[str] = [
    "cardiology", "neurology", "oncology", "orthopedics", "ophthalmology",
    "gastroenterology", "urology", "gynecology", "dermatology", "endocrinology",
]

COMPLIANCE_TERMS: List[str] = [
    "cybersecurity", "clinical evaluation", "post-market surveillance",
    "quality management", "risk management", "biocompatibility",
    "software lifecycle", "usability engineering", "clinical investigation",
]

URGENT_KEYWORDS: List[str] = [
    "immediate", "urgent", "critical", "emergency", "recall", "safety alert",
]

MEDICAL_TERMS: List[str] = [
    "medical device", "therapeutic", "diagnostic", "surgical", "implantable",
]

REGULATORY_TERMS: List[str] = [
    "fda", "ema", "mdr", "iso", "iec", "clinical evaluation",
]

# Update type -> timeline event category
EVENT_CATEGORIES: Dict[str, str] = {
    "FDA 510(k) Clearance": "Pre-market Clearance",
    "FDA PMA Approval": "Pre-market Approval",
    "FDA Device Recall": "Safety Action",
    "CE Mark": "European Conformity",
    "EU MDR Device Registration": "Registration",
    "EU MDR Incident Report": "Safety Report",
    "Clinical Study": "Clinical Evidence",
    "RSS Update": "Information Update",
}

DEFAULT_EVENT_CATEGORY: str = "Regulatory Update"
