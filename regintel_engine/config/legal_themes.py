"""Legal theme taxonomy and keyword vocabularies for corpus analysis.

Themes are static configuration. A case belongs to a theme when any of the
theme's keywords occurs (case-insensitive substring) in its title, summary
or key issues. A case may belong to several themes.

Precedent value per theme:
- high: product liability, regulatory compliance, data privacy, AI/ML devices
- medium: clinical trials, patents/IP, market access
"""

from typing import Any, Dict, List

LEGAL_THEMES: List[Dict[str, Any]] = [
    {
        "id": "product_liability",
        "name": "Product Liability for Medical Devices",
        "description": "Manufacturer liability for harm caused by defective devices",
        "keywords": [
            "product liability", "defective device", "manufacturer liability",
            "Produkthaftung", "Herstellerhaftung",
        ],
        "precedent_value": "high",
        "applicable_jurisdictions": ["US", "EU", "DE", "UK"],
        "category": "Liability",
    },
    {
        "id": "regulatory_compliance",
        "name": "Regulatory Compliance Breaches",
        "description": "Violations of FDA, EMA or other regulatory requirements",
        "keywords": [
            "FDA violation", "regulatory breach", "compliance failure",
            "EMA non-compliance", "Zulassungsverstoß",
        ],
        "precedent_value": "high",
        "applicable_jurisdictions": ["US", "EU", "DE", "UK", "CH"],
        "category": "Regulatory",
    },
    {
        "id": "clinical_trial_issues",
        "name": "Clinical Trials and Ethics",
        "description": "Clinical study conduct, informed consent, ethics committees",
        "keywords": [
            "clinical trial", "informed consent", "ethics committee",
            "klinische Studie", "Aufklärung",
        ],
        "precedent_value": "medium",
        "applicable_jurisdictions": ["US", "EU", "DE", "UK", "CH"],
        "category": "Clinical",
    },
    {
        "id": "patent_ip",
        "name": "Patents and Intellectual Property",
        "description": "Patent disputes and licensing for medical technology",
        "keywords": [
            "patent infringement", "intellectual property", "licensing",
            "Patentverletzung", "Lizenzierung",
        ],
        "precedent_value": "medium",
        "applicable_jurisdictions": ["US", "EU", "DE", "UK", "CH"],
        "category": "IP",
    },
    {
        "id": "market_access",
        "name": "Market Access and Reimbursement",
        "description": "Disputes over market authorization, pricing and reimbursement",
        "keywords": [
            "market access", "reimbursement", "pricing", "Marktzugang", "Erstattung",
        ],
        "precedent_value": "medium",
        "applicable_jurisdictions": ["US", "EU", "DE", "UK", "CH"],
        "category": "Market Access",
    },
    {
        "id": "data_privacy",
        "name": "Data Privacy and Medical Data",
        "description": "GDPR compliance and patient data protection",
        "keywords": [
            "GDPR", "DSGVO", "data protection", "patient privacy", "Datenschutz",
        ],
        "precedent_value": "high",
        "applicable_jurisdictions": ["EU", "DE", "UK", "CH"],
        "category": "Privacy",
    },
    {
        "id": "ai_ml_devices",
        "name": "AI/ML-based Medical Devices",
        "description": "Legal questions around artificial intelligence and machine learning",
        "keywords": [
            "artificial intelligence", "machine learning", "AI device",
            "KI-Medizinprodukt", "algorithm",
        ],
        "precedent_value": "high",
        "applicable_jurisdictions": ["US", "EU", "DE", "UK"],
        "category": "AI/ML",
    },
]

# Themes whose presence raises legal approval confidence
HIGH_RELEVANCE_THEME_IDS: List[str] = [
    "product_liability",
    "regulatory_compliance",
    "ai_ml_devices",
]

# Trend vocabulary
TREND_KEYWORDS: List[str] = [
    "artificial intelligence", "machine learning", "cybersecurity", "data protection",
    "telemedicine", "digital health", "remote monitoring", "blockchain",
    "software as medical device", "algorithm bias", "privacy by design",
]

RISK_INDICATORS: List[str] = [
    "class action", "punitive damages", "regulatory violation",
    "criminal charges", "injunctive relief", "recall",
    "death", "serious injury", "FDA warning letter",
]

# Standards and the regulations that reference them
KNOWN_STANDARDS: List[Dict[str, Any]] = [
    {
        "id": "ISO 13485:2016",
        "name": "Quality Management Systems",
        "keywords": ["quality management", "qms", "iso 13485"],
        "regulations": ["EU MDR", "FDA QSR", "21 CFR 820"],
        "categories": ["All Medical Devices"],
    },
    {
        "id": "ISO 10993",
        "name": "Biological Evaluation",
        "keywords": ["biocompatibility", "biological evaluation", "iso 10993"],
        "regulations": ["EU MDR Annex I", "FDA Biocompatibility"],
        "categories": ["Implantable Devices", "Contact Devices"],
    },
    {
        "id": "ISO 14971:2019",
        "name": "Risk Management",
        "keywords": ["risk management", "risk analysis", "iso 14971"],
        "regulations": ["EU MDR Article 10", "FDA Risk Management"],
        "categories": ["All Medical Devices"],
    },
    {
        "id": "IEC 62304",
        "name": "Medical Device Software",
        "keywords": ["software", "medical device software", "iec 62304"],
        "regulations": ["EU MDR Annex I", "FDA Software Guidance"],
        "categories": ["Software as Medical Device", "Device with Software"],
    },
]

# Label patterns for manufacturer extraction, tried in order
MANUFACTURER_PATTERNS: List[str] = [
    r"manufacturer[:\s]+([^,\n.]+)",
    r"applicant[:\s]+([^,\n.]+)",
    r"company[:\s]+([^,\n.]+)",
    r"sponsor[:\s]+([^,\n.]+)",
]

# Title prefixes stripped (in order) before treating the rest as a device name
DEVICE_TITLE_PREFIXES: List[str] = [
    r"^(FDA|EMA|BfArM|MHRA|Swissmedic)[\s:]+",
    r"^(510\(k\)|PMA|CE Mark)[\s:]+",
    r"^(Clearance|Approval|Registration)[\s:]+",
]
