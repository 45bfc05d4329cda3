# ECSA guideline professional fees: Government Gazette No. 52691 (16 May 2025)
# Amounts in ZAR. Secondary rates are percentages of the cost above the bracket floor.
# A bracket "max" of None is open-ended.

MIN_PROJECT_VALUE = 1_000_000

_ENGINEERING_BRACKETS_LOW = [
    {"min": 1_050_000, "max": 2_100_000, "primary_fee": 178_500, "secondary_rate": 17.0},
    {"min": 2_100_000, "max": 10_500_000, "primary_fee": 336_000, "secondary_rate": 12.5},
    {"min": 10_500_000, "max": 21_000_000, "primary_fee": 1_386_000, "secondary_rate": 10.5},
]

TABLES = {
    "1": {
        "id": "1",
        "name": "Civil & Structural Engineering (Engineering Projects)",
        "description": "Guideline fees for engineering projects as per Table 1.",
        "brackets": _ENGINEERING_BRACKETS_LOW + [
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 2_488_500, "secondary_rate": 9.0},
            {"min": 52_500_000, "max": 105_000_000, "primary_fee": 5_323_500, "secondary_rate": 8.0},
            {"min": 105_000_000, "max": 630_000_000, "primary_fee": 9_523_500, "secondary_rate": 7.0},
            {"min": 630_000_000, "max": None, "primary_fee": 46_273_500, "secondary_rate": 6.0},
        ],
    },
    "2": {
        "id": "2",
        "name": "Additional Design Fee: Reinforced Concrete & Structural Steel",
        "description": (
            "Supplementary fees in addition to Table 1 for reinforced concrete "
            "and structural steel."
        ),
        "brackets": [
            {"min": 1_050_000, "max": 2_100_000, "primary_fee": 84_000, "secondary_rate": 8.0},
            {"min": 2_100_000, "max": 10_500_000, "primary_fee": 157_500, "secondary_rate": 5.5},
            {"min": 10_500_000, "max": 21_000_000, "primary_fee": 619_500, "secondary_rate": 4.5},
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 1_092_000, "secondary_rate": 3.5},
            {"min": 52_500_000, "max": 105_000_000, "primary_fee": 2_194_500, "secondary_rate": 3.0},
            {"min": 105_000_000, "max": None, "primary_fee": 3_769_500, "secondary_rate": 2.5},
        ],
    },
    "3": {
        "id": "3",
        "name": "Civil Engineering (Building Projects)",
        "brackets": _ENGINEERING_BRACKETS_LOW + [
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 2_488_500, "secondary_rate": 9.5},
            {"min": 52_500_000, "max": None, "primary_fee": 5_481_000, "secondary_rate": 8.5},
        ],
    },
    "4": {
        "id": "4",
        "name": "Structural Engineering (Building Projects)",
        "brackets": _ENGINEERING_BRACKETS_LOW + [
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 2_488_500, "secondary_rate": 9.5},
            {"min": 52_500_000, "max": None, "primary_fee": 5_481_000, "secondary_rate": 8.5},
        ],
    },
    "5": {
        "id": "5",
        "name": "Mechanical Engineering (Engineering Projects)",
        "brackets": _ENGINEERING_BRACKETS_LOW + [
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 2_488_500, "secondary_rate": 9.0},
            {"min": 52_500_000, "max": 105_000_000, "primary_fee": 5_323_500, "secondary_rate": 8.0},
            {"min": 105_000_000, "max": 630_000_000, "primary_fee": 9_523_500, "secondary_rate": 7.0},
            {"min": 630_000_000, "max": None, "primary_fee": 46_273_500, "secondary_rate": 6.5},
        ],
    },
    "6": {
        "id": "6",
        "name": "Electrical Engineering (Engineering Projects)",
        "brackets": _ENGINEERING_BRACKETS_LOW + [
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 2_488_500, "secondary_rate": 9.0},
            {"min": 52_500_000, "max": 105_000_000, "primary_fee": 5_323_500, "secondary_rate": 8.0},
            {"min": 105_000_000, "max": 630_000_000, "primary_fee": 9_523_500, "secondary_rate": 7.0},
            {"min": 630_000_000, "max": None, "primary_fee": 46_273_500, "secondary_rate": 6.5},
        ],
    },
    "7": {
        "id": "7",
        "name": "Mechanical Engineering (Building Projects)",
        # Published table stops at R630m, larger projects fall outside the brackets
        "brackets": [
            {"min": 1_050_000, "max": 2_100_000, "primary_fee": 210_000, "secondary_rate": 20.0},
            {"min": 2_100_000, "max": 10_500_000, "primary_fee": 399_000, "secondary_rate": 15.0},
            {"min": 10_500_000, "max": 21_000_000, "primary_fee": 1_659_000, "secondary_rate": 13.0},
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 3_024_000, "secondary_rate": 11.5},
            {"min": 52_500_000, "max": 105_000_000, "primary_fee": 6_646_500, "secondary_rate": 10.5},
            {"min": 105_000_000, "max": 630_000_000, "primary_fee": 12_159_000, "secondary_rate": 10.0},
        ],
    },
    "8": {
        "id": "8",
        "name": "Electrical Engineering (Building Projects)",
        "brackets": [
            {"min": 1_050_000, "max": 2_100_000, "primary_fee": 210_000, "secondary_rate": 20.0},
            {"min": 2_100_000, "max": 10_500_000, "primary_fee": 399_000, "secondary_rate": 15.0},
            {"min": 10_500_000, "max": 21_000_000, "primary_fee": 1_659_000, "secondary_rate": 13.0},
            {"min": 21_000_000, "max": 52_500_000, "primary_fee": 3_024_000, "secondary_rate": 11.5},
            {"min": 52_500_000, "max": 105_000_000, "primary_fee": 6_646_500, "secondary_rate": 10.5},
            {"min": 105_000_000, "max": None, "primary_fee": 12_159_000, "secondary_rate": 10.0},
        ],
    },
}

_BUILDING_SERVICES_FACTORS = [
    {"name": "Multi-tenant installations", "multiplier": 1.25},
    {"name": "Alterations to existing works", "multiplier": 1.25},
    {"name": "Duplication of works", "multiplier": 0.25},
    {"name": "Financial administration handled by QS", "multiplier": 0.85},
]

FACTOR_SETS = {
    "2A": [
        {"name": "Rural roads", "multiplier": 0.85},
        {"name": "Alterations to existing works", "multiplier": 1.25},
        {"name": "Duplication of works", "multiplier": 0.25},
        {"name": "Financial administration handled by QS", "multiplier": 0.85},
    ],
    "3A": [
        {"name": "Alterations to existing works", "multiplier": 1.25},
        {"name": "Internal water and drainage for buildings", "multiplier": 1.25},
        {"name": "Mass concrete foundations, brickwork and cladding", "multiplier": 0.33},
        {"name": "Duplication of works", "multiplier": 0.25},
    ],
    "4A": [
        {"name": "Alterations to existing works", "multiplier": 1.25},
        {"name": "Mass concrete foundations, brickwork and cladding", "multiplier": 0.33},
        {"name": "Duplication of works", "multiplier": 0.25},
    ],
    "5A": _BUILDING_SERVICES_FACTORS,
    "6A": _BUILDING_SERVICES_FACTORS,
    "7A": _BUILDING_SERVICES_FACTORS,
    "8A": _BUILDING_SERVICES_FACTORS,
}

# Tables 1 and 2 share the civil engineering factor set
TABLE_FACTOR_SETS = {
    "1": "2A",
    "2": "2A",
    "3": "3A",
    "4": "4A",
    "5": "5A",
    "6": "6A",
    "7": "7A",
    "8": "8A",
}

STAGE_SETS = {
    "Civil Engineering Projects": [
        ("Inception", 5),
        ("Concept and Viability", 25),
        ("Design Development", 25),
        ("Documentation and Procurement", 25),
        ("Contract Administration and Inspection", 15),
        ("Close-Out", 5),
    ],
    "Structural Engineering Projects": [
        ("Inception", 5),
        ("Concept and Viability", 25),
        ("Design Development", 30),
        ("Documentation and Procurement", 10),
        ("Contract Administration and Inspection", 25),
        ("Close-Out", 5),
    ],
    "Building Projects": [
        ("Inception", 5),
        ("Concept and Viability", 25),
        ("Design Development", 25),
        ("Documentation and Procurement", 15),
        ("Contract Administration and Inspection", 25),
        ("Close-Out", 5),
    ],
    "Mechanical and Electrical Projects": [
        ("Inception", 5),
        ("Concept and Viability", 15),
        ("Design Development", 20),
        ("Documentation and Procurement", 20),
        ("Contract Administration and Inspection", 35),
        ("Close-Out", 5),
    ],
}

TABLE_STAGE_SETS = {
    "1": "Civil Engineering Projects",
    "2": "Civil Engineering Projects",
    "3": "Building Projects",
    "4": "Structural Engineering Projects",
    "5": "Mechanical and Electrical Projects",
    "6": "Mechanical and Electrical Projects",
    "7": "Mechanical and Electrical Projects",
    "8": "Mechanical and Electrical Projects",
}

ECSA_2025 = {
    "name": "ECSA Guideline Professional Fees 2025",
    "reference": "Government Gazette No. 52691 (16 May 2025)",
    "minimum_project_value": MIN_PROJECT_VALUE,
    "tables": TABLES,
    "factor_sets": FACTOR_SETS,
    "table_factor_sets": TABLE_FACTOR_SETS,
    "stage_sets": STAGE_SETS,
    "table_stage_sets": TABLE_STAGE_SETS,
}
