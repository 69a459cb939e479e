"""
Starter profession taxonomy used to seed empty backends.
"""

from __future__ import annotations

from catalog.records import TaxonomyEntry

DEFAULT_SECTORS: dict[str, list[str]] = {
    "Technology & IT": [
        "Software Developer", "Data Analyst", "UI/UX Designer", "Product Manager",
        "Cybersecurity Specialist", "DevOps Engineer", "System Administrator",
        "Cloud Architect", "QA Tester", "Game Developer",
    ],
    "Health & Medical": [
        "Doctor", "Dentist", "Nurse", "Pharmacist", "Physiotherapist",
        "Psychologist", "Nutritionist", "Veterinarian", "Chiropractor",
        "Surgeon", "Medical Technician", "Speech Therapist", "Home Care Aide",
        "Yoga Instructor", "Personal Trainer",
    ],
    "Creative & Arts": [
        "Graphic Designer", "Content Writer", "Video Editor", "Photographer",
        "Musician", "Fashion Designer", "Interior Designer", "Animator",
        "Voice Artist", "Makeup Artist",
    ],
    "Legal & Finance": [
        "Lawyer", "Chartered Accountant", "Financial Advisor", "Tax Consultant",
        "Bookkeeper", "Notary Public", "Insurance Agent", "Investment Banker",
    ],
    "Home Services": [
        "Plumber", "Electrician", "Carpenter", "Painter", "Gardener",
        "HVAC Technician", "Pest Control", "House Cleaner", "Appliance Repair",
    ],
    "Education & Training": [
        "Tutor", "Teacher", "Language Instructor", "Music Teacher",
        "Driving Instructor", "Career Counselor", "Corporate Trainer",
    ],
    "Events & Hospitality": [
        "Event Planner", "Wedding Planner", "DJ", "Caterer", "Chef",
        "Bartender", "Travel Agent", "Hotel Manager",
    ],
    "Construction & Engineering": [
        "Architect", "Civil Engineer", "Contractor", "Structural Engineer",
        "Surveyor", "Welder", "Safety Officer",
    ],
    "Business & Admin": [
        "Virtual Assistant", "Project Manager", "HR Specialist",
        "Marketing Manager", "Sales Representative", "Real Estate Agent",
    ],
    "Automotive & Transport": [
        "Mechanic", "Driver", "Car Detailer", "Logistics Coordinator",
    ],
}


def default_taxonomy() -> list[TaxonomyEntry]:
    return [
        TaxonomyEntry(profession=profession, sector=sector)
        for sector, professions in DEFAULT_SECTORS.items()
        for profession in professions
    ]
