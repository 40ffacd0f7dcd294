# database/seed.py
"""
Initial CV content.

`seed_database()` runs at backend startup and only inserts when the
experiences table is empty, so restarts never duplicate rows.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from . import queries

log = logging.getLogger(__name__)

EXPERIENCES = [
    {
        "company": "Koltiva AG",
        "role": "Remote Sensing and Climate Lead",
        "duration": "Jan 2022 - Present",
        "location": "Jakarta, Indonesia",
        "description": (
            "Leading remote sensing projects for environmental and FTTH monitoring. Integrating LiDAR, "
            "satellite imagery, and land-use datasets for supply chain transparency. Managing GIS "
            "developers and environmental scientists."
        ),
        "order": 1,
    },
    {
        "company": "World Resources Institute (WRI)",
        "role": "GIS Developer",
        "duration": "Mar 2019 - Jan 2021",
        "location": "Jakarta, Indonesia",
        "description": (
            "Translated business needs to technical requirements. Developed and deployed automated "
            "prioritization scripts. Coordinated with sustainable commodities researchers."
        ),
        "order": 2,
    },
    {
        "company": "CV Amanah Rimba",
        "role": "GIS Consultant",
        "duration": "Mar 2019 - Jan 2021",
        "location": "Indonesia",
        "description": (
            "Managed geospatial databases, developed maps, and performed aerial photogrammetry for "
            "technical feasibility studies."
        ),
        "order": 3,
    },
    {
        "company": "Center of Agroecology and Land Resources",
        "role": "GIS Developer",
        "duration": "Mar 2017 - Jan 2019",
        "location": "Yogyakarta",
        "description": (
            "Worked on connectivity of protected areas and peat ecosystem cultivation. Designed and "
            "created geospatial databases."
        ),
        "order": 4,
    },
    {
        "company": "Waindo Specterra",
        "role": "GIS Specialist",
        "duration": "July 2016 - Feb 2017",
        "location": "",
        "description": (
            "Surveyed soil characteristics for Land System in East and South Kalimantan. Performed data "
            "capture and analysis."
        ),
        "order": 5,
    },
    {
        "company": "Agricola Nusantara Baramineral",
        "role": "GIS Specialist",
        "duration": "Jan 2016 - July 2016",
        "location": "",
        "description": (
            "Feasibility study on Industrial Scale Vaname Shrimp Farming. Managed geospatial database and "
            "developed maps."
        ),
        "order": 6,
    },
]

EDUCATIONS = [
    {
        "institution": "Universitas Gadjah Mada",
        "degree": "Master of Engineering, Geomatics Engineering",
        "year": "2018 - 2021",
        "description": (
            "Thesis: Development of Spatial Web Based Agricultural Irrigation Management Information System"
        ),
        "order": 1,
    },
    {
        "institution": "Universitas Gadjah Mada",
        "degree": "Bachelor Degree, Soil Science",
        "year": "2012",
        "description": "Thesis: Labile and Stable Fraction of Carbon in Different Landuse",
        "order": 2,
    },
]

SKILLS = [
    {"name": "ArcGIS Pro", "category": "GIS Software"},
    {"name": "QGIS", "category": "GIS Software"},
    {"name": "ENVI / ENVI LiDAR", "category": "Remote Sensing"},
    {"name": "Google Earth Engine", "category": "Cloud Processing"},
    {"name": "Python", "category": "Programming"},
    {"name": "PostgreSQL", "category": "Database"},
    {"name": "SQL", "category": "Database"},
    {"name": "Javascript", "category": "Programming"},
    {"name": "PHP", "category": "Programming"},
    {"name": "Agisoft Metashape", "category": "3D Modelling"},
]

PROJECTS = [
    {
        "title": "Deforestation-free Supply Chain Monitoring",
        "description": (
            "Developed and managed geospatial projects to track deforestation risk commodities like palm oil "
            "and cocoa. Integrated satellite imagery with sustainability models."
        ),
        "role": "Lead",
        "tech_stack": ["Remote Sensing", "GIS", "Python"],
        "order": 1,
    },
    {
        "title": "Spatial Web Irrigation Management System",
        "description": (
            "Master's Thesis project: Development of a web-based information system for agricultural "
            "irrigation management."
        ),
        "role": "Developer/Researcher",
        "tech_stack": ["Web GIS", "Database"],
        "order": 2,
    },
    {
        "title": "Peat Ecosystem Connectivity",
        "description": (
            "Project for Connectivity of Protected Areas and Peat Ecosystem Cultivation in Central Kalimantan."
        ),
        "role": "GIS Developer",
        "tech_stack": ["GIS", "Spatial Analysis"],
        "order": 3,
    },
]


def seed_database(session: Session) -> bool:
    """
    Insert the CV content if the experiences table is empty.

    Returns
    -------
    bool
        True when rows were inserted, False when the database was already seeded.
    """
    if queries.count_experiences(session) > 0:
        log.info("[Seed] experiences present, skipping")
        return False

    for row in EXPERIENCES:
        queries.create_experience(session, **row)
    for row in EDUCATIONS:
        queries.create_education(session, **row)
    for row in SKILLS:
        queries.create_skill(session, **row)
    for row in PROJECTS:
        queries.create_project(session, **row)

    log.info(
        "[Seed] inserted %d experiences, %d educations, %d skills, %d projects",
        len(EXPERIENCES), len(EDUCATIONS), len(SKILLS), len(PROJECTS),
    )
    return True
