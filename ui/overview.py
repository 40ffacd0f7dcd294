"""
GeoPortfolio — Streamlit Home
-----------------------------
Main entrypoint of the multipage app (`streamlit run ui/overview.py`).

Sections: hero, experience, education, skills, projects, testimonies and
the contact form. Profile content comes from the backend API; showcase
dashboards live under ui/pages/.
"""

from __future__ import annotations

from collections import defaultdict

import streamlit as st

from core.errors import TransientFetchError
from core.logging_setup import setup_logging
from core.metadata import get_metadata
from core.ui_helpers import fetch_backend, submit_contact
from ui.components.backend_status import render_status_bar

setup_logging()
META = get_metadata()

st.set_page_config(page_title=META["project"], layout="wide")


@st.cache_data(ttl=300)
def load(endpoint: str):
    return fetch_backend(endpoint)


def section(endpoint: str):
    """Fetch a profile list; render an error state instead of raising."""
    try:
        return load(endpoint)
    except TransientFetchError as e:
        st.error(f"Could not load {endpoint}: {e.reason}")
        return []


# ----------------------------------------------------------------------------
# 1. Hero
# ----------------------------------------------------------------------------
st.title("Remote Sensing & Climate Lead")
st.caption("GIS developer · Earth observation · Supply-chain transparency")
st.markdown(META["description"])
st.markdown("---")

# ----------------------------------------------------------------------------
# 2. Experience & Education
# ----------------------------------------------------------------------------
left, right = st.columns([2, 1])

with left:
    st.subheader("Experience")
    for exp in section("/api/experiences"):
        where = f" · {exp['location']}" if exp.get("location") else ""
        st.markdown(f"**{exp['role']}** — {exp['company']}  \n_{exp['duration']}{where}_")
        st.write(exp["description"])

with right:
    st.subheader("Education")
    for edu in section("/api/educations"):
        st.markdown(f"**{edu['degree']}**  \n{edu['institution']} ({edu['year']})")
        if edu.get("description"):
            st.caption(edu["description"])

# ----------------------------------------------------------------------------
# 3. Skills
# ----------------------------------------------------------------------------
st.markdown("---")
st.subheader("Skills")
by_category = defaultdict(list)
for skill in section("/api/skills"):
    by_category[skill["category"]].append(skill["name"])
cols = st.columns(max(1, min(4, len(by_category))))
for i, (category, names) in enumerate(by_category.items()):
    with cols[i % len(cols)]:
        st.markdown(f"**{category}**")
        st.write(", ".join(names))

# ----------------------------------------------------------------------------
# 4. Projects & Testimonies
# ----------------------------------------------------------------------------
st.markdown("---")
st.subheader("Projects")
for project in section("/api/projects"):
    with st.container(border=True):
        st.markdown(f"### {project['title']}")
        if project.get("role"):
            st.caption(project["role"])
        st.write(project["description"])
        if project.get("techStack"):
            st.write(" · ".join(project["techStack"]))
        if project.get("link"):
            st.markdown(f"[View project]({project['link']})")

testimonies = section("/api/testimonies")
if testimonies:
    st.subheader("Testimonies")
    for t in testimonies:
        st.info(f"“{t['content']}”  \n— {t['name']}" + (f", {t['role']}" if t.get("role") else ""))

st.markdown("---")
st.info("Explore the showcases in the sidebar: Digital Twin, Supply Chain Emission and Flood & Disaster.")

# ----------------------------------------------------------------------------
# 5. Contact
# ----------------------------------------------------------------------------
st.subheader("Get in touch")
with st.form("contact", clear_on_submit=False):
    name = st.text_input("Name")
    email = st.text_input("Email")
    message = st.text_area("Message")
    submitted = st.form_submit_button("Send message")

if submitted:
    try:
        result = submit_contact(name, email, message)
    except TransientFetchError as e:
        st.error(f"Message could not be sent: {e.reason}")
    else:
        if result.get("success"):
            st.success(result.get("message", "Message received"))
        else:
            st.warning(f"{result.get('message', 'Invalid input')}: check the '{result.get('field')}' field.")

render_status_bar(expanded=False)
st.caption(f"© {META['project']} v{META['version']}")
