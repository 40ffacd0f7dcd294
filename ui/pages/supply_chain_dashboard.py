"""
GeoPortfolio — Supply Chain Emission
------------------------------------
Cocoa/coffee traceability showcase for Central Sulawesi: actors on a map
(by type or emission heatmap), their transactions and CoolFarmTool
emission breakdowns.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from analytics.aggregation import CALCULATION_TYPES, emission_summary, emission_unit, ghg_totals
from analytics.filters import ALL, FilterSpec, filter_actors, transactions_for_actor
from analytics.fixtures import build_fixture_repository
from analytics.view_binding import actors_feature_collection
from ui.components.visualizer import actor_legend, build_actors_map, build_emission_bar, build_ghg_pie

st.set_page_config(page_title="Supply Chain Emission — GeoPortfolio", layout="wide")


@st.cache_resource
def fixtures():
    return build_fixture_repository()


repo = fixtures()

st.title("Supply Chain Emission")
st.caption("Producers → traders → export warehouse. Demo data.")

with st.sidebar:
    st.header("Filters")
    types = st.multiselect("Actor types", ["producer", "trader", "warehouse"],
                           default=["producer", "trader", "warehouse"])
    district = st.selectbox("District", [ALL] + sorted({a.district for a in repo.actors}))
    commodity = st.selectbox("Commodity", [ALL] + sorted({a.commodity for a in repo.actors if a.commodity}))
    heatmap = st.toggle("Emission heatmap", value=False)
    calculation = st.selectbox("Calculation", list(CALCULATION_TYPES), index=3)

actors = filter_actors(repo.actors, FilterSpec(region=district, commodity=commodity,
                                               actor_types=frozenset(types)))

# ----------------------------------------------------------------------------
# 1. Map
# ----------------------------------------------------------------------------
map_col, detail_col = st.columns([3, 2])
with map_col:
    if actors:
        st.plotly_chart(build_actors_map(actors_feature_collection(actors, heatmap=heatmap)),
                        use_container_width=True)
    else:
        st.info("No actors match the current filters.")
    st.caption(" · ".join(f"{t}: {c}" for t, c in actor_legend().items()))

# ----------------------------------------------------------------------------
# 2. Actor detail
# ----------------------------------------------------------------------------
with detail_col:
    actor_id = st.selectbox("Actor", [a.id for a in actors],
                            format_func=lambda aid: repo.actor_by_id(aid).name)
    if actor_id:
        actor = repo.actor_by_id(actor_id)
        st.subheader(f"{actor.name} ({actor.display_id})")
        st.table(pd.DataFrame(list(actor.details.items()), columns=["Attribute", "Value"]).astype(str))
        txs = transactions_for_actor(repo.transactions, actor_id)
        st.markdown(f"**Transactions ({len(txs)})**")
        st.dataframe(pd.DataFrame([
            {"id": t.id, "from": t.from_id, "to": t.to_id, "commodity": t.commodity,
             "gross_kg": t.gross_kg, "date": t.date.isoformat()}
            for t in txs
        ]), hide_index=True)

# ----------------------------------------------------------------------------
# 3. Emission summary
# ----------------------------------------------------------------------------
st.markdown("---")
unit = emission_unit(calculation)
summary = emission_summary(actors)
st.metric("Total emission", f"{summary['total']:,.2f} {unit}")
bar_col, pie_col = st.columns([3, 2])
bar_col.plotly_chart(build_emission_bar(summary["by_source"], unit), use_container_width=True)
pie_col.plotly_chart(build_ghg_pie(ghg_totals(actors)), use_container_width=True)
