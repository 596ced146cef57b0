import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from ticketdesk import tasks_repo
from ticketdesk.api_client import ApiError
from ticketdesk.app_state import get_client
from ticketdesk.dashboard import status_counts_frame, summarize, tasks_frame
from ticketdesk.layout import guard
from ticketdesk.models import STATUS_LABELS
from ticketdesk.routes import DASHBOARD_PATH
from ticketdesk.ui import alert, card, data_table, kpi_card

guard(DASHBOARD_PATH)
client = get_client()

STATUS_COLORS = {
    STATUS_LABELS[1]: "rgb(107,114,128)",
    STATUS_LABELS[2]: "rgb(245,158,11)",
    STATUS_LABELS[3]: "rgb(34,197,94)",
}


for _key in ("dash_from", "dash_to"):
    st.session_state.setdefault(_key, None)


def _reset_filter():
    st.session_state.dash_from = None
    st.session_state.dash_to = None


with card():
    h1, h2, h3, h4 = st.columns([2, 1.2, 1.2, 0.9])
    with h1:
        st.title("📊 Dashboard")
    with h2:
        date_from = st.date_input("From", key="dash_from", format="YYYY-MM-DD")
    with h3:
        date_to = st.date_input("To", key="dash_to", format="YYYY-MM-DD")
    with h4:
        st.write("")
        st.button("Reset filter", on_click=_reset_filter, use_container_width=True)

try:
    with st.spinner("Loading..."):
        tasks = tasks_repo.list_tasks(client)
    error = ""
except ApiError as exc:
    tasks, error = [], exc.message

alert(error)

summary = summarize(tasks, date_from, date_to)

k1, k2, k3 = st.columns(3)
with k1:
    kpi_card("To Do", summary.counts[1], "1")
with k2:
    kpi_card("In Progress", summary.counts[2], "2")
with k3:
    kpi_card("Done", summary.counts[3], "3")

counts_df = status_counts_frame(summary.counts)

with card("Tickets per Status", "📈"):
    c1, c2 = st.columns(2)
    with c1:
        bar = px.bar(
            counts_df,
            x="status",
            y="count",
            color="status",
            color_discrete_map=STATUS_COLORS,
            labels={"status": "", "count": "Tickets"},
        )
        bar.update_layout(showlegend=False, height=300, margin=dict(l=10, r=10, t=10, b=10))
        bar.update_yaxes(rangemode="tozero", dtick=1)
        st.plotly_chart(bar, use_container_width=True)
    with c2:
        donut = go.Figure(
            go.Pie(
                labels=counts_df["status"],
                values=counts_df["count"],
                hole=0.55,
                marker=dict(colors=[STATUS_COLORS[s] for s in counts_df["status"]]),
                sort=False,
            )
        )
        donut.update_layout(height=300, margin=dict(l=10, r=10, t=10, b=10))
        st.plotly_chart(donut, use_container_width=True)

t1, t2 = st.columns(2)
with t1:
    with card("Due within 3 days", "⏰"):
        data_table(tasks_frame(summary.approaching))
with t2:
    with card("Past due date", "🚨"):
        data_table(tasks_frame(summary.overdue))
