"""
Streamlit UI for the Contact Pricing Calculator.

Features:
- Volume entry with live quote summary
- Resolution trace for the selected volume
- Plan table and price schedule chart
"""
import streamlit as st
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from contact_pricing.engine import PricingEngine
from contact_pricing.engine.models import format_trace
from contact_pricing.engine.plans import plans_frame
from contact_pricing.data.build_schedule import price_schedule
from contact_pricing.config.settings import get_settings
from contact_pricing.ui.formatting import format_currency, format_volume


st.set_page_config(
    page_title="Contact Pricing Calculator",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine()


@st.cache_data
def get_schedule():
    """Get cached price schedule for the chart."""
    return price_schedule(engine=get_engine())


try:
    engine = get_engine()
    settings = get_settings()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


# ============================================================================
# SIDEBAR: Volume
# ============================================================================
with st.sidebar:
    st.header("📇 Contacts")

    with st.container(border=True):
        volume = st.number_input("Contact volume", min_value=0, value=1500, step=100, key="volume_input")

    st.divider()
    st.caption(f"{len(engine.plans)} plan tiers loaded")


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Contact Pricing Calculator")
st.caption(f"Pricing Engine Active | {datetime.now().strftime('%Y-%m-%d')}")

tab1, tab2 = st.tabs(["⚡ Quote", "📚 Plans"])

with tab1:
    quote, trace = engine.calculate_with_trace(int(volume))

    if quote is None:
        st.info("Enter a contact volume above zero to see a quote.")
    elif quote.consultation:
        st.warning(quote.message)
        st.caption(f"Level {quote.level}")
    else:
        m1, m2, m3 = st.columns(3)
        m1.metric("Monthly Total", format_currency(quote.total, settings))
        m2.metric("Plan Level", quote.level)
        m3.metric("Included Contacts", format_volume(quote.included_volume, settings))

        st.divider()
        c1, c2 = st.columns(2)
        c1.markdown(f"**Base fee:** {format_currency(quote.base_fee, settings)}")
        c1.markdown(f"**Per 100 extra contacts:** {format_currency(quote.overage_unit_cost, settings)}")
        c2.markdown(f"**Extra contacts:** {format_volume(quote.overage_volume, settings)}")
        c2.markdown(f"**Extra contacts cost:** {format_currency(quote.overage_cost, settings)}")

    with st.expander("🔍 Resolution Details"):
        st.text(format_trace(trace))

with tab2:
    st.subheader("Plan Tiers")
    st.dataframe(plans_frame(engine.plans), use_container_width=True)

    st.subheader("Monthly Total by Volume")
    schedule = get_schedule()
    priced = schedule[schedule['outcome'] == 'priced'].set_index('volume')
    st.line_chart(priced['total'])
