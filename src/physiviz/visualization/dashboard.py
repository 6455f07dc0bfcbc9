"""
PhysiViz Dashboard

Interactive Streamlit page: type a physics problem, get an animated,
editable visualization with the worked solution and graphs.

Run with ``streamlit run src/physiviz/visualization/dashboard.py`` while the
parse service (``physiviz-server``) is running.
"""
import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import streamlit as st
from pydantic import ValidationError

# -- Import package --
try:
    import physiviz  # noqa: F401
except ImportError:
    sys.path.append(str(Path(__file__).parent.parent.parent))

from physiviz.core.animation import AnimationDriver, ManualScheduler
from physiviz.core.controls import ControlPanel
from physiviz.kinematics.motion import motion_for
from physiviz.problem import LiveParameters, ProblemDescription, ProblemFormatError
from physiviz.render.force_diagram import render_force_diagram
from physiviz.render.matplotlib_surface import MatplotlibSurface
from physiviz.render.scene import draw_trajectory
from physiviz.render.surface import replay
from physiviz.service.config import Settings, get_settings
from physiviz.service.parser import RemoteProblemParser, ServiceError
from physiviz.visualization import plotting

FRAME_DELAY = 0.05  # Wall-clock seconds between frames [s]


@dataclass
class SimulationState:
    """Everything that belongs to the currently loaded problem."""

    problem: ProblemDescription
    driver: AnimationDriver
    panel: ControlPanel


def new_state(problem: ProblemDescription) -> SimulationState:
    params = LiveParameters.from_problem(problem)
    driver = AnimationDriver(motion_for(problem.motion_type), params, scheduler=ManualScheduler())
    return SimulationState(problem, driver, ControlPanel(driver, original=params))


def load_problem(problem: ProblemDescription) -> None:
    old = st.session_state.get("sim")
    if old is not None:
        old.driver.dispose()
    st.session_state["sim"] = new_state(problem)
    st.session_state["sim_id"] = st.session_state.get("sim_id", 0) + 1


def show_surface(surface: MatplotlibSurface, target=None) -> None:
    (target or st).pyplot(surface.figure, clear_figure=False)
    plt.close(surface.figure)


# =============================================================================
# Page Configuration
# =============================================================================

st.set_page_config(
    page_title="PhysiViz",
    page_icon="🧪",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("🧪 PhysiViz: Physics Problem Visualizer")

# =============================================================================
# Sidebar - Problem Input
# =============================================================================

st.sidebar.header("📝 Problem")

problem_text = st.sidebar.text_area(
    "Describe a physics problem",
    height=160,
    placeholder="A ball is thrown horizontally at 15 m/s from a 25 m cliff...",
)
try:
    settings = get_settings()
except ValidationError as e:
    st.sidebar.warning(f"Ignoring malformed environment settings: {e.error_count()} error(s)")
    settings = Settings()
parse_url = st.sidebar.text_input("Parse service", value=settings.parse_url)

if st.sidebar.button("🔍 Analyze", type="primary"):
    try:
        with st.spinner("Analyzing problem..."):
            load_problem(RemoteProblemParser(parse_url, settings.timeout).parse(problem_text))
    except (ServiceError, ProblemFormatError) as e:
        st.error(f"❌ {e}")

uploaded = st.sidebar.file_uploader("Or load a problem JSON", type=["json"])
if uploaded is not None and st.session_state.get("uploaded_name") != uploaded.name:
    try:
        load_problem(ProblemDescription.from_payload(json.load(uploaded)))
        st.session_state["uploaded_name"] = uploaded.name
    except (ValueError, ProblemFormatError) as e:
        st.error(f"❌ Failed to load problem: {e}")

sim: SimulationState | None = st.session_state.get("sim")
if sim is None:
    st.info("👈 Enter a problem and press Analyze to start.")
    st.stop()

driver = sim.driver
panel = sim.panel
problem = sim.problem

# =============================================================================
# Layout
# =============================================================================

main_col, side_col = st.columns([3, 1])

with side_col:
    st.subheader("🔎 Problem Analysis")
    st.markdown(f"**{problem.title}**")
    st.caption(problem.description)
    st.markdown(f"**Motion:** `{problem.motion_type.value}`")
    if problem.unknowns:
        st.markdown("**Unknowns:** " + ", ".join(problem.unknowns))

    if problem.equations:
        st.subheader("📐 Key Formulas")
        for eq in problem.equations:
            st.code(eq, language=None)

    st.subheader("⚖️ Free Body Diagram")
    fbd = MatplotlibSurface(200, 200)
    replay(render_force_diagram(problem.force_tags), fbd)
    show_surface(fbd)
    st.caption("Active forces: " + (", ".join(problem.force_tags) or "none"))

with main_col:
    tab_vis, tab_solution, tab_graphs = st.tabs(["🎬 Visualize", "📖 Solution", "📈 Graphs"])

    # -------------------------------------------------------------------------
    # Visualize
    # -------------------------------------------------------------------------
    with tab_vis:
        b1, b2, b3, _ = st.columns([1, 1, 1, 3])
        if b1.button("▶ Play"):
            driver.play()
        if b2.button("⏸ Pause"):
            driver.pause()
        if b3.button("⟲ Reset"):
            driver.reset()

        with st.expander("🎛️ What-if parameters", expanded=True):
            if st.button("Restore original values"):
                panel.restore()
                # fresh widget keys so the sliders pick up the restored values
                st.session_state["sim_id"] += 1
                st.rerun()
            for spec in panel.sliders:
                value = st.slider(
                    f"{spec.label} [{spec.unit}]",
                    min_value=spec.minimum,
                    max_value=spec.maximum,
                    value=float(panel.displayed(spec.name)),
                    step=spec.step,
                    key=f"{st.session_state['sim_id']}_{spec.name}",
                )
                panel.update_from_slider(spec.name, value)

        frame_slot = st.empty()
        status = st.empty()

        def paint() -> None:
            surface = MatplotlibSurface(800, 400)
            driver.render(surface)
            show_surface(surface, frame_slot)
            status.caption(f"t = {driver.simulation_time:.2f} s | {driver.state.value}")

        paint()
        while driver.is_playing and driver.scheduler.run_next():
            paint()
            time.sleep(FRAME_DELAY)

        st.subheader("📍 Trajectory")
        traj = MatplotlibSurface(800, 600)
        draw_trajectory(traj, driver.motion, driver.params)
        show_surface(traj)

    # -------------------------------------------------------------------------
    # Solution
    # -------------------------------------------------------------------------
    with tab_solution:
        if not problem.solution_steps:
            st.info("No worked solution was returned for this problem.")
        for i, step in enumerate(problem.solution_steps, start=1):
            st.markdown(f"**Step {i}: {step.step}**")
            if step.explanation:
                st.write(step.explanation)
            if step.formula:
                st.code(step.formula, language=None)
            if step.value:
                st.markdown(f"→ `{step.value}`")

    # -------------------------------------------------------------------------
    # Graphs
    # -------------------------------------------------------------------------
    with tab_graphs:
        df = plotting.sample_time_series(driver.motion, driver.params)
        fig = plotting.plot_time_series(df, engine="plotly", title=problem.title)
        st.plotly_chart(fig, use_container_width=True)
        with st.expander("📋 Data", expanded=False):
            st.dataframe(df, use_container_width=True)

# =============================================================================
# Footer
# =============================================================================

st.divider()
st.caption("PhysiViz | Built with Streamlit, Matplotlib & Plotly")
