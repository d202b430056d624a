import streamlit as st
import logging

from config.scenarios import PRESET_SCENARIOS
from core.builders import duplicated, new_scenario
from services.export import scenario_to_json, scenarios_to_json
from services.repository import (
    JsonFileScenarioRepository,
    ScenarioRepository,
    import_scenario_json,
    import_scenarios_json,
)

logger = logging.getLogger(__name__)


def render(repo: ScenarioRepository, store_path: str) -> None:
    """Render the Scenario Library tab."""
    st.header("Scenario Library")
    scenarios = repo.list()

    # ── Stored scenarios ─────────────────────────────────────────────────
    if not scenarios:
        st.info("The library is empty. Load a preset or import a JSON file below.")
    for s in scenarios:
        with st.container(border=True):
            c1, c2, c3, c4 = st.columns([5, 2, 2, 2])
            with c1:
                st.markdown(f"**{'⭐ ' if s.is_baseline else ''}{s.name}**")
                st.caption(
                    f"{s.region.value} · {s.time.year} · {s.workload.utilization_class.value}"
                    f"{' + AI' if s.workload.ai_enabled else ''} · "
                    f"{s.regulatory_intensity.value} regulation"
                )
            c2.download_button(
                "⬇ JSON", scenario_to_json(s), file_name=f"{s.id}.json",
                mime="application/json", key=f"dl_{s.id}", use_container_width=True,
            )
            if c3.button("Duplicate", key=f"dup_{s.id}", use_container_width=True):
                repo.save(duplicated(s))
                st.rerun()
            if c4.button("Delete", key=f"del_{s.id}", use_container_width=True):
                repo.delete(s.id)
                if st.session_state.active_scenario_id == s.id:
                    st.session_state.active_scenario_id = None
                st.rerun()

    if scenarios:
        st.download_button(
            "⬇ Export all scenarios", scenarios_to_json(scenarios),
            file_name="scenarios.json", mime="application/json",
        )

    st.markdown("---")

    # ── Create ────────────────────────────────────────────────────────────
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**New from preset**")
        preset = st.selectbox("Preset", list(PRESET_SCENARIOS.keys()), label_visibility="collapsed")
        if st.button("Add preset", use_container_width=True):
            copy = duplicated(PRESET_SCENARIOS[preset], name=preset)
            repo.save(copy)
            st.session_state.active_scenario_id = copy.id
            st.rerun()
    with c2:
        st.markdown("**New blank scenario**")
        name = st.text_input("Name", value="New Scenario", label_visibility="collapsed")
        if st.button("Create", use_container_width=True):
            try:
                created = new_scenario(name)
            except ValueError as exc:
                st.error(str(exc))
            else:
                repo.save(created)
                st.session_state.active_scenario_id = created.id
                st.rerun()

    st.markdown("---")

    # ── Import ────────────────────────────────────────────────────────────
    st.markdown("**Import JSON**")
    upload = st.file_uploader("Scenario or scenario list", type=["json"], label_visibility="collapsed")
    if upload is not None and st.button("Import"):
        text = upload.getvalue().decode("utf-8")
        try:
            imported = [import_scenario_json(text)]
        except ValueError:
            try:
                imported = import_scenarios_json(text)
            except ValueError as exc:
                st.error(str(exc))
                return
        if not imported:
            st.warning("No valid scenarios found in the file.")
            return
        n = repo.save_many(imported)
        logger.info("Imported %d scenario(s) from %s", n, upload.name)
        st.success(f"Imported {n} scenario(s).")

    st.markdown("---")

    # ── Local store ───────────────────────────────────────────────────────
    st.markdown("**Local scenario store**")
    st.caption(store_path)
    store = JsonFileScenarioRepository(store_path)
    c1, c2 = st.columns(2)
    if c1.button("💾 Save library to store", use_container_width=True, disabled=not scenarios):
        try:
            store.clear()
            n = store.save_many(scenarios)
        except OSError as exc:
            st.error(f"Could not write {store_path}: {exc}")
        else:
            st.success(f"Saved {n} scenario(s).")
    if c2.button("📂 Load from store", use_container_width=True):
        try:
            loaded = store.list()
        except (OSError, ValueError) as exc:
            st.error(f"Could not read {store_path}: {exc}")
        else:
            n = repo.save_many(loaded)
            st.success(f"Loaded {n} scenario(s).")

    if scenarios and st.button("Clear library", type="secondary"):
        repo.clear()
        st.session_state.active_scenario_id = None
        st.rerun()
