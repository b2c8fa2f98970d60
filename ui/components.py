import streamlit as st

from core.models import ChecklistProgress


def render_progress(progress: ChecklistProgress):
    """Progress bar plus a one-line completion banner."""
    st.progress(progress.percent_complete / 100)
    st.markdown(
        f"**Progress:** {progress.checked} / {progress.total} ({progress.percent_complete}%)"
        f" · Required {progress.required_checked} / {progress.required}"
    )
    if progress.total and progress.is_complete:
        st.success("All requirements received.")
    elif progress.is_required_complete:
        st.info(f"All required items received. {progress.outstanding} optional item(s) outstanding.")
    else:
        st.warning(f"{progress.required_outstanding} required item(s) outstanding.")
