"""Streamlit upload-and-convert page for timing2toggl."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from timing2toggl.pipeline import SKIPPED_WARNING, resolve_reader
from timing2toggl.schema import OUTPUT_HEADER
from timing2toggl.writer import render_csv


def _convert_uploaded(uploaded_file, email: str, project: Optional[str]) -> dict[str, Any]:
    reader = resolve_reader(uploaded_file.name)
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        result = reader(temp_path, email, project or None)
    finally:
        os.unlink(temp_path)

    return {
        "skipped": result.skipped,
        "rows": [dict(zip(OUTPUT_HEADER, entry.as_row())) for entry in result.entries],
        "csv": render_csv(result.entries) if result.entries else "",
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Timing to Toggl", layout="wide")
    st.title("Timing to Toggl converter")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload Timing export", type=["csv", "json"])
        email = st.text_input("Toggl account email", value=os.environ.get("TOGGL_EMAIL", ""))
        project = st.text_input("Override project name (optional)", value="")
        run = st.button("Convert", type="primary")

    if not run:
        st.info("Upload an export in the sidebar and click **Convert**.")
        return

    if uploaded is None:
        st.error("Please upload a CSV or JSON export.")
        return
    if not email.strip():
        st.error("A Toggl account email address is required.")
        return

    try:
        result = _convert_uploaded(uploaded, email.strip(), project.strip())
    except ValueError as exc:
        st.error(f"Input error: {exc}")
        return

    if not result["rows"]:
        st.warning("No data found in input file.")
        return

    if result["skipped"]:
        st.warning(SKIPPED_WARNING)
    st.success(f"{len(result['rows'])} entries converted from {uploaded.name}.")
    st.dataframe(result["rows"], use_container_width=True)
    st.download_button(
        "Download Toggl CSV",
        data=result["csv"],
        file_name=f"{Path(uploaded.name).stem}-toggl.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
