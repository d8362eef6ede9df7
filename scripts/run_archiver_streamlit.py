"""Streamlit UI for the note.com archiver.

Run with:
    streamlit run scripts/run_archiver_streamlit.py
"""
from __future__ import annotations

import os
import sys

import streamlit as st

# ensure src package is importable when running from repo root
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from note_archiver.config import DEFAULT_AUTHOR, ArchiveConfig
from note_archiver.crawler import archive
from note_archiver.errors import SetupFailure
from note_archiver.models import ArticleState


st.set_page_config(page_title="note.com Archiver", layout="wide")

st.title("note.com Archiver")
st.markdown("Save an author's **note.com** articles as Markdown. Articles already in the output folder are skipped.")

with st.form("archive_form"):
    author = st.text_input("Author id", value=DEFAULT_AUTHOR, help="The part after note.com/ in the author's page URL")
    out_folder = st.text_input("Output folder", value=os.path.join(os.getcwd(), "articles"))
    urls_text = st.text_area(
        "Article URLs (optional, one per line)",
        help="When given, only these articles are archived and the author's page is not crawled",
    )
    queries_text = st.text_input(
        "Filter terms (optional, comma separated)",
        help="Only archive articles whose title or URL contains one of these terms",
    )
    col1, col2 = st.columns(2)
    with col1:
        headless = st.checkbox("Headless browser", value=True)
    with col2:
        title_skip = st.checkbox(
            "Skip articles whose title is already archived",
            value=True,
            help="Faster, but two different articles with the same title are treated as one",
        )
    submitted = st.form_submit_button("📥 Start archiving")

if submitted:
    urls = [line.strip() for line in urls_text.splitlines() if line.strip()]
    queries = [q.strip() for q in queries_text.split(",") if q.strip()]
    config = ArchiveConfig.for_author(
        author.strip() or DEFAULT_AUTHOR,
        output_dir=out_folder,
        headless=headless,
        title_skip=title_skip,
    )

    status = st.empty()
    log_box = st.container()
    done = {"count": 0}

    def on_outcome(outcome):
        done["count"] += 1
        status.info(f"Processed {done['count']} articles... last: {outcome.ref.url}")
        if outcome.state is ArticleState.CONVERTED_AND_SAVED:
            log_box.write(f"✅ {outcome.filename}")
        elif outcome.state is ArticleState.FAILED:
            log_box.write(f"❌ {outcome.ref.url}: {outcome.error}")

    with st.spinner("Archiving... this may take a while for authors with many articles"):
        try:
            summary = archive(config, urls=urls, queries=queries, progress_callback=on_outcome)
        except SetupFailure as e:
            st.error(f"❌ {e}")
            st.stop()

    status.empty()
    st.success(f"🎉 Done: {summary.describe()}")
    st.caption(f"Output folder: {config.output_dir}")

    if summary.saved_files:
        st.subheader("New files")
        for name in summary.saved_files:
            st.write(f"- {name}")

    failed = [o for o in summary.outcomes if o.state is ArticleState.FAILED]
    if failed:
        st.subheader("Failed")
        for outcome in failed:
            st.write(f"- {outcome.ref.url}: {outcome.error}")
