"""
Streamlit UI for the Email Validator
Operator console: upload, validate, review, fix and download
"""

import streamlit as st
import plotly.express as px
from typing import Any, Dict, Optional

from core.errors import BusyError, IngestError
from core.models import Dataset, ERROR_LABELS, VALID, FIXABLE, INVALID
from core.pipeline import EmailValidationPipeline
from core.processor import AcceptAll, AcceptSuggestion, Edit, Reset
from utils.output_processor import filter_rows

STATUS_ICONS = {VALID: "✅", FIXABLE: "⚠️", INVALID: "❌"}
PAGE_SIZES = [10, 25, 50, 100]


class EmailValidatorUI:
    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.pipeline = EmailValidationPipeline(options or {})
        # Session state keeps the dataset across reruns
        if 'dataset' not in st.session_state:
            st.session_state.dataset = None
        if 'flash_message' not in st.session_state:
            st.session_state.flash_message = None

    def run(self):
        """Main UI rendering method"""
        st.title("📧 Email Validator")
        st.markdown("Upload a CSV file with names and emails to validate and correct email addresses.")
        st.info("🔍 This tool checks email formatting and common typos. It does **not** verify deliverability.")

        if st.session_state.flash_message:
            st.success(st.session_state.flash_message)
            st.session_state.flash_message = None

        uploaded_file = self._render_upload_section()
        if uploaded_file is not None and st.button("🚀 Validate Emails", type="primary", use_container_width=True):
            self._process_file(uploaded_file)

        dataset = st.session_state.dataset
        if dataset is not None and dataset.rows:
            self._render_stats_section(dataset)
            self._render_actions(dataset)
            self._render_table(dataset)
            self._render_download_section(dataset)

    def _render_upload_section(self):
        st.subheader("📁 Upload Data File")
        uploaded_file = st.file_uploader(
            "Choose a data file",
            type=['csv', 'tsv', 'xlsx'],
            help="The file should include columns for name and email."
        )
        if uploaded_file:
            file_size = len(uploaded_file.getvalue()) / (1024 * 1024)  # MB
            st.caption(f"📊 **{uploaded_file.name}** ({file_size:.2f} MB)")
        return uploaded_file

    def _process_file(self, uploaded_file):
        progress_bar = st.progress(0)
        status_text = st.empty()

        def update_progress(step: str, progress: int, counters: Dict[str, int]):
            progress_bar.progress(progress)
            status_text.text(step)

        try:
            st.session_state.dataset = self.pipeline.process_file(uploaded_file, update_progress)
        except IngestError as e:
            st.error(f"❌ {str(e)}")
            return
        except ValueError as e:
            st.error(f"❌ **Processing Error**: {str(e)}")
            return

        status_text.text("✅ Validation complete!")
        dataset = st.session_state.dataset
        st.caption(
            f"Name column: **{dataset.name_column}** · Email column: **{dataset.email_column}**"
        )

    def _render_stats_section(self, dataset: Dataset):
        st.subheader("📊 Validation Summary")
        stats = dataset.stats

        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Total", stats.total)
        col2.metric("✅ Valid", stats.valid)
        col3.metric("⚠️ Fixable", stats.fixable)
        col4.metric("❌ Invalid", stats.invalid)

        if stats.error_counts:
            labels = [ERROR_LABELS.get(kind, kind) for kind in stats.error_counts]
            fig = px.bar(
                x=labels,
                y=list(stats.error_counts.values()),
                labels={'x': 'Issue', 'y': 'Rows'},
                title="Common Errors",
            )
            st.plotly_chart(fig, use_container_width=True)

    def _render_actions(self, dataset: Dataset):
        col1, col2 = st.columns(2)
        with col1:
            if st.button(f"🔧 Fix All ({dataset.stats.fixable})", disabled=dataset.stats.fixable == 0):
                self._apply(dataset, AcceptAll(), "Applied all suggested fixes")
        with col2:
            if st.button("↩️ Reset to Original"):
                self._apply(dataset, Reset(), "Reset to original data")

    def _render_table(self, dataset: Dataset):
        st.subheader("📋 Rows")
        search = st.text_input("🔎 Search by name, email or status")
        rows = filter_rows(dataset.rows, search)

        page_size = st.selectbox("Rows per page", PAGE_SIZES, index=0)
        page_count = max(1, (len(rows) + page_size - 1) // page_size)
        page = st.number_input("Page", min_value=1, max_value=page_count, value=1, step=1)
        page_rows = rows[(page - 1) * page_size:page * page_size]

        st.dataframe(
            self.pipeline.output_processor.rows_dataframe(page_rows),
            use_container_width=True,
            hide_index=True,
        )

        for row in page_rows:
            if row.status == VALID:
                continue
            label = f"{STATUS_ICONS.get(row.status, '')} {row.name or '(no name)'} · {row.email or '(empty)'}"
            with st.expander(label):
                st.write(f"**Issue:** {ERROR_LABELS.get(row.error_kind, 'Unknown error')}")
                if row.suggestion:
                    st.write(f"**Suggestion:** {row.suggestion}")
                    if st.button("Accept suggestion", key=f"accept_{row.id}"):
                        self._apply(dataset, AcceptSuggestion(row.id), f"Fixed {row.suggestion}")
                new_value = st.text_input("Edit email", value=row.email, key=f"edit_{row.id}")
                if st.button("Save", key=f"save_{row.id}"):
                    self._apply(dataset, Edit(row.id, new_value), "Email updated")

    def _render_download_section(self, dataset: Dataset):
        st.subheader("📥 Download Results")
        output = self.pipeline.output_processor
        records = self.pipeline.export(dataset)

        col1, col2 = st.columns(2)
        with col1:
            st.download_button(
                "📊 Download Validated CSV",
                data=self.pipeline.file_handler.save_to_csv(records, dataset.columns),
                file_name=output.export_filename(),
                mime="text/csv",
            )
            st.download_button(
                "📗 Download Validated Excel",
                data=self.pipeline.file_handler.save_to_excel(records, dataset.columns),
                file_name=output.export_filename(extension="xlsx"),
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )
        with col2:
            changes = output.changes_report(dataset)
            if not changes.empty:
                st.download_button(
                    "📝 Download Changes Report",
                    data=changes.to_csv(index=False),
                    file_name=output.export_filename().replace("validated_emails", "changes"),
                    mime="text/csv",
                )
            else:
                st.info("📝 No changes made to email addresses")

        rejected = output.rejected_report(dataset)
        if not rejected.empty:
            st.download_button(
                "🗑️ Download Invalid Rows",
                data=rejected.to_csv(index=False),
                file_name=output.export_filename().replace("validated_emails", "invalid"),
                mime="text/csv",
            )

    def _apply(self, dataset: Dataset, mutation, message: str):
        try:
            self.pipeline.apply(dataset, mutation)
        except BusyError as e:
            st.warning(str(e))
            return
        st.session_state.flash_message = message
        st.rerun()
