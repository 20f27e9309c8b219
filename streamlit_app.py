"""Streamlit operator console for bulk real-estate imports."""

from __future__ import annotations

import json
from typing import Any

import pandas as pd
import streamlit as st

from bulk_import.config import configure_logging, get_bulk_upload_settings
from bulk_import.connectors.bulk_upload_client import BulkUploadClient
from bulk_import.decoders.file_types import ACCEPTED_EXTENSIONS
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.mappers.path_tree import flatten
from bulk_import.services.import_report import ImportReport
from bulk_import.services.notifier import NoticeLevel, RecordingNotifier
from bulk_import.services.template_service import TemplateFormat
from bulk_import.services.upload_orchestrator import UploadOrchestrator, UploadState

st.set_page_config(page_title="Bulk Import", page_icon="BI", layout="wide")


@st.cache_resource(show_spinner=False)
def _load_client() -> BulkUploadClient:
    """Build one HTTP client per server process."""
    configure_logging()
    return BulkUploadClient(settings=get_bulk_upload_settings())


def _orchestrator_for(entity_kind: EntityKind) -> UploadOrchestrator:
    """Return the session's orchestrator for an entity kind, creating it on first use."""
    orchestrators: dict[str, UploadOrchestrator] = st.session_state.orchestrators
    orchestrator = orchestrators.get(entity_kind.value)
    if orchestrator is None:
        orchestrator = UploadOrchestrator(
            entity_kind,
            client=_load_client(),
            notifier=st.session_state.notifier,
            on_success=_mark_refresh_needed,
        )
        orchestrators[entity_kind.value] = orchestrator
    return orchestrator


def _mark_refresh_needed() -> None:
    st.session_state.last_refresh_kind = st.session_state.selected_kind


def _reset_upload(orchestrator: UploadOrchestrator) -> None:
    """Return to IDLE and give the file picker a fresh key so it forgets the last file."""
    orchestrator.cancel()
    st.session_state.last_file_token = None
    st.session_state.uploader_generation += 1


def _flush_notices() -> list[str]:
    """Render queued notices once; returns the texts shown."""
    shown: list[str] = []
    for notice in st.session_state.notifier.drain():
        text = f"{notice.title}: {notice.message}" if notice.title else notice.message
        if notice.level == NoticeLevel.ERROR:
            st.error(text)
        elif notice.level == NoticeLevel.SUCCESS:
            st.success(text)
        else:
            st.info(text)
        shown.append(text)
    return shown


def _preview_frame(records: list[Any]) -> pd.DataFrame:
    """Flatten preview records to dotted columns for a table view."""
    rows = [flatten(record) if isinstance(record, dict) else {"value": record} for record in records]
    return pd.DataFrame(rows)


def _render_report(report: ImportReport) -> None:
    if report.success:
        st.success(report.message or "Upload completed")
    else:
        st.error(report.message or "Upload failed")

    columns = st.columns(len(report.counts))
    for column, (name, value) in zip(columns, report.counts.items()):
        column.metric(name.title(), value)

    if report.record_errors:
        st.markdown("**Validation Errors**")
        for error in report.record_errors:
            st.markdown(f"Record {error.record_number}:")
            st.markdown("\n".join(f"- {message}" for message in error.messages))
        if report.hidden_error_count:
            st.caption(f"... and {report.hidden_error_count} more errors")

    if report.skipped_reasons:
        st.markdown("**Skipped Records**")
        st.markdown("\n".join(f"- {reason}" for reason in report.skipped_reasons))
        if report.hidden_skipped_count:
            st.caption(f"... and {report.hidden_skipped_count} more skipped")

    if report.image_warnings:
        st.markdown("**Image Warnings**")
        st.markdown("\n".join(f"- {reason}" for reason in report.image_warnings))
        if report.hidden_warning_count:
            st.caption(f"... and {report.hidden_warning_count} more warnings")


if "orchestrators" not in st.session_state:
    st.session_state.orchestrators = {}
if "notifier" not in st.session_state:
    st.session_state.notifier = RecordingNotifier()
if "selected_kind" not in st.session_state:
    st.session_state.selected_kind = EntityKind.PROPERTIES.value
if "last_file_token" not in st.session_state:
    st.session_state.last_file_token = None
if "last_refresh_kind" not in st.session_state:
    st.session_state.last_refresh_kind = None
if "uploader_generation" not in st.session_state:
    st.session_state.uploader_generation = 0


with st.sidebar:
    st.header("Bulk Upload")
    selected_value = st.selectbox(
        "Entity kind",
        options=[kind.value for kind in EntityKind],
        format_func=lambda value: EntityKind(value).label,
        key="selected_kind",
    )
    entity_kind = EntityKind(selected_value)
    orchestrator = _orchestrator_for(entity_kind)

    st.subheader("Templates")
    for template_format, label in ((TemplateFormat.JSON, "JSON"), (TemplateFormat.EXCEL, "Excel")):
        artifact = None
        if st.button(f"Fetch {label} template", use_container_width=True):
            artifact = orchestrator.fetch_template(template_format)
        if artifact is not None:
            st.download_button(
                label=f"Save {artifact.filename}",
                data=artifact.content,
                file_name=artifact.filename,
                mime=artifact.media_type,
                use_container_width=True,
            )

    if st.button("Close", key="close_upload", use_container_width=True):
        _reset_upload(orchestrator)
        st.rerun()


st.title(f"Bulk Upload {entity_kind.label}")
if st.session_state.last_refresh_kind == entity_kind.value:
    st.caption(f"{entity_kind.label} list should be refreshed after the last import.")

uploaded_file = st.file_uploader(
    "Select a JSON or Excel file",
    type=[extension.lstrip(".") for extension in ACCEPTED_EXTENSIONS],
    disabled=orchestrator.state is UploadState.UPLOADING,
    key=f"uploader_{entity_kind.value}_{st.session_state.uploader_generation}",
)
if uploaded_file is not None:
    file_token = (entity_kind.value, uploaded_file.name, uploaded_file.size)
    if file_token != st.session_state.last_file_token:
        st.session_state.last_file_token = file_token
        with st.spinner("Processing file..."):
            orchestrator.select_file(uploaded_file.name, uploaded_file.getvalue())

shown_notices = _flush_notices()

if orchestrator.state in (UploadState.PREVIEWING, UploadState.FAILED, UploadState.COMPLETED):
    st.subheader("Preview")
    st.caption(f"{orchestrator.filename}: {orchestrator.record_count} record(s)")
    preview = orchestrator.preview
    if preview:
        st.dataframe(_preview_frame(preview), use_container_width=True)
        with st.expander("Preview JSON"):
            st.code(json.dumps(preview, indent=2, ensure_ascii=False, default=str), language="json")
        if orchestrator.record_count > len(preview):
            st.caption(f"... and {orchestrator.record_count - len(preview)} more records")

upload_col, cancel_col = st.columns(2)
with upload_col:
    upload_clicked = st.button(
        f"Upload {orchestrator.record_count} records",
        type="primary",
        key="submit_upload",
        disabled=not orchestrator.can_submit,
        use_container_width=True,
    )
with cancel_col:
    if st.button("Cancel", key="cancel_upload", use_container_width=True):
        _reset_upload(orchestrator)
        st.rerun()

if upload_clicked and orchestrator.can_submit:
    with st.spinner("Uploading..."):
        orchestrator.submit()
    shown_notices += _flush_notices()

if (
    orchestrator.state is UploadState.FAILED
    and orchestrator.error_message
    and orchestrator.error_message not in shown_notices
):
    st.error(orchestrator.error_message)

report = orchestrator.report
if report is not None:
    st.subheader("Result")
    _render_report(report)
