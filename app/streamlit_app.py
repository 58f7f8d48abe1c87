# app/streamlit_app.py
import sys
import os

# Ensure project root is on sys.path so "dqprofile" can be imported
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd

from dqprofile.anomalies import outlier_mask
from dqprofile.cells import parse_numbers
from dqprofile.columns import column_values
from dqprofile.config import configure_logging
from dqprofile.duplicates import duplicate_value_counts
from dqprofile.engine import analyze_data_quality
from dqprofile.inference import DataType
from dqprofile.ingestion import IngestionError, load_from_source, process_file
from dqprofile.llm import generate_insights, normalize_insights
from dqprofile.profiling import profile_dataframe
from dqprofile.reports import generate_pdf_report_bytes, score_label

configure_logging()

st.set_page_config(page_title="Data Quality Profiler", layout="wide")
st.title("Data Quality Profiler")

st.markdown(
    """
This app lets you:

- Upload a **CSV / JSON** file **or** load a table from a database
- Get a **quality score** with completeness, consistency, accuracy and validity
- Inspect **per-column statistics**, outliers and repeated values
- Read **AI insights** (OpenAI if configured, local summary otherwise)
- Download a **PDF report**
"""
)

source_tab, dq_tab, insights_tab, reports_tab = st.tabs(
    ["📥 Data Source", "📊 Data Quality", "💡 Insights", "📄 Reports"]
)

# records + report live in session_state so all tabs can use them
if "records" not in st.session_state:
    st.session_state.records = None
if "report" not in st.session_state:
    st.session_state.report = None
if "insights" not in st.session_state:
    st.session_state.insights = None

# -------------- TAB 1: Data Source --------------
with source_tab:
    st.subheader("Upload file or connect to a database")

    source_mode = st.radio(
        "Select source type",
        ["Upload CSV/JSON", "Database (Snowflake / Postgres / MySQL / SQLite)"],
        horizontal=True,
    )

    if source_mode == "Upload CSV/JSON":
        uploaded = st.file_uploader("Upload CSV or JSON", type=["csv", "json"])
        if uploaded is not None:
            try:
                analysis = process_file(uploaded.name, uploaded.getvalue())
                st.session_state.records = analysis.records
                st.session_state.report = analysis.report
                st.session_state.insights = None
                st.success(f"Loaded {analysis.row_count} rows from {analysis.file_name}.")
                st.write("**Preview (first 100 rows)**")
                st.dataframe(pd.DataFrame(analysis.records[:100]))
            except IngestionError as e:
                st.error(str(e))
    else:
        st.markdown("### Database connection")
        db_type = st.selectbox(
            "Database type", ["PostgreSQL", "MySQL", "Snowflake", "SQLite"]
        )

        col1, col2 = st.columns(2)
        with col1:
            host = st.text_input("Host / Account (for Snowflake: account)", "")
            user = st.text_input("User")
            database = st.text_input("Database / Schema (SQLite: file path)")
        with col2:
            port = st.text_input("Port (ignored for Snowflake / SQLite)", "5432")
            password = st.text_input("Password", type="password")
            table_or_query = st.text_area(
                "Table name OR SQL query",
                "SELECT * FROM your_table LIMIT 1000",
            )

        if st.button("Load from database"):
            with st.spinner("Connecting and loading data..."):
                try:
                    records = load_from_source(
                        db_type=db_type,
                        host=host,
                        port=port,
                        user=user,
                        password=password,
                        database=database,
                        table_or_query=table_or_query,
                    )
                    st.session_state.records = records
                    st.session_state.report = analyze_data_quality(records)
                    st.session_state.insights = None
                    st.success(f"Loaded {len(records)} rows.")
                    st.dataframe(pd.DataFrame(records[:100]))
                except Exception as e:
                    st.error(f"Failed to load data: {e}")

    if st.session_state.report is not None:
        st.info("Data loaded. Now open the **Data Quality** tab.")

# -------------- TAB 2: Data Quality --------------
with dq_tab:
    st.subheader("Data Quality Analysis")

    report = st.session_state.report
    records = st.session_state.records
    if report is None:
        st.warning("No data loaded yet. Go to **Data Source** tab first.")
    else:
        st.metric(
            "Data Quality Score",
            f"{report.overall_score} / 100",
            help=score_label(report.overall_score),
        )
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Completeness", f"{report.completeness}%")
        c2.metric("Consistency", f"{report.consistency}%")
        c3.metric("Accuracy", f"{report.accuracy}%")
        c4.metric("Validity", f"{report.validity}%")

        st.markdown("#### Quality metrics")
        st.bar_chart(pd.Series({
            "Completeness": report.completeness,
            "Consistency": report.consistency,
            "Accuracy": report.accuracy,
            "Validity": report.validity,
        }, name="score"))

        profile_df = profile_dataframe(report.column_metrics)
        if not profile_df.empty:
            chart_left, chart_right = st.columns(2)
            with chart_left:
                st.markdown("##### Missing values by column (%)")
                st.bar_chart(profile_df.set_index("column")["null_pct"])
            with chart_right:
                st.markdown("##### Data types")
                st.bar_chart(profile_df["dtype"].value_counts().rename("columns"))

        st.markdown("#### Profiling summary")
        st.dataframe(profile_df)

        st.markdown("#### Issues")
        if not report.issues:
            st.success("No issues detected.")
        else:
            st.dataframe(pd.DataFrame([i.to_dict() for i in report.issues]))

        if report.column_metrics:
            st.markdown("#### Column drill-down")
            column = st.selectbox("Column", list(report.column_metrics))
            profile = report.column_metrics[column]
            values = column_values(records, column)

            if profile.data_type is DataType.NUMBER:
                numbers = parse_numbers(values[values.notna()])
                mask = outlier_mask(numbers)
                st.write(f"Outliers (IQR): **{int(mask.sum())}**")
                if mask.any():
                    st.dataframe(pd.Series(numbers[mask], name=column))

            repeated = duplicate_value_counts(values)
            st.write(f"Repeated values: **{profile.duplicates}**")
            if len(repeated) > 0:
                st.dataframe(repeated.head(100).rename("count"))

        st.download_button(
            label="Download report (JSON)",
            data=report.to_json(indent=2),
            file_name="dq_report.json",
            mime="application/json",
        )

# -------------- TAB 3: Insights --------------
with insights_tab:
    st.subheader("AI Insights")

    report = st.session_state.report
    if report is None:
        st.info("Run a data quality analysis first.")
    else:
        if st.button("Generate insights"):
            with st.spinner("Calling LLM / local summary..."):
                st.session_state.insights = generate_insights(report)

        insights = st.session_state.insights
        if insights:
            insights = normalize_insights(insights, report)
            st.write(insights["summary"])
            for issue in insights["issues"]:
                st.write(f"- **{issue['title']}** ({issue['severity']}): {issue['description']}")
            st.markdown("##### Recommendations")
            for rec in insights["recommendations"]:
                st.write(f"- {rec}")
            for sql in insights["sqlFixes"]:
                st.code(sql, language="sql")

# -------------- TAB 4: Reports --------------
with reports_tab:
    st.subheader("Data Quality Report (PDF)")

    report = st.session_state.report
    if report is None:
        st.info("Run a data quality analysis first.")
    else:
        if st.button("Generate PDF report"):
            with st.spinner("Generating PDF report..."):
                try:
                    pdf_bytes = generate_pdf_report_bytes(report, st.session_state.insights)
                    st.download_button(
                        label="Download PDF report",
                        data=pdf_bytes,
                        file_name="dq_report.pdf",
                        mime="application/pdf",
                    )
                except Exception as e:
                    st.error(f"Failed to generate report: {e}")
