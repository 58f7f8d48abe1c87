# dqprofile/llm.py
"""
LLM integration: uses OpenAI if OPENAI_API_KEY is set.
Function: generate_insights(report) -> insights dict
Insights dict: {"summary": str, "issues": [...], "recommendations": [...], "sqlFixes": [...]}
Without a key, or when the call fails, a deterministic local summary is returned.
"""
import json
import logging
import re
from typing import List, Optional

from openai import OpenAI

from .config import settings
from .engine import QualityReport

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a data quality expert. Provide clear, actionable insights about data "
    "quality issues in plain language that non-technical users can understand."
)


def build_prompt(report: QualityReport) -> str:
    issue_lines = "\n".join(
        f"- {i.message} ({i.severity.value} severity)" for i in report.issues
    )
    column_lines = "\n".join(
        f"- {c.name}: {c.data_type.value}, {c.null_percentage:.1f}% missing, {c.uniqueness:.1f}% unique"
        for c in report.column_metrics.values()
    )
    return (
        "Analyze this data quality report and provide insights:\n\n"
        f"Overall Quality Score: {report.overall_score}/100\n"
        f"- Completeness: {report.completeness}%\n"
        f"- Consistency: {report.consistency}%\n"
        f"- Accuracy: {report.accuracy}%\n"
        f"- Validity: {report.validity}%\n\n"
        f"Total Rows: {report.total_rows}\n"
        f"Total Columns: {report.total_columns}\n\n"
        f"Key Issues Found:\n{issue_lines}\n\n"
        f"Column Metrics:\n{column_lines}\n\n"
        "Please provide:\n"
        "1. A brief summary of the data quality\n"
        "2. Key issues that need attention (as JSON array with title, description, severity)\n"
        "3. Actionable recommendations (as JSON array)\n"
        "4. SQL fixes if applicable (as JSON array)\n\n"
        "Return the response as JSON with this structure:\n"
        "{\n"
        '  "summary": "...",\n'
        '  "issues": [{"title": "...", "description": "...", "severity": "high|medium|low"}],\n'
        '  "recommendations": ["...", "..."],\n'
        '  "sqlFixes": ["...", "..."]\n'
        "}"
    )


def _call_openai(prompt: str, api_key: str, model: str) -> str:
    """
    Separate function to call OpenAI (so it's easy to mock/replace).
    """
    client = OpenAI(api_key=api_key)
    resp = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=0.7,
        max_tokens=1000,
    )
    return resp.choices[0].message.content or ""


def _issue_summaries(report: QualityReport) -> List[dict]:
    return [
        {
            "title": i.type.value.replace("_", " ", 1).title(),
            "description": i.message,
            "severity": i.severity.value,
        }
        for i in report.issues[:5]
    ]


def extract_recommendations(text: str) -> List[str]:
    """Numbered or bulleted lines longer than 10 characters, at most five."""
    recommendations = []
    for line in text.split("\n"):
        if re.search(r"^\d+\.|[-*]", line) and len(line) > 10:
            recommendations.append(re.sub(r"^\d+\.|[-*]\s*", "", line, count=1).strip())
    return recommendations[:5]


def format_ai_response(content: str, report: QualityReport) -> dict:
    """Structure a free-text model answer."""
    return {
        "summary": content.split("\n")[0] or "Data quality analysis completed.",
        "issues": _issue_summaries(report),
        "recommendations": extract_recommendations(content),
        "sqlFixes": [],
    }


def _as_str_list(value) -> List[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None and not isinstance(v, (dict, list))]
    return []


def normalize_insights(insights: dict, report: QualityReport) -> dict:
    """
    Coerce a model answer into the insights shape:
    summary str, issues list of {title, description, severity} dicts,
    recommendations / sqlFixes lists of str.
    """
    summary = insights.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = "Data quality analysis completed."

    raw_issues = insights.get("issues")
    if isinstance(raw_issues, list):
        issues = []
        for item in raw_issues:
            if isinstance(item, dict):
                issues.append({
                    "title": str(item.get("title", "")),
                    "description": str(item.get("description", "")),
                    "severity": str(item.get("severity", "medium")),
                })
            elif isinstance(item, str):
                issues.append({"title": item, "description": item, "severity": "medium"})
    else:
        issues = _issue_summaries(report)

    return {
        "summary": summary,
        "issues": issues,
        "recommendations": _as_str_list(insights.get("recommendations")),
        "sqlFixes": _as_str_list(insights.get("sqlFixes")),
    }


def generate_basic_insights(report: QualityReport) -> dict:
    summary = f"Your dataset has an overall quality score of {report.overall_score}/100. "
    if report.overall_score >= 90:
        summary += "The data quality is excellent with minimal issues."
    elif report.overall_score >= 70:
        summary += "The data quality is good but could be improved."
    else:
        summary += "The data quality needs significant improvement."

    recommendations = []
    if report.completeness < 80:
        recommendations.append("Address missing values to improve completeness score")
    if report.consistency < 80:
        recommendations.append("Standardize data formats and types for better consistency")
    if report.accuracy < 80:
        recommendations.append("Review and correct outliers and duplicate entries")
    if report.validity < 80:
        recommendations.append("Validate data types and formats across all columns")

    return {
        "summary": summary,
        "issues": _issue_summaries(report),
        "recommendations": recommendations or ["Continue monitoring data quality regularly"],
        "sqlFixes": [],
    }


def generate_insights(
    report: QualityReport,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> dict:
    api_key = api_key or settings.OPENAI_API_KEY
    model = model or settings.OPENAI_MODEL

    if not api_key:
        return generate_basic_insights(report)

    try:
        content = _call_openai(build_prompt(report), api_key, model)
    except Exception as e:
        logger.warning("OpenAI API error, using basic insights: %s", e)
        return generate_basic_insights(report)

    if not content:
        logger.warning("Empty response from OpenAI, using basic insights")
        return generate_basic_insights(report)

    try:
        insights = json.loads(content)
        if isinstance(insights, dict):
            return normalize_insights(insights, report)
    except json.JSONDecodeError:
        pass

    # Try to pull a JSON object out of surrounding prose
    m = re.search(r"\{.*\}", content, re.S)
    if m:
        try:
            insights = json.loads(m.group(0))
            if isinstance(insights, dict):
                return normalize_insights(insights, report)
        except json.JSONDecodeError:
            pass

    return format_ai_response(content, report)
