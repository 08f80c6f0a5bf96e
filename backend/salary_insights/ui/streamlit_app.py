"""Streamlit UI for Salary Insights.

Run with: streamlit run backend/salary_insights/ui/streamlit_app.py
"""
from __future__ import annotations

import asyncio
from typing import Dict

import streamlit as st

from salary_insights.config import get_settings
from salary_insights.core.form import FormValidationError
from salary_insights.core.session import InsightsPage, Notification, Phase, ResultsPanel
from salary_insights.log import configure_logging
from salary_insights.models.schemas import ExperienceLevel
from salary_insights.services.llm_service import get_llm_service

settings = get_settings()
configure_logging(settings.log_level)

EXPERIENCE_LABELS: Dict[str, str] = {
    ExperienceLevel.ENTRY.value: "Entry-level",
    ExperienceLevel.MID.value: "Mid-level",
    ExperienceLevel.SENIOR.value: "Senior-level",
    ExperienceLevel.LEAD.value: "Lead",
    ExperienceLevel.MANAGER.value: "Manager",
}


@st.cache_resource
def _llm_service():
    return get_llm_service()


def _page() -> InsightsPage:
    if "page" not in st.session_state:
        try:
            llm = _llm_service()
        except RuntimeError as exc:
            st.error(str(exc))
            st.stop()
        st.session_state["page"] = InsightsPage(llm, locale=settings.display_locale)
    return st.session_state["page"]


def _toast(notification: Notification | None) -> None:
    if notification is None:
        return
    icon = "⚠️" if notification.variant == "destructive" else "💡"
    st.toast(f"**{notification.title}**: {notification.description}", icon=icon)


# ── Form ─────────────────────────────────────────────────────────────────

def render_form(page: InsightsPage) -> None:
    st.subheader("Enter Job Details")
    st.caption("Provide the details below to get a salary estimate.")

    errors: Dict[str, str] = st.session_state.get("form_errors", {})

    with st.form("job_details"):
        job_role = st.text_input("Job Role", placeholder="e.g., Software Engineer")
        if "jobRole" in errors:
            st.error(errors["jobRole"])

        experience = st.selectbox(
            "Experience Level",
            options=list(EXPERIENCE_LABELS),
            format_func=EXPERIENCE_LABELS.get,
            index=None,
            placeholder="Select your experience level",
        )
        if "experience" in errors:
            st.error(errors["experience"])

        location = st.text_input("Location", placeholder="e.g., San Francisco, CA")
        if "location" in errors:
            st.error(errors["location"])

        skills = st.text_area("Your Skills", placeholder="e.g., React, Node.js, Python, SQL, AWS")
        if "skills" in errors:
            st.error(errors["skills"])

        job_description = st.text_area(
            "Job Description", placeholder="Paste the full job description here", height=160
        )
        if "jobDescription" in errors:
            st.error(errors["jobDescription"])

        submitted = st.form_submit_button(
            "Predict Salary",
            type="primary",
            disabled=not page.can_submit,
            use_container_width=True,
        )

    if not submitted:
        return

    raw = {
        "jobRole": job_role,
        "experience": experience,
        "location": location,
        "skills": skills,
        "jobDescription": job_description,
    }
    try:
        with st.spinner("Analyzing your profile... The Salary Oracle is predicting your worth."):
            asyncio.run(page.submit(raw))
    except FormValidationError as exc:
        st.session_state["form_errors"] = exc.errors
    else:
        st.session_state["form_errors"] = {}
    st.rerun()


# ── Results ──────────────────────────────────────────────────────────────

def render_results(panel: ResultsPanel) -> None:
    result = panel.result

    with st.container(border=True):
        st.caption("Predicted Salary Range")
        st.markdown(f"## {result.predicted_salary}")
        st.caption(f"({result.estimate.currency_code})")

        bars = panel.chart()
        st.bar_chart(
            {"Bar": [b.label for b in bars], "Salary": [b.value for b in bars]},
            x="Bar",
            y="Salary",
        )
        st.caption(" · ".join(f"{b.label}: {b.tick}" for b in bars))

    with st.container(border=True):
        st.subheader("Career Insights")
        st.caption("Leverage AI to boost your application and earning potential.")

        st.markdown("**Suggested Skills for Higher Salary**")
        badges = panel.skill_badges()
        if badges:
            cols = st.columns(min(len(badges), 4))
            for i, badge in enumerate(badges):
                label = f"✓ {badge.skill}" if badge.already_listed else badge.skill
                if cols[i % len(cols)].button(label, key=f"skill-{i}"):
                    _toast(panel.badge_message(badge.skill))
            st.caption("Click a skill to see its potential impact!")
        elif st.button("Suggest Skills"):
            with st.spinner("Analyzing..."):
                asyncio.run(panel.suggest_skills())
            st.rerun()

        st.divider()
        if st.button("Generate Cover Letter", type="primary", use_container_width=True):
            with st.spinner("Crafting your letter..."):
                asyncio.run(panel.generate_cover_letter())
        if panel.cover_letter:
            st.markdown("**Your AI-Generated Cover Letter**")
            st.caption("Here is a tailored cover letter based on your profile. You can copy and edit it as needed.")
            st.code(panel.cover_letter, language=None, wrap_lines=True)

    _toast(panel.notification)
    panel.dismiss()


def render_empty() -> None:
    with st.container(border=True):
        st.markdown("### Your Results Await")
        st.caption("Fill out the form to see your estimated salary and career insights.")


# ── Page ─────────────────────────────────────────────────────────────────

def main() -> None:
    st.set_page_config(page_title="Salary Insights", page_icon="💰", layout="wide")
    st.title("Salary Insights")
    st.write("Your AI-powered guide to smarter salary negotiation.")

    page = _page()
    left, right = st.columns(2, gap="large")

    with left:
        render_form(page)

    with right:
        state = page.state
        if state.phase is Phase.ERROR:
            _toast(state.notification)
            page.dismiss()
            render_empty()
        elif state.phase is Phase.RESULT and page.results is not None:
            render_results(page.results)
        else:
            render_empty()


main()
