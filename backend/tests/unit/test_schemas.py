import pytest
from pydantic import ValidationError

from salary_insights.models.schemas import (
    ExperienceLevel,
    GenerateCoverLetterInput,
    JobProfile,
    PredictSalaryInput,
    SalaryEstimate,
    SkillSuggestions,
)


class TestJobProfile:
    def test_accepts_camel_case_and_keeps_values(self, valid_form):
        profile = JobProfile.model_validate(valid_form)
        assert profile.job_role == "Software Engineer"
        assert profile.experience is ExperienceLevel.SENIOR
        assert profile.job_description == valid_form["jobDescription"]

    def test_values_are_not_trimmed(self, valid_form):
        valid_form["jobRole"] = "  Data Engineer  "
        profile = JobProfile.model_validate(valid_form)
        assert profile.job_role == "  Data Engineer  "

    def test_is_immutable(self, valid_form):
        profile = JobProfile.model_validate(valid_form)
        with pytest.raises(ValidationError):
            profile.job_role = "Other"

    def test_dumps_camel_case(self, valid_form):
        data = JobProfile.model_validate(valid_form).model_dump(by_alias=True, mode="json")
        assert data == valid_form

    @pytest.mark.parametrize("level", [e.value for e in ExperienceLevel])
    def test_every_experience_level(self, valid_form, level):
        valid_form["experience"] = level
        assert JobProfile.model_validate(valid_form).experience.value == level

    def test_unknown_experience_level(self, valid_form):
        valid_form["experience"] = "intern"
        with pytest.raises(ValidationError):
            JobProfile.model_validate(valid_form)


class TestSalaryEstimate:
    def test_parses_provider_payload(self, salary_payload):
        est = SalaryEstimate.model_validate(salary_payload)
        assert est.min_salary == 90000
        assert est.max_salary == 120000
        assert est.currency_code == "USD"

    def test_currency_code_is_upper_cased(self):
        est = SalaryEstimate.model_validate({"minSalary": 1, "maxSalary": 2, "currencyCode": "eur"})
        assert est.currency_code == "EUR"

    def test_min_above_max_is_rejected(self):
        with pytest.raises(ValidationError):
            SalaryEstimate.model_validate({"minSalary": 130000, "maxSalary": 120000, "currencyCode": "USD"})

    def test_equal_bounds_are_allowed(self):
        est = SalaryEstimate.model_validate({"minSalary": 100, "maxSalary": 100, "currencyCode": "USD"})
        assert est.min_salary == est.max_salary

    @pytest.mark.parametrize("code", ["US", "USDT", "U$D", ""])
    def test_bad_currency_code(self, code):
        with pytest.raises(ValidationError):
            SalaryEstimate.model_validate({"minSalary": 1, "maxSalary": 2, "currencyCode": code})

    def test_negative_salary(self):
        with pytest.raises(ValidationError):
            SalaryEstimate.model_validate({"minSalary": -1, "maxSalary": 2, "currencyCode": "USD"})

    def test_missing_field(self):
        with pytest.raises(ValidationError):
            SalaryEstimate.model_validate({"minSalary": 1, "currencyCode": "USD"})


class TestSkillSuggestions:
    def test_keeps_order(self):
        out = SkillSuggestions.model_validate({"suggestedSkills": ["Kubernetes", "Go", "Terraform"]})
        assert out.suggested_skills == ["Kubernetes", "Go", "Terraform"]

    def test_collapses_duplicates_within_one_response(self):
        out = SkillSuggestions.model_validate(
            {"suggestedSkills": ["Kubernetes", " kubernetes ", "Go", "", "GO", "Terraform"]}
        )
        assert out.suggested_skills == ["Kubernetes", "Go", "Terraform"]

    def test_missing_list_means_empty(self):
        assert SkillSuggestions.model_validate({}).suggested_skills == []


def test_flow_inputs_from_profile(valid_form):
    profile = JobProfile.model_validate(valid_form)

    salary_in = PredictSalaryInput.from_profile(profile)
    assert salary_in.model_dump(by_alias=True, mode="json") == {
        k: v for k, v in valid_form.items() if k != "jobDescription"
    }

    letter_in = GenerateCoverLetterInput.from_profile(profile, "$90,000 - $120,000")
    assert letter_in.predicted_salary == "$90,000 - $120,000"
    assert letter_in.job_description == valid_form["jobDescription"]
