import pytest
from datetime import date

from lifemate.schemas.job_seeker import JobSeekerProfile
from lifemate.services.profile_validation import (
    find_violations,
    iter_field,
    parse_profile,
    validate_profile,
)
from lifemate.utils.exceptions import ValidationException


def work_entry(**overrides):
    entry = {
        "position": "Staff Nurse",
        "company": "Apollo Hospitals",
        "location": "Chennai",
        "start_date": "2020-03-10",
    }
    entry.update(overrides)
    return entry


def certification(**overrides):
    entry = {
        "name": "BLS",
        "issuing_organization": "American Heart Association",
        "issue_date": "2022-06-01",
    }
    entry.update(overrides)
    return entry


def test_default_profile_is_valid():
    """An empty profile only needs its user"""
    profile = JobSeekerProfile(user_id=1)
    assert find_violations(profile) == []
    assert validate_profile(profile) is profile


def test_defaults():
    profile = JobSeekerProfile(user_id=1)
    prefs = profile.job_preferences
    assert prefs.availability == "Negotiable"
    assert prefs.remote_work_preference == "No preference"
    assert prefs.willing_to_relocate is False
    assert prefs.expected_salary.currency == "INR"
    assert prefs.expected_salary.period == "Annual"
    assert profile.privacy_settings.show_contact_info is True
    assert profile.privacy_settings.show_current_salary is False
    assert profile.privacy_settings.show_profile_to_employers is True
    assert profile.privacy_settings.allow_direct_messages is True
    assert profile.stats.profile_views == 0
    assert profile.experience.is_currently_employed is True


def test_nested_defaults():
    profile = parse_profile(
        {
            "user_id": 1,
            "skills": [{"name": "Phlebotomy"}],
            "portfolio": [{"title": "Case study", "url": "https://example.com/c"}],
            "job_preferences": {"preferred_locations": [{"city": "Pune", "state": "MH"}]},
        }
    )
    assert profile.skills[0].level == "Intermediate"
    assert profile.portfolio[0].type == "Link"
    assert profile.job_preferences.preferred_locations[0].country == "India"


def test_title_too_long_is_rejected():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "title": "x" * 101})

    assert exc_info.value.field == "title"
    assert exc_info.value.constraint == "max_length(100)"
    assert exc_info.value.value == "x" * 101


def test_title_at_limit_is_accepted():
    assert parse_profile({"user_id": 1, "title": "x" * 100}).title == "x" * 100


def test_text_is_trimmed_before_length_check():
    profile = parse_profile({"user_id": 1, "title": "  " + "x" * 100 + "  "})
    assert profile.title == "x" * 100


def test_unknown_specialization_is_rejected():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "specializations": ["Cardiology", "Astrology"]})

    assert exc_info.value.field == "specializations[1]"
    assert exc_info.value.constraint == "one_of"


def test_specializations_behave_like_a_set():
    profile = parse_profile(
        {"user_id": 1, "specializations": ["Nursing", "Surgery", "Nursing"]}
    )
    assert profile.specializations == ["Nursing", "Surgery"]


@pytest.mark.parametrize("years", [0, 12.5, 50])
def test_total_years_in_range(years):
    assert parse_profile({"user_id": 1, "experience": {"total_years": years}})


@pytest.mark.parametrize("years", [-1, 50.5, 51])
def test_total_years_out_of_range(years):
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "experience": {"total_years": years}})
    assert exc_info.value.field == "experience.total_years"
    assert exc_info.value.constraint == "range(0, 50)"


def test_education_requires_its_core_fields():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "education": [
                    {"degree": "MBBS", "institution": "CMC Vellore", "year_of_completion": 2010}
                ],
            }
        )
    assert exc_info.value.field == "education[0].field"
    assert exc_info.value.constraint == "required"


def test_education_degree_vocabulary():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "education": [
                    {
                        "degree": "BTech",
                        "field": "Biotech",
                        "institution": "IIT",
                        "year_of_completion": 2010,
                    }
                ],
            }
        )
    assert exc_info.value.field == "education[0].degree"
    assert exc_info.value.constraint == "one_of"


@pytest.mark.parametrize(
    "year, ok",
    [
        (1949, False),
        (1950, True),
        (date.today().year + 5, True),
        (date.today().year + 6, False),
    ],
)
def test_year_of_completion_bounds(year, ok):
    data = {
        "user_id": 1,
        "education": [
            {"degree": "MD", "field": "Medicine", "institution": "KEM", "year_of_completion": year}
        ],
    }
    if ok:
        assert parse_profile(data).education[0].year_of_completion == year
    else:
        with pytest.raises(ValidationException) as exc_info:
            parse_profile(data)
        assert exc_info.value.field == "education[0].year_of_completion"


def test_work_experience_end_before_start_is_rejected():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "work_experience": [work_entry(start_date="2020-03-10", end_date="2020-03-09")],
            }
        )
    assert exc_info.value.field == "work_experience[0].end_date"
    assert exc_info.value.constraint == "not_before(start_date)"
    assert exc_info.value.value == date(2020, 3, 9)


def test_work_experience_same_day_is_accepted():
    profile = parse_profile(
        {
            "user_id": 1,
            "work_experience": [work_entry(start_date="2020-03-10", end_date="2020-03-10")],
        }
    )
    assert profile.work_experience[0].end_date == date(2020, 3, 10)


def test_work_experience_without_end_date_is_accepted():
    profile = parse_profile(
        {"user_id": 1, "work_experience": [work_entry(is_current=True)]}
    )
    assert profile.work_experience[0].end_date is None


def test_work_experience_requires_start_date():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {"user_id": 1, "work_experience": [work_entry(start_date=None)]}
        )
    assert exc_info.value.field == "work_experience[0].start_date"
    assert exc_info.value.constraint == "required"


def test_long_achievement_reports_its_position():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "work_experience": [
                    work_entry(),
                    work_entry(achievements=["Set up a sepsis protocol", "y" * 201]),
                ],
            }
        )
    assert exc_info.value.field == "work_experience[1].achievements[1]"
    assert exc_info.value.constraint == "max_length(200)"


def test_certification_expiry_on_issue_date_is_accepted():
    profile = parse_profile(
        {
            "user_id": 1,
            "certifications": [certification(issue_date="2022-06-01", expiry_date="2022-06-01")],
        }
    )
    assert profile.certifications[0].expiry_date == date(2022, 6, 1)


def test_certification_expiry_before_issue_is_rejected():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "certifications": [
                    certification(issue_date="2022-06-01", expiry_date="2022-05-31")
                ],
            }
        )
    assert exc_info.value.field == "certifications[0].expiry_date"
    assert exc_info.value.constraint == "not_before(issue_date)"


def test_skill_level_vocabulary():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "skills": [{"name": "Suturing", "level": "Guru"}]})
    assert exc_info.value.field == "skills[0].level"


def test_job_preference_vocabularies():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "job_preferences": {"preferred_shifts": ["Day", "Graveyard"]},
            }
        )
    assert exc_info.value.field == "job_preferences.preferred_shifts[1]"

    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "job_preferences": {"expected_salary": {"min": 1, "currency": "JPY"}},
            }
        )
    assert exc_info.value.field == "job_preferences.expected_salary.currency"


def test_negative_salary_is_rejected():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {"user_id": 1, "job_preferences": {"expected_salary": {"min": -5}}}
        )
    assert exc_info.value.field == "job_preferences.expected_salary.min"


def test_preferred_location_requires_city_and_state():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {
                "user_id": 1,
                "job_preferences": {"preferred_locations": [{"city": "Kochi", "state": "  "}]},
            }
        )
    assert exc_info.value.field == "job_preferences.preferred_locations[0].state"
    assert exc_info.value.constraint == "required"


def test_portfolio_requires_url():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "portfolio": [{"title": "Poster"}]})
    assert exc_info.value.field == "portfolio[0].url"


def test_find_violations_reports_every_bad_field():
    profile = JobSeekerProfile.model_validate(
        {
            "user_id": 1,
            "title": "t" * 150,
            "bio": "b" * 1500,
            "skills": [{"name": "s" * 60}],
        }
    )
    fields = [v.field for v in find_violations(profile)]
    assert fields == ["title", "bio", "skills[0].name"]


def test_type_errors_are_reported_as_field_errors():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "experience": {"total_years": "lots"}})
    assert exc_info.value.field == "experience.total_years"
    assert exc_info.value.value == "lots"


def test_bad_date_reports_list_position():
    with pytest.raises(ValidationException) as exc_info:
        parse_profile(
            {"user_id": 1, "work_experience": [work_entry(start_date="not a date")]}
        )
    assert exc_info.value.field == "work_experience[0].start_date"


def test_iter_field_skips_missing_parents():
    data = {"resume": None, "education": [{"degree": "MD"}, {}]}
    assert list(iter_field(data, "resume.size_bytes")) == []
    selected = [(path, value) for path, value, _ in iter_field(data, "education[].degree")]
    assert selected == [("education[0].degree", "MD"), ("education[1].degree", None)]


@pytest.mark.parametrize("years", [float("nan"), float("inf")])
def test_total_years_must_be_a_real_number(years):
    with pytest.raises(ValidationException) as exc_info:
        parse_profile({"user_id": 1, "experience": {"total_years": years}})
    assert exc_info.value.field == "experience.total_years"
    assert exc_info.value.constraint == "range(0, 50)"


def test_non_finite_salary_is_rejected():
    profile = JobSeekerProfile.model_validate(
        {
            "user_id": 1,
            "job_preferences": {
                "expected_salary": {"min": float("nan"), "max": float("inf")}
            },
        }
    )
    fields = [v.field for v in find_violations(profile)]
    assert fields == [
        "job_preferences.expected_salary.min",
        "job_preferences.expected_salary.max",
    ]


def test_non_finite_value_is_reported_as_text():
    error = ValidationException("experience.total_years", "range(0, 50)", float("nan"))
    assert error.to_dict()["value"] == "nan"
