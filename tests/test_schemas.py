"""이력서 스키마 테스트"""

import pytest
from pydantic import ValidationError

from app.domain.resume.constants import DEFAULT_SECTION_ORDER, SectionKey
from app.domain.resume.schemas import (
    ResumeData,
    ResumeDataInput,
    ResumeDraft,
    normalize_skills,
    validate_resume_data,
)


def _error_fields(exc: ValidationError) -> dict[str, str]:
    return {".".join(str(part) for part in err["loc"]): err["msg"] for err in exc.errors()}


class TestResumeDataDefaults:
    """관대한 문서 스키마 테스트"""

    def test_empty_document(self):
        """빈 입력은 빈 기본값 문서"""
        doc = ResumeData.model_validate({})

        assert doc.personal_info.first_name == ""
        assert doc.summary == ""
        assert doc.experience == []
        assert doc.skills.technical == []
        assert doc.skills.soft == []
        assert doc.section_order is None

    def test_null_strings_become_empty(self):
        """null 문자열 필드는 빈 문자열"""
        doc = ResumeData.model_validate({"personalInfo": {"firstName": None}, "summary": None})

        assert doc.personal_info.first_name == ""
        assert doc.summary == ""

    def test_unknown_keys_ignored(self):
        doc = ResumeData.model_validate({"summary": "Hi", "favouriteColour": "blue"})
        assert "favouriteColour" not in doc.to_json_dict()

    def test_items_without_id_get_uuid(self):
        """id 없는 항목은 UUID4 hex id를 받음"""
        doc = ResumeData.model_validate({"experience": [{"title": "A"}, {"title": "B"}]})

        ids = [exp.id for exp in doc.experience]
        assert all(len(item_id) == 32 for item_id in ids)
        assert ids[0] != ids[1]

    def test_legacy_experiences_key(self):
        """예전 키 experiences도 허용"""
        doc = ResumeData.model_validate({"experiences": [{"title": "Engineer"}]})

        assert doc.experience[0].title == "Engineer"
        assert "experiences" not in doc.to_json_dict()

    def test_json_uses_camel_case(self, sample_document):
        data = sample_document.to_json_dict()

        assert "personalInfo" in data
        assert "firstName" in data["personalInfo"]
        assert "startDate" in data["experience"][0]
        assert "expiryDate" in data["certifications"][0]

    def test_round_trip(self, sample_document):
        """JSON 직렬화 후 다시 읽으면 같은 문서"""
        restored = ResumeData.model_validate(sample_document.model_dump(by_alias=True, mode="json"))
        assert restored == sample_document

    def test_draft_round_trip_keeps_template(self):
        draft = ResumeDraft(selected_template="creative", summary="Hello")
        restored = ResumeDraft.model_validate(draft.model_dump(by_alias=True, mode="json"))

        assert restored.selected_template == "creative"
        assert restored.to_document().summary == "Hello"


class TestSkillsNormalization:
    """스킬 정규화 테스트"""

    def test_canonical_shape(self):
        assert normalize_skills({"technical": ["Go"], "soft": ["Empathy"]}) == {
            "technical": ["Go"],
            "soft": ["Empathy"],
        }

    def test_list_of_strings_is_technical(self):
        doc = ResumeData.model_validate({"skills": ["Python", "SQL"]})

        assert doc.skills.technical == ["Python", "SQL"]
        assert doc.skills.soft == []

    def test_skill_objects_split_by_category(self):
        """category가 soft면 soft, 나머지는 technical"""
        doc = ResumeData.model_validate(
            {
                "skills": [
                    {"name": "Teamwork", "category": "Soft"},
                    {"name": "Rust", "level": "Advanced", "category": "language"},
                    {"name": "Docker"},
                ]
            }
        )

        assert doc.skills.technical == ["Rust", "Docker"]
        assert doc.skills.soft == ["Teamwork"]

    def test_extra_skills_list_merged(self):
        doc = ResumeData.model_validate(
            {"skills": {"technical": ["Python"], "skills": [{"name": "Leadership", "category": "soft"}]}}
        )

        assert doc.skills.technical == ["Python"]
        assert doc.skills.soft == ["Leadership"]

    def test_blank_and_duplicate_names_removed(self):
        """빈 이름 제거, 대소문자 무시 중복 제거 (첫 항목 유지)"""
        doc = ResumeData.model_validate({"skills": ["Python", " ", "python", "SQL", "Python "]})
        assert doc.skills.technical == ["Python", "SQL"]

    def test_null_skills(self):
        doc = ResumeData.model_validate({"skills": None})
        assert doc.skills.count == 0


class TestSectionOrder:
    """sectionOrder 검증 테스트"""

    def test_valid_order_kept(self):
        order = [key.value for key in reversed(DEFAULT_SECTION_ORDER)]
        doc = ResumeData.model_validate({"sectionOrder": order})

        assert doc.section_order == list(reversed(DEFAULT_SECTION_ORDER))

    def test_partial_order_kept_verbatim(self):
        """순열 여부는 검사하지 않음"""
        doc = ResumeData.model_validate({"sectionOrder": ["skills", "summary"]})
        assert doc.section_order == [SectionKey.SKILLS, SectionKey.SUMMARY]

    def test_unknown_key_dropped_in_lenient_mode(self):
        """관대한 스키마에서는 잘못된 순서를 버림"""
        doc = ResumeData.model_validate({"sectionOrder": ["summary", "hobbies"]})
        assert doc.section_order is None

    def test_unknown_key_rejected_in_strict_mode(self, sample_resume_data):
        """엄격 스키마에서는 검증 에러"""
        payload = {**sample_resume_data, "sectionOrder": ["summary", "hobbies"]}

        with pytest.raises(ValidationError) as exc_info:
            ResumeDataInput.model_validate(payload)

        assert any(key.startswith("sectionOrder") for key in _error_fields(exc_info.value))


class TestStrictValidation:
    """엄격 입력 검증 테스트"""

    def test_valid_payload(self, sample_resume_data):
        doc = validate_resume_data(sample_resume_data)

        assert type(doc) is ResumeData
        assert doc.personal_info.first_name == "Jane"

    def test_personal_info_required(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data({"summary": "no personal info"})

        assert "personalInfo" in _error_fields(exc_info.value)

    def test_required_names(self, sample_resume_data):
        sample_resume_data["personalInfo"]["firstName"] = "  "
        sample_resume_data["personalInfo"]["lastName"] = ""

        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data(sample_resume_data)

        errors = _error_fields(exc_info.value)
        assert "First name is required" in errors["personalInfo.firstName"]
        assert "Last name is required" in errors["personalInfo.lastName"]

    @pytest.mark.parametrize("email", ["", "jane", "jane@example", "jane doe@example.com"])
    def test_invalid_email(self, sample_resume_data, email):
        sample_resume_data["personalInfo"]["email"] = email

        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data(sample_resume_data)

        assert "Invalid email address" in _error_fields(exc_info.value)["personalInfo.email"]

    def test_invalid_website(self, sample_resume_data):
        sample_resume_data["personalInfo"]["website"] = "jane.dev"

        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data(sample_resume_data)

        assert "Invalid website URL" in _error_fields(exc_info.value)["personalInfo.website"]

    def test_empty_website_allowed(self, sample_resume_data):
        sample_resume_data["personalInfo"]["website"] = ""
        assert validate_resume_data(sample_resume_data).personal_info.website == ""

    def test_experience_required_fields(self, sample_resume_data):
        sample_resume_data["experience"][0]["company"] = ""

        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data(sample_resume_data)

        assert "Company name is required" in _error_fields(exc_info.value)["experience.0.company"]

    def test_project_url_validated(self, sample_resume_data):
        sample_resume_data["projects"][0]["url"] = "ftp://example.com/file"

        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data(sample_resume_data)

        assert "Invalid project URL" in _error_fields(exc_info.value)["projects.0.url"]

    def test_certification_required_fields(self, sample_resume_data):
        sample_resume_data["certifications"][0]["issuer"] = ""

        with pytest.raises(ValidationError) as exc_info:
            validate_resume_data(sample_resume_data)

        assert "certifications.0.issuer" in _error_fields(exc_info.value)

    def test_strict_output_matches_lenient_parse(self, sample_resume_data, sample_document):
        assert validate_resume_data(sample_resume_data) == sample_document
