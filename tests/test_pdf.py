"""PDF 렌더링 테스트"""

from unittest.mock import patch

import pytest

from app.core.exceptions import PdfRenderError
from app.domain.resume.schemas import ResumeData
from app.infra.pdf.renderer import STYLE_SETS, build_story, get_style_set, render_pdf


class TestStyleSets:
    def test_four_style_sets(self):
        assert set(STYLE_SETS) == {"modern", "classic", "creative", "minimal"}

    def test_unknown_template_uses_modern(self):
        key, style_set = get_style_set("neon")

        assert key == "modern"
        assert style_set is STYLE_SETS["modern"]


class TestRenderPdf:
    """render_pdf 테스트"""

    @pytest.mark.parametrize("template_id", ["modern", "classic", "creative", "minimal", "neon"])
    def test_renders_pdf_bytes(self, sample_document, template_id):
        pdf = render_pdf(sample_document, template_id)

        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_empty_document(self):
        """빈 문서도 렌더링 가능"""
        assert render_pdf(ResumeData()).startswith(b"%PDF")

    def test_markup_in_content_is_escaped(self):
        doc = ResumeData.model_validate({"summary": "Built <b>fast & safe</b> systems"})
        assert render_pdf(doc).startswith(b"%PDF")

    def test_render_failure_raises_pdf_render_error(self, sample_document):
        with patch("app.infra.pdf.renderer.SimpleDocTemplate.build", side_effect=RuntimeError("boom")):
            with pytest.raises(PdfRenderError) as exc_info:
                render_pdf(sample_document)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to generate PDF"


class TestBuildStory:
    def test_empty_sections_skipped(self):
        full = build_story(ResumeData.model_validate({"summary": "Hi", "skills": ["Go"]}), "modern", 500)
        empty = build_story(ResumeData(), "modern", 500)

        assert len(full) > len(empty)
