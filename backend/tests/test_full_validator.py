"""Tests for the rule-based validation engine."""

from previewguard.validators import ErrorType, ValidationEngine, validate_sanitized_code
from previewguard.validators.base import BaseValidator
from previewguard.validators.content_validator import ContentLengthValidator


class ExplodingValidator(BaseValidator):
    @property
    def name(self) -> str:
        return "ExplodingValidator"

    def validate(self, code):
        raise RuntimeError("kaboom")


class TestValidateSanitizedCode:
    def test_clean_code_is_valid(self, valid_preview):
        result = validate_sanitized_code(valid_preview)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_raw_generated_reports_every_category(self, raw_generated):
        result = validate_sanitized_code(raw_generated)
        types = {ErrorType(e.type) for e in result.errors}

        assert not result.valid
        assert ErrorType.IMPORT in types
        assert ErrorType.EXPORT in types
        assert ErrorType.DIRECTIVE in types
        assert ErrorType.TYPESCRIPT in types
        assert all(e.fixable for e in result.errors)

    def test_error_line_numbers(self, valid_preview):
        code = "const a = 1\nimport x from 'y'\n" + valid_preview
        imports = [e for e in validate_sanitized_code(code).errors if e.type == ErrorType.IMPORT]
        assert imports
        assert imports[0].line == 2

    def test_dangerous_is_not_fixable(self, valid_preview):
        code = valid_preview.replace("const [count", "eval(input)\n  const [count")
        dangerous = [e for e in validate_sanitized_code(code).errors if e.type == ErrorType.DANGEROUS]
        assert len(dangerous) == 1
        assert dangerous[0].fixable is False
        assert dangerous[0].line == 2

    def test_markdown_fence_flagged(self, valid_preview):
        result = validate_sanitized_code(f"```jsx\n{valid_preview}\n```")
        assert any(e.type == ErrorType.MARKDOWN for e in result.errors)

    def test_unbalanced_is_syntax_error(self, valid_preview):
        result = validate_sanitized_code(valid_preview[:-1])
        assert [e.message for e in result.errors] == ["Unbalanced curly braces: missing 1 closing brace(s)"]
        assert result.errors[0].type == ErrorType.SYNTAX
        assert result.errors[0].fixable is False

    def test_too_short(self):
        result = validate_sanitized_code("const a = 1 // a long comment that does not count at all")
        assert any(e.message == "Code appears to be empty or too short" for e in result.errors)

    def test_component_name_is_a_warning_only(self, valid_preview):
        result = validate_sanitized_code(valid_preview.replace("Preview", "HomePage"))
        assert result.valid
        assert result.warnings == ['Component named "HomePage" instead of "Preview" - will need renaming']


class TestValidationEngine:
    def test_crashing_validator_becomes_syntax_error(self, valid_preview):
        engine = ValidationEngine(validators=[ExplodingValidator()])
        result = engine.validate(valid_preview)
        assert not result.valid
        assert result.errors[0].type == ErrorType.SYNTAX
        assert "ExplodingValidator" in result.errors[0].message
        assert "crashed" in result.errors[0].message

    def test_add_and_remove_validator(self):
        engine = ValidationEngine(validators=[ContentLengthValidator(min_length=5)])
        engine.add_validator(ExplodingValidator())
        assert [v.name for v in engine.validators] == ["ContentLengthValidator", "ExplodingValidator"]

        engine.remove_validator("ExplodingValidator")
        assert engine.validate("function Preview() {}").valid

    def test_deterministic(self, raw_generated):
        first = validate_sanitized_code(raw_generated)
        second = validate_sanitized_code(raw_generated)
        assert first.model_dump() == second.model_dump()
