"""Tests for the tool argument models."""

__test__ = True

import pytest
from pydantic import ValidationError

from edamcp.models import (
    NaturalLanguageArgs,
    NavigateArgs,
    ProjectArgs,
    RunVerificationArgs,
    UploadFileArgs,
)


class TestNavigateArgs:

    def test_accepts_wire_and_python_names(self):
        assert NavigateArgs.model_validate({"action": "projects", "projectId": "p1"}).project_id == "p1"
        assert NavigateArgs(action="projects", project_id="p1").project_id == "p1"

    def test_normalizes_case_and_whitespace(self):
        assert NavigateArgs.model_validate({"action": " New-Project "}).action == "new-project"

    def test_rejects_unknown_action(self):
        with pytest.raises(ValidationError):
            NavigateArgs.model_validate({"action": "logout"})

    def test_ignores_extra_keys(self):
        assert NavigateArgs.model_validate({"action": "home", "extra": 1}).action == "home"

    def test_schema_lists_enum(self):
        schema = NavigateArgs.model_json_schema(by_alias=True)
        assert schema["properties"]["action"]["enum"] == [
            "home", "projects", "new-project", "documentation", "settings",
        ]


class TestProjectArgs:

    def test_project_type_is_normalized(self):
        args = ProjectArgs.model_validate(
            {"action": "CREATE", "projectName": "cpu", "projectType": "Formal"}
        )
        assert (args.action, args.project_type) == ("create", "formal")

    def test_unknown_project_type(self):
        with pytest.raises(ValidationError):
            ProjectArgs.model_validate({"action": "create", "projectType": "analog"})


class TestUploadFileArgs:

    def test_requires_non_empty_fields(self):
        with pytest.raises(ValidationError):
            UploadFileArgs.model_validate({"projectId": "", "filePath": "a.v"})

    def test_file_type_is_optional(self):
        assert UploadFileArgs.model_validate({"projectId": "p", "filePath": "a.v"}).file_type is None


class TestRunVerificationArgs:

    def test_options_convert_to_value_object(self):
        args = RunVerificationArgs.model_validate(
            {
                "projectId": "p1",
                "verificationType": "power",
                "options": {"timeout": 600, "depth": 0, "properties": ["idle"]},
            }
        )

        options = args.options.to_options()

        assert options.timeout == 600
        assert options.depth == 0
        assert options.properties == ("idle",)

    @pytest.mark.parametrize(
        "options",
        [{"timeout": 0}, {"timeout": -5}, {"timeout": float("inf")}, {"timeout": "nan"}, {"depth": -1}],
    )
    def test_rejects_out_of_range_options(self, options):
        with pytest.raises(ValidationError):
            RunVerificationArgs.model_validate(
                {"projectId": "p1", "verificationType": "formal", "options": options}
            )


class TestNaturalLanguageArgs:

    @pytest.mark.parametrize("query", ["", "   "])
    def test_rejects_blank_query(self, query):
        with pytest.raises(ValidationError, match="query must not be empty"):
            NaturalLanguageArgs.model_validate({"query": query})

    def test_context_uses_wire_names(self):
        args = NaturalLanguageArgs.model_validate(
            {"query": "status", "context": {"currentProject": "p2"}}
        )
        assert args.context.to_context() == {"currentProject": "p2"}
