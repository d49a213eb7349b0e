"""Unit tests for LLM prompt templates."""

import json

import pytest

from scale_advisor.llm.prompts import (
    SECTION_INSTRUCTIONS,
    SYSTEM_PROMPTS,
    build_cloud_prompt,
    build_compilation_prompt,
    build_github_prompt,
    build_section_prompt,
    build_security_prompt,
    build_synthesis_prompt,
    get_system_prompt,
)
from scale_advisor.models.records import ReportSections
from scale_advisor.tools.fixtures import get_cloud_resources, get_security_data


class TestSystemPrompts:
    """Tests for the system directive table."""

    def test_directives_are_distinct(self) -> None:
        """Test every profile has its own directive."""
        assert len(set(SYSTEM_PROMPTS.values())) == len(SYSTEM_PROMPTS)

    def test_get_known_and_unknown(self) -> None:
        """Test lookup returns None for profiles without a directive."""
        assert "cloud architect" in get_system_prompt("analyze_cloud_resources")
        assert get_system_prompt("claude_chat") is None


class TestGitHubPrompt:
    """Tests for build_github_prompt."""

    def test_basic_prompt(self) -> None:
        """Test the basic checklist names the repository."""
        prompt = build_github_prompt("octo/widgets")

        assert '"octo/widgets"' in prompt
        assert "I need a basic analysis covering" in prompt
        assert "5. **Tech stack**" in prompt
        assert "concise but informative overview" in prompt

    def test_basic_without_dependencies(self) -> None:
        """Test the dependency item is omitted when not requested."""
        prompt = build_github_prompt("octo/widgets", include_dependencies=False)

        assert "Tech stack" not in prompt
        assert "4. **Key features**" in prompt

    def test_detailed_prompt(self) -> None:
        """Test the detailed checklist has five sections."""
        prompt = build_github_prompt("octo/widgets", analysis_depth="detailed")

        assert "I need a detailed analysis including" in prompt
        assert "5. **Development & Community**" in prompt
        assert "Dependencies and package managers used" in prompt

    def test_detailed_without_dependencies(self) -> None:
        """Test the detailed dependency bullets are omitted when not requested."""
        prompt = build_github_prompt(
            "octo/widgets", analysis_depth="detailed", include_dependencies=False
        )

        assert "Dependencies and package managers used" not in prompt
        assert "3. **Technology Stack**" in prompt

    def test_deterministic(self) -> None:
        """Test identical inputs render identical prompts."""
        assert build_github_prompt("a/b", "detailed") == build_github_prompt("a/b", "detailed")


class TestCloudPrompt:
    """Tests for build_cloud_prompt."""

    def test_inventory_rendered(self) -> None:
        """Test every instance and database appears with its key fields."""
        resources = get_cloud_resources()

        prompt = build_cloud_prompt(resources)

        assert f"region {resources.region}" in prompt
        assert f"account {resources.account_id}" in prompt
        assert f"**EC2 Instances ({len(resources.ec2_instances)}):**" in prompt
        for instance in resources.ec2_instances:
            assert f"- {instance.instance_id} ({instance.instance_type})" in prompt
            assert f"Tags: {json.dumps(instance.tags)}" in prompt
        for db in resources.rds_instances:
            assert f"- {db.db_instance_identifier} ({db.db_instance_class})" in prompt

    @pytest.mark.parametrize(
        ("analysis_type", "expected"),
        [
            ("overview", "Provide an overview analysis including"),
            ("detailed", "Provide a detailed analysis including"),
            ("security", "Focus on security analysis"),
            ("cost", "Focus on cost optimization"),
        ],
    )
    def test_instruction_per_type(self, analysis_type: str, expected: str) -> None:
        """Test each analysis type selects its instruction block."""
        prompt = build_cloud_prompt(get_cloud_resources(), analysis_type)

        assert expected in prompt

    def test_recommendations_toggle(self) -> None:
        """Test the recommendations block follows include_recommendations."""
        resources = get_cloud_resources()

        assert "**Recommendations**" in build_cloud_prompt(resources)
        assert "**Recommendations**" not in build_cloud_prompt(
            resources, include_recommendations=False
        )


class TestSecurityPrompt:
    """Tests for build_security_prompt."""

    def test_all_categories(self) -> None:
        """Test every present category gets its heading and JSON dump."""
        data = get_security_data()

        prompt = build_security_prompt(data, "https://github.com/o/r", "all", "high")

        assert "REPOSITORY: https://github.com/o/r" in prompt
        assert "ANALYSIS SCOPE: all" in prompt
        assert "SEVERITY THRESHOLD: high" in prompt
        for heading in ("IAM ANALYSIS:", "SECRETS ANALYSIS:", "CONTAINER SECURITY:"):
            assert heading in prompt
        assert json.dumps(data["iam"], indent=2) in prompt
        assert "6. Security scaling considerations for growth" in prompt

    def test_missing_categories_omitted(self) -> None:
        """Test only categories present in the data are rendered."""
        data = get_security_data()

        prompt = build_security_prompt({"secrets": data["secrets"]})

        assert "SECRETS ANALYSIS:" in prompt
        assert "IAM ANALYSIS:" not in prompt
        assert "CONTAINER SECURITY:" not in prompt
        assert "REPOSITORY: N/A" in prompt


class TestComprehensivePrompts:
    """Tests for the pipeline prompts."""

    def test_synthesis_embeds_both_analyses(self) -> None:
        """Test both analyses are embedded verbatim."""
        prompt = build_synthesis_prompt("GH TEXT", "CLOUD TEXT", ["security", "cost"])

        assert "GITHUB REPOSITORY ANALYSIS:\nGH TEXT" in prompt
        assert "CLOUD INFRASTRUCTURE ANALYSIS:\nCLOUD TEXT" in prompt
        assert "Focus areas: security, cost" in prompt

    def test_synthesis_default_focus(self) -> None:
        """Test an empty focus list renders the general label."""
        prompt = build_synthesis_prompt("a", "b", [])

        assert "Focus areas: general analysis" in prompt

    def test_section_prompts(self) -> None:
        """Test each section prompt is its instruction followed by the synthesis."""
        for section, instruction in SECTION_INSTRUCTIONS.items():
            assert build_section_prompt(section, "SYN") == f"{instruction} SYN"

    def test_unknown_section(self) -> None:
        """Test an unknown section name is rejected."""
        with pytest.raises(KeyError):
            build_section_prompt("appendix", "SYN")

    def test_compilation_order(self) -> None:
        """Test sections appear in summary, details, recommendations order."""
        sections = ReportSections(
            executive_summary="SUMMARY",
            technical_details="DETAILS",
            recommendations="RECS",
        )

        prompt = build_compilation_prompt(sections)

        assert prompt.index("SUMMARY") < prompt.index("DETAILS") < prompt.index("RECS")
        assert "EXECUTIVE SUMMARY:\nSUMMARY" in prompt
