"""LLM prompt templates for the analysis tools and the report pipeline.

Every builder here is a pure function of its arguments: no clock, no
randomness, no I/O. The same inputs always render byte-identical prompts.
"""

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from scale_advisor.models.records import ReportSections
    from scale_advisor.tools.fixtures import CloudResources


# System directives, keyed by call profile name

SYSTEM_PROMPTS: dict[str, str] = {
    "github_analyze_repository": (
        "You are a senior software engineer and technical analyst. When analyzing GitHub "
        "repositories, search for and review the actual repository content including README "
        "files, source code, configuration files, and documentation. Provide accurate, "
        "detailed technical insights based on what you find. If you cannot access the "
        "repository directly, clearly state this limitation."
    ),
    "analyze_cloud_resources": (
        "You are a senior cloud architect and DevOps expert specializing in AWS infrastructure "
        "analysis. Provide detailed, actionable insights about cloud resources, focusing on "
        "best practices, security, performance, and cost optimization. Use clear formatting "
        "with headers and bullet points."
    ),
    "analyze_security_posture": (
        "You are a senior security architect specializing in AWS security, DevSecOps, and "
        "compliance. Focus on practical, actionable security recommendations that prevent "
        "scaling failures."
    ),
    "comprehensive.synthesis": (
        "You are a senior technical architect specializing in full-stack analysis. Identify "
        "critical insights by combining repository and infrastructure analysis."
    ),
    "comprehensive.executive_summary": (
        "You are writing for executives. Focus on business impact, risks, and high-level "
        "recommendations."
    ),
    "comprehensive.technical_details": (
        "You are writing for technical teams. Include specific technical details, "
        "configurations, and implementation notes."
    ),
    "comprehensive.recommendations": (
        "You are a solutions architect. Provide specific, actionable recommendations with "
        "priorities and implementation steps."
    ),
    "comprehensive.compilation": (
        "You are a senior technical consultant creating a comprehensive scaling advisory "
        "report. Structure it professionally with clear sections and actionable insights."
    ),
}


def get_system_prompt(profile_name: str) -> str | None:
    """Get the system directive for a call profile.

    Args:
        profile_name: Profile name (e.g. "comprehensive.synthesis")

    Returns:
        System directive, or None for profiles without one
    """
    return SYSTEM_PROMPTS.get(profile_name)


# =============================================================================
# GitHub repository analysis
# =============================================================================


def build_github_prompt(
    full_name: str,
    analysis_depth: str = "basic",
    include_dependencies: bool = True,
) -> str:
    """Build the repository analysis instruction.

    Args:
        full_name: Repository in owner/repo form
        analysis_depth: "basic" or "detailed"
        include_dependencies: Whether to ask about dependencies and tooling

    Returns:
        Prompt text
    """
    prompt = (
        f'Please analyze the GitHub repository "{full_name}" '
        "and provide a comprehensive overview. "
    )

    if analysis_depth == "detailed":
        prompt += """I need a detailed analysis including:

1. **Repository Overview**
   - What does this project do? (main purpose and functionality)
   - Target audience and use cases
   - Project maturity and activity level

2. **Technical Architecture**
   - Programming languages used (with percentages if available)
   - Frameworks and libraries
   - Architecture patterns and design decisions
   - Key directories and file structure

3. **Technology Stack**"""

        if include_dependencies:
            prompt += """
   - Dependencies and package managers used
   - Build tools and development workflow
   - Testing frameworks
   - CI/CD setup"""

        prompt += """

4. **Key Features & Functionality**
   - Main features and capabilities
   - Notable code patterns or implementations
   - Performance considerations

5. **Development & Community**
   - Documentation quality
   - Contribution guidelines
   - Community activity and maintenance status
   - Recent updates and roadmap

Please search for and review the repository's README, package.json/requirements.txt, \
source code structure, and any documentation to provide accurate insights."""
    else:
        prompt += """I need a basic analysis covering:

1. **What it does**: Main purpose and functionality
2. **Technologies used**: Programming languages, main frameworks/libraries
3. **Project type**: (web app, library, CLI tool, etc.)
4. **Key features**: Main capabilities and use cases"""

        if include_dependencies:
            prompt += """
5. **Tech stack**: Dependencies and build tools used"""

        prompt += """

Please search for the repository and provide a concise but informative overview."""

    return prompt


# =============================================================================
# Cloud resource analysis
# =============================================================================

_CLOUD_INSTRUCTIONS: dict[str, str] = {
    "overview": """Provide an overview analysis including:
1. **Resource Summary**: What resources exist and their purpose
2. **Environment Classification**: Production, staging, development resources
3. **Key Observations**: Notable configurations or patterns
4. **Health Status**: Overall system health and availability""",
    "detailed": """Provide a detailed analysis including:
1. **Resource Inventory**: Complete breakdown of all resources
2. **Architecture Overview**: How resources are connected and organized
3. **Performance Characteristics**: Instance types, storage, and capacity
4. **Network Configuration**: VPC, subnets, security groups
5. **Operational Status**: Current state and health of resources""",
    "security": """Focus on security analysis:
1. **Security Groups**: Review firewall rules and access patterns
2. **Network Security**: VPC configuration and isolation
3. **Access Control**: Public vs private resources
4. **Database Security**: RDS security configuration
5. **Compliance**: Best practices adherence""",
    "cost": """Focus on cost optimization:
1. **Instance Sizing**: Right-sizing opportunities
2. **Resource Utilization**: Underutilized or idle resources
3. **Storage Optimization**: Storage type and size recommendations
4. **Reserved Instances**: Potential savings opportunities
5. **Cost Estimation**: Approximate monthly costs""",
}

_CLOUD_RECOMMENDATIONS = """

**Recommendations**: Provide actionable recommendations for:
- Performance improvements
- Cost optimization
- Security enhancements
- Operational best practices"""


def build_cloud_prompt(
    resources: "CloudResources",
    analysis_type: str = "overview",
    include_recommendations: bool = True,
) -> str:
    """Build the cloud resource analysis instruction.

    Args:
        resources: Cloud inventory to describe
        analysis_type: overview, detailed, security, or cost
        include_recommendations: Whether to ask for recommendations

    Returns:
        Prompt text
    """
    lines = [
        f"Analyze the following AWS cloud resources in region {resources.region} "
        f"for account {resources.account_id}:",
        "",
        f"**EC2 Instances ({len(resources.ec2_instances)}):**",
    ]

    for instance in resources.ec2_instances:
        lines.extend([
            f"- {instance.instance_id} ({instance.instance_type})",
            f"  State: {instance.state}",
            f"  AZ: {instance.availability_zone}",
            f"  Tags: {json.dumps(instance.tags)}",
            f"  Security Groups: {', '.join(instance.security_groups)}",
            "",
        ])

    lines.append(f"**RDS Instances ({len(resources.rds_instances)}):**")
    for db in resources.rds_instances:
        lines.extend([
            f"- {db.db_instance_identifier} ({db.db_instance_class})",
            f"  Engine: {db.engine} {db.engine_version}",
            f"  Status: {db.status}",
            f"  Storage: {db.allocated_storage}GB {db.storage_type}",
            f"  Multi-AZ: {str(db.multi_az).lower()}",
            f"  Backup Retention: {db.backup_retention_period} days",
            "",
        ])

    prompt = "\n".join(lines) + "\n"
    prompt += _CLOUD_INSTRUCTIONS.get(analysis_type, _CLOUD_INSTRUCTIONS["overview"])

    if include_recommendations:
        prompt += _CLOUD_RECOMMENDATIONS

    return prompt


# =============================================================================
# Security posture analysis
# =============================================================================


def build_security_prompt(
    security_data: dict[str, Any],
    repository_url: str | None = None,
    analysis_scope: str = "all",
    severity_threshold: str = "medium",
) -> str:
    """Build the security posture assessment instruction.

    Args:
        security_data: Findings grouped by category (iam, secrets, containers, compliance)
        repository_url: Optional repository the findings relate to
        analysis_scope: Scope label shown to the model
        severity_threshold: Threshold label shown to the model

    Returns:
        Prompt text
    """
    headings = {
        "iam": "IAM ANALYSIS",
        "secrets": "SECRETS ANALYSIS",
        "containers": "CONTAINER SECURITY",
        "compliance": "COMPLIANCE STATUS",
    }

    blocks = [
        "Analyze the following AWS security posture data and provide a comprehensive "
        "security assessment:",
        "",
        f"REPOSITORY: {repository_url or 'N/A'}",
        f"ANALYSIS SCOPE: {analysis_scope}",
        f"SEVERITY THRESHOLD: {severity_threshold}",
    ]

    for category, heading in headings.items():
        if category in security_data:
            blocks.extend([
                "",
                f"{heading}:",
                json.dumps(security_data[category], indent=2),
            ])

    blocks.append("""
Please provide:
1. Executive Summary of security posture
2. Critical security risks and their business impact
3. Detailed findings by category (IAM, Secrets, Containers)
4. Prioritized remediation roadmap with timelines
5. Compliance gap analysis
6. Security scaling considerations for growth

Focus on issues that commonly cause scaling failures and security incidents in \
production environments.""")

    return "\n".join(blocks)


# =============================================================================
# Comprehensive analysis pipeline
# =============================================================================


def build_synthesis_prompt(
    github_analysis: str,
    cloud_analysis: str,
    focus_areas: Sequence[str] = (),
) -> str:
    """Build the phase-2 synthesis instruction.

    Args:
        github_analysis: Repository analysis text, embedded verbatim
        cloud_analysis: Cloud analysis text, embedded verbatim
        focus_areas: Caller focus areas

    Returns:
        Prompt text
    """
    focus = ", ".join(focus_areas) if focus_areas else "general analysis"

    return f"""Analyze and synthesize these two analyses to identify key insights:

GITHUB REPOSITORY ANALYSIS:
{github_analysis}

CLOUD INFRASTRUCTURE ANALYSIS:
{cloud_analysis}

Focus areas: {focus}

Provide a synthesis that identifies:
1. **Alignment Issues**: Where the repository and cloud infrastructure don't align
2. **Scaling Bottlenecks**: Potential issues for growth
3. **Architecture Gaps**: Missing components or suboptimal configurations
4. **Technology Mismatches**: Where repo tech stack doesn't match cloud setup
5. **Key Insights**: Important observations from combining both analyses"""


# Phase-3 instruction per report section
SECTION_INSTRUCTIONS: dict[str, str] = {
    "executive_summary": "Write an executive summary based on this analysis:",
    "technical_details": "Write technical details and findings based on this analysis:",
    "recommendations": "Write actionable recommendations based on this analysis:",
}


def build_section_prompt(section: str, synthesis: str) -> str:
    """Build a phase-3 section instruction over the synthesis document.

    Args:
        section: Section key from SECTION_INSTRUCTIONS
        synthesis: Phase-2 synthesis text

    Returns:
        Prompt text

    Raises:
        KeyError: If the section is unknown
    """
    return f"{SECTION_INSTRUCTIONS[section]} {synthesis}"


def build_compilation_prompt(sections: "ReportSections") -> str:
    """Build the phase-4 compilation instruction.

    Args:
        sections: The three generated report sections

    Returns:
        Prompt text
    """
    return f"""Compile these sections into a cohesive scaling advisory report:

EXECUTIVE SUMMARY:
{sections.executive_summary}

TECHNICAL DETAILS:
{sections.technical_details}

RECOMMENDATIONS:
{sections.recommendations}

Create a well-structured report with clear sections, priorities, and next steps for \
scaling this application."""
