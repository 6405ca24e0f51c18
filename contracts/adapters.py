"""Adapters from contracts to Markdown.

Pure functions used by the CLI to render and export ideas and batches.
"""

from datetime import datetime

from contracts import Idea, IdeaBatch


def idea_to_markdown(idea: Idea, heading_level: int = 1) -> str:
    """Render one idea, with its verification and blueprint when present."""
    h = "#" * heading_level
    sub = "#" * (heading_level + 1)
    sections = [f"{h} {idea.title}"]

    if idea.tagline:
        sections.append(f"_{idea.tagline}_")

    meta = [
        f"- **Ecosystem:** {idea.ecosystem}",
        f"- **Sector:** {idea.sector}",
        f"- **Degen score:** {idea.degen_score}/100",
        f"- **Status:** {idea.status.value}",
    ]
    if idea.language:
        meta.append(f"- **Language:** {idea.language}")
    sections.append("\n".join(meta))

    if idea.description:
        sections.append(idea.description)

    if idea.features:
        lines = [f"{sub} Features"]
        for feature in idea.features:
            lines.append(f"- {feature}")
        sections.append("\n".join(lines))

    result = idea.verification_result
    if result:
        lines = [f"{sub} Verification", "Unique" if result.is_unique else "Collision detected"]
        for project in result.similar_projects:
            entry = f"- {project.name}"
            if project.url:
                entry += f" <{project.url}>"
            if project.description:
                entry += f": {project.description}"
            lines.append(entry)
        if result.notes:
            lines.append(f"\n{result.notes}")
        if result.pivot_suggestion:
            lines.append(f"\n**Pivot:** {result.pivot_suggestion}")
        sections.append("\n".join(lines))

    blueprint = idea.blueprint
    if blueprint:
        sections.append(f"{sub} Executive Summary\n{blueprint.overview}")
        sections.append(f"{sub} Tokenomics\n{blueprint.tokenomics}")
        sections.append(f"{sub} Roadmap\n{blueprint.roadmap}")
        sections.append(f"{sub} Technical Architecture\n{blueprint.technical_architecture}")
        if blueprint.contract_code:
            sections.append(f"{sub} Contract\n```solidity\n{blueprint.contract_code}\n```")
        if blueprint.frontend_snippet:
            sections.append(f"{sub} Frontend\n```\n{blueprint.frontend_snippet}\n```")
        if blueprint.deployment_url:
            sections.append(f"**Deployment:** {blueprint.deployment_url}")

    return "\n\n".join(sections)


def batch_to_markdown(batch: IdeaBatch) -> str:
    """Render a whole batch as one document."""
    created = datetime.fromtimestamp(batch.created_at / 1000).strftime("%Y-%m-%d %H:%M:%S")
    parts = [f"# {batch.label}", f"Batch `{batch.id}` created {created}, {len(batch.ideas)} idea(s)."]
    for idea in batch.ideas:
        parts.append(idea_to_markdown(idea, heading_level=2))
    return "\n\n".join(parts)
