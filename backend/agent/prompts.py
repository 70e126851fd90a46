"""
System Prompts

Grounding prompt for workspace chat, built from the workspace's papers.
"""

from services.records import Message, Paper


SYSTEM_PROMPT_TEMPLATE = (
    "You are a research assistant. Answer questions based on these research papers:\n\n"
    "{context}"
)

NO_PAPERS_CONTEXT = "No papers imported yet."


def render_paper(paper: Paper) -> str:
    return (
        f"Title: {paper.title}\n"
        f"Authors: {paper.authors}\n"
        f"Abstract: {paper.abstract or 'N/A'}"
    )


def render_grounding_context(papers: list[Paper]) -> str:
    """Render papers as blank-line separated blocks."""
    if not papers:
        return NO_PAPERS_CONTEXT
    return "\n\n".join(render_paper(p) for p in papers)


def get_system_prompt(papers: list[Paper]) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(context=render_grounding_context(papers))


def recent_history(messages: list[Message], size: int) -> list[Message]:
    """
    The `size` messages immediately before the newest one.

    The newest message is the turn being answered, so it is never history.
    """
    if size <= 0:
        return []
    return messages[:-1][-size:]
