"""
Tests for AppSession, the composed application shell.
"""

import pytest

from services.semantic_scholar import SearchResult
from services.session import AppSession, SessionError

from conftest import FakeCompletion


class FakeSearch:
    def __init__(self, results: list[SearchResult]):
        self.results = results
        self.queries: list[str] = []

    async def search(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        return self.results


RESULT = SearchResult(
    paper_id="s2-1",
    title="Attention Is All You Need",
    authors="Ashish Vaswani, Noam Shazeer",
    abstract="The dominant sequence transduction models...",
    year=2017,
    url="https://www.semanticscholar.org/paper/s2-1",
)


@pytest.fixture
def session(tmp_path, fake_completion):
    return AppSession(tmp_path / "data", completion=fake_completion, search=FakeSearch([RESULT]))


@pytest.fixture
def signed_in(session):
    session.register("Jane Doe", "jane@example.com", "secret1")
    session.login("jane@example.com", "secret1")
    return session


class TestAuthentication:
    def test_register_and_login(self, session):
        session.register("Jane Doe", "jane@example.com", "secret1")
        assert not session.is_authenticated

        user = session.login("JANE@example.com", "secret1")
        assert user.email == "jane@example.com"
        assert session.current_user == user

    def test_duplicate_email_rejected(self, session):
        session.register("Jane Doe", "jane@example.com", "secret1")
        with pytest.raises(SessionError, match="already exists"):
            session.register("Other Jane", "Jane@Example.com", "secret2")

    def test_short_password_rejected(self, session):
        with pytest.raises(SessionError, match="at least 6"):
            session.register("Jane Doe", "jane@example.com", "abc")

    def test_wrong_password(self, session):
        session.register("Jane Doe", "jane@example.com", "secret1")
        with pytest.raises(SessionError, match="Invalid email or password"):
            session.login("jane@example.com", "wrong-pass")
        with pytest.raises(SessionError, match="Invalid email or password"):
            session.login("nobody@example.com", "secret1")

    def test_logout(self, signed_in):
        signed_in.logout()
        assert signed_in.current_user is None
        with pytest.raises(SessionError, match="Not signed in"):
            signed_in.workspace_summaries()

    def test_sessions_are_isolated(self, tmp_path):
        a = AppSession(tmp_path / "a", completion=FakeCompletion())
        b = AppSession(tmp_path / "b", completion=FakeCompletion())
        a.register("Ada", "ada@example.com", "secret1")
        a.login("ada@example.com", "secret1")

        assert a.is_authenticated
        assert not b.is_authenticated
        with pytest.raises(SessionError):
            b.login("ada@example.com", "secret1")


class TestWorkspaces:
    def test_create_and_list_with_counts(self, signed_in):
        ws = signed_in.create_workspace("  NLP Research ", " language models ")
        signed_in.import_paper(RESULT, ws.id)

        summaries = signed_in.workspace_summaries()
        assert len(summaries) == 1
        assert summaries[0].workspace.name == "NLP Research"
        assert summaries[0].workspace.description == "language models"
        assert summaries[0].paper_count == 1

    def test_empty_name_rejected(self, signed_in):
        with pytest.raises(SessionError, match="name is required"):
            signed_in.create_workspace("   ")

    def test_delete_workspace_cascades(self, signed_in):
        ws = signed_in.create_workspace("Doomed")
        signed_in.import_paper(RESULT, ws.id)
        signed_in.conversation.append(ws.id, "user", "hello")

        signed_in.delete_workspace(ws.id)

        assert signed_in.workspace_summaries() == []
        assert signed_in.list_papers(ws.id) == []
        assert signed_in.messages(ws.id) == []


class TestPapers:
    @pytest.mark.asyncio
    async def test_search_and_import(self, signed_in):
        ws = signed_in.create_workspace("NLP")
        results = await signed_in.search_papers("  attention ")
        paper = signed_in.import_paper(results[0], ws.id)

        assert signed_in._search.queries == ["attention"]
        assert paper.source_url == RESULT.url
        assert paper.user_id == signed_in.current_user.id
        assert signed_in.list_papers(ws.id) == [paper]

    @pytest.mark.asyncio
    async def test_blank_search_skips_request(self, signed_in):
        assert await signed_in.search_papers("   ") == []
        assert signed_in._search.queries == []

    def test_import_requires_workspace(self, signed_in):
        with pytest.raises(SessionError, match="Select a workspace first"):
            signed_in.import_paper(RESULT, None)
        with pytest.raises(SessionError, match="Workspace not found"):
            signed_in.import_paper(RESULT, "missing")

    def test_remove_paper(self, signed_in):
        ws = signed_in.create_workspace("NLP")
        paper = signed_in.import_paper(RESULT, ws.id)
        signed_in.remove_paper(paper.id)
        assert signed_in.list_papers(ws.id) == []


class TestChat:
    @pytest.mark.asyncio
    async def test_chat_turn(self, signed_in, fake_completion):
        ws = signed_in.create_workspace("NLP")
        signed_in.import_paper(RESULT, ws.id)

        result = await signed_in.chat(ws.id, "Summarize the paper")

        assert result.ok
        assert "Attention Is All You Need" in fake_completion.calls[0][0].content
        assert result.to_dict()["state"] == "completed"
        assert result.to_dict()["assistant_message"]["role"] == "assistant"
        assert [m.role for m in signed_in.messages(ws.id)] == ["user", "assistant"]

    @pytest.mark.asyncio
    async def test_blank_message_ignored(self, signed_in, fake_completion):
        ws = signed_in.create_workspace("NLP")
        assert await signed_in.chat(ws.id, "   ") is None
        assert fake_completion.calls == []
        assert signed_in.messages(ws.id) == []

    @pytest.mark.asyncio
    async def test_clear_chat_is_scoped(self, signed_in):
        first = signed_in.create_workspace("First")
        second = signed_in.create_workspace("Second")
        await signed_in.chat(first.id, "hello")
        await signed_in.chat(second.id, "hello")

        signed_in.clear_chat(first.id)

        assert signed_in.messages(first.id) == []
        assert len(signed_in.messages(second.id)) == 2


class TestEntryPoint:
    def test_create_session_uses_data_dir(self, tmp_path):
        from researchhub import configure_logging, create_session

        configure_logging("debug")
        session = create_session(tmp_path / "hub")
        session.register("Ada", "ada@example.com", "secret1")

        assert (tmp_path / "hub" / "rh_users.json").exists()
