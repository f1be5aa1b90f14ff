from __future__ import annotations

from datetime import datetime, timezone

import demo
from blog_client.ui.modes import Viewing, post_key
from blog_client.ui.page import PostsPage


NOW = datetime(2024, 5, 1, 12, 10, tzinfo=timezone.utc)


def test_open_and_reply_through_commands(api, client, alice_session, monkeypatch, capsys) -> None:
    api.add_post(1, "Hello", "bob", minutes_ago=30)
    api.add_comment(1, 1, None, "bob", minutes_ago=30)
    page = PostsPage(client, alice_session, clock=lambda: NOW)
    page.refresh_posts()

    demo.run_command(page, ["open", "1"])
    assert page.expanded_post_id == 1

    monkeypatch.setattr("builtins.input", lambda _prompt: "nice post")
    demo.run_command(page, ["reply", "1", "1"])

    demo.print_page(page)
    out = capsys.readouterr().out
    assert "  #101 Alice [editable]" in out
    assert "    nice post" in out


def test_edit_refused_shows_error(api, client, alice_session, capsys) -> None:
    api.add_post(1, "Hello", "bob", minutes_ago=1)
    page = PostsPage(client, alice_session, clock=lambda: NOW)
    page.refresh_posts()

    demo.run_command(page, ["edit", "post", "1"])
    demo.print_page(page)

    assert "Error: Only the author" in capsys.readouterr().out


def _scripted_input(monkeypatch, lines: list[str]) -> None:
    remaining = iter(lines)

    def fake_input(_prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_eof_at_reply_prompt_cancels_reply(api, client, alice_session, monkeypatch, capsys) -> None:
    api.add_post(1, "Hello", "bob", minutes_ago=30)
    page = PostsPage(client, alice_session, clock=lambda: NOW)
    _scripted_input(monkeypatch, ["reply 1"])

    demo.repl(page)

    assert "Cancelled." in capsys.readouterr().out
    assert page.modes.active_reply() is None
    assert all(r.method != "POST" for r in api.requests)


def test_eof_at_edit_prompt_keeps_post(api, client, alice_session, monkeypatch) -> None:
    api.add_post(1, "Hello", "Alice", minutes_ago=1)
    page = PostsPage(client, alice_session, clock=lambda: NOW)
    _scripted_input(monkeypatch, ["edit post 1"])

    demo.repl(page)

    assert page.modes.get(post_key(1)) == Viewing()
    assert all(r.method != "PUT" for r in api.requests)


def test_eof_at_delete_confirmation_keeps_post(api, client, alice_session, monkeypatch) -> None:
    api.add_post(1, "Hello", "Alice", minutes_ago=1)
    page = PostsPage(client, alice_session, clock=lambda: NOW)
    _scripted_input(monkeypatch, ["delete post 1"])

    demo.repl(page)

    assert len(api.posts) == 1
