from __future__ import annotations

import logging

import typer

from blog_client.api.client import BlogClient
from blog_client.config import BLOG_LOG_LEVEL, BLOG_SESSION_FILE
from blog_client.render import DIVIDER, render_post, render_posts, render_thread
from blog_client.session import Session
from blog_client.ui.auth import LoginForm, RegisterForm
from blog_client.ui.modes import comment_key, post_key
from blog_client.ui.page import PostsPage

app = typer.Typer(help="Terminal client for the blog service.")


def _session() -> Session:
    return Session.load(BLOG_SESSION_FILE)


def _client(session: Session) -> BlogClient:
    return BlogClient(cookies=session.cookies)


def _fail(message: str | None) -> None:
    typer.echo(f"Error: {message or 'Request failed'}", err=True)
    raise typer.Exit(code=1)


def _check(ok: bool, page: PostsPage) -> None:
    if not ok:
        _fail(page.error)


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else BLOG_LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("login")
def login_command(
    email: str = typer.Option(..., "--email", help="Account email."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Account password."),
) -> None:
    session = _session()
    with _client(session) as client:
        form = LoginForm(client, session)
        if not form.submit(email, password):
            _fail(form.error)
    typer.echo(f"Logged in as {session.viewer}")


@app.command("register")
def register_command(
    username: str = typer.Option(..., "--username", help="Display name."),
    email: str = typer.Option(..., "--email", help="Account email."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Account password."),
) -> None:
    session = _session()
    with _client(session) as client:
        form = RegisterForm(client)
        if not form.submit(username, email, password):
            _fail(form.error)
    typer.echo("Registration successful. You can now log in.")


@app.command("logout")
def logout_command() -> None:
    _session().logout()
    typer.echo("Logged out")


@app.command("whoami")
def whoami_command() -> None:
    session = _session()
    typer.echo(session.viewer or "Not logged in")


@app.command("posts")
def posts_command() -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.refresh_posts(), page)
        typer.echo(render_posts(page.posts, page.viewer, page.now()))


@app.command("show")
def show_command(
    post_id: int = typer.Argument(..., help="Post to show with its comments."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.refresh_posts(), page)
        post = page.find_post(post_id)
        if post is None:
            _fail(f"Post {post_id} not found.")
        _check(page.toggle(post_id), page)
        now = page.now()
        typer.echo(render_post(post, page.viewer, now))
        typer.echo(DIVIDER)
        typer.echo(render_thread(page.comments.get(post_id, []), page.viewer, now))


@app.command("new-post")
def new_post_command(
    title: str = typer.Option(..., "--title", help="Post title."),
    content: str = typer.Option(..., "--content", help="Post body."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.create_post(title, content), page)
    typer.echo("Post created")


@app.command("edit-post")
def edit_post_command(
    post_id: int = typer.Argument(..., help="Post to edit."),
    title: str | None = typer.Option(None, "--title", help="New title."),
    content: str | None = typer.Option(None, "--content", help="New body."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.refresh_posts(), page)
        _check(page.start_edit_post(post_id), page)
        draft = page.modes.get(post_key(post_id))
        page.modes.update_draft(post_key(post_id), content if content is not None else draft.content, title)
        _check(page.save_post(post_id), page)
    typer.echo(f"Post {post_id} updated")


@app.command("delete-post")
def delete_post_command(
    post_id: int = typer.Argument(..., help="Post to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.refresh_posts(), page)
        if not yes and not typer.confirm("Are you sure you want to delete this post?"):
            raise typer.Abort()
        _check(page.delete_post(post_id), page)
    typer.echo(f"Post {post_id} deleted")


@app.command("comment")
def comment_command(
    post_id: int = typer.Argument(..., help="Post to comment on."),
    content: str = typer.Option(..., "--content", help="Comment text."),
    parent: int | None = typer.Option(None, "--parent", help="Comment to reply to."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        key = page.start_reply(post_id, parent)
        if key is None:
            _fail(page.error)
        page.modes.update_draft(key, content)
        _check(page.submit_reply(key), page)
        typer.echo(render_thread(page.comments.get(post_id, []), page.viewer, page.now()))


@app.command("edit-comment")
def edit_comment_command(
    comment_id: int = typer.Argument(..., help="Comment to edit."),
    post_id: int = typer.Option(..., "--post", help="Post the comment belongs to."),
    content: str = typer.Option(..., "--content", help="New comment text."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.refresh_comments(post_id), page)
        _check(page.start_edit_comment(comment_id), page)
        page.modes.update_draft(comment_key(comment_id), content)
        _check(page.save_comment(comment_id), page)
    typer.echo(f"Comment {comment_id} updated")


@app.command("delete-comment")
def delete_comment_command(
    comment_id: int = typer.Argument(..., help="Comment to delete."),
    post_id: int = typer.Option(..., "--post", help="Post the comment belongs to."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    session = _session()
    with _client(session) as client:
        page = PostsPage(client, session)
        _check(page.refresh_comments(post_id), page)
        if not yes and not typer.confirm("Are you sure you want to delete this comment?"):
            raise typer.Abort()
        _check(page.delete_comment(comment_id), page)
    typer.echo(f"Comment {comment_id} deleted")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
