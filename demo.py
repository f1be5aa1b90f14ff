from __future__ import annotations

import argparse
import sys
from pathlib import Path

from blog_client.api.client import BlogClient
from blog_client.config import BLOG_API_URL, BLOG_SESSION_FILE
from blog_client.render import DIVIDER, render_post, render_posts, render_thread
from blog_client.session import Session
from blog_client.ui.modes import Editing, comment_key, post_key
from blog_client.ui.page import PostsPage


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Interactive browser for posts and comment threads.",
    )
    parser.add_argument(
        "--api-url",
        default=BLOG_API_URL,
        help=f"Blog API base URL (default: {BLOG_API_URL})",
    )
    parser.add_argument(
        "--session-file",
        default=str(BLOG_SESSION_FILE),
        help="Session file written by `blog-client login`.",
    )
    return parser.parse_args()


def print_page(page: PostsPage) -> None:
    now = page.now()
    print(DIVIDER)
    if page.expanded_post_id is None:
        print(render_posts(page.posts, page.viewer, now))
    else:
        post = page.find_post(page.expanded_post_id)
        if post is not None:
            print(render_post(post, page.viewer, now))
            print(DIVIDER)
        print(render_thread(page.comments.get(page.expanded_post_id, []), page.viewer, now))
    if page.error:
        print(f"Error: {page.error}")
    print(DIVIDER)


def print_help() -> None:
    print("Commands:")
    print("  posts                 Reload the post list")
    print("  open <post>           Show or hide a post's comments")
    print("  reply <post> [<id>]   Reply to a post or to one of its comments")
    print("  edit post <id>        Edit one of your posts")
    print("  edit comment <id>     Edit one of your comments")
    print("  delete post <id>      Delete one of your posts")
    print("  delete comment <id>   Delete one of your comments")
    print("  :help                 Show this help message")
    print("  :q, :quit             Quit")


def prompt(label: str, default: str = "") -> str | None:
    """Read one line; None means the user backed out with Ctrl-D or Ctrl-C."""
    suffix = f" [{default}]" if default else ""
    try:
        value = input(f"{label}{suffix}> ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        print("Cancelled.")
        return None
    return value or default


def run_command(page: PostsPage, words: list[str]) -> None:
    command, args = words[0], words[1:]
    if command == "posts":
        page.refresh_posts()
    elif command == "open" and len(args) == 1:
        page.toggle(int(args[0]))
    elif command == "reply" and len(args) in (1, 2):
        post_id = int(args[0])
        parent_id = int(args[1]) if len(args) == 2 else None
        key = page.start_reply(post_id, parent_id)
        if key is None:
            return
        text = prompt("reply")
        if text is None:
            page.cancel(key)
            return
        page.modes.update_draft(key, text)
        page.submit_reply(key)
        page.expanded_post_id = post_id
    elif command == "edit" and len(args) == 2 and args[0] in ("post", "comment"):
        entity_id = int(args[1])
        if args[0] == "post":
            if not page.start_edit_post(entity_id):
                return
            key = post_key(entity_id)
            draft = page.modes.get(key)
            if not isinstance(draft, Editing):
                return
            content = prompt("content", draft.content)
            title = prompt("title", draft.title or "") if content is not None else None
            if content is None or title is None:
                page.cancel(key)
                return
            page.modes.update_draft(key, content, title)
            page.save_post(entity_id)
        else:
            if not page.start_edit_comment(entity_id):
                return
            key = comment_key(entity_id)
            draft = page.modes.get(key)
            if not isinstance(draft, Editing):
                return
            content = prompt("content", draft.content)
            if content is None:
                page.cancel(key)
                return
            page.modes.update_draft(key, content)
            page.save_comment(entity_id)
    elif command == "delete" and len(args) == 2 and args[0] in ("post", "comment"):
        if (prompt("Are you sure? (y/N)") or "").lower() != "y":
            return
        if args[0] == "post":
            page.delete_post(int(args[1]))
        else:
            page.delete_comment(int(args[1]))
    else:
        print_help()


def repl(page: PostsPage) -> None:
    print("Interactive blog browser. Type :help for commands.")
    page.refresh_posts()
    print_page(page)
    while True:
        try:
            line = input("blog> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            break

        if not line:
            continue
        if line in {":q", ":quit"}:
            break
        if line == ":help":
            print_help()
            continue

        try:
            run_command(page, line.split())
        except ValueError:
            print("Ids must be numbers.")
            continue
        print_page(page)


def main() -> int:
    args = parse_args()
    session = Session.load(Path(args.session_file))
    if not session.is_authenticated:
        print("Not logged in; browsing read-only.", file=sys.stderr)

    with BlogClient(args.api_url, cookies=session.cookies) as client:
        repl(PostsPage(client, session))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
