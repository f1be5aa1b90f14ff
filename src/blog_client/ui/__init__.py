from blog_client.ui.auth import LoginForm, RegisterForm
from blog_client.ui.modes import Editing, ModeTable, Replying, Viewing, comment_key, post_key
from blog_client.ui.page import PostsPage

__all__ = [
    "Editing",
    "LoginForm",
    "ModeTable",
    "PostsPage",
    "RegisterForm",
    "Replying",
    "Viewing",
    "comment_key",
    "post_key",
]
