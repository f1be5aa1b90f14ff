from blog_client.threads.permissions import EDIT_WINDOW, can_modify, can_modify_record
from blog_client.threads.tree import build_comment_tree, find_unreachable, flatten_tree, iter_preorder

__all__ = [
    "EDIT_WINDOW",
    "build_comment_tree",
    "can_modify",
    "can_modify_record",
    "find_unreachable",
    "flatten_tree",
    "iter_preorder",
]
