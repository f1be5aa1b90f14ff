from blog_client.api.client import BlogClient
from blog_client.api.errors import BlogApiError, HttpStatusError, MalformedResponseError, TransportError

__all__ = ["BlogApiError", "BlogClient", "HttpStatusError", "MalformedResponseError", "TransportError"]
