import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


# REST API the client talks to
BLOG_API_URL = os.getenv("BLOG_API_URL", "http://localhost:3001")
BLOG_REQUEST_TIMEOUT = float(os.getenv("BLOG_REQUEST_TIMEOUT", "30"))

# Where the viewer name and cookie jar are kept between runs
BLOG_SESSION_FILE = Path(
    os.getenv("BLOG_SESSION_FILE", str(Path.home() / ".blog_client" / "session.json"))
).expanduser()

BLOG_LOG_LEVEL = os.getenv("BLOG_LOG_LEVEL", "WARNING").upper()
