import pytest

from app import create_app
from config import Config

ABOUT_PAGE = """<!doctype html>
<html>
<body>
<section class="content">
<h1>About</h1>
<p>Intro paragraph.</p>
<div>Existing entry</div>
</section>
</body>
</html>
"""

NEWS_PAGE = """<html>
<body>
<h1>News</h1>
<div>Old news</div>
</body>
</html>
"""


class RecordingPublisher:
    def __init__(self):
        self.reasons = []

    def trigger(self, reason):
        self.reasons.append(reason)
        return True


@pytest.fixture
def workspace(tmp_path):
    public_dir = tmp_path / "public"
    public_dir.mkdir()
    (public_dir / "index.html").write_text("<html><body>index</body></html>", encoding="utf-8")
    (public_dir / "about.html").write_text(ABOUT_PAGE, encoding="utf-8")
    (public_dir / "news.html").write_text(NEWS_PAGE, encoding="utf-8")
    return tmp_path


@pytest.fixture
def app(workspace):
    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = "test-secret-key"
        FORM_PASSWORD = "s3cret"
        CSRF_ENABLED = False
        PUBLISH_ENABLED = False
        SUBMIT_RATE_LIMIT = 0
        PUBLIC_DIR = str(workspace / "public")
        MEDIA_DIR = str(workspace / "public" / "media")
        UPLOAD_LOGS_DIR = str(workspace / "upload_logs")
        LOGS_FILE = str(workspace / "logs" / "logs.json")
        PUBLISH_LOG_FILE = str(workspace / "logs" / "publish.json")
        PUBLISH_REPO_DIR = str(workspace)

    app = create_app(TestConfig)
    app.extensions["publisher"] = RecordingPublisher()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def publisher(app):
    return app.extensions["publisher"]
