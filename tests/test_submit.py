import json
from io import BytesIO
from pathlib import Path

import pytest

from conftest import ABOUT_PAGE, NEWS_PAGE
from utils.errors import SpliceError
from utils.rate_limit import SubmissionRateLimiter


def _form(**overrides):
    data = {
        "heading": "Evening notes",
        "text": "First line\nSecond line",
        "target": "about.html",
        "position": "bottom",
        "password": "s3cret",
    }
    data.update(overrides)
    return data


def _page(app, name="about.html"):
    return (Path(app.config["PUBLIC_DIR"]) / name).read_text(encoding="utf-8")


def _log(app):
    with open(app.config["LOGS_FILE"], encoding="utf-8") as log_file:
        return json.load(log_file)


@pytest.mark.parametrize("password", ["wrong", ""])
def test_invalid_password_is_rejected_and_logged(app, client, publisher, password):
    response = client.post("/submit", data=_form(password=password))

    assert response.status_code == 401
    assert b"Invalid password." in response.data
    assert _page(app) == ABOUT_PAGE
    entry = _log(app)[-1]
    assert entry["action"] == "submit"
    assert entry["target"] == "about.html"
    assert entry["error"] == "Invalid password"
    assert publisher.reasons == []


def test_rejected_submission_logs_uploaded_files(app, client):
    data = _form(password="wrong", images=[(BytesIO(b"png"), "cat.png")])

    client.post("/submit", data=data, content_type="multipart/form-data")

    files = _log(app)[-1]["files"]
    assert len(files) == 1
    assert files[0].startswith("cat_")


def test_bottom_submission_appends_to_section(app, client, publisher):
    response = client.post("/submit", data=_form())

    assert response.status_code == 200
    assert b"Saved to <b>about.html</b>!" in response.data
    assert b"Git push triggered." in response.data

    page = _page(app)
    assert "<summary>Evening notes</summary>" in page
    assert "First line<br>Second line" in page
    assert page.index("<summary>Evening notes</summary>") > page.index("<div>Existing entry</div>")
    assert page.index("</details>") < page.index("</section>")

    entry = _log(app)[-1]
    assert entry["error"] is None
    assert entry["files"] == []
    assert publisher.reasons == ["about.html (bottom)"]


def test_top_submission_summarises_text_after_heading_and_paragraph(app, client):
    text = "hello world this is a test of summary truncation exceeding eight words"

    response = client.post("/submit", data=_form(heading="", text=text, position="top"))

    assert response.status_code == 200
    page = _page(app)
    assert "<p>Intro paragraph.</p>\n<details>\n<summary>hello world this is a test of summary...</summary>" in page


def test_top_without_section_inserts_after_body_heading(app, client):
    client.post("/submit", data=_form(target="news.html", position="top"))

    page = _page(app, "news.html")
    assert "<h1>News</h1>\n<details>" in page
    assert page.index("<details>") < page.index("<div>Old news</div>")


def test_bottom_without_section_inserts_before_closing_body(app, client):
    client.post("/submit", data=_form(target="news.html"))

    page = _page(app, "news.html")
    assert page.index("<div>Old news</div>") < page.index("<details>")
    assert "</details>\n</body>" in page


def test_sequential_bottom_submissions_keep_order(app, client):
    client.post("/submit", data=_form(heading="First entry"))
    client.post("/submit", data=_form(heading="Second entry"))

    page = _page(app)
    assert page.index("First entry") < page.index("Second entry")
    assert len(_log(app)) == 2


def test_uploaded_images_and_files_are_stored_and_linked(app, client):
    data = _form(
        images=[(BytesIO(b"img-1"), "cat.png"), (BytesIO(b"img-2"), "dog.jpg")],
        files=[(BytesIO(b"%PDF"), "report.pdf")],
    )

    response = client.post("/submit", data=data, content_type="multipart/form-data")

    assert response.status_code == 200
    media = sorted(path.name for path in Path(app.config["MEDIA_DIR"]).iterdir())
    assert len(media) == 3
    page = _page(app)
    assert page.count('<img src="media/') == 2
    assert page.index('src="media/cat_') < page.index('src="media/dog_')
    assert "Files:" in page
    assert '<a href="media/report_' in page

    entry = _log(app)[-1]
    assert entry["files"][0].startswith("cat_")
    assert entry["files"][2].startswith("report_")


def test_snapshot_is_written_for_target(app, client):
    client.post("/submit", data=_form(position="top"))
    client.post("/submit", data=_form(heading="Latest", position="bottom"))

    snapshot_file = Path(app.config["UPLOAD_LOGS_DIR"]) / "about.html.json"
    snapshot = json.loads(snapshot_file.read_text(encoding="utf-8"))
    assert snapshot["heading"] == "Latest"
    assert snapshot["position"] == "bottom"
    assert snapshot["target"] == "about.html"
    assert snapshot["timestamp"]


@pytest.mark.parametrize("target", ["index.html", "../config.py", "missing.html", ""])
def test_unknown_target_is_rejected(app, client, publisher, target):
    response = client.post("/submit", data=_form(target=target))

    assert response.status_code == 400
    assert _log(app)[-1]["error"] == "Unknown target page"
    assert _page(app) == ABOUT_PAGE
    assert _page(app, "news.html") == NEWS_PAGE
    assert publisher.reasons == []


def test_overlong_fields_are_cut(app, client):
    client.post("/submit", data=_form(heading="H" * 500, text="T" * 5000))

    page = _page(app)
    assert "H" * 120 + "</summary>" in page
    assert "T" * 2001 not in page


def test_splice_failure_returns_error_without_publishing(app, client, publisher, monkeypatch):
    def broken_splice(path, fragment, position):
        raise SpliceError("Failed to write about.html: disk full")

    monkeypatch.setattr("routes.submit.splice_page_file", broken_splice)

    response = client.post("/submit", data=_form())

    assert response.status_code == 500
    assert b"Error: Failed to write about.html: disk full" in response.data
    assert _log(app)[-1]["error"] == "Failed to write about.html: disk full"
    assert publisher.reasons == []


def test_log_write_failure_does_not_change_response(app, client):
    Path(app.config["LOGS_FILE"]).mkdir(parents=True)

    response = client.post("/submit", data=_form())

    assert response.status_code == 200
    assert "<summary>Evening notes</summary>" in _page(app)


def test_csrf_token_is_required_when_enabled(app, client):
    app.config["CSRF_ENABLED"] = True

    rejected = client.post("/submit", data=_form())
    assert rejected.status_code == 400
    assert _page(app) == ABOUT_PAGE

    with client.session_transaction() as session:
        session["csrf_token"] = "token-value"
    accepted = client.post("/submit", data=_form(csrf_token="token-value"))
    assert accepted.status_code == 200


def test_rate_limit_rejects_excess_submissions(app, client):
    app.extensions["rate_limiter"] = SubmissionRateLimiter(limit=1, window_seconds=60)

    assert client.post("/submit", data=_form()).status_code == 200
    assert client.post("/submit", data=_form()).status_code == 429


def test_csrf_rejection_is_logged(app, client, publisher):
    app.config["CSRF_ENABLED"] = True

    response = client.post("/submit", data=_form(password="wrong"))

    assert response.status_code == 400
    assert _page(app) == ABOUT_PAGE
    entry = _log(app)[-1]
    assert entry["target"] == "about.html"
    assert entry["error"] == "Invalid CSRF token"
    assert publisher.reasons == []


def test_rate_limit_rejection_is_logged(app, client):
    app.extensions["rate_limiter"] = SubmissionRateLimiter(limit=1, window_seconds=60)

    client.post("/submit", data=_form())
    client.post("/submit", data=_form(heading="Second"))

    entries = _log(app)
    assert [entry["error"] for entry in entries] == [None, "Too many submissions"]
    assert "Second" not in _page(app)


def test_upload_failure_returns_server_error(app, client, publisher, monkeypatch):
    app.config["PROPAGATE_EXCEPTIONS"] = False

    def failing_store(file_storages, media_dir):
        raise OSError("No space left on device")

    monkeypatch.setattr("routes.submit.store_attachments", failing_store)

    data = _form(images=[(BytesIO(b"png"), "cat.png")])
    response = client.post("/submit", data=data, content_type="multipart/form-data")

    assert response.status_code == 500
    assert b"Error: No space left on device" in response.data
    assert _page(app) == ABOUT_PAGE
    assert publisher.reasons == []
