import threading
from unittest.mock import MagicMock, patch

import pytest
import requests

from plagcheck.errors import RemoteError
from plagcheck.schemas.credential_schemas import RapidApiCredentials
from plagcheck.utils.remote_detector import RapidApiDetector, _make_session


def _response(status_code=200, json_data=None, json_error=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def detector(session):
    return RapidApiDetector(
        credentials=RapidApiCredentials(api_key="test-key"),
        url="https://api.example.test/plagiarism",
        host="api.example.test",
        timeout=5,
        session=session,
    )


class TestRapidApiDetector:

    def test_successful_check(self, detector, session):
        session.post.return_value = _response(json_data={"totalPlagiarismPercentage": 42, "sources": []})

        result = detector.check("some text", include_citations=True)

        assert result["totalPlagiarismPercentage"] == 42
        session.post.assert_called_once_with(
            "https://api.example.test/plagiarism",
            json={
                "text": "some text",
                "language": "en",
                "includeCitations": True,
                "scrapeSources": False,
            },
            headers={
                "x-rapidapi-host": "api.example.test",
                "x-rapidapi-key": "test-key",
            },
            timeout=5,
        )

    def test_http_error_carries_status_and_body(self, detector, session):
        session.post.return_value = _response(status_code=403, json_data={"message": "You are not subscribed"})

        with pytest.raises(RemoteError) as exc:
            detector.check("text")

        assert exc.value.status_code == 403
        assert exc.value.response_data == {"message": "You are not subscribed"}
        assert "403" in exc.value.message

    def test_http_error_with_text_body(self, detector, session):
        session.post.return_value = _response(status_code=502, json_error=ValueError("no json"), text="Bad gateway")

        with pytest.raises(RemoteError) as exc:
            detector.check("text")

        assert exc.value.response_data == "Bad gateway"

    def test_network_error(self, detector, session):
        session.post.side_effect = requests.ConnectionError("connection reset")

        with pytest.raises(RemoteError, match="connection reset") as exc:
            detector.check("text")

        assert exc.value.status_code is None

    def test_invalid_json(self, detector, session):
        session.post.return_value = _response(json_error=ValueError("Expecting value"))

        with pytest.raises(RemoteError, match="not valid JSON"):
            detector.check("text")

    def test_non_object_json(self, detector, session):
        session.post.return_value = _response(json_data=["unexpected"])

        with pytest.raises(RemoteError, match="Unexpected response shape"):
            detector.check("text")


class TestSession:

    def test_retry_adapter_mounted(self):
        s = _make_session()
        retries = s.get_adapter("https://example.test").max_retries

        assert retries.total == 2
        assert 503 in retries.status_forcelist
        assert s.headers["Content-Type"] == "application/json"

    def test_each_thread_gets_its_own_session(self):
        detector = RapidApiDetector(credentials=RapidApiCredentials(api_key="test-key"))
        seen = []

        def grab():
            seen.append(detector.session)

        with patch("plagcheck.utils.remote_detector._make_session", side_effect=lambda: MagicMock()) as make:
            grab()
            grab()
            worker = threading.Thread(target=grab)
            worker.start()
            worker.join()

        assert make.call_count == 2
        assert seen[0] is seen[1]
        assert seen[2] is not seen[0]

    def test_injected_session_is_shared(self, session):
        detector = RapidApiDetector(credentials=RapidApiCredentials(api_key="test-key"), session=session)
        seen = []
        worker = threading.Thread(target=lambda: seen.append(detector.session))
        worker.start()
        worker.join()

        assert seen == [session]
        assert detector.session is session
