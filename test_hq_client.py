from datetime import datetime
from unittest import mock

import pytest
import requests

from errors import SinkError
from hq_client import HQClient, format_datetime


def make_response(status_code=200, body=b"{}"):
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.url = "https://hq.example.com/dashboard"
    return response


def test_format_datetime():
    assert format_datetime(datetime(2024, 1, 31, 9, 5)) == "31.01.24 09:05"


def test_session_is_sent_as_cookie():
    client = HQClient("https://hq.example.com/dashboard/", ("token", "secret"))

    assert client.endpoint == "https://hq.example.com/dashboard"
    assert client.session.cookies.get("token") == "secret"


def test_log_worktime_verifies_session_once_and_posts():
    client = HQClient("https://hq.example.com/dashboard", ("token", "secret"))

    with mock.patch.object(client.session, "request", return_value=make_response()) as request:
        client.log_worktime(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))
        client.log_worktime(datetime(2024, 1, 2, 9), datetime(2024, 1, 2, 17))

    methods = [call.args[0] for call in request.call_args_list]
    assert methods == ["GET", "POST", "POST"]
    assert request.call_args_list[1].kwargs["json"] == {
        "start": "01.01.24 09:00",
        "end": "01.01.24 17:00",
    }


def test_expired_session_raises_sink_error():
    client = HQClient("https://hq.example.com/dashboard", ("token", "expired"))

    with mock.patch.object(client.session, "request", return_value=make_response(401, b"")):
        with pytest.raises(SinkError, match="credentials have been expired"):
            client.log_worktime(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))


def test_network_failure_raises_sink_error():
    client = HQClient("https://hq.example.com/dashboard", ("token", "secret"))

    with mock.patch.object(
        client.session, "request", side_effect=requests.exceptions.ConnectionError("refused")
    ):
        with pytest.raises(SinkError, match="Could not reach"):
            client.log_worktime(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))


def test_missing_endpoint():
    with pytest.raises(SinkError):
        HQClient("", ("token", "secret"))


def test_html_response_to_submission_raises_sink_error():
    client = HQClient("https://hq.example.com/dashboard", ("token", "secret"))
    page = b"<html><body>Dashboard</body></html>"

    with mock.patch.object(
        client.session, "request", side_effect=[make_response(body=page), make_response(body=page)]
    ):
        with pytest.raises(SinkError, match="non-JSON response"):
            client.log_worktime(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))


def test_empty_response_to_submission_is_accepted():
    client = HQClient("https://hq.example.com/dashboard", ("token", "secret"))

    with mock.patch.object(
        client.session, "request", side_effect=[make_response(), make_response(204, b"")]
    ):
        assert client.log_worktime(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17)) is None
