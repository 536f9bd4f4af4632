import pytest

import shuttle

REQUEST = shuttle.Request("GET", "http://example.com")


def test_responses_are_returned_in_fifo_order() -> None:
    transport = shuttle.MockTransport([shuttle.Response(200), shuttle.Response(201), shuttle.Response(202)])

    assert [transport.execute(REQUEST).status for _ in range(3)] == [200, 201, 202]
    with pytest.raises(shuttle.QueueExhaustedError):
        transport.execute(REQUEST)


def test_callable_receives_request() -> None:
    seen: list[shuttle.Request] = []

    def respond(request: shuttle.Request) -> shuttle.Response:
        seen.append(request)
        return shuttle.Response(204)

    transport = shuttle.MockTransport([respond])

    assert transport.execute(REQUEST).status == 204
    assert seen == [REQUEST]


def test_literal_response_is_returned_as_is() -> None:
    response = shuttle.Response(200)
    assert shuttle.MockTransport([response]).execute(REQUEST) is response


def test_empty_queue() -> None:
    with pytest.raises(shuttle.QueueExhaustedError):
        shuttle.MockTransport([]).execute(REQUEST)


def test_append_and_len() -> None:
    transport = shuttle.MockTransport()
    assert len(transport) == 0

    transport.append(shuttle.Response(200), lambda r: shuttle.Response(201))

    assert len(transport) == 2
    assert transport.execute(REQUEST).status == 200
    assert len(transport) == 1


def test_set_debug_records_flag() -> None:
    transport = shuttle.MockTransport([])

    assert transport.set_debug(True) is transport
    assert transport.debug
    assert not transport.set_debug(False).debug
