import logging

from tools import SensitiveDataFilter

TOKEN = "AbCdEf" + "x1" * 29


def filtered(msg, args=None):
    record = logging.LogRecord("openshock", logging.INFO, __file__, 1, msg, args, None)
    SensitiveDataFilter().filter(record)
    return record.getMessage()


def test_masks_header_value():
    message = filtered("headers: {'OpenShockToken': 'abcdef1234567890'}")

    assert "1234567890" not in message
    assert "'OpenShockToken': 'abcdef[openshock-token-masked]'" in message


def test_masks_bare_token():
    assert len(TOKEN) == 64

    message = filtered(f"using token {TOKEN}")

    assert message == "using token AbCdEf[openshock-token-masked]"


def test_masks_string_args():
    message = filtered("token=%s id=%s", (TOKEN, 42))

    assert TOKEN not in message
    assert message.endswith("id=42")


def test_leaves_ids_alone():
    message = filtered("shocker 4b7a8d6e-0c3f-4a1e-9f2b-7d5c3e1a2b4c")

    assert message == "shocker 4b7a8d6e-0c3f-4a1e-9f2b-7d5c3e1a2b4c"
