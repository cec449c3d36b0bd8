import pytest

from core.classification import classify, is_leave, is_remote
from models.entries import Classification


@pytest.mark.parametrize("tags", ["ferie", "Ferie", "permesso", "permesso, remoto", "FERIE estive"])
def test_leave_tags(tags):
    assert is_leave(tags)
    assert classify(tags) == Classification.LEAVE


@pytest.mark.parametrize("tags", ["remoto", "Remote", "lavoro remotizzato", "REMOT"])
def test_remote_tags(tags):
    assert is_remote(tags)


@pytest.mark.parametrize("tags", [None, "", "cliente", "in sede"])
def test_plain_worked_day(tags):
    assert not is_leave(tags)
    assert not is_remote(tags)
    assert classify(tags) == Classification.WORKED


def test_leave_and_remote_are_independent():
    tags = "ferie, remoto"
    assert classify(tags) == Classification.LEAVE
    assert is_remote(tags)
