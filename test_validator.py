import pytest
from utils.errors import (MissingParameter, InvalidParameterType, UnauthorizedAdmin, UnsupportedSource,
                          InvalidVersionFormat)
from utils.validator import validate_params

VALID = {"admin": "442", "choose": "al", "mcbb": "1.20.1"}


def test_valid_params_pass_through_unchanged():
    req = validate_params(dict(VALID))
    assert (req.admin, req.choose, req.mcbb) == ("442", "al", "1.20.1")


@pytest.mark.parametrize("name", ["admin", "choose", "mcbb"])
def test_missing_parameter(name):
    raw = dict(VALID)
    del raw[name]
    with pytest.raises(MissingParameter) as exc_info:
        validate_params(raw)
    assert exc_info.value.code == 400
    assert name in exc_info.value.msg


@pytest.mark.parametrize("name", ["admin", "choose", "mcbb"])
def test_empty_parameter_is_missing(name):
    raw = dict(VALID, **{name: ""})
    with pytest.raises(MissingParameter):
        validate_params(raw)


def test_presence_checked_before_admin():
    with pytest.raises(MissingParameter):
        validate_params({"admin": "nobody", "choose": "al"})


def test_numeric_admin_is_accepted():
    assert validate_params(dict(VALID, admin=442)).admin == "442"


def test_non_string_parameter_rejected():
    with pytest.raises(InvalidParameterType):
        validate_params(dict(VALID, mcbb=["1.20.1"]))


def test_unauthorized_admin():
    with pytest.raises(UnauthorizedAdmin) as exc_info:
        validate_params(dict(VALID, admin="999"))
    assert exc_info.value.code == 403


def test_unsupported_source_lists_valid_keys():
    with pytest.raises(UnsupportedSource) as exc_info:
        validate_params(dict(VALID, choose="tx"))
    assert exc_info.value.code == 400
    for key in ("al", "hw", "mojiang"):
        assert key in exc_info.value.msg


def test_source_checked_before_version_format():
    with pytest.raises(UnsupportedSource):
        validate_params(dict(VALID, choose="tx", mcbb="1.20 1"))


@pytest.mark.parametrize("version", ["1.20.1", "23w31a", "1.20-pre1", "b1.7.3", "rd-132211", "a_b"])
def test_version_format_accepted(version):
    assert validate_params(dict(VALID, mcbb=version)).mcbb == version


@pytest.mark.parametrize("version", ["1.20 1", "../etc", "1.20.1\n", "1.20/1", "版本", "1.20;rm"])
def test_version_format_rejected(version):
    with pytest.raises(InvalidVersionFormat) as exc_info:
        validate_params(dict(VALID, mcbb=version))
    assert exc_info.value.code == 400
